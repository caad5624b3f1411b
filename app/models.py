"""
SQLAlchemy models for operator accounts, media, site content and configuration.

Content collections (services, reviews, pricing tiers, contact requests) are
plain tables. Site configuration singletons are stored one row per slug in the
``globals`` table with a JSON payload, so they can be upserted by name.
"""

import json
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, LargeBinary, String, Text, func
from sqlalchemy.orm import deferred, relationship

from app.database import Base


class User(Base):
    """
    Represents an operator account of the administrative interface.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    roles = Column(Text, nullable=False, default='["admin"]')
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def role_list(self) -> list:
        return json.loads(self.roles) if self.roles else []

    def to_dict(self) -> dict:
        return {"id": self.id, "email": self.email, "roles": self.role_list}


class Media(Base):
    """
    Represents an uploaded binary asset such as a logo or a service illustration.
    """

    __tablename__ = "media"

    id = Column(Integer, primary_key=True, index=True)
    filename = Column(String, nullable=False, index=True)
    alt = Column(String, nullable=True)
    mime_type = Column(String, nullable=False, default="application/octet-stream")
    filesize = Column(Integer, nullable=False, default=0)
    data = deferred(Column(LargeBinary, nullable=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "filename": self.filename,
            "alt": self.alt,
            "mime_type": self.mime_type,
            "filesize": self.filesize,
            "url": f"/api/media/{self.id}",
        }


class Service(Base):
    """
    Represents a cleaning service offered on the homepage.
    """

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    slug = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False)
    image_id = Column(Integer, ForeignKey("media.id", ondelete="SET NULL"), nullable=True)
    order = Column(Integer, nullable=False, default=0)

    image = relationship("Media", lazy="joined")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "image": self.image.to_dict() if self.image is not None else None,
            "order": self.order,
        }


class Review(Base):
    """
    Represents a customer testimonial.
    """

    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    location = Column(String, nullable=False)
    text = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False, default=5)
    order = Column(Integer, nullable=False, default=0)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "text": self.text,
            "rating": self.rating,
            "order": self.order,
        }


class PricingTier(Base):
    """
    Represents a pricing package; ``features`` holds a JSON list of strings.
    """

    __tablename__ = "pricing"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    price = Column(Integer, nullable=False)
    rooms = Column(String, nullable=False)
    features = Column(Text, nullable=False, default="[]")
    popular = Column(Boolean, nullable=False, default=False)
    order = Column(Integer, nullable=False, default=0)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "price": self.price,
            "rooms": self.rooms,
            "features": json.loads(self.features) if self.features else [],
            "popular": bool(self.popular),
            "order": self.order,
        }


class ContactRequest(Base):
    """
    Represents a message submitted through the public contact form.
    """

    __tablename__ = "contact_requests"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=True)
    message = Column(Text, nullable=False)
    status = Column(String, nullable=False, default="new", index=True)
    source = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "message": self.message,
            "status": self.status,
            "source": self.source,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class GlobalRecord(Base):
    """
    Stores one site configuration singleton (site settings, hero, ...) by slug.
    """

    __tablename__ = "globals"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String, unique=True, nullable=False, index=True)
    data = Column(Text, nullable=False, default="{}")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def to_dict(self) -> dict:
        return json.loads(self.data) if self.data else {}
