"""Canonical default dataset written on first boot or after a force reseed.

The public read API serves the same values when the store is unreachable, so
the literal content below is what visitors see before any operator edits.
Bump ``SEED_VERSION`` whenever the dataset changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

SEED_VERSION = "2025.1"

DEFAULT_PHONE = "(415) 123-4567"

DEFAULT_CITIES = [
    "San Francisco",
    "San Mateo",
    "San Jose",
    "Palo Alto",
    "Mountain View",
    "Sunnyvale",
    "Fremont",
    "Oakland",
]


@dataclass(frozen=True)
class AssetSpec:
    """A named seed image: registry key, file name and alt text."""

    key: str
    filename: str
    alt: str


SEED_ASSETS = (
    AssetSpec("logo", "carpet-ninja.png", "Carpet Ninja Logo"),
    AssetSpec("favicon", "favicon.png", "Carpet Ninja Favicon"),
    AssetSpec("hero_image", "carpet-ninja-car-3.png", "Carpet Ninja Van"),
    AssetSpec("before_image", "before.png", "Before Cleaning"),
    AssetSpec("after_image", "after.png", "After Cleaning"),
    AssetSpec("service:deep-carpet-cleaning", "service-deep-carpet-cleaning.png", "Deep Carpet Cleaning Service"),
    AssetSpec("service:upholstery-mattresses", "service-upholstery-mattresses.png", "Upholstery and Mattress Cleaning"),
    AssetSpec("service:stain-odor-removal", "service-stain-odor-removal.png", "Stain and Odor Removal Service"),
)


def site_settings(media: Dict[str, Optional[int]]) -> Dict[str, Any]:
    return {
        "phone": DEFAULT_PHONE,
        "email": "hello@carpet-ninja.com",
        "instagram": "@carpet.ninja",
        "tagline": "Deep Carpet & Upholstery Cleaning, done Ninja-fast.",
        "cities": [{"name": name} for name in DEFAULT_CITIES],
        "logo": media.get("logo"),
        "favicon": media.get("favicon"),
    }


def hero(media: Dict[str, Optional[int]]) -> Dict[str, Any]:
    return {
        "headline": "Deep Carpet & Upholstery Cleaning, done Ninja-fast.",
        "subheadline": (
            "We're a mobile, pro-grade cleaning team serving the Bay Area, CA. "
            "Eco-friendly detergents, industrial extractors, and ninja-level attention to detail. 🥷✨"
        ),
        "cta_text": "Book Now",
        "badges": [
            {"icon": "fa-solid fa-leaf", "text": "Eco-safe"},
            {"icon": "fa-solid fa-truck-fast", "text": "Mobile Service"},
            {"icon": "fa-solid fa-star", "text": "5★ Rated"},
        ],
        "hero_image": media.get("hero_image"),
        "logo": media.get("logo"),
    }


def before_after(media: Dict[str, Optional[int]]) -> Dict[str, Any]:
    # A comparison needs both images, otherwise the gallery starts empty.
    comparisons: List[Dict[str, Any]] = []
    if media.get("before_image") and media.get("after_image"):
        comparisons.append({
            "title": "Living Room Carpet",
            "before_image": media["before_image"],
            "after_image": media["after_image"],
            "description": "Deep cleaning removed years of dirt and stains",
        })
    return {
        "section_title": "See the Difference",
        "section_subtitle": "Real results from Bay Area homes",
        "comparisons": comparisons,
    }


def section_visibility() -> Dict[str, Any]:
    return {
        "show_hero": True,
        "show_services": True,
        "show_before_after": True,
        "show_reviews": True,
        "show_pricing": True,
        "show_coverage": True,
        "show_contact": True,
        "enable_bubbles": True,
        "bubble_count": 15,
    }


SERVICES = [
    {
        "title": "Deep Carpet Cleaning",
        "slug": "deep-carpet-cleaning",
        "description": "Hot water extraction with powerful vacuum and edge tools for a wall-to-wall refresh.",
        "order": 1,
    },
    {
        "title": "Upholstery & Mattresses",
        "slug": "upholstery-mattresses",
        "description": "Fiber-safe cleaning for sofas, chairs, headboards and mattresses. Allergen reduction included.",
        "order": 2,
    },
    {
        "title": "Stain & Odor Removal",
        "slug": "stain-odor-removal",
        "description": "Targeted treatment for pet accidents, spills, and heavy traffic lanes. UV inspection on request.",
        "order": 3,
    },
]

REVIEWS = [
    {
        "name": "Anna P.",
        "location": "San Jose",
        "text": "They rescued our light couch from a coffee disaster. It literally looks new again. Fast, polite, and super professional.",
        "rating": 5,
        "order": 1,
    },
    {
        "name": "Marcus W.",
        "location": "Oakland",
        "text": "Pet odor gone! The UV check and enzyme treatment worked wonders. Dry in a few hours.",
        "rating": 5,
        "order": 2,
    },
    {
        "name": "Chloe R.",
        "location": "Palo Alto",
        "text": "Fair pricing, on time, and the results were 🔥. Booking again before the holidays.",
        "rating": 5,
        "order": 3,
    },
]

PRICING = [
    {
        "title": "Basic Clean",
        "price": 120,
        "rooms": "Up to 3 rooms",
        "features": ["Hot water extraction", "Eco-friendly detergents", "Edge cleaning", "Fast drying"],
        "popular": False,
        "order": 1,
    },
    {
        "title": "Deep Clean",
        "price": 180,
        "rooms": "Up to 5 rooms",
        "features": [
            "Everything in Basic",
            "Stain pre-treatment",
            "Pet odor removal",
            "Anti-allergen rinse",
            "UV inspection",
        ],
        "popular": True,
        "order": 2,
    },
    {
        "title": "Premium Clean",
        "price": 250,
        "rooms": "Up to 8 rooms",
        "features": [
            "Everything in Deep Clean",
            "Furniture cleaning",
            "Mattress cleaning",
            "Area rug cleaning",
            "Same-day service",
        ],
        "popular": False,
        "order": 3,
    },
]
