import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import get_db
from app.main import app
from app.seeding.assets import AssetLoader
from app.seeding.defaults import DEFAULT_PHONE
from app.seeding.reconciler import reconcile
from app.store import ContentStore


@pytest.fixture
def seeded(session_factory, accounts, assets_dir):
    db = session_factory()
    try:
        return reconcile(ContentStore(db), accounts=accounts, loader=AssetLoader(assets_dir))
    finally:
        db.close()


@pytest.fixture
def unavailable_client():
    """TestClient backed by a database without tables."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    factory = sessionmaker(bind=engine)

    def override_get_db():
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)
        engine.dispose()


def test_services_are_listed_in_display_order(client, seeded):
    r = client.get("/api/services")
    assert r.status_code == 200
    items = r.json()
    assert [s["order"] for s in items] == [1, 2, 3]
    assert items[0]["slug"] == "deep-carpet-cleaning"
    assert items[0]["image"]["url"] == f"/api/media/{items[0]['image']['id']}"


def test_pricing_has_one_popular_tier(client, seeded):
    tiers = client.get("/api/pricing").json()
    assert len(tiers) == 3
    assert [t["title"] for t in tiers if t["popular"]] == ["Deep Clean"]
    assert "UV inspection" in tiers[1]["features"]


def test_reviews_are_listed(client, seeded):
    reviews = client.get("/api/reviews").json()
    assert [r["name"] for r in reviews] == ["Anna P.", "Marcus W.", "Chloe R."]


def test_site_payload_bundles_globals_and_collections(client, seeded):
    r = client.get("/api/site")
    assert r.status_code == 200
    site = r.json()
    assert site["site_settings"]["phone"] == DEFAULT_PHONE
    assert site["site_settings"]["logo"] == seeded.media["logo"]
    assert site["section_visibility"]["show_pricing"] is True
    assert len(site["before_after"]["comparisons"]) == 1
    assert len(site["services"]) == 3


def test_stored_global_overrides_default_fields(client, session_factory):
    db = session_factory()
    try:
        ContentStore(db).update_global("site-settings", {"phone": "(650) 555-0100"})
    finally:
        db.close()
    payload = client.get("/api/globals/site-settings").json()
    assert payload["phone"] == "(650) 555-0100"
    assert payload["email"] == "hello@carpet-ninja.com"


def test_unknown_or_private_global_is_not_found(client):
    assert client.get("/api/globals/nope").status_code == 404
    assert client.get("/api/globals/development-settings").status_code == 404


def test_unreachable_store_serves_default_content(unavailable_client):
    services = unavailable_client.get("/api/services").json()
    assert [s["slug"] for s in services] == [
        "deep-carpet-cleaning",
        "upholstery-mattresses",
        "stain-odor-removal",
    ]
    assert all(s["image"] is None for s in services)

    site = unavailable_client.get("/api/site").json()
    assert site["site_settings"]["phone"] == DEFAULT_PHONE
    assert len(site["site_settings"]["cities"]) == 8
    assert site["site_settings"]["logo"] is None
    assert len(site["reviews"]) == 3
    assert sum(1 for t in site["pricing"] if t["popular"]) == 1


def test_media_is_streamed_with_its_mime_type(client, seeded, assets_dir):
    media_id = seeded.media["logo"]
    r = client.get(f"/api/media/{media_id}")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("image/png")
    assert r.content == (assets_dir / "carpet-ninja.png").read_bytes()


def test_missing_media_is_not_found(client):
    assert client.get("/api/media/999").status_code == 404


def test_media_on_unreachable_store_is_unavailable(unavailable_client):
    assert unavailable_client.get("/api/media/1").status_code == 503
