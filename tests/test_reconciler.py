from datetime import datetime, timezone

import pytest

from app.errors import StoreError, StoreUnavailable
from app.seeding import defaults, reconciler
from app.seeding.assets import AssetLoader
from app.seeding.reconciler import ReconcileState, reconcile
from app.seeding.reset import DEVELOPMENT_SETTINGS, DevelopmentFlags, read_development_flags

NO_ASSETS = AssetLoader(None)


def _arm_force_reseed(store, is_development=True):
    store.update_global(
        DEVELOPMENT_SETTINGS,
        {"is_development": is_development, "force_reseed_on_next_start": True},
    )


def test_cold_boot_seeds_baseline_content(store, accounts):
    report = reconcile(store, accounts=accounts, loader=NO_ASSETS)

    assert report.ok
    assert report.seeded
    assert report.states[-2:] == [ReconcileState.SEED, ReconcileState.DONE]
    assert store.count("users") == 1
    assert store.count("services") == 3
    assert store.count("reviews") == 3
    assert store.count("pricing") == 3

    site_settings = store.find_global("site-settings")
    assert site_settings["phone"] == "(415) 123-4567"
    assert [c["name"] for c in site_settings["cities"]] == defaults.DEFAULT_CITIES
    assert [t.title for t in store.find("pricing", where={"popular": True})] == ["Deep Clean"]
    assert {r.rating for r in store.find("reviews")} == {5}
    for slug in ("hero", "before-after", "section-visibility"):
        assert store.find_global(slug) is not None
    assert store.find_global("hero")["subheadline"].endswith("attention to detail. 🥷✨")
    assert any("the results were 🔥" in r.text for r in store.find("reviews"))


def test_cold_boot_without_assets_leaves_image_references_empty(store, accounts):
    report = reconcile(store, accounts=accounts, loader=NO_ASSETS)

    assert set(report.media.values()) == {None}
    assert store.count("media") == 0
    assert store.find_global("site-settings")["logo"] is None
    assert store.find_global("hero")["hero_image"] is None
    assert store.find_global("before-after")["comparisons"] == []
    assert all(s.image_id is None for s in store.find("services"))


def test_cold_boot_with_assets_links_uploaded_media(store, accounts, assets_dir):
    report = reconcile(store, accounts=accounts, loader=AssetLoader(assets_dir))

    assert store.count("media") == len(defaults.SEED_ASSETS)
    assert None not in report.media.values()
    assert store.find_global("site-settings")["logo"] == report.media["logo"]
    assert store.find_global("hero")["hero_image"] == report.media["hero_image"]
    comparisons = store.find_global("before-after")["comparisons"]
    assert len(comparisons) == 1
    assert comparisons[0]["before_image"] == report.media["before_image"]
    services = {s.slug: s.image_id for s in store.find("services")}
    assert services["deep-carpet-cleaning"] == report.media["service:deep-carpet-cleaning"]


def test_seed_records_development_flags(store, accounts):
    now = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
    report = reconcile(store, accounts=accounts, loader=NO_ASSETS, now=now)

    flags = DevelopmentFlags.from_payload(store.find_global(DEVELOPMENT_SETTINGS))
    assert report.seed_count == 1
    assert flags.seed_count == 1
    assert flags.last_seed_date == now.isoformat()
    assert flags.seed_version == defaults.SEED_VERSION
    assert not flags.force_reseed_on_next_start


def test_second_run_is_a_no_op(store, accounts, assets_dir):
    loader = AssetLoader(assets_dir)
    reconcile(store, accounts=accounts, loader=loader)
    report = reconcile(store, accounts=accounts, loader=loader)

    assert report.ok
    assert not report.seeded
    assert ReconcileState.SKIP in report.states
    assert ReconcileState.SEED not in report.states
    assert report.seed_count == 1
    assert store.count("services") == 3
    assert store.count("reviews") == 3
    assert store.count("pricing") == 3
    assert store.count("media") == len(defaults.SEED_ASSETS)
    assert store.count("users") == 1


def test_populated_store_is_left_alone(store, accounts):
    store.create("services", {"title": "Custom", "slug": "custom", "description": "Edited by an operator", "order": 1})
    report = reconcile(store, accounts=accounts, loader=NO_ASSETS)

    assert ReconcileState.SKIP in report.states
    assert [s.slug for s in store.find("services")] == ["custom"]
    assert store.count("reviews") == 0


def test_armed_force_reseed_wipes_and_reseeds_once(store, accounts):
    reconcile(store, accounts=accounts, loader=NO_ASSETS)
    store.create("contact-requests", {"name": "Jo", "email": "jo@carpet-ninja.com", "message": "Hi"})
    store.create("reviews", {"name": "Extra", "location": "Fremont", "text": "Added later", "rating": 4, "order": 9})
    _arm_force_reseed(store)

    report = reconcile(store, accounts=accounts, loader=NO_ASSETS)

    assert report.ok
    assert report.seeded
    assert report.wipe.deleted["reviews"] == 4
    assert report.wipe.deleted["contact-requests"] == 1
    assert store.count("reviews") == 3
    assert store.count("contact-requests") == 0
    assert store.count("users") == 1
    flags = DevelopmentFlags.from_payload(store.find_global(DEVELOPMENT_SETTINGS))
    assert flags.seed_count == 2
    assert not flags.force_reseed_on_next_start
    assert flags.is_development

    again = reconcile(store, accounts=accounts, loader=NO_ASSETS)
    assert again.wipe is None
    assert ReconcileState.SKIP in again.states


def test_force_reseed_without_development_mode_is_ignored(store, accounts):
    reconcile(store, accounts=accounts, loader=NO_ASSETS)
    store.create("reviews", {"name": "Extra", "location": "Fremont", "text": "Kept", "rating": 4, "order": 9})
    _arm_force_reseed(store, is_development=False)

    report = reconcile(store, accounts=accounts, loader=NO_ASSETS)

    assert report.wipe is None
    assert ReconcileState.SKIP in report.states
    assert store.count("reviews") == 4
    assert store.find_global(DEVELOPMENT_SETTINGS)["force_reseed_on_next_start"] is True


def test_partial_wipe_failure_does_not_stop_the_reseed(store, accounts, monkeypatch):
    reconcile(store, accounts=accounts, loader=NO_ASSETS)
    _arm_force_reseed(store)
    real_delete = store.delete

    def flaky_delete(collection, record_id):
        if collection == "reviews":
            raise StoreError("locked")
        return real_delete(collection, record_id)

    monkeypatch.setattr(store, "delete", flaky_delete)
    report = reconcile(store, accounts=accounts, loader=NO_ASSETS)

    assert report.ok
    assert report.seeded
    assert report.to_dict()["wipe_failures"] == ["reviews"]
    assert report.wipe.deleted["services"] == 3
    assert store.count("services") == 3


def test_failed_reseed_keeps_media_references_valid(store, accounts, assets_dir, monkeypatch):
    reconcile(store, accounts=accounts, loader=AssetLoader(assets_dir))
    _arm_force_reseed(store)

    def fail_assets(registrar, loader):
        raise StoreUnavailable("connection lost")

    monkeypatch.setattr(reconciler, "_register_assets", fail_assets)
    report = reconcile(store, accounts=accounts, loader=AssetLoader(assets_dir))

    assert not report.ok
    assert "connection lost" in report.error
    assert store.count("media") == 0
    assert store.find_global("site-settings")["logo"] is None
    assert store.find_global("hero")["hero_image"] is None
    assert store.find_global("before-after")["comparisons"] == []
    # The switch stays armed so the next start retries.
    assert DevelopmentFlags.from_payload(store.find_global(DEVELOPMENT_SETTINGS)).force_reset_armed


def test_unreachable_store_is_reported_not_raised(broken_store, accounts):
    report = reconcile(broken_store, accounts=accounts, loader=NO_ASSETS)

    assert not report.ok
    assert report.error
    assert not report.seeded
    assert report.accounts[0].outcome.value == "failed"
    assert report.to_dict()["error"] == report.error


def test_unreadable_flags_fail_open(broken_store):
    assert read_development_flags(broken_store) == DevelopmentFlags()


@pytest.mark.parametrize("payload", [None, {}, {"seed_count": "not-a-number"}])
def test_flags_default_to_no_reset(payload):
    flags = DevelopmentFlags.from_payload(payload)
    assert not flags.force_reset_armed
    assert flags.seed_count == 0
