import json

from app import models
from app.errors import StoreError
from app.seeding.admins import DEV_ADMIN_EMAIL, ProvisionOutcome, provision_admins, resolve_accounts
from app.settings import AdminAccount, get_settings
from app.utils.security import verify_password


def test_creates_missing_accounts_with_hashed_password_and_roles(store, db_session):
    accounts = [
        AdminAccount(email="Owner@Carpet-Ninja.com", password="Owner!Pass123"),
        AdminAccount(email="editor@carpet-ninja.com", password="Editor!Pass123", roles=("editor",)),
    ]
    results = provision_admins(store, accounts)
    assert [r.outcome for r in results] == [ProvisionOutcome.CREATED, ProvisionOutcome.CREATED]

    owner = db_session.query(models.User).filter(models.User.email == "owner@carpet-ninja.com").one()
    assert verify_password("Owner!Pass123", owner.hashed_password)
    assert json.loads(owner.roles) == ["admin"]
    editor = db_session.query(models.User).filter(models.User.email == "editor@carpet-ninja.com").one()
    assert editor.role_list == ["editor"]


def test_repeated_provisioning_keeps_one_account_per_email(store, accounts):
    provision_admins(store, accounts)
    results = provision_admins(store, accounts)
    provision_admins(store, accounts)
    assert results[0].outcome is ProvisionOutcome.SKIPPED
    assert store.count("users") == 1


def test_existing_account_password_is_never_changed(store, db_session):
    provision_admins(store, [AdminAccount(email="owner@carpet-ninja.com", password="Original!Pass1")])
    provision_admins(store, [AdminAccount(email="owner@carpet-ninja.com", password="Changed!Pass2")])
    user = db_session.query(models.User).one()
    assert verify_password("Original!Pass1", user.hashed_password)
    assert not verify_password("Changed!Pass2", user.hashed_password)


def test_one_failing_account_does_not_block_the_others(store, monkeypatch):
    real_create = store.create

    def flaky_create(collection, data):
        if data.get("email") == "broken@carpet-ninja.com":
            raise StoreError("disk full")
        return real_create(collection, data)

    monkeypatch.setattr(store, "create", flaky_create)
    results = provision_admins(
        store,
        [
            AdminAccount(email="broken@carpet-ninja.com", password="Broken!Pass1"),
            AdminAccount(email="owner@carpet-ninja.com", password="Owner!Pass123"),
        ],
    )
    assert [r.outcome for r in results] == [ProvisionOutcome.FAILED, ProvisionOutcome.CREATED]
    assert "disk full" in results[0].detail
    assert store.count("users") == 1


def test_unreachable_store_fails_every_entry_without_raising(broken_store, accounts):
    results = provision_admins(broken_store, accounts)
    assert [r.outcome for r in results] == [ProvisionOutcome.FAILED]


def test_development_without_configured_accounts_generates_one():
    from dataclasses import replace

    settings = replace(get_settings(), admin_accounts=())
    generated = resolve_accounts(settings)
    assert len(generated) == 1
    assert generated[0].email == DEV_ADMIN_EMAIL
    assert generated[0].generated
    assert len(generated[0].password) >= 12
    assert resolve_accounts(replace(settings, environment="production")) == ()
