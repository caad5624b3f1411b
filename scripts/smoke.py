"""Smoke test for a running deployment.

Usage:
  python scripts/smoke.py

Requires the backend to be running at http://127.0.0.1:8000 by default.
Set BASE to target another deployment. Set SMOKE_ADMIN_EMAIL and
SMOKE_ADMIN_PASSWORD to also exercise the operator login and admin routes.
"""

import os
import sys
import time
import requests

BASE = os.environ.get("BASE", "http://127.0.0.1:8000")


def fail(msg):
    print("FAIL:", msg)
    sys.exit(2)


def ok(msg):
    print("OK:", msg)


def check_health():
    r = requests.get(f"{BASE}/health")
    if r.status_code != 200:
        fail(f"/health returned {r.status_code}: {r.text}")
    js = r.json()
    if not js.get("store_ok"):
        print("WARN: store not reachable, public routes will serve fallbacks")
    ok(f"Health: environment={js.get('environment')} seed_count={js.get('seed_count')}")


def check_content():
    for path, expected in (("/api/services", 3), ("/api/reviews", 3), ("/api/pricing", 3)):
        r = requests.get(f"{BASE}{path}")
        if r.status_code != 200:
            fail(f"{path} returned {r.status_code}: {r.text}")
        items = r.json()
        if len(items) < expected:
            print(f"WARN: {path} has {len(items)} items, expected at least {expected}")
        ok(f"{path}: {len(items)} items")
    popular = [t for t in requests.get(f"{BASE}/api/pricing").json() if t.get("popular")]
    if len(popular) != 1:
        print(f"WARN: {len(popular)} pricing tiers flagged popular")
    r = requests.get(f"{BASE}/api/site")
    if r.status_code != 200:
        fail(f"/api/site returned {r.status_code}: {r.text}")
    phone = r.json().get("site_settings", {}).get("phone")
    if not phone:
        fail("site settings have no phone number")
    ok(f"Site settings phone: {phone}")


def check_contact():
    payload = {
        "name": "Smoke Test",
        "email": f"smoke+{int(time.time())}@carpet-ninja.com",
        "message": "Smoke test submission, please ignore.",
        "source": "smoke",
    }
    r = requests.post(f"{BASE}/api/contact", json=payload)
    if r.status_code != 201:
        fail(f"contact submit failed: {r.status_code} {r.text}")
    ok(f"Contact request stored (id={r.json().get('id')})")
    r = requests.post(f"{BASE}/api/contact", json=payload)
    if r.status_code != 429:
        fail(f"duplicate contact submit not rejected: {r.status_code} {r.text}")
    ok("Duplicate contact submission rejected")


def check_admin():
    email = os.environ.get("SMOKE_ADMIN_EMAIL")
    password = os.environ.get("SMOKE_ADMIN_PASSWORD")
    if not email or not password:
        print("Skipping admin checks: SMOKE_ADMIN_EMAIL/SMOKE_ADMIN_PASSWORD not set")
        return
    r = requests.post(f"{BASE}/auth/login", json={"email": email, "password": password})
    if r.status_code != 200:
        fail(f"admin login failed: {r.status_code} {r.text}")
    headers = {"Authorization": f"Bearer {r.json()['access_token']}"}
    r = requests.get(f"{BASE}/admin/development-settings", headers=headers)
    if r.status_code != 200:
        fail(f"development settings unavailable: {r.status_code} {r.text}")
    ok(f"Development settings: {r.json()}")


if __name__ == "__main__":
    print("Target:", BASE)
    check_health()
    check_content()
    check_contact()
    check_admin()
    print("All smoke checks passed.")
