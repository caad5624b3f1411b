def test_health_reports_store_and_seed_state(client):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["environment"] == "test"
    assert body["store_ok"] is True
    assert body["services"] == 0
    assert body["seed_count"] == 0


def test_health_after_seeding(client, admin_auth_header):
    client.post("/admin/reseed", headers=admin_auth_header)
    body = client.get("/health").json()
    assert body["services"] == 3
    assert body["seed_count"] == 1


def test_root_answers_plain_text(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.text == "API OK"
