"""Metrics, events, devices, emails, and TUID endpoints."""

from folio.core import tuid


async def test_metric_stats_endpoint(client):
    target = tuid.new_id()
    for value in (1, 3):
        res = await client.post("/api/v1/metrics", json={
            "title": "Load", "entity_id": target, "entity_type": "Content",
            "value": value, "units": "s", "tags": ["Web"],
        })
        assert res.status_code == 201, res.text

    stats = (await client.get(f"/api/v1/metric_stats?entity={target}")).json()
    assert stats["count"] == 2
    assert stats["mean"] == 2.0
    assert (await client.get("/api/v1/metric_tags")).json() == ["web"]


async def test_metric_stats_requires_filter(client):
    res = await client.get("/api/v1/metric_stats")
    assert res.status_code == 400


async def test_metric_stats_without_values_is_404(client):
    res = await client.get(f"/api/v1/metric_stats?entity={tuid.new_id()}")
    assert res.status_code == 404


async def test_events_listed_newest_first_and_filtered(client):
    ids = []
    for level in ("INFO", "ERROR", "INFO"):
        res = await client.post("/api/v1/events", json={
            "message": f"{level} happened", "log_level": level, "entity_type": "Content",
        })
        ids.append(res.json()["id"])

    newest = (await client.get("/api/v1/events")).json()
    assert [e["id"] for e in newest] == ids[::-1]

    errors = (await client.get("/api/v1/events?log_level=error")).json()
    assert [e["id"] for e in errors] == [ids[1]]
    assert (await client.get("/api/v1/event_log_levels")).json() == ["ERROR", "INFO"]


async def test_bad_log_level_is_400(client):
    res = await client.get("/api/v1/events?log_level=LOUD")
    assert res.status_code == 400
    assert res.json()["error"]["context"]["parameter"] == "log_level"


async def test_device_registered_from_user_agent(client):
    res = await client.post("/api/v1/devices", headers={"User-Agent": "TestBrowser/1.0"})
    assert res.status_code == 201
    device = res.json()
    assert device["user_agent"] == "TestBrowser/1.0"
    assert device["expires_at"] is not None

    agents = (await client.get("/api/v1/device_agents")).json()
    assert agents == [{"id": device["id"], "value": "TestBrowser/1.0"}]


async def test_email_round_trip_keeps_from_alias(client):
    res = await client.post("/api/v1/emails", json={
        "from": {"name": "Ann", "address": "Ann@Example.com"},
        "to": [{"address": "bob@example.com"}],
        "subject": "Hi",
    })
    assert res.status_code == 201, res.text
    email = (await client.get(f"/api/v1/emails/{res.json()['id']}")).json()
    assert email["from"]["address"] == "ann@example.com"
    found = (await client.get("/api/v1/emails?address=bob@example.com")).json()
    assert [e["id"] for e in found] == [email["id"]]


async def test_tuids(client):
    minted = (await client.get("/api/v1/tuids")).json()
    assert len(minted) == 5
    assert [t["id"] for t in minted] == sorted(t["id"] for t in minted)

    one = (await client.post("/api/v1/tuids")).json()
    decoded = (await client.get(f"/api/v1/tuids/{one['id']}")).json()
    assert decoded == one

    assert (await client.get("/api/v1/tuids?limit=2")).status_code == 200
    assert (await client.get("/api/v1/tuids/bad")).status_code == 400


async def test_health_and_about(client):
    assert (await client.get("/api/v1/health/")).json()["status"] == "healthy"
    assert (await client.get("/api/v1/health/ready")).status_code == 200
    assert (await client.get("/api/v1/about")).json()["name"] == "folio-api"
