"""User and token API — password scrubbing, org labels, issue/revoke."""

from folio.core import tuid
from folio.core.errors import StoreError


async def _user(client, email="ann@example.com", password="pw", **extra):
    res = await client.post("/api/v1/users", json={"email": email, "password": password, **extra})
    assert res.status_code == 201, res.text
    return res.json()


async def test_user_responses_never_include_passwords(client):
    user = await _user(client)
    assert "password" not in user and "password_hash" not in user
    got = (await client.get(f"/api/v1/users/{user['id']}")).json()
    assert "password_hash" not in got
    listed = (await client.get("/api/v1/users")).json()
    assert all("password_hash" not in u for u in listed)


async def test_email_filter(client):
    await _user(client, email="a@b.io")
    await _user(client, email="c@d.io")
    found = (await client.get("/api/v1/users?email=A@B.io")).json()
    assert [u["email"] for u in found] == ["a@b.io"]


async def test_duplicate_email_is_422(client):
    await _user(client)
    res = await client.post("/api/v1/users", json={"email": "ANN@example.com"})
    assert res.status_code == 422


async def test_user_orgs_lists_org_names(client):
    org = (await client.post("/api/v1/organizations", json={"name": "Acme"})).json()
    await _user(client, org_id=org["id"])
    assert (await client.get("/api/v1/user_orgs")).json() == [{"id": org["id"], "value": "Acme"}]


async def test_token_issue_read_and_revoke(client):
    user = await _user(client)
    res = await client.post("/api/v1/tokens", json={
        "grant_type": "password", "username": "ann@example.com", "password": "pw",
    })
    assert res.status_code == 201
    token = res.json()
    assert token["user_id"] == user["id"]

    by_user = (await client.get(f"/api/v1/tokens?user={user['id']}")).json()
    assert [t["id"] for t in by_user] == [token["id"]]
    assert (await client.get("/api/v1/token_user_ids")).json() == [
        {"id": user["id"], "value": "ann@example.com"},
    ]

    assert (await client.delete(f"/api/v1/tokens/{token['id']}")).status_code == 200
    assert (await client.get(f"/api/v1/tokens/{token['id']}")).status_code == 404


async def test_bad_credentials_are_401(client):
    await _user(client)
    res = await client.post("/api/v1/tokens", json={
        "grant_type": "password", "username": "ann@example.com", "password": "wrong",
    })
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "AUTHENTICATION_FAILED"


async def test_deleting_user_revokes_tokens(client):
    user = await _user(client)
    token = (await client.post("/api/v1/tokens", json={
        "username": "ann@example.com", "password": "pw",
    })).json()
    await client.delete(f"/api/v1/users/{user['id']}")
    assert (await client.get(f"/api/v1/tokens/{token['id']}")).status_code == 404


async def test_unknown_user_version_is_404(client):
    user = await _user(client)
    res = await client.get(f"/api/v1/users/{user['id']}/versions/{tuid.new_id()}")
    assert res.status_code == 404


async def test_failed_token_revoke_keeps_the_user(client, services, monkeypatch):
    user = await _user(client)

    async def failing(user_id):
        raise StoreError("connection reset", "commit")

    monkeypatch.setattr(services.tokens, "delete_for_user", failing)
    res = await client.delete(f"/api/v1/users/{user['id']}")
    assert res.status_code == 500
    assert (await client.get(f"/api/v1/users/{user['id']}")).status_code == 200
