"""Content API — CRUD, versions, and the content_titles listing behaviors.

Invariants:
    - Filtered title listings page by ID with an exclusive offset
    - sorted/search read the whole partition and order by title
    - Bad listing parameters are 400 with the parameter named, before any read
"""

from folio.core import tuid
from folio.core.errors import ErrorContext, StoreError


async def test_create_read_and_location(client, make_content):
    res = await client.post("/api/v1/contents", json={
        "type": "ARTICLE", "content": {"title": "Hello"},
    })
    assert res.status_code == 201
    body = res.json()
    assert res.headers["location"] == f"/api/v1/contents/{body['id']}"

    got = await client.get(f"/api/v1/contents/{body['id']}")
    assert got.json()["content"]["title"] == "Hello"


async def test_head_reports_existence(client, make_content):
    c = await make_content("Dune")
    assert (await client.head(f"/api/v1/contents/{c['id']}")).status_code == 204
    assert (await client.head(f"/api/v1/contents/{tuid.new_id()}")).status_code == 404


async def test_unknown_id_is_404_and_malformed_id_is_400(client):
    missing = await client.get(f"/api/v1/contents/{tuid.new_id()}")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "NOT_FOUND"

    bad = await client.get("/api/v1/contents/nope")
    assert bad.status_code == 400
    assert bad.json()["error"]["context"]["parameter"] == "id"


async def test_update_creates_version_and_delete_returns_body(client, make_content):
    c = await make_content("Dune")
    res = await client.put(f"/api/v1/contents/{c['id']}", json={
        "type": "BOOK", "content": {"title": "Dune Messiah"},
    })
    assert res.status_code == 200
    v2 = res.json()["version_id"]

    versions = (await client.get(f"/api/v1/contents/{c['id']}/versions")).json()
    assert [v["version_id"] for v in versions] == [c["version_id"], v2]
    old = await client.get(f"/api/v1/contents/{c['id']}/versions/{c['version_id']}")
    assert old.json()["content"]["title"] == "Dune"

    deleted = await client.delete(f"/api/v1/contents/{c['id']}")
    assert deleted.json()["id"] == c["id"]
    assert (await client.get(f"/api/v1/contents/{c['id']}")).status_code == 404


async def test_semantic_problems_are_422(client):
    res = await client.post("/api/v1/contents", json={"type": "BOOK", "content": {}})
    assert res.status_code == 422
    assert res.json()["error"]["problems"] == ["content is empty"]


async def test_overlong_tag_or_author_is_422_not_store_error(client):
    res = await client.post("/api/v1/contents", json={
        "type": "BOOK",
        "tags": ["x" * 300],
        "authors": [{"name": "A" * 257}],
        "content": {"title": "Long"},
    })
    assert res.status_code == 422
    problems = res.json()["error"]["problems"]
    assert len(problems) == 2
    assert all("exceeds 256 characters" in p for p in problems)
    assert (await client.get("/api/v1/content_titles")).json() == []


async def test_unknown_content_type_is_400(client):
    res = await client.post("/api/v1/contents", json={"type": "POEM", "content": {"title": "x"}})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_tag_listing_pages_with_exclusive_offset(client, make_content):
    t1 = await make_content("Gamma", tags=["Fiction"])
    t2 = await make_content("Alpha", tags=["fiction"])
    t3 = await make_content("Beta", tags=["fiction"])
    await make_content("Other", tags=["history"])

    first = (await client.get("/api/v1/content_titles?tag=fiction&limit=2")).json()
    assert [t["id"] for t in first] == [t1["id"], t2["id"]]

    second = (await client.get(
        f"/api/v1/content_titles?tag=fiction&offset={t2['id']}&limit=2",
    )).json()
    assert [t["id"] for t in second] == [t3["id"]]


async def test_sorted_listing_orders_by_title(client, make_content):
    await make_content("Gamma", tags=["fiction"])
    await make_content("Alpha", tags=["fiction"])
    found = (await client.get("/api/v1/content_titles?tag=fiction&sorted=true&limit=1")).json()
    assert [t["value"] for t in found] == ["Alpha (BOOK)", "Gamma (BOOK)"]


async def test_search_matches_terms_case_insensitively(client, make_content):
    await make_content("The Red Dragon")
    await make_content("Dragon Tales", type_="ARTICLE")
    await make_content("Owls")
    found = (await client.get("/api/v1/content_titles?search=dragon")).json()
    assert [t["value"] for t in found] == ["Dragon Tales (ARTICLE)", "The Red Dragon (BOOK)"]

    both = (await client.get("/api/v1/content_titles?search=red+owls&any=true")).json()
    assert len(both) == 2


async def test_type_filter_beats_author(client, make_content):
    await make_content("By Ann", type_="ARTICLE", authors=["Ann"])
    await make_content("Also Ann", type_="BOOK", authors=["Ann"])
    found = (await client.get("/api/v1/content_titles?type=book&author=Ann")).json()
    assert [t["value"] for t in found] == ["Also Ann (BOOK)"]


async def test_bad_filter_is_400_even_when_outranked(client):
    res = await client.get("/api/v1/content_titles?type=BOOK&editor=bad")
    assert res.status_code == 400
    assert res.json()["error"]["context"]["parameter"] == "editor"


async def test_bad_limit_is_400(client):
    for limit in ("0", "-1", "many"):
        res = await client.get(f"/api/v1/content_titles?limit={limit}")
        assert res.status_code == 400
        assert res.json()["error"]["context"]["parameter"] == "limit"


async def test_contents_body_listing_and_distinct_keys(client, make_content):
    a = await make_content("A", tags=["x", "y"], authors=["Ann"])
    b = await make_content("B", tags=["y"])
    bodies = (await client.get("/api/v1/contents?limit=1")).json()
    assert [c["id"] for c in bodies] == [a["id"]]
    newest = (await client.get("/api/v1/contents?reverse=true")).json()
    assert [c["id"] for c in newest] == [b["id"], a["id"]]

    assert (await client.get("/api/v1/content_tags")).json() == ["x", "y"]
    assert (await client.get("/api/v1/content_authors")).json() == ["Ann"]
    assert (await client.get("/api/v1/content_types")).json() == ["BOOK"]


async def test_mutations_are_audited(client, make_content):
    c = await make_content("Dune")
    events = (await client.get(f"/api/v1/events?entity={c['id']}")).json()
    assert [e["message"] for e in events] == [f"Created Content {c['id']}"]


async def test_store_failure_is_500_with_audit_event(client, services, make_content, monkeypatch):
    c = await make_content("Dune")

    async def failing(entity_id):
        raise StoreError(
            "connection reset", "query",
            ErrorContext(entity_type="Content", entity_id=entity_id),
        )

    monkeypatch.setattr(services.contents.table, "read", failing)
    res = await client.get(f"/api/v1/contents/{c['id']}")
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "STORE_ERROR"
    event_id = error["context"]["event_id"]
    assert tuid.is_valid(event_id)

    event = (await client.get(f"/api/v1/events/{event_id}")).json()
    assert event["log_level"] == "ERROR"
    assert event["entity_id"] == c["id"]
    assert event["uri"] == f"/api/v1/contents/{c['id']}"


async def test_search_within_tag_partition(client, make_content):
    await make_content("Dragon Rider", tags=["fiction"])
    await make_content("Sea Wolves", tags=["fiction"])
    await make_content("Dragon Biology", tags=["science"])
    found = (await client.get("/api/v1/content_titles?tag=fiction&search=Dragon&any=false")).json()
    assert [t["value"] for t in found] == ["Dragon Rider (BOOK)"]
