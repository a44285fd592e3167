"""API test helpers."""

import pytest


@pytest.fixture
def make_content(client):
    """POST a content body and return the created JSON."""

    async def _make(title, type_="BOOK", tags=(), authors=(), subtitle=""):
        res = await client.post("/api/v1/contents", json={
            "type": type_,
            "tags": list(tags),
            "authors": [{"name": a} for a in authors],
            "content": {"title": title, "subtitle": subtitle, "text": "Once upon a time"},
        })
        assert res.status_code == 201, res.text
        return res.json()

    return _make
