"""Import/export tests."""

import pytest
from httpx import AsyncClient


async def _seed(client: AsyncClient):
    await client.post(
        "/api/prompts/",
        json={"title": "Summarise", "description": "Short summary", "content": "Summarise {{text}}"},
    )
    await client.post("/api/prompts/", json={"title": "Translate", "content": "To {{lang}}"})


@pytest.mark.asyncio
async def test_export_json(client: AsyncClient):
    await _seed(client)
    resp = await client.get("/api/transfer/export")
    assert resp.status_code == 200
    assert "attachment" in resp.headers["content-disposition"]
    doc = resp.json()
    assert doc["version"] == "1.0"
    assert doc["vault"] == {"name": "default"}
    assert sorted(p["title"] for p in doc["prompts"]) == ["Summarise", "Translate"]


@pytest.mark.asyncio
async def test_export_markdown_keeps_variables_literal(client: AsyncClient):
    await _seed(client)
    resp = await client.get("/api/transfer/export", params={"format": "markdown"})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/markdown")
    text = resp.text
    assert text.startswith("# PromptVault Export\n")
    assert "## Summarise\n\n*Short summary*\n\n```\nSummarise {{text}}\n```" in text
    assert "## Translate\n\n```\nTo {{lang}}\n```" in text


@pytest.mark.asyncio
async def test_import_new_prompts_get_first_version(client: AsyncClient):
    data = {
        "prompts": [
            {"title": "Fresh", "content": "Hello {{who}}"},
            {"title": "", "content": "no title"},
        ]
    }
    resp = await client.post("/api/transfer/import", json={"data": data})
    assert resp.status_code == 200
    result = resp.json()
    assert result["imported"] == 1
    assert result["skipped"] == 1
    assert result["errors"] == ["Skipped prompt: missing title or content"]

    prompts = (await client.get("/api/prompts/")).json()
    assert [p["title"] for p in prompts] == ["Fresh"]
    versions = (await client.get(f"/api/prompts/{prompts[0]['id']}/versions/")).json()
    assert [v["version_number"] for v in versions] == [1]


@pytest.mark.asyncio
async def test_import_conflict_skip(client: AsyncClient):
    await _seed(client)
    data = {"prompts": [{"title": "summarise", "content": "replacement"}]}
    resp = await client.post("/api/transfer/import", json={"data": data})
    assert resp.json()["skipped"] == 1
    prompts = (await client.get("/api/prompts/", params={"search": "Summarise"})).json()
    assert prompts[0]["content"] == "Summarise {{text}}"


@pytest.mark.asyncio
async def test_import_conflict_overwrite_snapshots_first(client: AsyncClient):
    await _seed(client)
    data = {"prompts": [{"title": "SUMMARISE", "description": "new", "content": "TL;DR {{text}}"}]}
    resp = await client.post(
        "/api/transfer/import", json={"data": data, "conflict_resolution": "overwrite"}
    )
    assert resp.json()["overwritten"] == 1

    prompts = (await client.get("/api/prompts/", params={"search": "TL;DR"})).json()
    assert len(prompts) == 1
    assert prompts[0]["title"] == "Summarise"
    assert prompts[0]["description"] == "new"

    versions = (await client.get(f"/api/prompts/{prompts[0]['id']}/versions/")).json()
    assert [v["version_number"] for v in versions] == [2, 1]
    assert versions[0]["content"] == "Summarise {{text}}"


@pytest.mark.asyncio
async def test_import_conflict_duplicate(client: AsyncClient):
    await _seed(client)
    data = {"prompts": [{"title": "Translate", "content": "Into {{lang}}"}]}
    resp = await client.post(
        "/api/transfer/import", json={"data": data, "conflict_resolution": "duplicate"}
    )
    assert resp.json()["duplicated"] == 1
    titles = sorted(p["title"] for p in (await client.get("/api/prompts/")).json())
    assert titles == ["Summarise", "Translate", "Translate (imported)"]


@pytest.mark.asyncio
async def test_import_rejects_bad_resolution(client: AsyncClient):
    resp = await client.post(
        "/api/transfer/import", json={"data": {"prompts": []}, "conflict_resolution": "merge"}
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_export_includes_tags(client: AsyncClient):
    tag = (await client.post("/api/tags/", json={"name": "ops", "color": "#123456"})).json()
    await client.post(
        "/api/prompts/", json={"title": "Deploy", "content": "Ship {{service}}", "tag_ids": [tag["id"]]}
    )

    doc = (await client.get("/api/transfer/export")).json()
    assert doc["tags"] == [{"id": tag["id"], "name": "ops", "color": "#123456"}]
    assert doc["prompts"][0]["tags"] == ["ops"]

    text = (await client.get("/api/transfer/export", params={"format": "markdown"})).text
    assert "## Deploy\n\n**Tags:** ops\n\n```\nShip {{service}}\n```" in text


@pytest.mark.asyncio
async def test_import_matches_tags_by_name(client: AsyncClient):
    await client.post("/api/tags/", json={"name": "Email", "color": "#111111"})
    data = {
        "tags": [{"name": "email", "color": "#222222"}, {"name": "Sales", "color": "#333333"}],
        "prompts": [
            {"title": "Follow up", "content": "Hi {{name}}", "tags": ["EMAIL", "sales", "new"]},
        ],
    }
    resp = await client.post("/api/transfer/import", json={"data": data})
    assert resp.json()["imported"] == 1

    tags = (await client.get("/api/tags/")).json()
    assert [(t["name"], t["color"]) for t in tags] == [
        ("Email", "#111111"), ("Sales", "#333333"), ("new", "#6366f1"),
    ]
    prompt = (await client.get("/api/prompts/")).json()[0]
    assert [t["name"] for t in prompt["tags"]] == ["Email", "Sales", "new"]


@pytest.mark.asyncio
async def test_import_overwrite_replaces_tags(client: AsyncClient):
    old = (await client.post("/api/tags/", json={"name": "old"})).json()
    await client.post(
        "/api/prompts/", json={"title": "Retag me", "content": "v1", "tag_ids": [old["id"]]}
    )
    data = {"prompts": [{"title": "Retag me", "content": "v2", "tags": ["fresh"]}]}
    resp = await client.post(
        "/api/transfer/import", json={"data": data, "conflict_resolution": "overwrite"}
    )
    assert resp.json()["overwritten"] == 1

    prompt = (await client.get("/api/prompts/")).json()[0]
    assert prompt["content"] == "v2"
    assert [t["name"] for t in prompt["tags"]] == ["fresh"]
