from zoba.catalog import DEFAULT_TEMPLATES, EXPERIMENTAL_TEMPLATES


def test_seed_is_idempotent(client):
    first = client.post("/api/templates/")
    second = client.post("/api/templates/")

    assert first.json() == {"message": "Templates initialized successfully"}
    assert second.json() == {"message": "Templates already exist"}
    assert len(client.get("/api/templates/").json()) == len(DEFAULT_TEMPLATES) + len(EXPERIMENTAL_TEMPLATES)


def test_catalog_flags(client):
    client.post("/api/templates/")

    templates = {t["name"]: t for t in client.get("/api/templates/").json()}

    assert len(templates) == 13
    assert templates["Simple Flowchart"]["is_default"] is True
    assert templates["Simple Flowchart"]["is_experimental"] is False
    assert templates["Sankey Diagram"]["is_experimental"] is True
    assert templates["Pie Chart"]["type"] == "pie"


def test_empty_store_lists_no_templates(client):
    assert client.get("/api/templates/").json() == []


def test_reset_replaces_collection_with_catalog(client):
    client.post("/api/templates/")
    before = {t["id"] for t in client.get("/api/templates/").json()}

    response = client.delete("/api/templates/")

    after = client.get("/api/templates/").json()
    assert response.json() == {"message": "Templates collection reset successfully"}
    assert len(after) == 13
    assert before.isdisjoint({t["id"] for t in after})
