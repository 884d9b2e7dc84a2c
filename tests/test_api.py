from conftest import ADMIN_HEADERS, STAFF_HEADERS


def _create(client, name, site_id=1, headers=STAFF_HEADERS, **extra):
    response = client.post(f"/api/folders/site/{site_id}", json={"name": name, **extra}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_root_and_health(client):
    assert client.get("/").json()["api_versions"] == ["v1"]
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/ready").json() == {"ready": True}


def test_create_returns_camel_case(client):
    folder = _create(client, "Archives", description="Old records", sortOrder=2)

    assert folder["name"] == "Archives"
    assert folder["path"] == "/Archives"
    assert folder["siteId"] == 1
    assert folder["parentId"] is None
    assert folder["sortOrder"] == 2
    assert folder["createdBy"] == "alice"
    assert "COMMUNITY_MEMBER" in folder["allowedRoles"]


def test_versioned_mount(client):
    _create(client, "Archives")

    response = client.get("/v1/api/folders/site/1", headers=STAFF_HEADERS)

    assert response.json()["total"] == 1


def test_anonymous_cannot_create(client):
    response = client.post("/api/folders/site/1", json={"name": "Archives"})

    assert response.status_code == 403
    body = response.json()
    assert body["error"] == "PermissionDenied"
    assert body["path"] == "/api/folders/site/1"
    assert body["request_id"] == response.headers["X-Request-ID"]


def test_community_member_cannot_create(client):
    response = client.post("/api/folders/site/1", json={"name": "A"}, headers={"X-User-Role": "COMMUNITY_MEMBER"})

    assert response.status_code == 403


def test_duplicate_is_conflict(client):
    _create(client, "Maps")

    response = client.post("/api/folders/site/1", json={"name": "MAPS"}, headers=STAFF_HEADERS)

    assert response.status_code == 409
    assert response.json()["error"] == "DuplicateNameError"


def test_invalid_name_is_bad_request(client):
    response = client.post("/api/folders/site/1", json={"name": "a/b"}, headers=STAFF_HEADERS)

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


def test_missing_body_field_is_unprocessable(client):
    response = client.post("/api/folders/site/1", json={}, headers=STAFF_HEADERS)

    assert response.status_code == 422


def test_tree_hides_restricted_folders(client):
    root = _create(client, "Archives", allowedRoles=["PUBLIC"])
    secret = _create(client, "Secret", parentId=root["id"], allowedRoles=["HERITAGE_MANAGER"])
    _create(client, "Minutes", parentId=secret["id"], allowedRoles=["PUBLIC"])

    public_tree = client.get("/api/folders/tree", params={"siteId": 1}).json()
    staff_tree = client.get("/api/folders/tree", params={"siteId": 1}, headers=STAFF_HEADERS).json()

    assert [n["name"] for n in public_tree["items"]] == ["Archives", "Minutes"]
    assert public_tree["items"][0]["children"] == []
    assert staff_tree["items"][0]["children"][0]["name"] == "Secret"
    assert staff_tree["items"][0]["children"][0]["children"][0]["name"] == "Minutes"


def test_system_wide_tree_requires_admin(client):
    _create(client, "One", site_id=1)
    _create(client, "Two", site_id=2)

    assert client.get("/api/folders/tree", headers=STAFF_HEADERS).status_code == 403
    assert client.get("/api/folders", headers=STAFF_HEADERS).status_code == 403

    response = client.get("/api/folders/tree", headers=ADMIN_HEADERS)
    assert sorted(n["name"] for n in response.json()["items"]) == ["One", "Two"]
    assert client.get("/api/folders", headers=ADMIN_HEADERS).json()["total"] == 2


def test_search(client):
    _create(client, "Survey Maps", allowedRoles=["PUBLIC"])
    _create(client, "Survey Plans", allowedRoles=["HERITAGE_MANAGER"])

    public = client.get("/api/folders/search", params={"q": "survey", "siteId": 1}).json()
    staff = client.get("/api/folders/search", params={"q": "survey", "siteId": 1}, headers=STAFF_HEADERS).json()
    short = client.get("/api/folders/search", params={"q": "s", "siteId": 1}, headers=STAFF_HEADERS).json()

    assert [f["name"] for f in public["items"]] == ["Survey Maps"]
    assert staff["total"] == 2
    assert short == {"items": [], "total": 0}


def test_update_and_get(client):
    folder = _create(client, "Maps", description="Survey maps")

    response = client.put(f"/api/folders/{folder['id']}", json={"name": "Plans"}, headers=STAFF_HEADERS)

    assert response.status_code == 200
    assert response.json()["description"] == "Survey maps"
    fetched = client.get(f"/api/folders/{folder['id']}", headers=STAFF_HEADERS).json()
    assert fetched["name"] == "Plans"
    assert fetched["path"] == "/Plans"


def test_get_missing_and_hidden(client):
    secret = _create(client, "Secret", allowedRoles=["HERITAGE_MANAGER"])

    assert client.get("/api/folders/does-not-exist").status_code == 404
    assert client.get(f"/api/folders/{secret['id']}").status_code == 403


def test_permissions_endpoint(client):
    folder = _create(client, "Maps")

    response = client.patch(
        f"/api/folders/{folder['id']}/permissions",
        json={"allowedRoles": ["PUBLIC"]},
        headers=STAFF_HEADERS
    )
    empty = client.patch(f"/api/folders/{folder['id']}/permissions", json={"allowedRoles": []}, headers=STAFF_HEADERS)

    assert response.json()["allowedRoles"] == ["PUBLIC"]
    assert empty.status_code == 400


def test_move_and_breadcrumb(client):
    a = _create(client, "A")
    b = _create(client, "B", parentId=a["id"])
    c = _create(client, "C", parentId=b["id"])
    d = _create(client, "D")

    moved = client.post(f"/api/folders/{b['id']}/move", json={"parentId": d["id"]}, headers=STAFF_HEADERS)
    cycle = client.post(f"/api/folders/{d['id']}/move", json={"parentId": c["id"]}, headers=STAFF_HEADERS)
    crumbs = client.get(f"/api/folders/{c['id']}/path", headers=STAFF_HEADERS).json()

    assert moved.json()["path"] == "/D/B"
    assert cycle.status_code == 400
    assert cycle.json()["error"] == "CycleError"
    assert [i["name"] for i in crumbs["items"]] == ["D", "B", "C"]


def test_move_to_root(client):
    a = _create(client, "A")
    b = _create(client, "B", parentId=a["id"])

    response = client.post(f"/api/folders/{b['id']}/move", json={"parentId": None}, headers=STAFF_HEADERS)

    assert response.json()["level"] == 0
    assert response.json()["path"] == "/B"


def test_breadcrumb_hidden_is_empty(client):
    secret = _create(client, "Secret", allowedRoles=["HERITAGE_MANAGER"])

    assert client.get(f"/api/folders/{secret['id']}/path").json() == {"items": [], "total": 0}


def test_delete(client):
    a = _create(client, "A")
    _create(client, "B", parentId=a["id"])

    blocked = client.delete(f"/api/folders/{a['id']}", headers=STAFF_HEADERS)
    done = client.delete(f"/api/folders/{a['id']}", params={"recursive": "true"}, headers=STAFF_HEADERS)

    assert blocked.status_code == 409
    assert blocked.json()["error"] == "NotEmptyError"
    assert done.status_code == 204
    assert client.get("/api/folders/site/1", headers=STAFF_HEADERS).json()["total"] == 0


def test_bulk_create(client):
    response = client.post(
        "/api/folders/site/1/bulk",
        json={"folders": [{"name": "A"}, {"name": ""}, {"name": "A"}, {"name": "B"}]},
        headers=STAFF_HEADERS
    )

    body = response.json()
    assert response.status_code == 200
    assert (body["created"], body["skipped"], body["failed"]) == (2, 1, 1)
    assert body["skippedIndexes"] == [1]
    assert body["errors"][0]["error"] == "DuplicateNameError"


def test_children_contents_and_statistics(client):
    root = _create(client, "Root")
    maps = _create(client, "Maps", parentId=root["id"], type="MAPS")
    _create(client, "1920", parentId=maps["id"])

    children = client.get(f"/api/folders/{root['id']}/children", headers=STAFF_HEADERS).json()
    contents = client.get(f"/api/folders/{root['id']}/contents", headers=STAFF_HEADERS).json()
    stats = client.get(f"/api/folders/{root['id']}/statistics", headers=STAFF_HEADERS).json()
    tree_stats = client.get("/api/folders/statistics", params={"siteId": 1}, headers=STAFF_HEADERS).json()

    assert [c["name"] for c in children["items"]] == ["Maps"]
    assert contents["items"][0]["childFolderCount"] == 1
    assert stats == {"documentCount": 0, "childFolderCount": 1}
    assert tree_stats["totalFolders"] == 3
    assert tree_stats["maxDepth"] == 2
    assert tree_stats["foldersByType"] == {"GENERAL": 2, "MAPS": 1}


def test_filter(client):
    root = _create(client, "Root")
    _create(client, "Maps", parentId=root["id"])

    response = client.get("/api/folders/filter", params={"siteId": 1, "parentId": root["id"]}, headers=STAFF_HEADERS)

    assert [f["name"] for f in response.json()["items"]] == ["Maps"]


def test_reference_data(client):
    types = client.get("/api/folders/types").json()
    roles = client.get("/api/folders/permissions").json()

    assert types["total"] == 12
    assert types["items"][0] == {"value": "GENERAL", "name": "General", "icon": "Folder", "color": "blue"}
    assert roles["items"] == [
        "SYSTEM_ADMINISTRATOR", "HERITAGE_MANAGER", "CONTENT_MANAGER", "COMMUNITY_MEMBER", "PUBLIC"
    ]


def test_cors_headers(client):
    response = client.options(
        "/api/folders/types",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"}
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_document_counts_and_reassignment_on_delete(client):
    from heritage_folders.routers.dependencies import get_document_store

    root = _create(client, "Root")
    child = _create(client, "Child", parentId=root["id"])
    store = get_document_store()
    store.file_document("doc-1", child["id"])

    fetched = client.get(f"/api/folders/{child['id']}", headers=STAFF_HEADERS).json()
    client.delete(f"/api/folders/{child['id']}", headers=STAFF_HEADERS)

    assert fetched["documentCount"] == 1
    assert store.folder_of("doc-1") == root["id"]
