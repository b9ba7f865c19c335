import io
import re

import pytest

from realty.core.errors import ValidationFailedError
from realty.main import app
from realty.services.storage import LocalObjectStore, folder_for, get_store

KEY_RE = re.compile(r"^images/\d{13}-[0-9a-f]{32}\.png$")
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def store(tmp_path, client):
    store = LocalObjectStore(tmp_path / "uploads", "http://media.test", "/static/uploads", max_bytes=1024)
    app.dependency_overrides[get_store] = lambda: store
    return store


def test_folder_for():
    assert folder_for("image/png") == "images"
    assert folder_for("video/mp4") == "videos"
    assert folder_for("application/pdf") == "documents"
    assert folder_for("text/plain") == "uploads"


def test_key_for_url_only_resolves_own_urls(tmp_path):
    store = LocalObjectStore(tmp_path, "http://media.test", "static/uploads")
    assert store.key_for_url("http://media.test/static/uploads/images/a.png") == "images/a.png"
    assert store.key_for_url("https://elsewhere.test/static/uploads/images/a.png") == "images/a.png"
    assert store.key_for_url("http://media.test/other/images/a.png") is None
    assert store.key_for_url("http://media.test/static/uploads/../secret") is None
    assert store.key_for_url("http://media.test/static/uploads/") is None
    assert store.key_for_url("http://media.test/static/uploads//etc/passwd") is None
    assert store.key_for_url("http://media.test/static/uploads/images\\..\\..\\x") is None


def test_delete_never_leaves_the_upload_root(tmp_path):
    root = tmp_path / "uploads"
    root.mkdir()
    outside = tmp_path / "settings.txt"
    outside.write_text("keep")
    store = LocalObjectStore(root, "http://media.test", "/static/uploads")

    assert store.delete_urls([f"http://media.test/static/uploads/{outside}"]) == []
    with pytest.raises(ValidationFailedError):
        store.delete(str(outside))
    assert outside.read_text() == "keep"


def test_put_rejects_oversized_file(tmp_path):
    store = LocalObjectStore(tmp_path, "http://media.test", "/static/uploads", max_bytes=10)
    with pytest.raises(ValidationFailedError, match="File too large"):
        store.put(io.BytesIO(b"x" * 11), filename="big.png", content_type="image/png")
    assert not any(p.is_file() for p in tmp_path.rglob("*"))


@pytest.mark.asyncio
async def test_upload_requires_auth(client, store):
    resp = await client.post("/api/upload/single", files={"file": ("a.png", PNG, "image/png")})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_upload_single_and_delete(client, store, buyer_headers):
    resp = await client.post(
        "/api/upload/single", files={"file": ("Photo.PNG", PNG, "image/png")}, headers=buyer_headers
    )
    assert resp.status_code == 200
    stored = resp.json()["file"]
    assert KEY_RE.match(stored["key"])
    assert stored["url"] == f"http://media.test/static/uploads/{stored['key']}"
    assert stored["originalName"] == "Photo.PNG"
    assert stored["size"] == len(PNG)
    assert (store.root / stored["key"]).read_bytes() == PNG

    resp = await client.request("DELETE", "/api/upload/file", json={"url": stored["url"]}, headers=buyer_headers)
    assert resp.status_code == 200
    assert not (store.root / stored["key"]).exists()

    resp = await client.request(
        "DELETE", "/api/upload/file", json={"url": "http://x.test/nope.png"}, headers=buyer_headers
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_upload_rejects_bad_type(client, store, buyer_headers):
    resp = await client.post(
        "/api/upload/single", files={"file": ("notes.txt", b"hello", "text/plain")}, headers=buyer_headers
    )
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Invalid file type")


@pytest.mark.asyncio
async def test_multiple_upload_is_all_or_nothing(client, store, buyer_headers):
    files = [
        ("files", ("a.png", PNG, "image/png")),
        ("files", ("b.exe", b"MZ", "application/octet-stream")),
    ]
    resp = await client.post("/api/upload/multiple", files=files, headers=buyer_headers)
    assert resp.status_code == 400
    assert not any(p.is_file() for p in store.root.rglob("*"))


@pytest.mark.asyncio
async def test_property_images_limit(client, store, seller_headers):
    files = [("images", (f"{i}.png", PNG, "image/png")) for i in range(11)]
    resp = await client.post("/api/upload/property-images", files=files, headers=seller_headers)
    assert resp.status_code == 400

    resp = await client.post("/api/upload/property-images", files=files[:2], headers=seller_headers)
    assert resp.status_code == 200
    urls = resp.json()["images"]
    assert len(urls) == 2

    resp = await client.request(
        "DELETE", "/api/upload/files", json={"urls": urls + ["http://x.test/foreign.png"]}, headers=seller_headers
    )
    body = resp.json()
    assert body["success"] is True
    assert len(body["deleted"]) == 2


@pytest.mark.asyncio
async def test_project_files_groups_by_field(client, store, admin_headers):
    files = [
        ("images", ("cover.png", PNG, "image/png")),
        ("gallery", ("g1.jpg", PNG, "image/jpeg")),
        ("gallery", ("g2.jpg", PNG, "image/jpeg")),
        ("videos", ("tour.mp4", b"\x00" * 32, "video/mp4")),
    ]
    resp = await client.post("/api/upload/project-files", files=files, headers=admin_headers)
    assert resp.status_code == 200
    result = resp.json()["files"]
    assert [len(result[k]) for k in ("images", "gallery", "videos")] == [1, 2, 1]
    assert "/videos/" in result["videos"][0]


@pytest.mark.asyncio
async def test_delete_file_refuses_absolute_keys(client, store, buyer_headers, tmp_path):
    outside = tmp_path / "notes.txt"
    outside.write_text("keep")
    resp = await client.request(
        "DELETE",
        "/api/upload/file",
        json={"url": f"http://media.test/static/uploads/{outside}"},
        headers=buyer_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid file URL"
    assert outside.exists()
