"""
Uploads: local storage, static serving and blob forwarding.
"""
import io

from services.storage_service import UploadStorage, generate_name


class FakeBlobClient:
    def __init__(self, service, blob):
        self.service = service
        self.blob = blob

    def upload_blob(self, data, overwrite=False):
        if self.service.fail:
            raise RuntimeError("network down")
        self.service.uploaded[self.blob] = data.read()


class FakeBlobService:
    def __init__(self, fail=False):
        self.fail = fail
        self.uploaded = {}

    def get_blob_client(self, container, blob):
        return FakeBlobClient(self, blob)


class TestStorage:

    def test_generated_names_keep_plain_extensions(self):
        assert generate_name("photo.JPG").endswith(".jpg")
        assert "." not in generate_name("archive.tar.g?z")
        assert "." not in generate_name(None)
        assert generate_name("a.png") != generate_name("a.png")

    def test_store_locally(self, tmp_path):
        storage = UploadStorage(str(tmp_path))
        url = storage.store(io.BytesIO(b"hello"), "note.txt", forward=True)
        assert url.startswith("/uploads/") and url.endswith(".txt")
        assert (tmp_path / url.rsplit("/", 1)[1]).read_bytes() == b"hello"

    def test_forward_to_blob(self, tmp_path):
        blobs = FakeBlobService()
        storage = UploadStorage(str(tmp_path), blob_service=blobs, account="acct", container="media")
        url = storage.store(io.BytesIO(b"img"), "a.png", forward=True)
        name = next(iter(blobs.uploaded))
        assert name.startswith("uploads/")
        assert url == f"https://acct.blob.core.windows.net/media/{name}"
        assert blobs.uploaded[name] == b"img"

    def test_forward_failure_falls_back_to_local(self, tmp_path):
        storage = UploadStorage(str(tmp_path), blob_service=FakeBlobService(fail=True), account="acct")
        url = storage.store(io.BytesIO(b"img"), "a.png", forward=True)
        assert url.startswith("/uploads/")
        assert (tmp_path / url.rsplit("/", 1)[1]).exists()

    def test_public_uploads_are_never_forwarded(self, tmp_path):
        blobs = FakeBlobService()
        storage = UploadStorage(str(tmp_path), blob_service=blobs, account="acct")
        assert storage.store(io.BytesIO(b"x"), "a.png").startswith("/uploads/")
        assert blobs.uploaded == {}


class TestUploadRoutes:

    def test_public_upload_is_served_back(self, client):
        r = client.post("/api/upload", files={"file": ("plan.pdf", b"%PDF-1.4 plan", "application/pdf")})
        assert r.status_code == 200
        body = r.json()
        assert body["originalName"] == "plan.pdf"
        assert body["url"].startswith("/uploads/") and body["url"].endswith(".pdf")

        served = client.get(body["url"])
        assert served.status_code == 200
        assert served.content == b"%PDF-1.4 plan"
        assert served.headers["access-control-allow-origin"] == "*"
        assert served.headers["cross-origin-resource-policy"] == "cross-origin"

    def test_file_required(self, client):
        r = client.post("/api/upload", data={"note": "no file"})
        assert r.status_code == 400
        assert r.json() == {"error": "file required"}

    def test_admin_upload_without_blob_storage(self, client, sales_headers):
        r = client.post("/api/admin/upload", files={"file": ("a.jpg", b"jpg", "image/jpeg")}, headers=sales_headers)
        assert r.status_code == 200
        assert r.json()["url"].startswith("/uploads/")

    def test_admin_upload_roles(self, client, viewer_headers):
        r = client.post("/api/admin/upload", files={"file": ("a.jpg", b"jpg", "image/jpeg")}, headers=viewer_headers)
        assert r.status_code == 403
        assert client.post("/api/admin/upload", files={"file": ("a.jpg", b"jpg", "image/jpeg")}).status_code == 401
