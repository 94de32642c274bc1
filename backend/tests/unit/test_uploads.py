import pytest

from promotheans_api.core.errors import StorageError, ValidationError
from promotheans_api.services.storage import FtpMirrorStorage, LocalStorage, build_storage
from promotheans_api.services.uploads import UploadResolver, build_filename, sanitize
from tests.helpers import FakeFTPServer

MAX = 5 * 1024 * 1024
NOW = 1700000000.0


def test_sanitize_replaces_non_alphanumerics():
    assert sanitize("Jane Doe ART!") == "jane_doe_art_"
    assert sanitize("") == "unknown"
    assert sanitize(None) == "unknown"


def test_build_filename_is_deterministic():
    name = build_filename("Jane Doe ART!", "Fan Art", "pic.PNG", 1700000000000)
    assert name == "jane_doe_art__fan_art_1700000000000.PNG"
    assert build_filename("Jane Doe ART!", "Fan Art", "pic.PNG", 1700000000000) == name


def test_build_filename_defaults_and_truncation():
    assert build_filename(None, None, "x.jpg", 5) == "unknown_art_5.jpg"
    assert build_filename("a" * 50, "b" * 50, "noext", 7) == "a" * 30 + "_" + "b" * 20 + "_7"


def test_check_rejects_non_images():
    resolver = UploadResolver(LocalStorage("unused"), max_bytes=MAX)
    with pytest.raises(ValidationError) as exc:
        resolver.check("text/plain", 10)
    assert exc.value.message == "Only image files are allowed!"
    with pytest.raises(ValidationError):
        resolver.check(None, 10)


def test_check_rejects_oversized_files():
    resolver = UploadResolver(LocalStorage("unused"), max_bytes=MAX)
    resolver.check("image/png", MAX)
    with pytest.raises(ValidationError) as exc:
        resolver.check("image/png", MAX + 1)
    assert exc.value.message == "File too large. Maximum size is 5MB."


def test_store_writes_local_file(tmp_path):
    storage = LocalStorage(tmp_path)
    resolver = UploadResolver(storage, max_bytes=MAX, clock=lambda: NOW)
    stored = resolver.store(b"\x89PNG", "image/png", "me.png", artist="Jane", category="Sketch")

    assert stored.filename == "jane_sketch_1700000000000.png"
    assert stored.path == "assets/community_art/jane_sketch_1700000000000.png"
    assert stored.size == 4
    assert stored.uploaded_via == "local"
    assert (tmp_path / stored.filename).read_bytes() == b"\x89PNG"


def test_local_storage_stays_inside_root(tmp_path):
    storage = LocalStorage(tmp_path / "root")
    storage.save("../escape.png", b"x")
    assert (tmp_path / "root" / "escape.png").exists()
    assert not (tmp_path / "escape.png").exists()


def test_local_delete_missing_file_returns_false(tmp_path):
    storage = LocalStorage(tmp_path)
    assert storage.delete("nope.png") is False
    storage.save("yes.png", b"x")
    assert storage.delete("yes.png") is True
    assert not (tmp_path / "yes.png").exists()


def _ftp_storage(tmp_path, server):
    return FtpMirrorStorage(
        LocalStorage(tmp_path),
        host="ftp.example.com",
        user="u",
        password="p",
        ftp_factory=server.factory,
    )


def test_ftp_mirror_uploads_and_drops_local_copy(tmp_path):
    server = FakeFTPServer()
    storage = _ftp_storage(tmp_path, server)
    resolver = UploadResolver(storage, max_bytes=MAX, clock=lambda: NOW)

    stored = resolver.store(b"img", "image/jpeg", "a.jpg", artist="Jane", category="Art")

    assert stored.uploaded_via == "FTP"
    assert server.files == {"assets/community_art/jane_art_1700000000000.jpg": b"img"}
    assert server.connections == [("ftp.example.com", 21)]
    assert not (tmp_path / stored.filename).exists()


def test_ftp_mirror_failure_keeps_local_file(tmp_path):
    server = FakeFTPServer(fail_store=True)
    storage = _ftp_storage(tmp_path, server)

    with pytest.raises(StorageError) as exc:
        storage.save("kept.png", b"img")

    assert exc.value.message.startswith("Failed to upload file to server via FTP")
    assert (tmp_path / "kept.png").read_bytes() == b"img"
    assert server.files == {}


def test_ftp_delete(tmp_path):
    server = FakeFTPServer()
    storage = _ftp_storage(tmp_path, server)
    storage.save("gone.png", b"img")

    assert storage.delete("gone.png") is True
    assert server.files == {}
    # already removed on the remote side
    assert storage.delete("gone.png") is False


def test_build_storage_needs_complete_ftp_settings(settings):
    assert isinstance(build_storage(settings), LocalStorage)

    partial = settings.model_copy(update={"use_ftp": True, "ftp_host": "ftp.example.com"})
    assert isinstance(build_storage(partial), LocalStorage)

    full = partial.model_copy(update={"ftp_user": "u", "ftp_password": "p"})
    storage = build_storage(full)
    assert isinstance(storage, FtpMirrorStorage)
    assert storage.port == 21


def test_ftp_connection_closed_when_login_fails(tmp_path):
    server = FakeFTPServer(fail_login=True)
    storage = _ftp_storage(tmp_path, server)

    with pytest.raises(StorageError):
        storage.save("x.png", b"img")

    assert len(server.clients) == 1
    assert server.clients[0].closed is True
