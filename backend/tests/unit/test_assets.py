import pytest
from sqlalchemy import select

from promotheans_api.models.audit_logs import AssetCleanupFailure
from promotheans_api.services.assets import AssetLifecycleManager, canonical_asset_path, filename_from_path
from promotheans_api.services.storage import LocalStorage
from tests.helpers import temp_database


class BrokenStorage:
    name = "FTP"

    def delete(self, filename):
        raise ConnectionError("FTP server unreachable")


@pytest.mark.parametrize(
    "path,expected",
    [
        ("assets/community_art/jane_art_1.png", "jane_art_1.png"),
        ("/assets/community_art/jane_art_1.png", "jane_art_1.png"),
        ("https://cdn.example.com/assets/community_art/x.png", "x.png"),
        ("uploads/other/y.png", "y.png"),
        ("z.png", "z.png"),
    ],
)
def test_filename_from_path(path, expected):
    assert filename_from_path(path) == expected


@pytest.mark.anyio
async def test_discard_removes_file(tmp_path):
    storage = LocalStorage(tmp_path / "uploads")
    storage.save("a.png", b"x")
    async with temp_database(tmp_path / "assets.db") as Session:
        async with Session() as db:
            assets = AssetLifecycleManager(storage, db)
            assert await assets.discard("assets/community_art/a.png") is True
            assert await assets.discard("assets/community_art/a.png") is False
            assert await assets.discard(None) is False


@pytest.mark.anyio
async def test_discard_failure_is_recorded_not_raised(tmp_path):
    async with temp_database(tmp_path / "assets.db") as Session:
        async with Session() as db:
            assets = AssetLifecycleManager(BrokenStorage(), db)
            assert await assets.discard("assets/community_art/lost.png") is False

        async with Session() as db:
            rows = (await db.execute(select(AssetCleanupFailure))).scalars().all()

    assert len(rows) == 1
    assert rows[0].image_path == "assets/community_art/lost.png"
    assert rows[0].backend == "FTP"
    assert "unreachable" in rows[0].error


@pytest.mark.anyio
async def test_replace_only_discards_changed_images(tmp_path):
    storage = LocalStorage(tmp_path / "uploads")
    storage.save("old.png", b"x")
    async with temp_database(tmp_path / "assets.db") as Session:
        async with Session() as db:
            assets = AssetLifecycleManager(storage, db)
            assert await assets.replace("assets/community_art/old.png", "assets/community_art/old.png") is False
            assert (tmp_path / "uploads" / "old.png").exists()
            assert await assets.replace("assets/community_art/old.png", "assets/community_art/new.png") is True
            assert not (tmp_path / "uploads" / "old.png").exists()


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/assets/community_art/x.png", "assets/community_art/x.png"),
        ("./assets/community_art/x.png", "assets/community_art/x.png"),
        (" assets/community_art/x.png ", "assets/community_art/x.png"),
        ("https://cdn.example.com/assets/community_art/x.png", "https://cdn.example.com/assets/community_art/x.png"),
        ("elsewhere/x.png", "elsewhere/x.png"),
    ],
)
def test_canonical_asset_path(path, expected):
    assert canonical_asset_path(path) == expected


@pytest.mark.anyio
async def test_replace_ignores_spelling_of_same_file(tmp_path):
    storage = LocalStorage(tmp_path / "uploads")
    storage.save("same.png", b"x")
    async with temp_database(tmp_path / "assets.db") as Session:
        async with Session() as db:
            assets = AssetLifecycleManager(storage, db)
            assert await assets.replace("assets/community_art/same.png", "/assets/community_art/same.png") is False
    assert (tmp_path / "uploads" / "same.png").exists()
