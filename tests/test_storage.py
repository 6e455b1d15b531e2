import shutil
from pathlib import Path

import pytest

from webcam_uploads.core.constants import ERROR_LIST_FAILED, ERROR_STORE_FAILED
from webcam_uploads.core.errors import ResourceError
from webcam_uploads.core.storage import ImageStorage, ensure_storage_dir


class TestEnsureStorageDir:
    def test_creates_missing_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "uploads"

        assert ensure_storage_dir(target) == target
        assert target.is_dir()

    def test_existing_directory_is_kept(self, tmp_path: Path) -> None:
        target = tmp_path / "uploads"
        target.mkdir()
        (target / "1-old.jpg").write_bytes(b"old")

        ensure_storage_dir(target)

        assert (target / "1-old.jpg").read_bytes() == b"old"

    def test_missing_parent_is_fatal(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            ensure_storage_dir(tmp_path / "missing" / "uploads")

    def test_file_in_the_way_is_fatal(self, tmp_path: Path) -> None:
        target = tmp_path / "uploads"
        target.write_text("not a directory")

        with pytest.raises(FileExistsError):
            ensure_storage_dir(target)


@pytest.fixture
def storage(tmp_path: Path) -> ImageStorage:
    return ImageStorage(ensure_storage_dir(tmp_path / "uploads"))


@pytest.mark.anyio
class TestImageStorage:
    async def test_save_writes_bytes(self, storage: ImageStorage) -> None:
        path = await storage.save("1-a.jpg", b"\xff\xd8data")

        assert path == (storage.directory / "1-a.jpg").resolve()
        assert path.read_bytes() == b"\xff\xd8data"

    async def test_save_overwrites_same_name(self, storage: ImageStorage) -> None:
        await storage.save("1-a.jpg", b"first")
        await storage.save("1-a.jpg", b"second")

        assert (storage.directory / "1-a.jpg").read_bytes() == b"second"

    async def test_save_refuses_names_outside_directory(self, storage: ImageStorage) -> None:
        with pytest.raises(ResourceError) as exc_info:
            await storage.save("../escape.jpg", b"x")

        assert exc_info.value.message == ERROR_STORE_FAILED
        assert not (storage.directory.parent / "escape.jpg").exists()

    async def test_save_failure_is_resource_error(self, storage: ImageStorage) -> None:
        shutil.rmtree(storage.directory)

        with pytest.raises(ResourceError) as exc_info:
            await storage.save("1-a.jpg", b"x")

        assert exc_info.value.status_code == 500
        assert isinstance(exc_info.value.__cause__, OSError)

    async def test_list_filters_by_extension(self, storage: ImageStorage) -> None:
        for name in ("1-a.jpg", "2-b.PNG", "3-c.gif", "4-d.jpeg", "notes.txt", "5-e.webp"):
            (storage.directory / name).write_bytes(b"x")

        listed = await storage.list_images()

        assert sorted(listed) == [
            "/uploads/1-a.jpg",
            "/uploads/2-b.PNG",
            "/uploads/3-c.gif",
            "/uploads/4-d.jpeg",
        ]

    async def test_list_empty_directory(self, storage: ImageStorage) -> None:
        assert await storage.list_images() == []

    async def test_list_missing_directory(self, storage: ImageStorage) -> None:
        shutil.rmtree(storage.directory)

        with pytest.raises(ResourceError) as exc_info:
            await storage.list_images()

        assert exc_info.value.message == ERROR_LIST_FAILED


def test_is_writable(storage: ImageStorage) -> None:
    assert storage.is_writable() is True

    shutil.rmtree(storage.directory)

    assert storage.is_writable() is False
