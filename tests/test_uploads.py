"""
Upload adapter: naming, policy checks and storage.
"""

import io
import re

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from core import uploads
from core.errors import NotFoundError, UploadRejectedError


@pytest.fixture(autouse=True)
def uploads_dir(tmp_path, monkeypatch):
    root = tmp_path / "uploads"
    monkeypatch.setenv("UPLOADS_DIR", str(root))
    return root


def _upload(filename: str, data: bytes = b"\x89PNG data", content_type: str = "image/png") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def test_generated_filename_shape():
    name = uploads.generate_filename("city", ".PNG")

    assert re.fullmatch(r"city-\d{13}-[0-9a-f]{8}\.png", name)


def test_unknown_folder_is_not_found():
    with pytest.raises(NotFoundError):
        uploads.get_policy("secrets")


async def test_save_creates_folder_and_file(uploads_dir):
    stored = await uploads.save_upload(_upload("Skyline.png"), uploads.get_policy("cities"))

    assert stored.public_path.startswith("/uploads/cities/city-")
    assert (uploads_dir / "cities" / stored.filename).read_bytes() == b"\x89PNG data"
    assert stored.original_filename == "Skyline.png"


@pytest.mark.parametrize(
    "filename, content_type",
    [("notes.txt", "text/plain"), ("photo.png", "text/html"), ("", "image/png")],
)
async def test_disallowed_files_are_rejected(uploads_dir, filename, content_type):
    with pytest.raises(UploadRejectedError):
        await uploads.save_upload(_upload(filename, content_type=content_type), uploads.get_policy("cities"))

    assert not (uploads_dir / "cities").exists()


async def test_oversized_file_is_rejected(uploads_dir):
    policy = uploads.UploadPolicy(folder="tiny", prefix="t", max_bytes=4)

    with pytest.raises(UploadRejectedError, match="too large"):
        await uploads.save_upload(_upload("a.png", data=b"0123456789"), policy)

    assert not (uploads_dir / "tiny").exists()


async def test_empty_file_is_rejected():
    with pytest.raises(UploadRejectedError, match="empty"):
        await uploads.save_upload(_upload("a.png", data=b""), uploads.get_policy("cities"))


def test_settings_policy_accepts_icons():
    ext = uploads.validate_upload(
        _upload("favicon.ico", content_type="image/x-icon"),
        uploads.get_policy("settings"),
    )

    assert ext == ".ico"


def test_delete_removes_stored_file(uploads_dir):
    target = uploads_dir / "cities" / "city-1-abcdef12.png"
    target.parent.mkdir(parents=True)
    target.write_bytes(b"x")

    assert uploads.delete_upload("/uploads/cities/city-1-abcdef12.png") is True
    assert not target.exists()


def test_delete_missing_file_is_quiet():
    assert uploads.delete_upload("/uploads/cities/gone.png") is False


@pytest.mark.parametrize("path", ["/uploads/../../etc/passwd", "", None, "/uploads/.."])
def test_paths_outside_root_are_ignored(path):
    assert uploads.resolve_public_path(path) is None
    assert uploads.delete_upload(path) is False
