"""
Upload adapter: validate an incoming file against a per-folder policy and store
it under the uploads root as `<prefix>-<epochMillis>-<shortId><ext>`.

Files are served back by the static mount at `/uploads` (see `api/main.py`),
so the public path of a stored file is `/uploads/<folder>/<filename>`.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile

from .config import env_str
from .errors import NotFoundError, UploadRejectedError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".webp"})
IMAGE_CONTENT_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})

MB = 1024 * 1024


@dataclass(frozen=True)
class UploadPolicy:
    folder: str
    prefix: str
    max_bytes: int
    extensions: frozenset[str] = IMAGE_EXTENSIONS
    content_types: frozenset[str] = IMAGE_CONTENT_TYPES


@dataclass(frozen=True)
class StoredFile:
    folder: str
    filename: str
    original_filename: str
    content_type: str | None
    size_bytes: int

    @property
    def public_path(self) -> str:
        return f"/uploads/{self.folder}/{self.filename}"


POLICIES: dict[str, UploadPolicy] = {
    "cities": UploadPolicy(folder="cities", prefix="city", max_bytes=5 * MB),
    "settings": UploadPolicy(
        folder="settings",
        prefix="site",
        max_bytes=2 * MB,
        extensions=IMAGE_EXTENSIONS | {".ico", ".svg"},
        content_types=IMAGE_CONTENT_TYPES | {"image/x-icon", "image/vnd.microsoft.icon", "image/svg+xml"},
    ),
    "agencies": UploadPolicy(folder="agencies", prefix="agency", max_bytes=2 * MB),
    "documents": UploadPolicy(
        folder="documents",
        prefix="doc",
        max_bytes=10 * MB,
        extensions=IMAGE_EXTENSIONS | {".pdf"},
        content_types=IMAGE_CONTENT_TYPES | {"application/pdf"},
    ),
}


def uploads_root() -> Path:
    return Path(env_str("UPLOADS_DIR", "uploads"))


def get_policy(folder: str) -> UploadPolicy:
    policy = POLICIES.get(folder)
    if policy is None:
        raise NotFoundError(f"Unknown upload folder '{folder}'.")
    return policy


def generate_filename(prefix: str, ext: str) -> str:
    epoch_ms = int(time.time() * 1000)
    short_id = uuid.uuid4().hex[:8]
    return f"{prefix}-{epoch_ms}-{short_id}{ext.lower()}"


def validate_upload(file: UploadFile, policy: UploadPolicy) -> str:
    """
    Return the normalized extension if the file passes the policy's
    extension and MIME allow-lists.
    """
    if not file.filename:
        raise UploadRejectedError("Missing filename.")

    ext = Path(file.filename).suffix.lower()
    if ext not in policy.extensions:
        raise UploadRejectedError(
            f"Unsupported file type '{ext}'. Allowed: {', '.join(sorted(policy.extensions))}"
        )

    content_type = (file.content_type or "").split(";", 1)[0].strip().lower()
    if content_type not in policy.content_types:
        raise UploadRejectedError(f"Unsupported content type '{content_type or 'unknown'}'.")
    return ext


async def read_upload_bytes(file: UploadFile, max_bytes: int) -> bytes:
    chunk_size = 1024 * 1024
    buf = bytearray()

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise UploadRejectedError(f"File too large. Max is {max_bytes // MB} MB.")

    return bytes(buf)


async def save_upload(file: UploadFile, policy: UploadPolicy) -> StoredFile:
    ext = validate_upload(file, policy)
    data = await read_upload_bytes(file, max_bytes=policy.max_bytes)
    if not data:
        raise UploadRejectedError("Uploaded file is empty.")

    target_dir = uploads_root() / policy.folder
    target_dir.mkdir(parents=True, exist_ok=True)

    filename = generate_filename(policy.prefix, ext)
    (target_dir / filename).write_bytes(data)
    logger.info("upload_stored folder=%s filename=%s size=%s", policy.folder, filename, len(data))

    return StoredFile(
        folder=policy.folder,
        filename=filename,
        original_filename=file.filename or "",
        content_type=file.content_type,
        size_bytes=len(data),
    )


def resolve_public_path(public_path: str | None) -> Path | None:
    """
    Map "/uploads/<folder>/<name>" back to a file under the uploads root.
    Anything that points outside the root resolves to None.
    """
    raw = (public_path or "").strip()
    if not raw:
        return None

    relative = raw.lstrip("/")
    if relative.startswith("uploads/"):
        relative = relative[len("uploads/"):]

    root = uploads_root().resolve()
    candidate = (root / relative).resolve()
    if root not in candidate.parents:
        return None
    return candidate


def delete_upload(public_path: str | None) -> bool:
    """
    Best-effort removal of a previously stored file. Never raises.
    """
    path = resolve_public_path(public_path)
    if path is None:
        return False
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError:
        logger.warning("upload_delete_failed path=%s", path, exc_info=True)
        return False
    logger.info("upload_deleted path=%s", path)
    return True
