"""
Generic upload endpoints (admin only).

Files land in `<UPLOADS_DIR>/<folder>/` according to the folder's policy in
`core.uploads.POLICIES` and are served from `/uploads/<folder>/<filename>`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile, status

from activity.dependencies import track_action
from auth import dependencies as auth_dependencies
from core import uploads
from core.errors import NotFoundError
from core.responses import ok

router = APIRouter(dependencies=[Depends(auth_dependencies.require_admin)])


@router.post(
    "/{folder}",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(track_action("upload", entity_type="file"))],
)
async def upload_file(folder: str, file: UploadFile = File(...)) -> dict:
    stored = await uploads.save_upload(file, uploads.get_policy(folder))
    return ok(
        "File uploaded successfully.",
        file={
            "folder": stored.folder,
            "filename": stored.filename,
            "original_filename": stored.original_filename,
            "content_type": stored.content_type,
            "size_bytes": stored.size_bytes,
            "path": stored.public_path,
        },
    )


@router.delete("/{folder}/{filename}", dependencies=[Depends(track_action("delete", entity_type="file"))])
async def delete_file(folder: str, filename: str) -> dict:
    uploads.get_policy(folder)
    if not uploads.delete_upload(f"/uploads/{folder}/{filename}"):
        raise NotFoundError("File not found.")
    return ok("File deleted successfully.")
