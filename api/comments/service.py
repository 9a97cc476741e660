"""
Comment service layer.

Comments are owned by their author (`sent_by`). Authors may edit and delete
their own comments; administrators may edit, reply to and delete any comment.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from auth import security
from core import crud
from core.errors import ForbiddenError
from core.responses import listing, ok

from . import repository, schemas
from .repository import COMMENTS

logger = logging.getLogger(__name__)

NOT_FOUND = "Comment not found."


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _is_owner(comment: dict, user: dict) -> bool:
    return comment.get("sent_by") is not None and int(comment["sent_by"]) == int(user["id"])


async def create_comment(payload: schemas.CommentCreate, *, current_user: dict) -> dict:
    data = payload.model_dump()
    data.update(sent_by=int(current_user["id"]), send_date=_utc_now(), status=0)
    row = await crud.insert(COMMENTS, data)
    logger.info("comment_created comment_id=%s type=%s p_id=%s", row["id"], row["type"], row["p_id"])
    return ok("Comment added successfully.", comment=row)


async def comments_for_entity(entity_type: str, p_id: int) -> dict:
    rows = await repository.comments_for_entity(entity_type, p_id)
    return listing("comments", rows)


async def list_comments(*, limit: int | None = None, offset: int = 0) -> dict:
    rows = await crud.list_rows(COMMENTS, limit=limit, offset=offset)
    return listing("comments", rows)


async def get_comment(comment_id: int) -> dict:
    return ok(comment=await crud.get_or_404(COMMENTS, comment_id, NOT_FOUND))


async def update_comment(comment_id: int, payload: schemas.CommentUpdate, *, current_user: dict) -> dict:
    existing = await crud.get_or_404(COMMENTS, comment_id, NOT_FOUND)
    is_admin = security.is_admin(current_user)
    if not is_admin and not _is_owner(existing, current_user):
        raise ForbiddenError("Not authorized to update this comment.")

    changes = payload.model_dump(exclude_unset=True)
    if not is_admin:
        changes.pop("reply", None)
        changes.pop("status", None)
    elif changes.get("reply"):
        changes.update(replied_by=int(current_user["id"]), replied_date=_utc_now(), status=1)

    merged = crud.merge_update(COMMENTS, existing, changes)
    await crud.update(COMMENTS, comment_id, merged)
    return ok("Comment updated successfully.", comment={"id": comment_id, **merged})


async def delete_comment(comment_id: int, *, current_user: dict) -> dict:
    existing = await crud.get_or_404(COMMENTS, comment_id, NOT_FOUND)
    if not security.is_admin(current_user) and not _is_owner(existing, current_user):
        raise ForbiddenError("Not authorized to delete this comment.")

    await crud.delete(COMMENTS, comment_id)
    logger.info("comment_deleted comment_id=%s by_user_id=%s", comment_id, current_user["id"])
    return ok("Comment deleted successfully.")
