"""
Comment persistence.
"""

from __future__ import annotations

from core import crud, db

COMMENTS = crud.Table(
    name="comments",
    columns=(
        "p_id",
        "type",
        "sent_by",
        "replied_by",
        "send_date",
        "replied_date",
        "comment",
        "reply",
        "status",
    ),
    order_by="create_date DESC, id DESC",
    required=("p_id", "type", "comment", "status"),
    touch_column="update_date",
)


async def comments_for_entity(entity_type: str, p_id: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT c.*,
               sender.name AS sender_name,
               sender.email AS sender_email,
               replier.name AS replier_name
        FROM comments c
        LEFT JOIN users sender ON sender.id = c.sent_by
        LEFT JOIN users replier ON replier.id = c.replied_by
        WHERE c.type = $1
          AND c.p_id = $2
        ORDER BY c.create_date ASC, c.id ASC
        """,
        entity_type,
        p_id,
    )
