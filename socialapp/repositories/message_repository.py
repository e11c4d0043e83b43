from sqlalchemy import case, func, or_

from socialapp.db import db
from socialapp.models.message_model import Message
from socialapp.models.user_model import User


def create_message(sender_id, recipient_id, text):
    message = Message(
        sender_id=sender_id,
        recipient_id=recipient_id,
        text=text,
    )
    db.session.add(message)
    return message


def get_latest_per_counterpart(user_id):
    """One row per conversation partner holding the newest message exchanged."""
    counterpart = case(
        (Message.sender_id == user_id, Message.recipient_id),
        else_=Message.sender_id,
    )
    ranked = (
        db.select(
            Message.id.label("id"),
            Message.text.label("text"),
            Message.created_at.label("created_at"),
            counterpart.label("counterpart_id"),
            func.row_number()
            .over(
                partition_by=counterpart,
                order_by=(Message.created_at.desc(), Message.id.desc()),
            )
            .label("row_num"),
        )
        .where(or_(Message.sender_id == user_id, Message.recipient_id == user_id))
        .subquery()
    )

    stmt = (
        db.select(
            User.username.label("with_user"),
            ranked.c.text.label("last_text"),
            ranked.c.created_at,
        )
        .join(User, User.id == ranked.c.counterpart_id)
        .where(ranked.c.row_num == 1)
        .order_by(ranked.c.created_at.desc(), ranked.c.id.desc())
    )
    return db.session.execute(stmt).all()
