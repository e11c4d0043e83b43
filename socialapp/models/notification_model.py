from datetime import datetime

from socialapp.db import db


class Notification(db.Model):
    __tablename__ = "notifications"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    text = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    seen = db.Column(db.Boolean, default=False, nullable=False)

    __table_args__ = (
        db.Index("ix_notifications_user_recent", "user_id", "created_at"),
    )
