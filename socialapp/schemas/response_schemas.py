from socialapp.extensions.extensions import ma
from socialapp.utils.timestamps import isoformat_utc


class UserSummarySchema(ma.Schema):
    username = ma.String()
    display = ma.String()
    avatarColor = ma.String(attribute="avatar_color")


class CommentResponseSchema(ma.Schema):
    text = ma.String()
    by = ma.Function(lambda comment: comment.author.username)
    at = ma.Function(lambda comment: isoformat_utc(comment.created_at))


class NotificationSchema(ma.Schema):
    text = ma.String()
    at = ma.Function(lambda notification: isoformat_utc(notification.created_at))
    seen = ma.Boolean()


class ThreadSchema(ma.Schema):
    # "with" is a keyword, so the field is declared under another name.
    with_user = ma.String(data_key="with")
    last_text = ma.String()
