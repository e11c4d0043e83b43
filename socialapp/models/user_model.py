from socialapp.db import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.Text, unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    display = db.Column(db.Text, nullable=False)
    avatar_color = db.Column(db.String(16), nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "display": self.display,
            "avatarColor": self.avatar_color,
        }
