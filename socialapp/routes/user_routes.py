from flask import Blueprint, jsonify
from flask_jwt_extended import current_user, jwt_required

from socialapp.repositories import user_repository
from socialapp.schemas.response_schemas import UserSummarySchema
from socialapp.services import follow_service


user_bp = Blueprint("users", __name__)

USER_LIST_LIMIT = 100


@user_bp.route("/users", methods=["GET"])
def list_users():
    users = user_repository.list_users(limit=USER_LIST_LIMIT)
    return jsonify({"users": UserSummarySchema(many=True).dump(users)}), 200


@user_bp.route("/users/<username>/follow", methods=["POST"])
@jwt_required()
def toggle_follow(username):
    following = follow_service.toggle_follow(current_user, username)
    return jsonify({"ok": True, "following": following}), 200
