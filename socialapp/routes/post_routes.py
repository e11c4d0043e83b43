from flask import Blueprint, request, jsonify
from flask_jwt_extended import current_user, jwt_required

from socialapp.schemas.request_schemas import CommentCreateSchema, PostCreateSchema, load_request
from socialapp.security import optional_viewer
from socialapp.services import comment_service, post_service

post_bp = Blueprint("posts", __name__)

@post_bp.route("/posts", methods=["POST"])
@jwt_required()
def create_post():
    data = load_request(PostCreateSchema())
    post_id = post_service.create_post(
        current_user,
        text=data.get("text"),
        image=data.get("image"),
    )
    return jsonify({"ok": True, "id": post_id}), 200


@post_bp.route("/posts", methods=["GET"])
def list_posts():
    search = request.args.get("q") or None
    trending = bool(request.args.get("trending"))

    posts = post_service.list_posts(
        search=search,
        trending=trending,
        viewer=optional_viewer(),
    )
    return jsonify({"posts": posts}), 200


@post_bp.route("/posts/<int:post_id>/like", methods=["POST"])
@jwt_required()
def toggle_like(post_id):
    liked = post_service.toggle_like(current_user, post_id)
    return jsonify({"ok": True, "liked": liked}), 200


@post_bp.route("/posts/<int:post_id>/comment", methods=["POST"])
@jwt_required()
def add_comment(post_id):
    data = load_request(CommentCreateSchema())
    comment_service.add_comment(current_user, post_id, data.get("text"))
    return jsonify({"ok": True}), 200
