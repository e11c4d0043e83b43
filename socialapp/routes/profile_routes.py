from flask import Blueprint, jsonify
from flask_jwt_extended import current_user, jwt_required

from socialapp.schemas.request_schemas import ProfileUpdateSchema, load_request
from socialapp.services import profile_service


profile_bp = Blueprint("profiles", __name__)


@profile_bp.route("/me", methods=["GET"])
@jwt_required()
def get_my_profile():
    return jsonify(profile_service.get_profile(current_user)), 200


@profile_bp.route("/me", methods=["PUT"])
@jwt_required()
def update_my_profile():
    data = load_request(ProfileUpdateSchema())
    profile_service.update_profile(current_user, display=data.get("display"))
    return jsonify({"ok": True}), 200
