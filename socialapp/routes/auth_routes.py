from flask import Blueprint, jsonify

from socialapp.schemas.request_schemas import LoginSchema, RegisterSchema, load_request
from socialapp.services import auth_service



auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register():
    data = load_request(RegisterSchema())
    payload = auth_service.register(
        data["username"],
        data["password"],
        data.get("display"),
    )
    return jsonify(payload), 200


@auth_bp.route("/login", methods=["POST"])
def login():
    data = load_request(LoginSchema())
    payload = auth_service.login(data["username"], data["password"])
    return jsonify(payload), 200
