from flask import Blueprint, jsonify
from flask_jwt_extended import current_user, jwt_required

from socialapp.schemas.request_schemas import MessageCreateSchema, load_request
from socialapp.schemas.response_schemas import ThreadSchema
from socialapp.services import message_service

message_bp = Blueprint("messages", __name__)

@message_bp.route("/messages", methods=["POST"])
@jwt_required()
def send():
    data = load_request(MessageCreateSchema())
    message_service.send_message(current_user, data["to"], data["text"])
    return jsonify({"ok": True}), 200

@message_bp.route("/messages", methods=["GET"])
@jwt_required()
def threads():
    return jsonify({
        "threads": ThreadSchema(many=True).dump(message_service.list_threads(current_user))
    }), 200
