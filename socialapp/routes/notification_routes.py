from flask import Blueprint, jsonify
from flask_jwt_extended import current_user, jwt_required

from socialapp.services import notification_service


notification_bp = Blueprint("notifications", __name__)


@notification_bp.route("/notifications", methods=["GET"])
@jwt_required()
def list_notifications():
    return jsonify({
        "notifications": notification_service.list_notifications(current_user)
    }), 200
