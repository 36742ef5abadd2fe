from flask import Blueprint, jsonify, request

from farmconnect import services
from farmconnect.auth import current_user, login_required, roles_required
from farmconnect.errors import handles_errors
from farmconnect.models import Role

bp = Blueprint("farmer", __name__, url_prefix="/api/farmer")


# ---------------- Dashboard ----------------
@bp.route("/stats", methods=["GET"])
@roles_required(Role.FARMER)
@handles_errors("Error fetching stats")
def farmer_stats():
    stats = services.get_dashboard().stats(current_user().id)
    return jsonify({"success": True, "data": stats}), 200


# open to every role despite the prefix
@bp.route("/profile", methods=["PUT"])
@login_required
@handles_errors("Error updating profile")
def update_profile():
    data = request.get_json(silent=True) or {}
    user = services.get_accounts().update_profile(
        current_user().id,
        full_name=data.get("full_name"),
        phone=data.get("phone"),
    )
    return jsonify({
        "success": True,
        "message": "Profile updated successfully",
        "data": user.to_dict(),
    }), 200
