from flask import Blueprint, jsonify, request

from farmconnect import services
from farmconnect.auth import generate_token, login_required
from farmconnect.errors import handles_errors

bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@bp.route("/register", methods=["POST"])
@handles_errors("Server error during registration")
def register():
    data = request.get_json(silent=True) or {}
    user = services.get_accounts().register(
        email=data.get("email"),
        phone=data.get("phone"),
        full_name=data.get("full_name"),
        role=data.get("role"),
        password=data.get("password"),
    )
    return jsonify({
        "success": True,
        "message": "User registered successfully",
        "token": generate_token(user),
        "data": {
            "id": user.id,
            "email": user.email,
            "full_name": user.full_name,
            "role": user.role,
        },
    }), 201


@bp.route("/login", methods=["POST"])
@handles_errors("Server error during login")
def login():
    data = request.get_json(silent=True) or {}
    user = services.get_accounts().authenticate(data.get("identifier"), data.get("password"))
    return jsonify({
        "success": True,
        "message": "Login successful",
        "token": generate_token(user),
        "data": user.to_dict(),
    }), 200


@bp.route("/profile/<int:user_id>", methods=["GET"])
@login_required
@handles_errors("Error fetching profile")
def get_profile(user_id):
    user = services.get_accounts().get(user_id)
    return jsonify({"success": True, "data": user.to_dict()}), 200
