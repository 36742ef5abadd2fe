from flask import Blueprint, jsonify, request

from farmconnect import services
from farmconnect.auth import current_user, login_required, roles_required
from farmconnect.errors import handles_errors
from farmconnect.models import Role
from farmconnect.services.orders import BUYER_PRODUCT, BUYER_PROFILE, FARMER_CONTACT, FARMER_PRODUCT

bp = Blueprint("orders", __name__, url_prefix="/api/orders")


@bp.route("", methods=["POST"])
@login_required
@handles_errors("Error creating order")
def create_order():
    data = request.get_json(silent=True) or {}
    order = services.get_orders().create(current_user().id, data)
    return jsonify({
        "success": True,
        "message": "Order placed successfully",
        "data": order.to_dict(),
    }), 201


@bp.route("/buyer", methods=["GET"])
@login_required
@handles_errors("Error fetching orders")
def buyer_orders():
    orders = services.get_orders().list_for_buyer(current_user().id)
    items = [o.to_dict(farmer_fields=FARMER_CONTACT, product_fields=BUYER_PRODUCT) for o in orders]
    return jsonify({"success": True, "count": len(items), "data": items}), 200


@bp.route("/farmer", methods=["GET"])
@roles_required(Role.FARMER)
@handles_errors("Error fetching orders")
def farmer_orders():
    orders = services.get_orders().list_for_farmer(current_user().id, request.args.get("status"))
    items = [o.to_dict(buyer_fields=BUYER_PROFILE, product_fields=FARMER_PRODUCT) for o in orders]
    return jsonify({"success": True, "count": len(items), "data": items}), 200


@bp.route("/<int:order_id>/accept", methods=["PUT"])
@roles_required(Role.FARMER)
@handles_errors("Error accepting order")
def accept_order(order_id):
    order = services.get_orders().accept(current_user().id, order_id)
    return jsonify({
        "success": True,
        "message": "Order accepted successfully",
        "data": order.to_dict(),
    }), 200


@bp.route("/<int:order_id>/reject", methods=["PUT"])
@roles_required(Role.FARMER)
@handles_errors("Error rejecting order")
def reject_order(order_id):
    data = request.get_json(silent=True) or {}
    order = services.get_orders().reject(current_user().id, order_id, data.get("reason"))
    return jsonify({"success": True, "message": "Order rejected", "data": order.to_dict()}), 200
