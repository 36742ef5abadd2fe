from flask import Blueprint, jsonify, request

from farmconnect import services
from farmconnect.auth import current_user, roles_required
from farmconnect.errors import handles_errors
from farmconnect.models import Role
from farmconnect.services.catalog import FARMER_PROFILE

bp = Blueprint("products", __name__, url_prefix="/api/products")


@bp.route("", methods=["GET"])
@handles_errors("Error fetching products")
def list_products():
    products = services.get_catalog().list(
        category=request.args.get("category"),
        min_price=request.args.get("min_price"),
        max_price=request.args.get("max_price"),
    )
    items = [p.to_dict(farmer_fields=FARMER_PROFILE) for p in products]
    return jsonify({"success": True, "count": len(items), "data": items}), 200


@bp.route("/<int:product_id>", methods=["GET"])
@handles_errors("Error fetching product")
def get_product(product_id):
    product = services.get_catalog().get(product_id)
    return jsonify({"success": True, "data": product.to_dict(farmer_fields=FARMER_PROFILE)}), 200


@bp.route("", methods=["POST"])
@roles_required(Role.FARMER)
@handles_errors("Error creating product")
def create_product():
    data = request.get_json(silent=True) or {}
    product = services.get_catalog().create(current_user().id, data)
    return jsonify({
        "success": True,
        "message": "Product created successfully",
        "data": product.to_dict(),
    }), 201


@bp.route("/<int:product_id>", methods=["PUT"])
@roles_required(Role.FARMER)
@handles_errors("Error updating product")
def update_product(product_id):
    data = request.get_json(silent=True) or {}
    product = services.get_catalog().update(current_user().id, product_id, data)
    return jsonify({
        "success": True,
        "message": "Product updated successfully",
        "data": product.to_dict(),
    }), 200


@bp.route("/<int:product_id>", methods=["DELETE"])
@roles_required(Role.FARMER)
@handles_errors("Error deleting product")
def delete_product(product_id):
    services.get_catalog().delete(current_user().id, product_id)
    return jsonify({"success": True, "message": "Product deleted successfully"}), 200
