from datetime import datetime, timezone

from sqlalchemy import CheckConstraint

from farmconnect.extensions import db


class Role:
    FARMER = "FARMER"
    WHOLESALER = "WHOLESALER"
    RETAILER = "RETAILER"
    CUSTOMER = "CUSTOMER"
    INSTITUTIONAL_BUYER = "INSTITUTIONAL_BUYER"

    ALL = (FARMER, WHOLESALER, RETAILER, CUSTOMER, INSTITUTIONAL_BUYER)


class OrderStatus:
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    # counted as revenue, but nothing in the API moves an order here yet
    COMPLETED = "COMPLETED"


def utcnow():
    return datetime.now(timezone.utc)


def _iso(value):
    return value.isoformat() if value else None


# ---------------- User Model ----------------
class User(db.Model):
    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    phone = db.Column(db.String(20), index=True)
    full_name = db.Column(db.String(120), nullable=False)
    role = db.Column(db.String(32), nullable=False)
    password = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def to_dict(self):
        """Sanitized record: the password hash never leaves the model."""
        return {
            "id": self.id,
            "email": self.email,
            "phone": self.phone,
            "full_name": self.full_name,
            "role": self.role,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    def summary(self, *fields):
        return {field: getattr(self, field) for field in ("id", *fields)}


# ---------------- Product Model ----------------
class Product(db.Model):
    __tablename__ = "products"
    id = db.Column(db.Integer, primary_key=True)
    farmer_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    name = db.Column(db.String(120), nullable=False)
    category = db.Column(db.String(80), nullable=False, index=True)
    price = db.Column(db.Numeric(12, 2, asdecimal=False), nullable=False)
    unit = db.Column(db.String(20), nullable=False)
    # no store-level floor: the unguarded accept path can drive this negative
    quantity = db.Column(db.Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    description = db.Column(db.Text)
    image_url = db.Column(db.String(500))

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    farmer = db.relationship("User", lazy="joined")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_nonneg"),
    )

    def to_dict(self, farmer_fields=None):
        data = {
            "id": self.id,
            "farmer_id": self.farmer_id,
            "name": self.name,
            "category": self.category,
            "price": self.price,
            "unit": self.unit,
            "quantity": self.quantity,
            "description": self.description,
            "image_url": self.image_url,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }
        if farmer_fields:
            data["farmer"] = self.farmer.summary(*farmer_fields) if self.farmer else None
        return data

    def summary(self, *fields):
        return {field: getattr(self, field) for field in ("id", *fields)}


# ---------------- Order Model ----------------
class Order(db.Model):
    __tablename__ = "orders"
    id = db.Column(db.Integer, primary_key=True)
    buyer_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    farmer_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False)

    quantity = db.Column(db.Numeric(12, 2, asdecimal=False), nullable=False)
    unit_price = db.Column(db.Numeric(12, 2, asdecimal=False), nullable=False)
    total_amount = db.Column(db.Numeric(14, 2, asdecimal=False), nullable=False)
    delivery_address = db.Column(db.Text)
    notes = db.Column(db.Text)
    status = db.Column(db.String(20), nullable=False, default=OrderStatus.PENDING, index=True)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    buyer = db.relationship("User", foreign_keys=[buyer_id])
    farmer = db.relationship("User", foreign_keys=[farmer_id])
    product = db.relationship("Product")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_qty_positive"),
    )

    def to_dict(self, buyer_fields=None, farmer_fields=None, product_fields=None):
        data = {
            "id": self.id,
            "buyer_id": self.buyer_id,
            "farmer_id": self.farmer_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total_amount": self.total_amount,
            "delivery_address": self.delivery_address,
            "notes": self.notes,
            "status": self.status,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }
        if buyer_fields:
            data["buyer"] = self.buyer.summary(*buyer_fields) if self.buyer else None
        if farmer_fields:
            data["farmer"] = self.farmer.summary(*farmer_fields) if self.farmer else None
        if product_fields:
            data["product"] = self.product.summary(*product_fields) if self.product else None
        return data
