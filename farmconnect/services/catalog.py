import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from farmconnect.errors import Conflict, NotFound, ValidationError
from farmconnect.models import Product

logger = logging.getLogger(__name__)

FARMER_PROFILE = ("full_name", "email", "phone")
EDITABLE_FIELDS = ("name", "category", "price", "unit", "quantity", "description", "image_url")


def parse_amount(value, field, allow_zero=True):
    """Coerce a price or quantity from JSON, rejecting negatives."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if amount < 0 or (amount == 0 and not allow_zero):
        raise ValidationError(f"{field} must be {'non-negative' if allow_zero else 'positive'}")
    return amount


def _missing(value):
    return value is None or (isinstance(value, str) and not value.strip())


class ProductCatalog:
    def __init__(self, session):
        self.session = session

    def create(self, farmer_id, data) -> Product:
        required = ["name", "category", "price", "unit", "quantity"]
        if any(_missing(data.get(k)) for k in required):
            raise ValidationError("name, category, price, unit, and quantity are required")

        product = Product(
            farmer_id=farmer_id,
            name=str(data["name"]).strip(),
            category=str(data["category"]).strip(),
            price=parse_amount(data["price"], "price"),
            unit=str(data["unit"]).strip(),
            quantity=parse_amount(data["quantity"], "quantity"),
            description=data.get("description"),
            image_url=data.get("image_url"),
        )
        self.session.add(product)
        self.session.commit()
        logger.info("Farmer %s listed product %s", farmer_id, product.id)
        return product

    def list(self, category=None, min_price=None, max_price=None):
        """All matching listings, newest first. Not paginated."""
        query = select(Product)
        if category:
            query = query.where(Product.category == category)
        if not _missing(min_price):
            query = query.where(Product.price >= parse_amount(min_price, "min_price"))
        if not _missing(max_price):
            query = query.where(Product.price <= parse_amount(max_price, "max_price"))
        query = query.order_by(Product.created_at.desc(), Product.id.desc())
        return self.session.scalars(query).unique().all()

    def get(self, product_id) -> Product:
        product = self.session.get(Product, product_id)
        if product is None:
            raise NotFound("Product not found")
        return product

    def _owned(self, farmer_id, product_id) -> Product:
        product = self.session.scalars(
            select(Product).where(Product.id == product_id, Product.farmer_id == farmer_id)
        ).first()
        if product is None:
            raise NotFound("Product not found")
        return product

    def update(self, farmer_id, product_id, data) -> Product:
        # blank values are skipped, as on create they count as missing
        changes = {k: data[k] for k in EDITABLE_FIELDS if not _missing(data.get(k))}
        if not changes:
            raise ValidationError("No fields to update")
        for field, value in changes.items():
            if field in ("price", "quantity"):
                changes[field] = parse_amount(value, field)
            else:
                changes[field] = str(value).strip()

        product = self._owned(farmer_id, product_id)
        for field, value in changes.items():
            setattr(product, field, value)
        self.session.commit()
        return product

    def delete(self, farmer_id, product_id):
        self._owned(farmer_id, product_id)
        try:
            self.session.execute(
                delete(Product).where(Product.id == product_id, Product.farmer_id == farmer_id)
            )
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise Conflict("Product has orders and cannot be deleted")
        logger.info("Farmer %s deleted product %s", farmer_id, product_id)
