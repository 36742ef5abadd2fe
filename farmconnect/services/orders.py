"""Order lifecycle: PENDING -> ACCEPTED | REJECTED.

Placing an order checks stock but does not reserve it. Acceptance, by
default, commits the status change and then writes the product's new quantity
as a second, separate statement computed from the value read before either
write. Nothing stops two accepts (or an accept racing a new order) from
overselling a product. Run back to back, two accepts drive quantity negative;
interleaved so that both read before either writes, the second write
overwrites the first and one decrement is lost.

With ``atomic_accept`` the status change and a conditional decrement
(``quantity >= ordered``) run in one transaction, and the accept fails with
a Conflict when stock no longer covers the order.
"""
import logging

from sqlalchemy import select, update

from farmconnect.errors import Conflict, NotFound, ValidationError
from farmconnect.models import Order, OrderStatus, Product, utcnow
from farmconnect.services.catalog import parse_amount

logger = logging.getLogger(__name__)

BUYER_PROFILE = ("full_name", "email", "phone")
FARMER_CONTACT = ("full_name", "phone")
FARMER_PRODUCT = ("name", "unit")
BUYER_PRODUCT = ("name", "unit", "image_url")


def _fmt(amount):
    return f"{amount:g}"


class OrderWorkflow:
    def __init__(self, session, atomic_accept=False):
        self.session = session
        self.atomic_accept = atomic_accept

    def create(self, buyer_id, data) -> Order:
        product_id = data.get("product_id")
        quantity = data.get("quantity")
        if product_id in (None, "") or quantity in (None, ""):
            raise ValidationError("Product ID and quantity are required")
        quantity = parse_amount(quantity, "quantity", allow_zero=False)
        try:
            product_id = int(product_id)
        except (TypeError, ValueError):
            raise ValidationError("Product ID must be an integer")

        product = self.session.get(Product, product_id)
        if product is None:
            raise NotFound("Product not found")

        if product.quantity < quantity:
            raise ValidationError(
                f"Not enough stock. Available: {_fmt(product.quantity)} {product.unit}"
            )

        # price snapshot; later edits to the listing leave this order alone
        unit_price = product.price
        order = Order(
            buyer_id=buyer_id,
            farmer_id=product.farmer_id,
            product_id=product.id,
            quantity=quantity,
            unit_price=unit_price,
            total_amount=round(unit_price * quantity, 2),
            delivery_address=data.get("delivery_address"),
            notes=data.get("notes"),
            status=OrderStatus.PENDING,
        )
        self.session.add(order)
        self.session.commit()
        logger.info("Buyer %s placed order %s for product %s", buyer_id, order.id, product.id)
        return order

    def _owned(self, farmer_id, order_id) -> Order:
        order = self.session.scalars(
            select(Order).where(Order.id == order_id, Order.farmer_id == farmer_id)
        ).first()
        if order is None:
            raise NotFound("Order not found")
        return order

    def _stock_on_hand(self, order):
        return order.product.quantity

    def accept(self, farmer_id, order_id) -> Order:
        order = self._owned(farmer_id, order_id)
        if order.status != OrderStatus.PENDING:
            raise ValidationError(f"Cannot accept order with status: {order.status}")

        if self.atomic_accept:
            return self._accept_atomically(order)

        current_quantity = self._stock_on_hand(order)

        order.status = OrderStatus.ACCEPTED
        order.updated_at = utcnow()
        self.session.commit()

        # second, independent write: absolute value from the earlier read
        self.session.execute(
            update(Product)
            .where(Product.id == order.product_id)
            .values(quantity=current_quantity - order.quantity)
        )
        self.session.commit()
        logger.info("Order %s accepted, product %s stock set to %s",
                    order.id, order.product_id, current_quantity - order.quantity)
        return order

    def _accept_atomically(self, order) -> Order:
        moved = self.session.execute(
            update(Order)
            .where(Order.id == order.id, Order.status == OrderStatus.PENDING)
            .values(status=OrderStatus.ACCEPTED, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        if moved.rowcount != 1:
            self.session.rollback()
            # another request moved it first; report the status it holds now
            self.session.refresh(order)
            raise Conflict(f"Cannot accept order with status: {order.status}")

        decremented = self.session.execute(
            update(Product)
            .where(Product.id == order.product_id, Product.quantity >= order.quantity)
            .values(quantity=Product.quantity - order.quantity)
            .execution_options(synchronize_session=False)
        )
        if decremented.rowcount != 1:
            self.session.rollback()
            logger.warning("Order %s not accepted: stock below %s", order.id, order.quantity)
            raise Conflict("Not enough stock to accept order")

        self.session.commit()
        self.session.refresh(order)
        logger.info("Order %s accepted atomically", order.id)
        return order

    def reject(self, farmer_id, order_id, reason=None) -> Order:
        order = self._owned(farmer_id, order_id)
        if order.status != OrderStatus.PENDING:
            raise ValidationError(f"Cannot reject order with status: {order.status}")

        order.status = OrderStatus.REJECTED
        order.notes = reason or order.notes
        order.updated_at = utcnow()
        self.session.commit()
        logger.info("Order %s rejected", order.id)
        return order

    def list_for_farmer(self, farmer_id, status=None):
        query = select(Order).where(Order.farmer_id == farmer_id)
        if status:
            query = query.where(Order.status == status)
        query = query.order_by(Order.created_at.desc(), Order.id.desc())
        return self.session.scalars(query).all()

    def list_for_buyer(self, buyer_id):
        query = (
            select(Order)
            .where(Order.buyer_id == buyer_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        return self.session.scalars(query).all()
