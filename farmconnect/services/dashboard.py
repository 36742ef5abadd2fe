from sqlalchemy import select

from farmconnect.models import Order, OrderStatus, Product

REVENUE_STATUSES = (OrderStatus.ACCEPTED, OrderStatus.COMPLETED)


def summarize(products, orders, low_stock_threshold=20):
    """Dashboard figures over rows that are already loaded in full."""
    total_inventory_value = sum(float(p.price) * float(p.quantity) for p in products)
    total_revenue = sum(float(o.total_amount) for o in orders if o.status in REVENUE_STATUSES)

    return {
        "totalProducts": len(products),
        "totalInventoryValue": f"{total_inventory_value:.2f}",
        "lowStockProducts": sum(1 for p in products if p.quantity < low_stock_threshold),
        "totalOrders": len(orders),
        "pendingOrders": sum(1 for o in orders if o.status == OrderStatus.PENDING),
        "acceptedOrders": sum(1 for o in orders if o.status == OrderStatus.ACCEPTED),
        "totalRevenue": f"{total_revenue:.2f}",
    }


class FarmerDashboard:
    def __init__(self, session, low_stock_threshold=20):
        self.session = session
        self.low_stock_threshold = low_stock_threshold

    def stats(self, farmer_id):
        products = self.session.scalars(
            select(Product).where(Product.farmer_id == farmer_id)
        ).unique().all()
        orders = self.session.scalars(select(Order).where(Order.farmer_id == farmer_id)).all()
        return summarize(products, orders, self.low_stock_threshold)
