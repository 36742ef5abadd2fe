from flask import current_app

from farmconnect.extensions import db
from farmconnect.services.accounts import Accounts
from farmconnect.services.catalog import ProductCatalog
from farmconnect.services.dashboard import FarmerDashboard
from farmconnect.services.orders import OrderWorkflow


def get_accounts():
    return Accounts(db.session)


def get_catalog():
    return ProductCatalog(db.session)


def get_orders():
    return OrderWorkflow(db.session, atomic_accept=current_app.config["ATOMIC_ORDER_ACCEPT"])


def get_dashboard():
    return FarmerDashboard(db.session, low_stock_threshold=current_app.config["LOW_STOCK_THRESHOLD"])
