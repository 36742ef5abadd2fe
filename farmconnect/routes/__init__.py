from farmconnect.routes import auth, farmer, health, orders, products


def register_blueprints(app):
    for module in (health, auth, products, orders, farmer):
        app.register_blueprint(module.bp)
