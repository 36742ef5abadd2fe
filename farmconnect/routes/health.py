from flask import Blueprint, current_app, jsonify
from sqlalchemy import text

from farmconnect.extensions import db
from farmconnect.models import utcnow

bp = Blueprint("health", __name__)


@bp.route("/")
def index():
    return jsonify({"message": "FarmConnect API running"})


# App health check
@bp.route("/api/health", methods=["GET"])
def health():
    return jsonify({
        "status": "OK",
        "env": current_app.config.get("ENV"),
        "time": utcnow().isoformat(),
    })


# Database health check
@bp.route("/api/db-health", methods=["GET"])
def db_health():
    try:
        db.session.execute(text("SELECT 1"))
    except Exception as e:
        db.session.rollback()
        current_app.logger.error("Database health check failed: %s", e)
        return jsonify({"status": "DB_ERROR", "error": str(e)}), 500
    return jsonify({"status": "DB_CONNECTED"})
