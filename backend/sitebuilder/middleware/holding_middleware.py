from flask import request, g, jsonify
from sitebuilder.models.holding import Holding
from sitebuilder.extensions import db

# Endpoints served without a tenant
PUBLIC_ENDPOINTS = {
    "static",
    "openapi_landing",
    "v1.health_check",
    "v1.public_landing",
}

def holding_middleware(app):
    @app.before_request
    def load_holding():
        endpoint = request.endpoint
        if endpoint is None:
            return None  # unmatched route, let Flask answer 404
        if endpoint in PUBLIC_ENDPOINTS or endpoint.startswith("swagger_ui"):
            return None

        holding_id = request.headers.get("X-Holding-ID")
        if not holding_id:
            return jsonify({"error": "X-Holding-ID header is missing"}), 400

        holding = db.session.execute(
            db.select(Holding).filter_by(id=holding_id, is_active=True)
        ).scalar_one_or_none()
        if not holding:
            return jsonify({"error": "Invalid holding"}), 404

        # Attach holding to global context
        g.current_holding = holding
