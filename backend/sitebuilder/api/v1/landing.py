# sitebuilder/api/v1/landing.py
from flask import g, request, jsonify
from flask_jwt_extended import jwt_required
from sitebuilder.utils.decorators import holding_required
from sitebuilder.application.landing.get_or_create_landing import get_or_create_landing
from sitebuilder.application.landing.update_landing import update_landing_settings
from sitebuilder.application.landing.publish_landing import publish_landing
from sitebuilder.application.landing.public_snapshot import get_public_snapshot
from sitebuilder.normalizers.landing import normalize_landing
from . import v1_bp


def current_landing():
    return get_or_create_landing(holding_id=g.current_holding.id)


@v1_bp.route("/landing", methods=["GET"])
@jwt_required()
@holding_required
def get_landing():
    landing = current_landing()
    return jsonify(normalize_landing(landing, admin=True, include_blocks=True))


@v1_bp.route("/landing", methods=["PATCH"])
@jwt_required()
@holding_required
def update_landing():
    landing = current_landing()
    data = request.get_json(silent=True) or {}

    landing = update_landing_settings(landing_id=landing.id, patch=data)

    return jsonify(normalize_landing(landing, admin=True)), 200


@v1_bp.route("/landing/publish", methods=["POST"])
@jwt_required()
@holding_required
def publish_current_landing():
    landing = publish_landing(landing_id=current_landing().id)

    return jsonify({
        "message": "Landing published",
        "url": landing.url,
        "published_at": landing.published_at.isoformat(),
    }), 200


@v1_bp.route("/landing/snapshot", methods=["GET"])
@jwt_required()
@holding_required
def snapshot():
    return jsonify(get_public_snapshot(landing_id=current_landing().id)), 200
