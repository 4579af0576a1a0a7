# sitebuilder/api/v1/assets.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from sitebuilder.utils.decorators import holding_required
from sitebuilder.application.lookups import get_asset
from sitebuilder.application.assets.list_assets import list_assets
from sitebuilder.application.assets.register_asset import register_asset
from sitebuilder.application.assets.update_asset import update_asset_metadata
from sitebuilder.application.assets.delete_asset import delete_asset
from sitebuilder.domain.exceptions import AssetNotFound
from sitebuilder.normalizers.asset import normalize_asset
from .landing import current_landing
from . import v1_bp


def owned_asset(asset_id):
    landing = current_landing()
    asset = get_asset(asset_id)
    if asset.landing_id != landing.id:
        raise AssetNotFound(f"Asset {asset_id} not found", asset_id=asset_id)
    return asset


@v1_bp.route("/landing/assets", methods=["GET"])
@jwt_required()
@holding_required
def get_assets():
    landing = current_landing()

    assets = list_assets(
        landing_id=landing.id,
        asset_type=request.args.get("type"),
        usage_context=request.args.get("usage_context"),
        search=request.args.get("search"),
    )

    return jsonify({
        "assets": [normalize_asset(a) for a in assets],
        "count": len(assets),
    }), 200


@v1_bp.route("/landing/assets", methods=["POST"])
@jwt_required()
@holding_required
def add_asset():
    landing = current_landing()
    data = request.get_json(silent=True)

    if not isinstance(data, dict):
        return jsonify({"error": "Asset descriptor must be a JSON object"}), 400

    asset = register_asset(landing_id=landing.id, descriptor=data)

    return jsonify(normalize_asset(asset)), 201


@v1_bp.route("/landing/assets/<asset_id>", methods=["PATCH"])
@jwt_required()
@holding_required
def update_asset(asset_id):
    asset = owned_asset(asset_id)
    data = request.get_json(silent=True) or {}

    asset = update_asset_metadata(
        asset_id=asset.id,
        metadata_patch=data.get("metadata", {}),
    )

    return jsonify(normalize_asset(asset)), 200


@v1_bp.route("/landing/assets/<asset_id>", methods=["DELETE"])
@jwt_required()
@holding_required
def remove_asset(asset_id):
    delete_asset(asset_id=owned_asset(asset_id).id)
    return jsonify({"message": "Asset deleted"}), 200
