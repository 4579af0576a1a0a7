# sitebuilder/api/v1/blocks.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from sitebuilder.utils.decorators import holding_required
from sitebuilder.utils.optimistic_lock import enforce_optimistic_lock, last_modified
from sitebuilder.application.lookups import get_block
from sitebuilder.application.blocks.list_blocks import list_blocks
from sitebuilder.application.blocks.create_block import create_block
from sitebuilder.application.blocks.update_block import (
    update_block_content,
    update_block_settings,
    set_block_active,
)
from sitebuilder.application.blocks.publish_block import publish_block
from sitebuilder.application.blocks.duplicate_block import duplicate_block
from sitebuilder.application.blocks.delete_block import delete_block
from sitebuilder.application.blocks.reorder_blocks import reorder_blocks
from sitebuilder.domain.blocks import list_block_types
from sitebuilder.domain.exceptions import BlockNotFound
from sitebuilder.normalizers.block import normalize_block
from .landing import current_landing
from . import v1_bp


def owned_block(block_id):
    """Load a block and make sure it belongs to the caller's landing."""
    landing = current_landing()
    block = get_block(block_id)
    if block.landing_id != landing.id:
        raise BlockNotFound(f"Block {block_id} not found", block_id=block_id)
    return block


def block_response(block, status=200):
    response = jsonify(normalize_block(block, admin=True))
    response.status_code = status

    stamp = last_modified(block)
    if stamp:
        response.headers["Last-Modified"] = stamp
    return response


def parse_bool(value):
    if value is None:
        return None
    return value.lower() in ("1", "true", "yes")


# ------------------------
# Blocks
# ------------------------

@v1_bp.route("/landing/block-types", methods=["GET"])
@jwt_required()
@holding_required
def get_block_types():
    return jsonify({"block_types": list_block_types()}), 200


@v1_bp.route("/landing/blocks", methods=["GET"])
@jwt_required()
@holding_required
def get_blocks():
    landing = current_landing()

    blocks = list_blocks(
        landing_id=landing.id,
        status=request.args.get("status"),
        block_type=request.args.get("type"),
        is_active=parse_bool(request.args.get("is_active")),
    )

    return jsonify({
        "blocks": [normalize_block(b, admin=True) for b in blocks],
        "count": len(blocks),
    }), 200


@v1_bp.route("/landing/blocks", methods=["POST"])
@jwt_required()
@holding_required
def add_block():
    landing = current_landing()
    data = request.get_json(silent=True) or {}

    if not data.get("type"):
        return jsonify({"error": "Block type is required"}), 400

    block = create_block(
        landing_id=landing.id,
        block_type=data["type"],
        title=data.get("title"),
        settings=data.get("settings"),
    )

    return block_response(block, 201)


@v1_bp.route("/landing/blocks/reorder", methods=["PUT"])
@jwt_required()
@holding_required
def reorder():
    landing = current_landing()
    data = request.get_json(silent=True) or {}
    block_order = data.get("block_order")

    if not isinstance(block_order, list):
        return jsonify({"error": "block_order must be a list of block ids"}), 400

    moved = reorder_blocks(landing_id=landing.id, ordered_block_ids=block_order)

    return jsonify({
        "message": "Blocks reordered" if moved else "Order unchanged",
        "moved": moved,
    }), 200


@v1_bp.route("/landing/blocks/<block_id>", methods=["GET"])
@jwt_required()
@holding_required
def get_single_block(block_id):
    return block_response(owned_block(block_id))


@v1_bp.route("/landing/blocks/<block_id>", methods=["PATCH"])
@jwt_required()
@holding_required
def update_block(block_id):
    block = owned_block(block_id)
    enforce_optimistic_lock(block)

    data = request.get_json(silent=True) or {}

    block = update_block_settings(
        block_id=block.id,
        title=data.get("title"),
        settings=data.get("settings"),
    )

    return block_response(block)


@v1_bp.route("/landing/blocks/<block_id>/content", methods=["PATCH"])
@jwt_required()
@holding_required
def update_content(block_id):
    block = owned_block(block_id)
    enforce_optimistic_lock(block)

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Content patch must be a JSON object"}), 400

    block = update_block_content(block_id=block.id, partial_content=data)

    return block_response(block)


@v1_bp.route("/landing/blocks/<block_id>/active", methods=["POST"])
@jwt_required()
@holding_required
def toggle_block(block_id):
    block = owned_block(block_id)
    data = request.get_json(silent=True) or {}

    if not isinstance(data.get("is_active"), bool):
        return jsonify({"error": "is_active must be a boolean"}), 400

    block = set_block_active(block_id=block.id, is_active=data["is_active"])

    return block_response(block)


@v1_bp.route("/landing/blocks/<block_id>/publish", methods=["POST"])
@jwt_required()
@holding_required
def publish_single_block(block_id):
    block = publish_block(block_id=owned_block(block_id).id)
    return block_response(block)


@v1_bp.route("/landing/blocks/<block_id>/duplicate", methods=["POST"])
@jwt_required()
@holding_required
def duplicate(block_id):
    copy = duplicate_block(block_id=owned_block(block_id).id)
    return block_response(copy, 201)


@v1_bp.route("/landing/blocks/<block_id>", methods=["DELETE"])
@jwt_required()
@holding_required
def remove_block(block_id):
    delete_block(block_id=owned_block(block_id).id)
    return jsonify({"message": "Block deleted"}), 200
