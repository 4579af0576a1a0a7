"""
Asset references inside block content.

A reference is any ``{"asset_id": "...", "size": "..."}`` object, at any
depth of a block's content.
"""
from typing import Any, Dict, Mapping

from flask import current_app

from sitebuilder.extensions import db
from sitebuilder.models.landing_asset import LandingAsset
from sitebuilder.domain.blocks import is_asset_reference, iter_asset_references
from sitebuilder.domain.exceptions import AssetNotFound
from sitebuilder.utils.media import resolve_optimized_url

_MISSING = object()


def referenced_asset_ids(content: Any) -> set:
    return {ref["asset_id"] for ref in iter_asset_references(content)}


def load_assets(landing_id: str, asset_ids) -> Dict[str, LandingAsset]:
    if not asset_ids:
        return {}

    assets = db.session.execute(
        db.select(LandingAsset).where(
            LandingAsset.landing_id == landing_id,
            LandingAsset.id.in_(list(asset_ids)),
        )
    ).scalars()
    return {asset.id: asset for asset in assets}


def assert_references_resolve(landing_id: str, content: Any) -> None:
    """Every cited asset must exist and belong to the same landing."""
    asset_ids = referenced_asset_ids(content)
    found = load_assets(landing_id, asset_ids)

    missing = sorted(asset_ids - found.keys())
    if missing:
        raise AssetNotFound(
            "Block content references unknown assets",
            asset_id=missing[0],
            missing=missing,
            landing_id=landing_id,
        )


def _resolve(value: Any, assets: Mapping[str, LandingAsset], block_id: str) -> Any:
    if is_asset_reference(value):
        asset = assets.get(value["asset_id"])
        if asset is None:
            current_app.logger.warning(
                f"Dropping broken asset reference {value['asset_id']} in block {block_id}"
            )
            return _MISSING

        metadata = asset.asset_metadata or {}
        return {
            "asset_id": asset.id,
            "asset_type": asset.asset_type,
            "url": resolve_optimized_url(asset, value.get("size")),
            "alt_text": metadata.get("alt_text"),
            "caption": metadata.get("caption"),
        }

    if isinstance(value, dict):
        resolved = {}
        for key, item in value.items():
            item = _resolve(item, assets, block_id)
            resolved[key] = None if item is _MISSING else item
        return resolved

    if isinstance(value, list):
        resolved_items = (_resolve(item, assets, block_id) for item in value)
        return [item for item in resolved_items if item is not _MISSING]

    return value


def resolve_references(content: Any, assets: Mapping[str, LandingAsset], *, block_id: str = "") -> Any:
    """
    Return a copy of ``content`` with asset references replaced by URLs.

    References to assets that no longer exist are dropped from lists and
    nulled in objects, so one missing file never breaks a page.
    """
    resolved = _resolve(content, assets, block_id)
    return None if resolved is _MISSING else resolved
