from typing import Any, Dict
from sitebuilder.extensions import db
from sitebuilder.models.landing import Landing
from sitebuilder.models.landing_block import LandingBlock
from sitebuilder.application.lookups import get_landing
from sitebuilder.application.assets.references import load_assets, referenced_asset_ids
from sitebuilder.domain.exceptions import LandingNotFound
from sitebuilder.normalizers.snapshot import normalize_public_snapshot


def _visible_blocks(landing_id: str) -> list:
    # One query, so positions and statuses come from the same committed state
    return list(
        db.session.execute(
            db.select(LandingBlock)
            .where(
                LandingBlock.landing_id == landing_id,
                LandingBlock.is_active.is_(True),
                LandingBlock.status == "published",
            )
            .order_by(LandingBlock.sort_position.asc())
        ).scalars()
    )


def build_snapshot(landing: Landing) -> Dict[str, Any]:
    blocks = _visible_blocks(landing.id)

    asset_ids = set()
    for block in blocks:
        asset_ids |= referenced_asset_ids(block.content)

    assets = load_assets(landing.id, asset_ids)
    return normalize_public_snapshot(landing, blocks, assets)


def get_public_snapshot(*, landing_id: str) -> Dict[str, Any]:
    """
    Read-only projection of what the public page shows.

    Only active, published blocks in position order, with asset
    references resolved to URLs. Draft or hidden blocks never appear.
    """
    return build_snapshot(get_landing(landing_id))


def get_public_snapshot_by_domain(*, domain: str) -> Dict[str, Any]:
    """Snapshot of the published landing served on ``domain``."""
    landing = db.session.execute(
        db.select(Landing).filter_by(domain=domain, status="published")
    ).scalar_one_or_none()

    if not landing:
        raise LandingNotFound("Landing not found", domain=domain)

    return build_snapshot(landing)
