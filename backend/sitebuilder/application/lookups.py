from sitebuilder.extensions import db
from sitebuilder.models.landing import Landing
from sitebuilder.models.landing_block import LandingBlock
from sitebuilder.models.landing_asset import LandingAsset
from sitebuilder.domain.exceptions import AssetNotFound, BlockNotFound, LandingNotFound


def get_landing(landing_id: str) -> Landing:
    landing = db.session.get(Landing, landing_id)
    if not landing:
        raise LandingNotFound("Landing not found", landing_id=landing_id)
    return landing


def get_block(block_id: str) -> LandingBlock:
    block = db.session.get(LandingBlock, block_id)
    if not block:
        raise BlockNotFound("Block not found", block_id=block_id)
    return block


def get_asset(asset_id: str) -> LandingAsset:
    asset = db.session.get(LandingAsset, asset_id)
    if not asset:
        raise AssetNotFound("Asset not found", asset_id=asset_id)
    return asset


def landing_blocks(landing_id: str) -> list:
    """Blocks of a landing in position order, re-read from the database."""
    return list(
        db.session.execute(
            db.select(LandingBlock)
            .where(LandingBlock.landing_id == landing_id)
            .order_by(LandingBlock.sort_position.asc())
            .execution_options(populate_existing=True)
        ).scalars()
    )


def next_position(landing_id: str) -> int:
    max_position = db.session.execute(
        db.select(db.func.max(LandingBlock.sort_position))
        .where(LandingBlock.landing_id == landing_id)
    ).scalar()
    return (max_position or 0) + 1
