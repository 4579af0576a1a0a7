from flask import current_app
from sitebuilder.extensions import db
from sitebuilder.application.lookups import get_asset
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional


def delete_asset(*, asset_id: str) -> None:
    """
    Remove an asset record.

    Blocks citing the asset are left as they are; the public snapshot
    skips references that no longer resolve.
    """
    asset = get_asset(asset_id)
    holding_id = asset.landing.holding_id

    with transactional():
        db.session.delete(asset)

        log_action(
            holding_id=holding_id,
            action="asset.delete",
            entity_type="asset",
            entity_id=asset_id,
            payload={"filename": asset.filename, "landing_id": asset.landing_id},
        )

    current_app.logger.info(f"Deleted asset {asset_id}")
