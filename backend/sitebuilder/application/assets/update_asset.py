from typing import Any, Dict
from sitebuilder.models.landing_asset import LandingAsset
from sitebuilder.application.lookups import get_asset
from sitebuilder.domain.exceptions import ContentValidationError
from sitebuilder.utils.media import clean_metadata
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional


def update_asset_metadata(
    *,
    asset_id: str,
    metadata_patch: Dict[str, Any],
) -> LandingAsset:
    """
    Merge alt text, caption, description and friends into an asset's
    metadata. The stored file is never touched.
    """
    asset = get_asset(asset_id)

    patch = clean_metadata(metadata_patch)
    if not patch:
        raise ContentValidationError("No metadata provided for update", field="metadata")

    with transactional():
        asset.asset_metadata = {**(asset.asset_metadata or {}), **patch}

        log_action(
            holding_id=asset.landing.holding_id,
            action="asset.update",
            entity_type="asset",
            entity_id=asset.id,
            payload={"fields": sorted(patch)},
        )

    return asset
