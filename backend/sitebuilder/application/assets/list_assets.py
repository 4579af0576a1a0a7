from typing import List, Optional
from sitebuilder.extensions import db
from sitebuilder.models.landing_asset import LandingAsset
from sitebuilder.application.lookups import get_landing
from sitebuilder.domain.exceptions import ContentValidationError
from sitebuilder.utils.media import ASSET_TYPES, assert_usage_context


def list_assets(
    *,
    landing_id: str,
    asset_type: Optional[str] = None,
    usage_context: Optional[str] = None,
    search: Optional[str] = None,
) -> List[LandingAsset]:
    """
    Assets of a landing, newest first.

    ``search`` matches a literal filename substring, case-insensitively.
    Unknown ``asset_type`` or ``usage_context`` filters are rejected.
    """
    get_landing(landing_id)

    query = db.select(LandingAsset).where(LandingAsset.landing_id == landing_id)

    if asset_type:
        if asset_type not in ASSET_TYPES:
            raise ContentValidationError(
                f"Unknown asset type: {asset_type!r}",
                field="asset_type",
                allowed=list(ASSET_TYPES),
            )
        query = query.where(LandingAsset.asset_type == asset_type)

    if usage_context:
        assert_usage_context(usage_context)
        query = query.where(LandingAsset.usage_context == usage_context)

    if search:
        query = query.where(LandingAsset.filename.icontains(search, autoescape=True))

    query = query.order_by(LandingAsset.created_at.desc(), LandingAsset.id.desc())
    return list(db.session.execute(query).scalars())
