from typing import List, Optional
from sitebuilder.extensions import db
from sitebuilder.models.landing_block import BLOCK_STATUSES, LandingBlock
from sitebuilder.application.lookups import get_landing
from sitebuilder.domain.exceptions import ContentValidationError


def list_blocks(
    *,
    landing_id: str,
    status: Optional[str] = None,
    block_type: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> List[LandingBlock]:
    get_landing(landing_id)

    query = db.select(LandingBlock).where(LandingBlock.landing_id == landing_id)

    if status:
        if status not in BLOCK_STATUSES:
            raise ContentValidationError(
                f"Unknown block status: {status!r}",
                field="status",
                allowed=list(BLOCK_STATUSES),
            )
        query = query.where(LandingBlock.status == status)

    if block_type:
        query = query.where(LandingBlock.block_type == block_type)

    if is_active is not None:
        query = query.where(LandingBlock.is_active.is_(bool(is_active)))

    query = query.order_by(LandingBlock.sort_position.asc())
    return list(db.session.execute(query).scalars())
