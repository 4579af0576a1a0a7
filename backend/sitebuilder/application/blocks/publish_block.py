from flask import current_app
from sitebuilder.models.base import utc_now
from sitebuilder.models.landing_block import LandingBlock
from sitebuilder.application.lookups import get_block
from sitebuilder.domain.lifecycle.block import assert_block_transition
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional


def publish_block(*, block_id: str) -> LandingBlock:
    """
    Move a block from DRAFT to PUBLISHED and stamp published_at.

    Publishing an already published block is a no-op.
    """
    block = get_block(block_id)

    if block.status == "published":
        return block

    with transactional():
        # 1️⃣ Lifecycle transition enforcement
        assert_block_transition(from_status=block.status, to_status="published")

        # 2️⃣ Apply state change
        block.status = "published"
        block.published_at = utc_now()

        # 3️⃣ Audit logging
        log_action(
            holding_id=block.landing.holding_id,
            action="block.publish",
            entity_type="block",
            entity_id=block.id,
            payload={"landing_id": block.landing_id},
        )

    current_app.logger.info(f"Published block {block.id}")
    return block
