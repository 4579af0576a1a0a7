from typing import Any, Dict, Optional
from flask import current_app
from sitebuilder.extensions import db
from sitebuilder.models.landing_block import LandingBlock
from sitebuilder.application.lookups import landing_blocks, next_position
from sitebuilder.domain.blocks import (
    BLOCK_TYPE_NAMES,
    assert_block_type,
    default_content_for,
    default_settings,
    validate_settings,
)
from sitebuilder.domain.invariants.block import assert_block_order
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.locking import landing_lock
from sitebuilder.utils.transaction import transactional


def create_block(
    *,
    landing_id: str,
    block_type: str,
    title: Optional[str] = None,
    settings: Optional[Dict[str, Any]] = None,
) -> LandingBlock:
    """
    Append a new DRAFT block seeded from its type's default content.

    Responsibilities:
    - Reject unknown block types
    - Place the block after the current last one, under the landing lock
    - Audit logging
    """
    assert_block_type(block_type)

    block_settings = default_settings()
    if settings:
        validate_settings(settings)
        block_settings.update(settings)

    with landing_lock(landing_id) as landing:
        with transactional():
            block = LandingBlock()
            block.landing_id = landing.id
            block.block_type = block_type
            block.title = title or BLOCK_TYPE_NAMES[block_type]
            block.content = default_content_for(block_type)
            block.settings = block_settings
            block.sort_position = next_position(landing.id)
            block.status = "draft"
            block.is_active = True

            db.session.add(block)
            db.session.flush()  # ensures block.id is available

            assert_block_order(landing_blocks(landing.id))

            log_action(
                holding_id=landing.holding_id,
                action="block.create",
                entity_type="block",
                entity_id=block.id,
                payload={
                    "landing_id": landing.id,
                    "type": block.block_type,
                    "sort_position": block.sort_position,
                },
            )

    current_app.logger.info(f"Created {block_type} block {block.id} on landing {landing_id}")
    return block
