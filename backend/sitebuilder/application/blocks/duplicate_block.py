from copy import deepcopy
from flask import current_app
from sitebuilder.extensions import db
from sitebuilder.models.landing_block import TITLE_MAX_LENGTH, LandingBlock
from sitebuilder.application.lookups import get_block, landing_blocks, next_position
from sitebuilder.domain.invariants.block import assert_block_order
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.locking import landing_lock
from sitebuilder.utils.transaction import transactional

COPY_SUFFIX = " (copy)"


def duplicate_block(*, block_id: str) -> LandingBlock:
    """
    Copy a block to the end of its landing.

    The copy gets a new id, the same type, content and settings, and always
    starts as an active DRAFT.
    """
    source = get_block(block_id)

    with landing_lock(source.landing_id) as landing:
        with transactional():
            copy = LandingBlock()
            copy.landing_id = landing.id
            copy.block_type = source.block_type
            # Trimmed so the suffix always fits the column
            copy.title = f"{source.title[:TITLE_MAX_LENGTH - len(COPY_SUFFIX)]}{COPY_SUFFIX}"
            copy.content = deepcopy(source.content or {})
            copy.settings = deepcopy(source.settings or {})
            copy.sort_position = next_position(landing.id)
            copy.status = "draft"
            copy.is_active = True
            copy.published_at = None

            db.session.add(copy)
            db.session.flush()

            assert_block_order(landing_blocks(landing.id))

            log_action(
                holding_id=landing.holding_id,
                action="block.duplicate",
                entity_type="block",
                entity_id=copy.id,
                payload={
                    "source_id": source.id,
                    "sort_position": copy.sort_position,
                },
            )

    current_app.logger.info(f"Duplicated block {block_id} as {copy.id}")
    return copy
