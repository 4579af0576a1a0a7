from flask import current_app
from sitebuilder.extensions import db
from sitebuilder.application.lookups import get_block, landing_blocks
from sitebuilder.domain.exceptions import BlockNotDeletable, BlockNotFound
from sitebuilder.domain.invariants.block import assert_block_order
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.locking import landing_lock
from sitebuilder.utils.order import apply_positions
from sitebuilder.utils.transaction import transactional


def delete_block(*, block_id: str) -> None:
    """
    Delete a block and close the gap it leaves.

    Every block after the deleted one moves up by one position, inside the
    same transaction and under the landing lock.
    """
    block = get_block(block_id)

    if not block.deletable:
        raise BlockNotDeletable(
            f"{block.block_type} blocks cannot be deleted",
            block_id=block.id,
            block_type=block.block_type,
        )

    with landing_lock(block.landing_id) as landing:
        with transactional():
            # Position may have moved since the block was first read
            current = {b.id: b for b in landing_blocks(landing.id)}
            block = current.pop(block_id, None)
            if block is None:
                raise BlockNotFound("Block not found", block_id=block_id)

            deleted_position = block.sort_position
            db.session.delete(block)
            db.session.flush()

            remaining = list(current.values())
            positions = {
                b.id: b.sort_position - 1
                for b in remaining
                if b.sort_position > deleted_position
            }
            apply_positions(remaining, positions)
            assert_block_order(remaining)

            log_action(
                holding_id=landing.holding_id,
                action="block.delete",
                entity_type="block",
                entity_id=block_id,
                payload={
                    "landing_id": landing.id,
                    "sort_position": deleted_position,
                    "shifted": len(positions),
                },
            )

    current_app.logger.info(f"Deleted block {block_id}, compacted {len(positions)} positions")
