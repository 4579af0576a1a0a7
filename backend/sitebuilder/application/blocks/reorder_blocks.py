from typing import Sequence
from flask import current_app
from sitebuilder.application.lookups import landing_blocks
from sitebuilder.domain.invariants.block import assert_block_order
from sitebuilder.domain.ordering import compute_positions
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.locking import landing_lock
from sitebuilder.utils.order import apply_positions
from sitebuilder.utils.transaction import transactional


def reorder_blocks(
    *,
    landing_id: str,
    ordered_block_ids: Sequence[str],
) -> int:
    """
    Give a landing's blocks the order listed in ``ordered_block_ids``.

    The list must name every block of the landing exactly once. Submitting
    the current order is a no-op and writes nothing.

    Returns the number of blocks that moved.
    """
    with landing_lock(landing_id) as landing:
        with transactional():
            blocks = landing_blocks(landing.id)

            positions = compute_positions(
                [block.id for block in blocks],
                ordered_block_ids,
                landing_id=landing.id,
            )
            if positions is None:
                return 0

            moved = apply_positions(blocks, positions)
            assert_block_order(blocks)

            log_action(
                holding_id=landing.holding_id,
                action="block.reorder",
                entity_type="landing",
                entity_id=landing.id,
                payload={"order": list(ordered_block_ids), "moved": moved},
            )

    current_app.logger.info(f"Reordered landing {landing_id}: {moved} blocks moved")
    return moved
