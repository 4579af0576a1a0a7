from sitebuilder.domain.exceptions import InvariantViolation

def assert_block_order(blocks):
    positions = [block.sort_position for block in blocks]
    if not positions:
        return

    expected = list(range(1, len(positions) + 1))
    if sorted(positions) != expected:
        raise InvariantViolation(
            f"Block positions are not consecutive starting from 1: {positions}",
            positions=positions,
        )
