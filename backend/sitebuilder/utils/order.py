from typing import Dict, Iterable
from sitebuilder.extensions import db


def apply_positions(items: Iterable, positions: Dict[str, int], order_field: str = "sort_position") -> int:
    """
    Persist new positions for items keyed by id.

    Rows that move are parked at negative positions first and flushed, then
    given their final value, so a unique (scope, position) constraint holds
    after every statement regardless of flush order.

    Returns the number of rows that moved.
    """
    moving = [
        item for item in items
        if item.id in positions and getattr(item, order_field) != positions[item.id]
    ]
    if not moving:
        return 0

    for index, item in enumerate(moving, start=1):
        setattr(item, order_field, -index)
    db.session.flush()

    for item in moving:
        setattr(item, order_field, positions[item.id])
    db.session.flush()

    return len(moving)


def compact_positions(items: Iterable, order_field: str = "sort_position") -> int:
    """
    Re-assigns sequential positions (1..N) keeping the current relative order.
    """
    ordered = sorted(items, key=lambda item: getattr(item, order_field))
    positions = {item.id: index for index, item in enumerate(ordered, start=1)}
    return apply_positions(ordered, positions, order_field=order_field)
