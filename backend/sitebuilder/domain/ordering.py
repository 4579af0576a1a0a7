"""
Block reordering.

Turns a client-proposed ordering of block ids into dense 1-based sort
positions. Pure: no session, no models.
"""
from collections import Counter
from typing import Dict, Optional, Sequence

from .exceptions import ReorderSetMismatch


def compute_positions(
    current_ids: Sequence[str],
    target_ids: Sequence[str],
    *,
    landing_id: Optional[str] = None,
) -> Optional[Dict[str, int]]:
    """
    Compute new sort positions for ``target_ids``.

    ``current_ids`` must be the landing's block ids in current order.
    Returns ``None`` when the target order equals the current one, so the
    caller can skip the write. Raises ``ReorderSetMismatch`` unless
    ``target_ids`` is an exact permutation of ``current_ids``.
    """
    target_ids = list(target_ids)
    current = set(current_ids)

    # Block ids are strings; anything else is foreign
    malformed = [item for item in target_ids if not isinstance(item, str)]
    valid_ids = [item for item in target_ids if isinstance(item, str)]

    counts = Counter(valid_ids)
    duplicates = sorted(block_id for block_id, n in counts.items() if n > 1)
    missing = sorted(current - counts.keys())
    unexpected = sorted(counts.keys() - current) + malformed

    if duplicates or missing or unexpected or len(target_ids) != len(current_ids):
        raise ReorderSetMismatch(
            "Block order must list every block of the landing exactly once",
            landing_id=landing_id,
            missing=missing,
            unexpected=unexpected,
            duplicates=duplicates,
        )

    if list(current_ids) == target_ids:
        return None

    return {block_id: index for index, block_id in enumerate(target_ids, start=1)}
