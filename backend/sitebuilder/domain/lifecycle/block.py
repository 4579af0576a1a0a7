from typing import Set
from sitebuilder.domain.exceptions import InvariantViolation

# Explicit allowed state transitions
ALLOWED_BLOCK_TRANSITIONS: dict[str, Set[str]] = {
    "draft": {"published"},
    "published": set(),  # no unpublish
}

def assert_block_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards block lifecycle transitions.
    Single source of truth for block status changes.
    """
    allowed = ALLOWED_BLOCK_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise InvariantViolation(
            f"Illegal block transition: {from_status} → {to_status}",
            from_status=from_status,
            to_status=to_status,
        )
