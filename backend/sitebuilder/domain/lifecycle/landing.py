from typing import Set
from sitebuilder.domain.exceptions import InvariantViolation

ALLOWED_LANDING_TRANSITIONS: dict[str, Set[str]] = {
    "draft": {"published"},
    "published": set(),
}

def assert_landing_transition(*, from_status: str, to_status: str) -> None:
    allowed = ALLOWED_LANDING_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise InvariantViolation(
            f"Illegal landing transition: {from_status} → {to_status}",
            from_status=from_status,
            to_status=to_status,
        )
