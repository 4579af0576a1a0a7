from datetime import timezone
from email.utils import format_datetime
from flask import request, abort
from dateutil.parser import parse, ParserError

CONDITION_HEADER = "If-Unmodified-Since"


def as_http_time(ts):
    """
    UTC, timezone-aware, truncated to whole seconds (HTTP date precision).
    Naive values are taken as UTC.
    """
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).replace(microsecond=0)


def last_modified(entity):
    """Value for a Last-Modified header, or None for unsaved entities."""
    if entity.updated_at is None:
        return None
    return format_datetime(as_http_time(entity.updated_at), usegmt=True)


def enforce_optimistic_lock(entity):
    """
    Reject an edit made on a stale copy.

    Clients echo the Last-Modified value of their last read in
    If-Unmodified-Since. Without the header no check is made.
    Aborts with 409 when the entity changed after that instant.
    """
    raw = request.headers.get(CONDITION_HEADER)
    if not raw:
        return

    try:
        client_ts = as_http_time(parse(raw))
    except (ParserError, OverflowError):
        abort(400, description=f"Invalid {CONDITION_HEADER} header")

    if entity.updated_at is None:
        return

    if as_http_time(entity.updated_at) > client_ts:
        abort(
            409,
            description=f"{type(entity).__name__} {entity.id} was modified after {raw}",
        )
