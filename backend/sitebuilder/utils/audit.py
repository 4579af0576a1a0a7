from flask import g, has_request_context
from sitebuilder.extensions import db
from sitebuilder.models.audit_log import AuditLog
from typing import Optional

SYSTEM_ACTOR = "system"

def current_actor_id() -> str:
    if has_request_context():
        return getattr(g, "current_actor_id", None) or SYSTEM_ACTOR
    return SYSTEM_ACTOR

def log_action(
    *,
    holding_id: str,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
):
    log = AuditLog()

    log.actor_id = current_actor_id()
    log.holding_id = holding_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id or "*"
    log.payload = payload or {}

    db.session.add(log)
