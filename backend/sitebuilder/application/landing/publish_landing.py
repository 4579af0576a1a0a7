# sitebuilder/application/landing/publish_landing.py
from flask import current_app
from sitebuilder.models.base import utc_now
from sitebuilder.models.landing import Landing
from sitebuilder.application.lookups import landing_blocks
from sitebuilder.domain.invariants.landing import assert_landing
from sitebuilder.domain.lifecycle.landing import assert_landing_transition
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.locking import landing_lock
from sitebuilder.utils.transaction import transactional


def publish_landing(*, landing_id: str) -> Landing:
    """
    Put a landing live.

    Responsibilities:
    - landing lock, so the block set cannot change under the check
    - publish invariants (domain, template, at least one published block)
    - lifecycle transition enforcement
    - audit logging

    Blocks keep their own status; only active published blocks render.
    Publishing an already published landing is a no-op.
    """
    with landing_lock(landing_id) as landing:
        if landing.is_published:
            return landing

        with transactional():
            # 1️⃣ Publish-specific invariants
            blocks = landing_blocks(landing.id)
            assert_landing(landing, blocks, publish=True)

            # 2️⃣ Lifecycle transition enforcement
            assert_landing_transition(from_status=landing.status, to_status="published")

            # 3️⃣ Apply state change
            landing.status = "published"
            landing.published_at = utc_now()

            # 4️⃣ Audit logging
            log_action(
                holding_id=landing.holding_id,
                action="landing.publish",
                entity_type="landing",
                entity_id=landing.id,
                payload={
                    "domain": landing.domain,
                    "published_blocks": sum(1 for b in blocks if b.status == "published"),
                },
            )

    current_app.logger.info(f"Published landing {landing_id} at {landing.url}")
    return landing
