from flask import current_app
from sqlalchemy.exc import IntegrityError
from sitebuilder.extensions import db
from sitebuilder.models.holding import Holding
from sitebuilder.models.landing import Landing
from sitebuilder.domain.exceptions import HoldingNotFound
from sitebuilder.domain.invariants.landing import is_valid_domain
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional


def _find_landing(holding_id: str):
    return db.session.execute(
        db.select(Landing).filter_by(holding_id=holding_id)
    ).scalar_one_or_none()


def _seed_domain(holding: Holding):
    candidate = (holding.slug or "").lower()
    if not is_valid_domain(candidate):
        return None

    taken = db.session.execute(
        db.select(Landing.id).filter_by(domain=candidate)
    ).first()
    return None if taken else candidate


def get_or_create_landing(*, holding_id: str) -> Landing:
    """
    Return the holding's landing, creating an empty DRAFT one on first use.

    Edge cases handled:
    - Unknown holding
    - Holding slug unusable or already taken as a domain (domain left empty)
    - Two first requests racing on the per-holding unique constraint
    """
    landing = _find_landing(holding_id)
    if landing:
        return landing

    holding = db.session.get(Holding, holding_id)
    if not holding:
        raise HoldingNotFound("Holding not found", holding_id=holding_id)

    landing = Landing()
    landing.holding_id = holding.id
    landing.title = holding.name
    landing.domain = _seed_domain(holding)
    landing.template = current_app.config["DEFAULT_LANDING_TEMPLATE"]
    landing.status = "draft"
    landing.theme_config = {}
    landing.seo_meta = {}
    landing.analytics_config = {}

    try:
        with transactional():
            db.session.add(landing)
            db.session.flush()

            log_action(
                holding_id=holding.id,
                action="landing.create",
                entity_type="landing",
                entity_id=landing.id,
                payload={"domain": landing.domain, "template": landing.template},
            )
    except IntegrityError:
        # Another request created it first
        existing = _find_landing(holding_id)
        if existing is None:
            raise
        return existing

    current_app.logger.info(f"Created landing {landing.id} for holding {holding.id}")
    return landing
