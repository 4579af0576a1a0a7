from typing import Any, Dict
from sqlalchemy.exc import IntegrityError
from sitebuilder.extensions import db
from sitebuilder.models.landing import Landing
from sitebuilder.application.lookups import get_landing
from sitebuilder.domain.exceptions import (
    ContentValidationError,
    DomainAlreadyTaken,
    DomainImmutableAfterPublish,
)
from sitebuilder.domain.invariants.landing import assert_domain, assert_landing
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional


ALLOWED_UPDATE_FIELDS = ("title", "description", "domain", "template")
MERGED_UPDATE_FIELDS = ("theme_config", "seo_meta", "analytics_config")


def _assert_domain_change(landing: Landing, domain: Any) -> None:
    if landing.is_published:
        raise DomainImmutableAfterPublish(
            "Domain cannot change once the landing is published",
            landing_id=landing.id,
            domain=landing.domain,
        )

    assert_domain(domain)

    taken = db.session.execute(
        db.select(Landing.id).where(Landing.domain == domain, Landing.id != landing.id)
    ).first()
    if taken:
        raise DomainAlreadyTaken(
            f"Domain '{domain}' is already taken",
            landing_id=landing.id,
            domain=domain,
        )


def _assert_patch(patch: Dict[str, Any]) -> None:
    if not isinstance(patch, dict):
        raise ContentValidationError("Settings patch must be an object", field=None)

    unknown = sorted(set(patch) - set(ALLOWED_UPDATE_FIELDS) - set(MERGED_UPDATE_FIELDS))
    if unknown:
        raise ContentValidationError(
            f"Unsupported landing fields: {', '.join(unknown)}",
            field=unknown[0],
        )

    title = patch.get("title")
    if "title" in patch and (not isinstance(title, str) or not title.strip()):
        raise ContentValidationError("Title must be a non-empty string", field="title")

    for field in ("description", "template"):
        if patch.get(field) is not None and not isinstance(patch[field], str):
            raise ContentValidationError(f"{field} must be a string", field=field)

    for field in MERGED_UPDATE_FIELDS:
        if field in patch and not isinstance(patch[field], dict):
            raise ContentValidationError(f"{field} must be an object", field=field)


def update_landing_settings(
    *,
    landing_id: str,
    patch: Dict[str, Any],
) -> Landing:
    """
    Update landing-level settings.

    Design rules:
    - title, description, domain, template are replaced
    - theme_config, seo_meta, analytics_config are merged shallowly
    - domain is globally unique and frozen after publish
    - unchanged values are not written
    """
    landing = get_landing(landing_id)
    _assert_patch(patch)

    if "domain" in patch and patch["domain"] != landing.domain:
        _assert_domain_change(landing, patch["domain"])

    changed_fields: list[str] = []

    try:
        with transactional():
            for field in ALLOWED_UPDATE_FIELDS:
                if field in patch and getattr(landing, field) != patch[field]:
                    setattr(landing, field, patch[field])
                    changed_fields.append(field)

            for field in MERGED_UPDATE_FIELDS:
                if field in patch and patch[field]:
                    current = getattr(landing, field) or {}
                    setattr(landing, field, {**current, **patch[field]})
                    changed_fields.append(field)

            if changed_fields:
                assert_landing(landing)

                log_action(
                    holding_id=landing.holding_id,
                    action="landing.update",
                    entity_type="landing",
                    entity_id=landing.id,
                    payload={"fields": changed_fields},
                )
    except IntegrityError as exc:
        # Unique domain constraint lost a race with another landing
        raise DomainAlreadyTaken(
            f"Domain '{patch.get('domain')}' is already taken",
            landing_id=landing_id,
            domain=patch.get("domain"),
        ) from exc

    return landing
