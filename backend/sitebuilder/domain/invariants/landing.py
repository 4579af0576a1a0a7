import re
from sitebuilder.domain.exceptions import (
    ContentValidationError,
    LandingIncomplete,
    NothingToPublish,
)
from .block import assert_block_order

DOMAIN_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")


def is_valid_domain(domain) -> bool:
    return isinstance(domain, str) and bool(DOMAIN_PATTERN.match(domain))


def assert_domain(domain: str) -> None:
    if not is_valid_domain(domain):
        raise ContentValidationError(
            "Domain must be a subdomain slug: lowercase letters, digits and inner hyphens",
            field="domain",
            value=domain,
        )


def assert_landing(landing, blocks=None, publish=False):
    if blocks is None:
        blocks = landing.blocks

    assert_block_order(blocks)

    if not publish:
        return

    for field in ("domain", "template"):
        if not getattr(landing, field):
            raise LandingIncomplete(
                f"Cannot publish landing without a {field}.",
                landing_id=landing.id,
                field=field,
            )

    if not any(block.status == "published" for block in blocks):
        raise NothingToPublish(
            "Cannot publish landing without published blocks.",
            landing_id=landing.id,
        )
