from typing import Any, Dict, Optional
from sitebuilder.models.landing_block import TITLE_MAX_LENGTH, LandingBlock
from sitebuilder.application.lookups import get_block
from sitebuilder.application.assets.references import assert_references_resolve
from sitebuilder.domain.blocks import validate_content, validate_settings
from sitebuilder.domain.exceptions import ContentValidationError
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional


def update_block_content(
    *,
    block_id: str,
    partial_content: Dict[str, Any],
) -> LandingBlock:
    """
    Shallow-merge ``partial_content`` into a block's content.

    Design rules:
    - Top-level keys replace existing ones, nested objects are not merged
    - The merged content must satisfy the block type's schema
    - Cited assets must belong to the block's landing
    - Publish status is left alone
    """
    block = get_block(block_id)

    if not isinstance(partial_content, dict):
        raise ContentValidationError(
            "Content patch must be an object",
            block_id=block.id,
            field=None,
        )

    merged = {**(block.content or {}), **partial_content}

    try:
        validate_content(block.block_type, merged)
    except ContentValidationError as exc:
        exc.details["block_id"] = block.id
        raise

    assert_references_resolve(block.landing_id, merged)

    with transactional():
        block.content = merged

        log_action(
            holding_id=block.landing.holding_id,
            action="block.update_content",
            entity_type="block",
            entity_id=block.id,
            payload={"fields": sorted(partial_content)},
        )

    return block


def update_block_settings(
    *,
    block_id: str,
    title: Optional[str] = None,
    settings: Optional[Dict[str, Any]] = None,
) -> LandingBlock:
    """Rename a block and/or merge display settings into it."""
    block = get_block(block_id)

    if title is None and settings is None:
        raise ContentValidationError(
            "No valid fields provided for update",
            block_id=block.id,
            field=None,
        )

    if title is not None and (not isinstance(title, str) or not title.strip()):
        raise ContentValidationError("Block title must be a non-empty string", block_id=block.id, field="title")

    if title is not None and len(title) > TITLE_MAX_LENGTH:
        raise ContentValidationError(
            f"Block title must be at most {TITLE_MAX_LENGTH} characters",
            block_id=block.id,
            field="title",
        )

    if settings is not None:
        validate_settings(settings)

    changed_fields: list[str] = []

    with transactional():
        if title is not None and title != block.title:
            block.title = title
            changed_fields.append("title")

        if settings is not None:
            block.settings = {**(block.settings or {}), **settings}
            changed_fields.append("settings")

        log_action(
            holding_id=block.landing.holding_id,
            action="block.update_settings",
            entity_type="block",
            entity_id=block.id,
            payload={"fields": changed_fields},
        )

    return block


def set_block_active(*, block_id: str, is_active: bool) -> LandingBlock:
    """Show or hide a block publicly. Publish status is unaffected."""
    block = get_block(block_id)

    if not isinstance(is_active, bool):
        raise ContentValidationError("is_active must be a boolean", block_id=block.id, field="is_active")

    if block.is_active == is_active:
        return block

    with transactional():
        block.is_active = is_active

        log_action(
            holding_id=block.landing.holding_id,
            action="block.activate" if is_active else "block.deactivate",
            entity_type="block",
            entity_id=block.id,
        )

    return block
