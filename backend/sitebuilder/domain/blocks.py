"""
Block type catalogue.

Single source of truth for what a landing block of a given type looks like:
its default content, the minimal shape its content must keep, whether it may
be deleted, and how asset references are spelled inside content.

Tables are built once at import time and exposed read-only.
"""
from copy import deepcopy
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping

from .exceptions import ContentValidationError, InvalidBlockType


BLOCK_TYPES = (
    "hero",
    "about",
    "services",
    "projects",
    "team",
    "contacts",
    "testimonials",
    "gallery",
    "news",
    "custom",
)

BLOCK_TYPE_NAMES: Mapping[str, str] = MappingProxyType({
    "hero": "Hero banner",
    "about": "About the company",
    "services": "Services",
    "projects": "Projects",
    "team": "Team",
    "contacts": "Contacts",
    "testimonials": "Testimonials",
    "gallery": "Gallery",
    "news": "News",
    "custom": "Custom block",
})

# Mandatory blocks every landing keeps
PROTECTED_BLOCK_TYPES = frozenset({"hero"})

BLOCK_DEFAULT_CONTENT: Mapping[str, Dict[str, Any]] = MappingProxyType({
    "hero": {
        "title": "Block title",
        "subtitle": "Block subtitle",
        "description": "Block description",
        "button_text": "Learn more",
        "button_url": "https://example.com",
        "background_image": "",
        "text_color": "#000000",
        "background_color": "#ffffff",
    },
    "about": {
        "title": "About us",
        "description": "Tell visitors about your company",
        "image": "",
        "features": [],
    },
    "services": {
        "title": "Our services",
        "description": "What the company offers",
        "services": [],
    },
    "projects": {
        "title": "Our projects",
        "description": "Portfolio of completed projects",
        "projects": [],
    },
    "team": {
        "title": "Our team",
        "description": "Meet the people behind the work",
        "members": [],
    },
    "contacts": {
        "title": "Contacts",
        "phone": "+7 (000) 000-00-00",
        "email": "info@company.com",
        "address": "Company address",
        "working_hours": "Mon-Fri: 9:00-18:00",
        "social_links": [],
    },
    "testimonials": {
        "title": "Testimonials",
        "description": "What our clients say about us",
        "testimonials": [],
    },
    "gallery": {
        "title": "Gallery",
        "description": "Photos of our work",
        "images": [],
    },
    "news": {
        "title": "News",
        "description": "Company news",
        "articles": [],
    },
    "custom": {
        "html_content": "<div>Custom content</div>",
        "css_styles": "",
    },
})

# field kinds: string | list | object | media (url string or asset reference)
BLOCK_SCHEMAS: Mapping[str, Dict[str, Any]] = MappingProxyType({
    "hero": {
        "required": ("title",),
        "fields": {
            "title": "string",
            "subtitle": "string",
            "description": "string",
            "button_text": "string",
            "button_url": "string",
            "background_image": "media",
            "text_color": "string",
            "background_color": "string",
        },
    },
    "about": {
        "required": ("description",),
        "fields": {"title": "string", "description": "string", "image": "media", "features": "list"},
    },
    "services": {
        "required": ("services",),
        "fields": {"title": "string", "description": "string", "services": "list"},
    },
    "projects": {
        "required": ("projects",),
        "fields": {"title": "string", "description": "string", "projects": "list"},
    },
    "team": {
        "required": ("members",),
        "fields": {"title": "string", "description": "string", "members": "list"},
    },
    "contacts": {
        "required": ("title",),
        "fields": {
            "title": "string",
            "phone": "string",
            "email": "string",
            "address": "string",
            "working_hours": "string",
            "social_links": "list",
            "map_coordinates": "object",
        },
    },
    "testimonials": {
        "required": ("testimonials",),
        "fields": {"title": "string", "description": "string", "testimonials": "list"},
    },
    "gallery": {
        "required": ("images",),
        "fields": {"title": "string", "description": "string", "images": "list"},
    },
    "news": {
        "required": ("articles",),
        "fields": {"title": "string", "description": "string", "articles": "list"},
    },
    "custom": {
        "required": (),
        "fields": {"html_content": "string", "css_styles": "string"},
    },
})

DEFAULT_BLOCK_SETTINGS: Mapping[str, Any] = MappingProxyType({
    "animation": "none",
    "padding": "normal",
    "text_align": "left",
})

TEXT_ALIGNMENTS = ("left", "center", "right")


def assert_block_type(block_type: str) -> None:
    if block_type not in BLOCK_TYPES:
        raise InvalidBlockType(
            f"Unknown block type: {block_type!r}",
            block_type=block_type,
            allowed=list(BLOCK_TYPES),
        )


def default_content_for(block_type: str) -> Dict[str, Any]:
    assert_block_type(block_type)
    return deepcopy(BLOCK_DEFAULT_CONTENT[block_type])


def default_settings() -> Dict[str, Any]:
    return dict(DEFAULT_BLOCK_SETTINGS)


def is_deletable(block_type: str) -> bool:
    return block_type not in PROTECTED_BLOCK_TYPES


def is_asset_reference(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("asset_id"), str)


def iter_asset_references(value: Any) -> Iterator[Dict[str, Any]]:
    """Yield every ``{"asset_id": ...}`` object nested anywhere in content."""
    if is_asset_reference(value):
        yield value
    elif isinstance(value, dict):
        for item in value.values():
            yield from iter_asset_references(item)
    elif isinstance(value, list):
        for item in value:
            yield from iter_asset_references(item)


def _matches_kind(value: Any, kind: str) -> bool:
    if value is None:
        return True
    if kind == "string":
        return isinstance(value, str)
    if kind == "list":
        return isinstance(value, list)
    if kind == "object":
        return isinstance(value, dict)
    if kind == "media":
        return isinstance(value, str) or is_asset_reference(value)
    return True


def validate_content(block_type: str, content: Any) -> None:
    """
    Check content against the schema of its block type.

    Required fields must be present and non-empty (strings) or present as
    lists. Declared fields must have the declared kind. Extra fields pass.
    """
    assert_block_type(block_type)

    if not isinstance(content, dict):
        raise ContentValidationError(
            "Block content must be an object",
            block_type=block_type,
            field=None,
        )

    schema = BLOCK_SCHEMAS[block_type]
    fields = schema["fields"]

    for field in schema["required"]:
        value = content.get(field)
        missing = value is None or (isinstance(value, str) and not value.strip())
        if missing:
            raise ContentValidationError(
                f"{block_type} block requires '{field}'",
                block_type=block_type,
                field=field,
            )

    for field, kind in fields.items():
        if field in content and not _matches_kind(content[field], kind):
            raise ContentValidationError(
                f"{block_type} block field '{field}' must be of kind {kind}",
                block_type=block_type,
                field=field,
                expected=kind,
            )


def validate_settings(settings: Any) -> None:
    if not isinstance(settings, dict):
        raise ContentValidationError("Block settings must be an object", field="settings")

    align = settings.get("text_align")
    if align is not None and align not in TEXT_ALIGNMENTS:
        raise ContentValidationError(
            f"Unsupported text alignment: {align!r}",
            field="text_align",
            allowed=list(TEXT_ALIGNMENTS),
        )


def list_block_types() -> list:
    return [
        {
            "type": block_type,
            "name": BLOCK_TYPE_NAMES[block_type],
            "default_content": default_content_for(block_type),
            "schema": {
                "required": list(BLOCK_SCHEMAS[block_type]["required"]),
                "fields": dict(BLOCK_SCHEMAS[block_type]["fields"]),
            },
            "deletable": is_deletable(block_type),
        }
        for block_type in BLOCK_TYPES
    ]
