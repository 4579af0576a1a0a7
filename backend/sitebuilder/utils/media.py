from typing import Mapping, Optional
from werkzeug.utils import secure_filename
from sitebuilder.domain.exceptions import ContentValidationError, UnsupportedMimeType

# Mirrors the upload form: image/*, video/*, .pdf, .doc, .docx
DOCUMENT_MIME_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

ASSET_TYPES = ("image", "video", "document")

USAGE_CONTEXTS = ("hero", "logo", "gallery", "about", "team", "projects", "favicon", "general")

SIZE_CLASSES = ("thumbnail", "small", "medium", "large")

METADATA_KEYS = {"alt_text", "caption", "description", "title", "width", "height", "duration"}

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def normalize_mime_type(mime_type: Optional[str]) -> str:
    if mime_type is not None and not isinstance(mime_type, str):
        raise ContentValidationError("mime_type must be a string", field="mime_type")

    # "image/png; charset=binary" -> "image/png"
    return (mime_type or "").split(";", 1)[0].strip().lower()


def classify_asset_type(mime_type: Optional[str]) -> str:
    mime = normalize_mime_type(mime_type)

    if mime.startswith("image/"):
        return "image"
    if mime.startswith("video/"):
        return "video"
    if mime in DOCUMENT_MIME_TYPES:
        return "document"

    raise UnsupportedMimeType(
        f"File type not allowed: {mime_type!r}",
        mime_type=mime_type,
    )


def assert_usage_context(usage_context: str) -> None:
    if usage_context not in USAGE_CONTEXTS:
        raise ContentValidationError(
            f"Unknown usage context: {usage_context!r}",
            field="usage_context",
            allowed=list(USAGE_CONTEXTS),
        )


def clean_metadata(metadata) -> dict:
    if metadata is None:
        return {}
    if not isinstance(metadata, dict):
        raise ContentValidationError("Asset metadata must be an object", field="metadata")

    unknown = sorted(set(metadata) - METADATA_KEYS)
    if unknown:
        raise ContentValidationError(
            f"Unsupported metadata keys: {', '.join(unknown)}",
            field=unknown[0],
            allowed=sorted(METADATA_KEYS),
        )
    return dict(metadata)


def clean_filename(filename: str) -> str:
    if filename is not None and not isinstance(filename, str):
        raise ContentValidationError("filename must be a string", field="filename")

    cleaned = secure_filename(filename or "")
    if not cleaned:
        raise ContentValidationError("A filename is required", field="filename")
    return cleaned


def human_size(size_bytes: int) -> str:
    """Render a byte count the way the media manager shows it (base 1024)."""
    if size_bytes <= 0:
        return "0 Bytes"

    value = float(size_bytes)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1

    number = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{number} {_SIZE_UNITS[unit]}"


def clean_optimized_urls(asset_type: str, optimized_urls: Optional[Mapping[str, str]]) -> Optional[dict]:
    """Keep known size classes, and only for images."""
    if optimized_urls is not None and not isinstance(optimized_urls, Mapping):
        raise ContentValidationError("optimized_urls must be an object", field="optimized_urls")

    if asset_type != "image" or not optimized_urls:
        return None

    cleaned = {
        size: url
        for size, url in optimized_urls.items()
        if size in SIZE_CLASSES and isinstance(url, str) and url
    }
    return cleaned or None


def resolve_optimized_url(asset, size_class: Optional[str] = "medium") -> str:
    """
    Optimized variant URL for ``size_class`` when the asset is an image that
    has it, otherwise the public URL.
    """
    if asset.asset_type == "image" and asset.optimized_urls and size_class:
        return asset.optimized_urls.get(size_class) or asset.public_url
    return asset.public_url
