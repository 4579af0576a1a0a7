from typing import Any, Dict
from flask import current_app
from sitebuilder.extensions import db
from sitebuilder.models.landing_asset import LandingAsset
from sitebuilder.application.lookups import get_landing
from sitebuilder.domain.exceptions import ContentValidationError
from sitebuilder.utils.media import (
    assert_usage_context,
    classify_asset_type,
    clean_filename,
    clean_metadata,
    clean_optimized_urls,
    normalize_mime_type,
)
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional


def register_asset(
    *,
    landing_id: str,
    descriptor: Dict[str, Any],
) -> LandingAsset:
    """
    Record metadata for a file the upload service has already stored.

    Descriptor keys:
    - filename, byte_size, mime_type (required)
    - usage_context (defaults to "general")
    - metadata, public_url, optimized_urls (optional)

    Size limits are enforced by the upload service; the size is stored
    as reported.
    """
    landing = get_landing(landing_id)

    asset_type = classify_asset_type(descriptor.get("mime_type"))
    filename = clean_filename(descriptor.get("filename"))

    byte_size = descriptor.get("byte_size")
    if isinstance(byte_size, bool) or not isinstance(byte_size, int) or byte_size < 0:
        raise ContentValidationError(
            "byte_size must be a non-negative integer",
            field="byte_size",
        )

    usage_context = descriptor.get("usage_context") or "general"
    assert_usage_context(usage_context)

    metadata = clean_metadata(descriptor.get("metadata"))

    public_url = descriptor.get("public_url")
    if public_url is not None and not isinstance(public_url, str):
        raise ContentValidationError("public_url must be a string", field="public_url")

    if not public_url:
        base_url = current_app.config["ASSET_PUBLIC_BASE_URL"].rstrip("/")
        public_url = f"{base_url}/{landing.id}/{filename}"

    raw_optimized = descriptor.get("optimized_urls")
    optimized_urls = clean_optimized_urls(asset_type, raw_optimized)
    if raw_optimized and optimized_urls is None:
        current_app.logger.warning(
            f"Ignoring optimized variants for {asset_type} asset {filename}"
        )

    asset = LandingAsset()
    asset.landing_id = landing.id
    asset.filename = filename
    asset.mime_type = normalize_mime_type(descriptor.get("mime_type"))
    asset.asset_type = asset_type
    asset.usage_context = usage_context
    asset.size_bytes = byte_size
    asset.public_url = public_url
    asset.optimized_urls = optimized_urls
    asset.asset_metadata = metadata

    with transactional():
        db.session.add(asset)
        db.session.flush()  # ensures asset.id is available

        log_action(
            holding_id=landing.holding_id,
            action="asset.register",
            entity_type="asset",
            entity_id=asset.id,
            payload={
                "filename": asset.filename,
                "asset_type": asset.asset_type,
                "usage_context": asset.usage_context,
                "size_bytes": asset.size_bytes,
            },
        )

    current_app.logger.info(f"Registered {asset_type} asset {asset.id} for landing {landing.id}")
    return asset
