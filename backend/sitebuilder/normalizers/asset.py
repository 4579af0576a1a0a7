from ._time import isoformat


def normalize_asset(asset):
    return {
        "id": asset.id,
        "landing_id": asset.landing_id,
        "filename": asset.filename,
        "mime_type": asset.mime_type,
        "asset_type": asset.asset_type,
        "usage_context": asset.usage_context,
        "file_size": asset.size_bytes,
        "human_size": asset.human_size,
        "public_url": asset.public_url,
        "optimized_urls": asset.optimized_urls,
        "is_optimized": asset.is_optimized,
        "metadata": asset.asset_metadata or {},
        "uploaded_at": isoformat(asset.created_at),
    }
