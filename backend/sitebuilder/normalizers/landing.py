from .block import normalize_block
from ._time import isoformat


def normalize_landing(landing, admin=False, include_blocks=False):
    data = {
        "id": landing.id,
        "holding_id": landing.holding_id,
        "title": landing.title,
        "description": landing.description,
        "domain": landing.domain,
        "template": landing.template,
        "status": landing.status,
        "is_published": landing.is_published,
        "published_at": isoformat(landing.published_at),
        "url": landing.url,
        "preview_url": landing.preview_url,
    }

    if admin:
        data["theme_config"] = landing.theme_config or {}
        data["seo_meta"] = landing.seo_meta or {}
        data["analytics_config"] = landing.analytics_config or {}
        data["assets_count"] = len(landing.assets)
        data["created_at"] = isoformat(landing.created_at)
        data["updated_at"] = isoformat(landing.updated_at)

    if include_blocks:
        blocks = sorted(landing.blocks, key=lambda b: b.sort_position)
        data["blocks"] = [normalize_block(b, admin=admin) for b in blocks]

    return data
