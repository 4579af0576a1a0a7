from sitebuilder.application.assets.references import resolve_references
from ._time import isoformat


def normalize_public_snapshot(landing, blocks, assets):
    """
    Public projection of a landing: only what a visitor may see.

    ``blocks`` must already be filtered to active, published blocks in
    position order; ``assets`` maps asset id to asset for reference
    resolution.
    """
    return {
        "landing": {
            "id": landing.id,
            "title": landing.title,
            "description": landing.description,
            "domain": landing.domain,
            "template": landing.template,
            "url": landing.url,
            "published_at": isoformat(landing.published_at),
            "theme_config": landing.theme_config or {},
            "seo_meta": landing.seo_meta or {},
            "analytics_config": landing.analytics_config or {},
        },
        "blocks": [
            {
                "id": block.id,
                "type": block.block_type,
                "title": block.title,
                "sort_position": block.sort_position,
                "content": resolve_references(block.content or {}, assets, block_id=block.id),
                "settings": block.settings or {},
            }
            for block in blocks
        ],
    }
