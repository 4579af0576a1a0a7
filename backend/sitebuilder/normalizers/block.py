from sitebuilder.domain.blocks import BLOCK_SCHEMAS
from ._time import isoformat


def normalize_block(block, admin=False):
    base = {
        "id": block.id,
        "landing_id": block.landing_id,
        "type": block.block_type,
        "title": block.title,
        "content": block.content or {},
        "settings": block.settings or {},
        "sort_position": block.sort_position,
        "status": block.status,
        "is_active": block.is_active,
        "published_at": isoformat(block.published_at),
        "can_delete": block.deletable,
    }

    if admin:
        schema = BLOCK_SCHEMAS[block.block_type]
        base["schema"] = {
            "required": list(schema["required"]),
            "fields": dict(schema["fields"]),
        }
        base["created_at"] = isoformat(block.created_at)
        base["updated_at"] = isoformat(block.updated_at)

    return base
