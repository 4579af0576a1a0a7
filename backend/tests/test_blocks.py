"""
Integration tests for the block store: create, update, publish, duplicate,
delete and reorder against the database.
"""

import random

import pytest

from sitebuilder.application.assets.register_asset import register_asset
from sitebuilder.application.blocks.create_block import create_block
from sitebuilder.application.blocks.delete_block import delete_block
from sitebuilder.application.blocks.duplicate_block import duplicate_block
from sitebuilder.application.blocks.list_blocks import list_blocks
from sitebuilder.application.blocks.publish_block import publish_block
from sitebuilder.application.blocks.reorder_blocks import reorder_blocks
from sitebuilder.application.blocks.update_block import (
    set_block_active,
    update_block_content,
    update_block_settings,
)
from sitebuilder.domain.blocks import BLOCK_DEFAULT_CONTENT, BLOCK_TYPES
from sitebuilder.domain.exceptions import (
    AssetNotFound,
    BlockNotDeletable,
    BlockNotFound,
    ContentValidationError,
    InvalidBlockType,
    ReorderSetMismatch,
)


def positions(landing):
    return [(b.id, b.sort_position) for b in list_blocks(landing_id=landing.id)]


def assert_dense(landing):
    found = sorted(b.sort_position for b in list_blocks(landing_id=landing.id))
    assert found == list(range(1, len(found) + 1))


# ------------------------
# Create / duplicate
# ------------------------

def test_create_hero_then_duplicate(landing):
    hero = create_block(landing_id=landing.id, block_type="hero")

    assert hero.content == BLOCK_DEFAULT_CONTENT["hero"]
    assert hero.sort_position == 1
    assert hero.status == "draft"
    assert hero.is_active is True

    copy = duplicate_block(block_id=hero.id)

    assert copy.id != hero.id
    assert copy.block_type == "hero"
    assert copy.content == hero.content
    assert copy.status == "draft"
    assert copy.sort_position == 2
    assert copy.title.endswith("(copy)")


def test_duplicate_resets_lifecycle(landing):
    block = create_block(landing_id=landing.id, block_type="about")
    publish_block(block_id=block.id)
    set_block_active(block_id=block.id, is_active=False)

    copy = duplicate_block(block_id=block.id)

    assert copy.status == "draft"
    assert copy.is_active is True
    assert copy.published_at is None


def test_duplicate_does_not_share_content(landing):
    block = create_block(landing_id=landing.id, block_type="services")
    copy = duplicate_block(block_id=block.id)

    update_block_content(block_id=copy.id, partial_content={"services": [{"name": "Audit"}]})

    assert block.content["services"] == []


def test_duplicate_of_longest_title_fits(landing):
    block = create_block(landing_id=landing.id, block_type="about")
    update_block_settings(block_id=block.id, title="x" * 255)

    copy = duplicate_block(block_id=block.id)

    assert len(copy.title) == 255
    assert copy.title.endswith(" (copy)")
    assert copy.title.startswith("x" * 248)


def test_rename_rejects_overlong_title(landing):
    block = create_block(landing_id=landing.id, block_type="about")

    with pytest.raises(ContentValidationError) as exc:
        update_block_settings(block_id=block.id, title="x" * 256)

    assert exc.value.details["field"] == "title"


def test_create_unknown_type(landing):
    with pytest.raises(InvalidBlockType) as exc:
        create_block(landing_id=landing.id, block_type="carousel")

    assert exc.value.details["block_type"] == "carousel"
    assert list_blocks(landing_id=landing.id) == []


def test_create_appends_and_audits(landing, audit_count):
    for block_type in ("hero", "about", "contacts"):
        create_block(landing_id=landing.id, block_type=block_type)

    blocks = list_blocks(landing_id=landing.id)
    assert [b.block_type for b in blocks] == ["hero", "about", "contacts"]
    assert [b.sort_position for b in blocks] == [1, 2, 3]
    assert audit_count("block.create") == 3


def test_create_with_title_and_settings(landing):
    block = create_block(
        landing_id=landing.id,
        block_type="team",
        title="Leadership",
        settings={"text_align": "center"},
    )

    assert block.title == "Leadership"
    assert block.settings["text_align"] == "center"
    assert block.settings["padding"] == "normal"


# ------------------------
# Content and settings
# ------------------------

def test_update_content_is_shallow_merge(landing):
    block = create_block(landing_id=landing.id, block_type="hero")
    publish_block(block_id=block.id)

    block = update_block_content(block_id=block.id, partial_content={"subtitle": "New subtitle"})

    assert block.content["subtitle"] == "New subtitle"
    assert block.content["title"] == BLOCK_DEFAULT_CONTENT["hero"]["title"]
    assert block.status == "published"


def test_update_content_rejects_invalid_shape(landing):
    block = create_block(landing_id=landing.id, block_type="hero")

    with pytest.raises(ContentValidationError) as exc:
        update_block_content(block_id=block.id, partial_content={"title": ""})

    assert exc.value.details["field"] == "title"
    assert exc.value.details["block_id"] == block.id
    assert block.content["title"] == BLOCK_DEFAULT_CONTENT["hero"]["title"]


def test_update_content_missing_block(landing):
    with pytest.raises(BlockNotFound):
        update_block_content(block_id="missing", partial_content={"title": "x"})


def test_update_content_checks_asset_references(landing, other_landing):
    foreign = register_asset(
        landing_id=other_landing.id,
        descriptor={"filename": "bg.png", "byte_size": 10, "mime_type": "image/png"},
    )
    block = create_block(landing_id=landing.id, block_type="hero")

    with pytest.raises(AssetNotFound) as exc:
        update_block_content(
            block_id=block.id,
            partial_content={"background_image": {"asset_id": foreign.id}},
        )

    assert exc.value.details["asset_id"] == foreign.id


def test_update_settings(landing):
    block = create_block(landing_id=landing.id, block_type="about")

    block = update_block_settings(block_id=block.id, title="Who we are", settings={"padding": "large"})

    assert block.title == "Who we are"
    assert block.settings["padding"] == "large"
    assert block.settings["animation"] == "none"

    with pytest.raises(ContentValidationError):
        update_block_settings(block_id=block.id)


def test_set_active_keeps_status(landing):
    block = create_block(landing_id=landing.id, block_type="about")
    publish_block(block_id=block.id)

    block = set_block_active(block_id=block.id, is_active=False)

    assert block.is_active is False
    assert block.status == "published"


# ------------------------
# Publish
# ------------------------

def test_publish_block_is_idempotent(landing, audit_count):
    block = create_block(landing_id=landing.id, block_type="about")

    block = publish_block(block_id=block.id)
    first_published_at = block.published_at

    assert block.status == "published"
    assert first_published_at is not None

    block = publish_block(block_id=block.id)

    assert block.published_at == first_published_at
    assert audit_count("block.publish") == 1


# ------------------------
# Delete
# ------------------------

def test_delete_compacts_positions(landing):
    about = create_block(landing_id=landing.id, block_type="about")
    services = create_block(landing_id=landing.id, block_type="services")
    team = create_block(landing_id=landing.id, block_type="team")

    delete_block(block_id=services.id)

    assert positions(landing) == [(about.id, 1), (team.id, 2)]


def test_delete_protected_block(landing):
    hero = create_block(landing_id=landing.id, block_type="hero")

    with pytest.raises(BlockNotDeletable) as exc:
        delete_block(block_id=hero.id)

    assert exc.value.details["block_type"] == "hero"
    assert positions(landing) == [(hero.id, 1)]


def test_delete_missing_block(landing):
    with pytest.raises(BlockNotFound):
        delete_block(block_id="missing")


# ------------------------
# Reorder
# ------------------------

def test_reorder_assigns_positions(landing):
    a = create_block(landing_id=landing.id, block_type="hero")
    b = create_block(landing_id=landing.id, block_type="about")
    c = create_block(landing_id=landing.id, block_type="contacts")

    moved = reorder_blocks(landing_id=landing.id, ordered_block_ids=[c.id, a.id, b.id])

    assert moved == 3
    assert positions(landing) == [(c.id, 1), (a.id, 2), (b.id, 3)]


def test_reorder_twice_writes_once(landing, audit_count):
    a = create_block(landing_id=landing.id, block_type="hero")
    b = create_block(landing_id=landing.id, block_type="about")
    c = create_block(landing_id=landing.id, block_type="news")
    target = [b.id, c.id, a.id]

    assert reorder_blocks(landing_id=landing.id, ordered_block_ids=target) == 3
    after_first = positions(landing)
    updated_at = {block.id: block.updated_at for block in list_blocks(landing_id=landing.id)}

    assert reorder_blocks(landing_id=landing.id, ordered_block_ids=target) == 0

    assert positions(landing) == after_first
    assert {block.id: block.updated_at for block in list_blocks(landing_id=landing.id)} == updated_at
    assert audit_count("block.reorder") == 1


def test_reorder_partial_move(landing):
    a = create_block(landing_id=landing.id, block_type="hero")
    b = create_block(landing_id=landing.id, block_type="about")
    c = create_block(landing_id=landing.id, block_type="news")

    moved = reorder_blocks(landing_id=landing.id, ordered_block_ids=[a.id, c.id, b.id])

    assert moved == 2
    assert positions(landing) == [(a.id, 1), (c.id, 2), (b.id, 3)]


def test_reorder_missing_block_leaves_positions(landing):
    a = create_block(landing_id=landing.id, block_type="hero")
    b = create_block(landing_id=landing.id, block_type="about")
    before = positions(landing)

    with pytest.raises(ReorderSetMismatch) as exc:
        reorder_blocks(landing_id=landing.id, ordered_block_ids=[b.id])

    assert exc.value.details["missing"] == [a.id]
    assert positions(landing) == before


def test_reorder_with_foreign_block(landing, other_landing):
    a = create_block(landing_id=landing.id, block_type="hero")
    b = create_block(landing_id=landing.id, block_type="about")
    foreign = create_block(landing_id=other_landing.id, block_type="about")
    before = positions(landing)

    with pytest.raises(ReorderSetMismatch) as exc:
        reorder_blocks(landing_id=landing.id, ordered_block_ids=[b.id, a.id, foreign.id])

    assert exc.value.details["unexpected"] == [foreign.id]
    assert positions(landing) == before
    assert positions(other_landing) == [(foreign.id, 1)]


# ------------------------
# Ordering invariant
# ------------------------

@pytest.mark.parametrize("seed", [1, 7, 42])
def test_positions_stay_dense_under_random_mutations(landing, seed):
    rng = random.Random(seed)
    create_block(landing_id=landing.id, block_type="hero")

    for _ in range(40):
        blocks = list_blocks(landing_id=landing.id)
        action = rng.choice(("create", "create", "duplicate", "delete", "reorder"))

        if action == "create":
            create_block(landing_id=landing.id, block_type=rng.choice(BLOCK_TYPES))
        elif action == "duplicate":
            duplicate_block(block_id=rng.choice(blocks).id)
        elif action == "delete":
            deletable = [b for b in blocks if b.deletable]
            if deletable:
                delete_block(block_id=rng.choice(deletable).id)
        else:
            order = [b.id for b in blocks]
            rng.shuffle(order)
            reorder_blocks(landing_id=landing.id, ordered_block_ids=order)

        assert_dense(landing)


def test_list_blocks_filters(landing):
    hero = create_block(landing_id=landing.id, block_type="hero")
    about = create_block(landing_id=landing.id, block_type="about")
    news = create_block(landing_id=landing.id, block_type="news")
    publish_block(block_id=hero.id)
    set_block_active(block_id=news.id, is_active=False)

    assert [b.id for b in list_blocks(landing_id=landing.id, status="published")] == [hero.id]
    assert [b.id for b in list_blocks(landing_id=landing.id, block_type="about")] == [about.id]
    assert [b.id for b in list_blocks(landing_id=landing.id, is_active=False)] == [news.id]
    assert list_blocks(landing_id=landing.id, block_type="gallery") == []


def test_list_blocks_rejects_unknown_status(landing):
    with pytest.raises(ContentValidationError) as exc:
        list_blocks(landing_id=landing.id, status="archived")

    assert exc.value.details["field"] == "status"
    assert exc.value.details["allowed"] == ["draft", "published"]
