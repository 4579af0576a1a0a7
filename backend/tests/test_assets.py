"""
Integration tests for the asset registry.
"""

import pytest

from sitebuilder.extensions import db
from sitebuilder.models import LandingAsset
from sitebuilder.application.assets.delete_asset import delete_asset
from sitebuilder.application.assets.list_assets import list_assets
from sitebuilder.application.assets.register_asset import register_asset
from sitebuilder.application.assets.update_asset import update_asset_metadata
from sitebuilder.domain.exceptions import (
    AssetNotFound,
    ContentValidationError,
    UnsupportedMimeType,
)


def register(landing, filename, mime_type, **extra):
    descriptor = {"filename": filename, "byte_size": 2048, "mime_type": mime_type}
    descriptor.update(extra)
    return register_asset(landing_id=landing.id, descriptor=descriptor)


def asset_count():
    return db.session.execute(db.select(db.func.count()).select_from(LandingAsset)).scalar()


def test_register_classifies_by_mime_type(landing):
    image = register(landing, "logo.png", "image/png", usage_context="logo")
    brochure = register(landing, "brochure.pdf", "application/pdf")

    assert image.asset_type == "image"
    assert image.usage_context == "logo"
    assert image.human_size == "2 KB"
    assert image.public_url == f"https://cdn.test/landings/{landing.id}/logo.png"

    assert brochure.asset_type == "document"
    assert brochure.usage_context == "general"


def test_register_rejects_audio(landing):
    with pytest.raises(UnsupportedMimeType) as exc:
        register(landing, "jingle.mp3", "audio/mpeg")

    assert exc.value.details["mime_type"] == "audio/mpeg"
    assert asset_count() == 0


def test_register_keeps_reported_size(landing):
    # Size limits belong to the upload service
    video = register(landing, "tour.mp4", "video/mp4", byte_size=50 * 1024 * 1024)

    assert video.asset_type == "video"
    assert video.size_bytes == 50 * 1024 * 1024


def test_register_sanitizes_filename(landing):
    asset = register(landing, "../../etc/My Logo.png", "image/png")

    assert asset.filename == "etc_My_Logo.png"


@pytest.mark.parametrize("descriptor, field", [
    ({"filename": "a.png", "byte_size": -1, "mime_type": "image/png"}, "byte_size"),
    ({"filename": "a.png", "byte_size": "10", "mime_type": "image/png"}, "byte_size"),
    ({"filename": "", "byte_size": 10, "mime_type": "image/png"}, "filename"),
    ({"filename": "a.png", "byte_size": 10, "mime_type": "image/png", "usage_context": "banner"}, "usage_context"),
    ({"filename": 123, "byte_size": 10, "mime_type": "image/png"}, "filename"),
    ({"filename": "a.png", "byte_size": 10, "mime_type": ["image/png"]}, "mime_type"),
    ({"filename": "a.png", "byte_size": 10, "mime_type": "image/png", "public_url": 7}, "public_url"),
    ({"filename": "a.png", "byte_size": 10, "mime_type": "image/png", "optimized_urls": ["x"]}, "optimized_urls"),
])
def test_register_validates_descriptor(landing, descriptor, field):
    with pytest.raises(ContentValidationError) as exc:
        register_asset(landing_id=landing.id, descriptor=descriptor)

    assert exc.value.details["field"] == field


def test_optimized_urls_only_for_images(landing):
    variants = {"small": "https://cdn.test/s.png", "medium": "https://cdn.test/m.png"}

    image = register(landing, "team.png", "image/png", optimized_urls=variants)
    document = register(landing, "team.pdf", "application/pdf", optimized_urls=variants)

    assert image.optimized_urls == variants
    assert image.is_optimized is True
    assert document.optimized_urls is None


def test_list_assets_filters(landing, other_landing):
    logo = register(landing, "Logo.PNG", "image/png", usage_context="logo")
    register(landing, "hero.jpg", "image/jpeg", usage_context="hero")
    price = register(landing, "price-list.pdf", "application/pdf")
    register(other_landing, "logo.png", "image/png", usage_context="logo")

    assert len(list_assets(landing_id=landing.id)) == 3
    assert [a.id for a in list_assets(landing_id=landing.id, asset_type="document")] == [price.id]
    assert [a.id for a in list_assets(landing_id=landing.id, usage_context="logo")] == [logo.id]
    assert [a.id for a in list_assets(landing_id=landing.id, search="logo")] == [logo.id]


@pytest.mark.parametrize("filters, field", [
    ({"asset_type": "audio"}, "asset_type"),
    ({"usage_context": "footer"}, "usage_context"),
])
def test_list_assets_rejects_unknown_filters(landing, filters, field):
    with pytest.raises(ContentValidationError) as exc:
        list_assets(landing_id=landing.id, **filters)

    assert exc.value.details["field"] == field


def test_update_metadata_merges(landing):
    asset = register(landing, "logo.png", "image/png", metadata={"alt_text": "Logo"})

    asset = update_asset_metadata(asset_id=asset.id, metadata_patch={"caption": "Our mark"})

    assert asset.asset_metadata == {"alt_text": "Logo", "caption": "Our mark"}
    assert asset.public_url.endswith("/logo.png")


def test_update_metadata_rejects_unknown_keys(landing):
    asset = register(landing, "logo.png", "image/png")

    with pytest.raises(ContentValidationError):
        update_asset_metadata(asset_id=asset.id, metadata_patch={"public_url": "https://evil"})

    with pytest.raises(ContentValidationError):
        update_asset_metadata(asset_id=asset.id, metadata_patch={})


def test_delete_asset(landing, audit_count):
    asset = register(landing, "logo.png", "image/png")

    delete_asset(asset_id=asset.id)

    assert asset_count() == 0
    assert audit_count("asset.delete") == 1

    with pytest.raises(AssetNotFound):
        delete_asset(asset_id=asset.id)


def test_search_is_a_literal_substring(landing):
    register(landing, "logo.png", "image/png")
    price = register(landing, "price_list.pdf", "application/pdf")
    register(landing, "discount.pdf", "application/pdf")

    assert [a.id for a in list_assets(landing_id=landing.id, search="_")] == [price.id]
    assert list_assets(landing_id=landing.id, search="%") == []
    assert list_assets(landing_id=landing.id, search="l_go") == []
