from sitebuilder.extensions import db
from sitebuilder.utils.media import human_size
from .base import BaseModel

class LandingAsset(BaseModel):
    __tablename__ = "landing_assets"

    landing_id = db.Column(db.String(36), db.ForeignKey("landings.id"), nullable=False, index=True)
    filename = db.Column(db.String(255), nullable=False, index=True)
    mime_type = db.Column(db.String(127), nullable=False)
    asset_type = db.Column(db.String(20), nullable=False, index=True)  # image, video, document
    usage_context = db.Column(db.String(20), nullable=False, default="general", index=True)
    size_bytes = db.Column(db.BigInteger, nullable=False, default=0)
    public_url = db.Column(db.String(1024), nullable=False)
    optimized_urls = db.Column(db.JSON, nullable=True)  # images only
    asset_metadata = db.Column("metadata", db.JSON, nullable=False, default=dict)

    landing = db.relationship("Landing", back_populates="assets")

    @property
    def human_size(self) -> str:
        return human_size(self.size_bytes or 0)

    @property
    def is_optimized(self) -> bool:
        return bool(self.optimized_urls)
