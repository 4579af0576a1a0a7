from flask import current_app
from sitebuilder.extensions import db
from .base import BaseModel
from .holding_mixin import HoldingMixin


class Landing(BaseModel, HoldingMixin):
    __tablename__ = "landings"

    title = db.Column(db.String(255), nullable=False, default="")
    description = db.Column(db.Text, nullable=True)
    domain = db.Column(db.String(63), nullable=True, unique=True, index=True)
    template = db.Column(db.String(100), nullable=True)
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)

    # Stored for the renderer, never interpreted here
    theme_config = db.Column(db.JSON, default=dict)
    seo_meta = db.Column(db.JSON, default=dict)
    analytics_config = db.Column(db.JSON, default=dict)

    __table_args__ = (
        db.UniqueConstraint("holding_id", name="uq_landing_per_holding"),
    )

    holding = db.relationship("Holding", back_populates="landing")

    # Ordered blocks, removed together with the landing
    blocks = db.relationship(
        "LandingBlock",
        back_populates="landing",
        order_by="LandingBlock.sort_position",
        cascade="all, delete-orphan"
    )
    assets = db.relationship(
        "LandingAsset",
        back_populates="landing",
        cascade="all, delete-orphan"
    )

    @property
    def is_published(self) -> bool:
        return self.status == "published"

    @property
    def url(self):
        if not self.domain:
            return None
        base_domain = current_app.config["LANDING_BASE_DOMAIN"]
        return f"https://{self.domain}.{base_domain}"

    @property
    def preview_url(self):
        if not self.url:
            return None
        return f"{self.url}/?preview={self.id}"
