from sitebuilder.extensions import db
from sitebuilder.domain.blocks import is_deletable
from .base import BaseModel

BLOCK_STATUSES = ("draft", "published")

TITLE_MAX_LENGTH = 255

class LandingBlock(BaseModel):
    __tablename__ = "landing_blocks"

    landing_id = db.Column(db.String(36), db.ForeignKey("landings.id"), nullable=False, index=True)
    block_type = db.Column(db.String(50), nullable=False, index=True)
    title = db.Column(db.String(TITLE_MAX_LENGTH), nullable=False, default="")
    content = db.Column(db.JSON, nullable=False, default=dict)
    settings = db.Column(db.JSON, nullable=False, default=dict)
    sort_position = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)

    landing = db.relationship("Landing", back_populates="blocks")

    __table_args__ = (
        db.UniqueConstraint("landing_id", "sort_position", name="uq_landing_block_position"),
        db.Index("idx_block_landing_position", "landing_id", "sort_position"),
    )

    @property
    def deletable(self) -> bool:
        return is_deletable(self.block_type)
