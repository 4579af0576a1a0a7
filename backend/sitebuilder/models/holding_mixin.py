from sitebuilder.extensions import db

class HoldingMixin:
    holding_id = db.Column(
        db.String(36),
        db.ForeignKey("holdings.id"),
        nullable=False,
        index=True
    )
