from sitebuilder.extensions import db
from .base import BaseModel

class Holding(BaseModel):
    """
    Tenant organization. Owned by the platform; the landing engine only
    reads it to resolve the tenant and to seed a landing's domain.
    """
    __tablename__ = "holdings"

    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    is_active = db.Column(db.Boolean, default=True)

    landing = db.relationship("Landing", back_populates="holding", uselist=False)
