from .holding import Holding
from .landing import Landing
from .landing_block import LandingBlock
from .landing_asset import LandingAsset
from .audit_log import AuditLog

__all__ = ["Holding", "Landing", "LandingBlock", "LandingAsset", "AuditLog"]
