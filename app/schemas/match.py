from app.schemas.base import CamelModel
from app.schemas.profile import PartnerBrief


class MatchFound(CamelModel):
    """match:found notification, one per participant"""

    session_id: str
    partner: PartnerBrief
