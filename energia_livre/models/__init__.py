# Import all models so Base.metadata knows every table
from energia_livre.models.user import User
from energia_livre.models.comercializadora import Comercializadora
from energia_livre.models.purchase_intent import PurchaseIntent
from energia_livre.models.proposal import Proposal
from energia_livre.models.user_partner_access import UserPartnerAccess

__all__ = ["User", "Comercializadora", "PurchaseIntent", "Proposal", "UserPartnerAccess"]
