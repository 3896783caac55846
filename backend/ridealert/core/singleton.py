from ridealert.services.auth_service import AuthService
from ridealert.services.transit_service import TransitService


transit_service = TransitService()
auth_service = AuthService()

__all__ = ["transit_service", "auth_service"]
