from .auth_service import AuthenticationService

__all__ = ["AuthenticationService"]
