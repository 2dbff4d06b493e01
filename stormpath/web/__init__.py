"""
Access control for web applications.
"""

from .filters import AccessControlMiddleware, AuthenticationMiddleware, setup_access_control
from .handlers import UnauthenticatedHandler, LoginRedirectHandler, JsonUnauthorizedHandler
from .utils import build_login_redirect_url, clean_uri, get_remote_user

__all__ = [
    "AccessControlMiddleware",
    "AuthenticationMiddleware",
    "setup_access_control",
    "UnauthenticatedHandler",
    "LoginRedirectHandler",
    "JsonUnauthorizedHandler",
    "build_login_redirect_url",
    "clean_uri",
    "get_remote_user",
]
