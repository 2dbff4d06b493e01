"""
Access control middleware.

An access control gate lets a request through when ``is_access_allowed``
says so; otherwise ``on_access_denied`` decides whether the request continues
anyway (by returning None) or gets a different response.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from ..config.settings import WebConfig
from .handlers import LoginRedirectHandler, UnauthenticatedHandler
from .utils import clean_uri, get_context_relative_uri, get_remote_user, redirect_to_login

logger = logging.getLogger(__name__)


class AccessControlMiddleware(BaseHTTPMiddleware, ABC):
    """Base class for middleware that allows or denies requests."""

    def __init__(self, app: ASGIApp, config: Optional[WebConfig] = None):
        super().__init__(app)
        self.config = config or WebConfig()
        self.login_url = clean_uri(self.config.login_url)

    @abstractmethod
    async def is_access_allowed(self, request: Request) -> bool:
        """Return True if the request may proceed normally."""
        pass

    @abstractmethod
    async def on_access_denied(self, request: Request) -> Optional[Response]:
        """
        Process a request that was denied access.

        Returns:
            None if the request should continue to be processed, or the
            response to send instead
        """
        pass

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if await self.is_access_allowed(request):
            return await call_next(request)

        response = await self.on_access_denied(request)
        if response is None:
            return await call_next(request)
        return response

    def is_login_request(self, request: Request) -> bool:
        return get_context_relative_uri(request) == self.login_url

    def redirect_to_login(self, request: Request, status: str) -> Response:
        return redirect_to_login(request, self.config.login_url, status)


class AuthenticationMiddleware(AccessControlMiddleware):
    """
    Only lets authenticated requests through.

    The login URL itself is always allowed so unauthenticated users can still
    log in. Everything else goes to the unauthenticated handler, which
    redirects to the login URL by default.
    """

    def __init__(
        self,
        app: ASGIApp,
        config: Optional[WebConfig] = None,
        unauthenticated_handler: Optional[UnauthenticatedHandler] = None,
    ):
        super().__init__(app, config)
        self.unauthenticated_handler = unauthenticated_handler or LoginRedirectHandler(self.config)

    async def is_access_allowed(self, request: Request) -> bool:
        return get_remote_user(request) is not None or self.is_login_request(request)

    async def on_access_denied(self, request: Request) -> Optional[Response]:
        logger.debug(f"Denied unauthenticated request to {request.url.path}")
        return await self.unauthenticated_handler.on_authentication_required(request)


def setup_access_control(
    app: FastAPI,
    config: Optional[WebConfig] = None,
    unauthenticated_handler: Optional[UnauthenticatedHandler] = None,
) -> None:
    """
    Install the authentication gate on a FastAPI app.

    Middleware added later wraps middleware added earlier, so call this
    before adding the middleware that establishes the user.

    Args:
        app: FastAPI application
        config: Login URL and status settings
        unauthenticated_handler: Handler for denied requests (login redirect by default)
    """
    config = config or WebConfig()
    app.add_middleware(
        AuthenticationMiddleware,
        config=config,
        unauthenticated_handler=unauthenticated_handler,
    )
    logger.info(f"Access control enabled, login URL {config.login_url}")
