"""
Handlers for requests that need authentication.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..config.settings import WebConfig
from .models import ErrorDetail, ErrorResponse
from .utils import redirect_to_login

logger = logging.getLogger(__name__)


class UnauthenticatedHandler(ABC):
    """Decides what happens to a request that requires authentication."""

    @abstractmethod
    async def on_authentication_required(self, request: Request) -> Optional[Response]:
        """
        Handle an unauthenticated request.

        Returns:
            Response to send instead of the requested resource, or None to let
            the request continue
        """
        pass


class LoginRedirectHandler(UnauthenticatedHandler):
    """Redirects to the login URL with a status and, for GET requests, a next URL."""

    def __init__(self, config: Optional[WebConfig] = None):
        self.config = config or WebConfig()

    async def on_authentication_required(self, request: Request) -> Optional[Response]:
        logger.debug(f"Redirecting unauthenticated {request.method} {request.url.path} to login")
        return redirect_to_login(
            request, self.config.login_url, self.config.unauthenticated_status
        )


class JsonUnauthorizedHandler(UnauthenticatedHandler):
    """Answers with a 401 JSON error body, for API clients that can't follow a login redirect."""

    def __init__(self, message: str = "Not authenticated"):
        self.message = message

    async def on_authentication_required(self, request: Request) -> Optional[Response]:
        body = ErrorResponse(error=ErrorDetail(code="UNAUTHORIZED", message=self.message))
        return JSONResponse(status_code=401, content=body.model_dump(exclude_none=True))
