"""
URL helpers for access control.
"""

import re
from typing import Optional
from urllib.parse import quote_plus, urlsplit

from starlette.requests import Request
from starlette.responses import RedirectResponse

_REPEATED_SLASHES = re.compile(r"/{2,}")
_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*://")


def clean_uri(uri: Optional[str]) -> str:
    """
    Normalize a URI down to a comparable path.

    Drops scheme, host, query and fragment, collapses repeated slashes,
    forces a leading slash and removes a trailing one (except for ``/``).
    """
    if not uri:
        return "/"

    if _SCHEME.match(uri):
        path = urlsplit(uri).path
    else:
        path = re.split(r"[?#]", uri, maxsplit=1)[0]
    path = _REPEATED_SLASHES.sub("/", path)
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1 and path.endswith("/"):
        path = path.rstrip("/") or "/"
    return path


def get_context_relative_uri(request: Request) -> str:
    """Request path with the application root path removed."""
    path = request.scope.get("path", "/")
    root_path = request.scope.get("root_path", "")
    if root_path and path.startswith(root_path):
        path = path[len(root_path):]
    return clean_uri(path)


def get_remote_user(request: Request) -> Optional[str]:
    """
    Identity of the authenticated principal, if any.

    Looks at an authenticated ``scope["user"]`` (as set by Starlette's
    AuthenticationMiddleware) and then at ``request.state.remote_user``.
    """
    user = request.scope.get("user")
    if user is not None and getattr(user, "is_authenticated", False):
        return getattr(user, "display_name", None) or getattr(user, "identity", None) or str(user)

    remote_user = getattr(request.state, "remote_user", None)
    return remote_user or None


def build_login_redirect_url(login_url: str, status: str, method: str, current_url: str) -> str:
    """
    Build the login redirect target for a denied request.

    ``status`` is added unless the login URL's query already mentions it. Only
    GET requests get a ``next`` parameter pointing back at the original URL,
    since replaying other methods after login isn't safe.

    Args:
        login_url: Configured login URL, possibly with a query string
        status: Value for the ``status`` parameter
        method: HTTP method of the denied request
        current_url: Full URL of the denied request, query string included
    """
    if status is None:
        raise ValueError("status argument cannot be None.")

    redirect_url = login_url
    query = None

    i = redirect_url.find("?")
    if i != -1:
        query = redirect_url[i + 1:]

    if query is None:
        redirect_url += f"?status={status}"
    elif "status" not in query:
        if query != "":
            redirect_url += "&"
        redirect_url += f"status={status}"

    if method.upper() == "GET":
        redirect_url += f"&next={quote_plus(current_url, safe='*')}"

    return redirect_url


def issue_redirect(request: Request, url: str, status_code: int = 302) -> RedirectResponse:
    """Redirect response; app-relative URLs are prefixed with the root path."""
    if url.startswith("/"):
        root_path = request.scope.get("root_path", "")
        if root_path and not url.startswith(root_path + "/"):
            url = root_path.rstrip("/") + url
    return RedirectResponse(url=url, status_code=status_code)


def redirect_to_login(request: Request, login_url: str, status: str) -> RedirectResponse:
    """Redirect a denied request to the login URL."""
    redirect_url = build_login_redirect_url(
        login_url, status, request.method, str(request.url)
    )
    return issue_redirect(request, redirect_url)
