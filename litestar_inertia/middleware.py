import logging
from typing import TYPE_CHECKING, Any

from litestar.enums import ScopeType
from litestar.middleware import AbstractMiddleware
from litestar.status_codes import HTTP_302_FOUND, HTTP_303_SEE_OTHER

from litestar_inertia.request import InertiaRequest
from litestar_inertia.responder import get_inertia

if TYPE_CHECKING:
    from litestar import Response
    from litestar.types import ASGIApp, Message, Receive, Scope, Send

    from litestar_inertia.responder import Inertia

logger = logging.getLogger("litestar_inertia")

SEE_OTHER_METHODS = frozenset({"PUT", "PATCH", "DELETE"})


def redirect_on_asset_version_mismatch(
    request: "InertiaRequest[Any, Any, Any]",
    inertia: "Inertia",
) -> "Response[Any] | None":
    """Return a redirect response when client and server asset versions differ.

    Only GET requests from an Inertia client that sent a version are checked.

    Returns:
        A 409 response sending the client to the same URL when versions differ, otherwise None.
    """
    if not request.is_inertia or request.method != "GET":
        return None

    client_version = request.inertia_version
    server_version = inertia.get_version()
    if client_version is None or server_version is None or client_version == server_version:
        return None

    logger.warning(
        "Inertia asset version mismatch for %s (client %s, server %s), forcing a full reload",
        request.url.path,
        client_version,
        server_version,
    )
    return inertia.location(str(request.url))


def see_other_send(send: "Send") -> "Send":
    """Wrap ``send`` so ``302 Found`` redirects become ``303 See Other``.

    Browsers replay the method of a 302 redirect issued for PUT, PATCH and DELETE
    requests; 303 makes the client follow up with a GET.

    Args:
        send: The ASGI send callable.

    Returns:
        The wrapped send callable.
    """

    async def wrapped_send(message: "Message") -> None:
        if message["type"] == "http.response.start" and message["status"] == HTTP_302_FOUND:
            message["status"] = HTTP_303_SEE_OTHER
        await send(message)

    return wrapped_send


class InertiaMiddleware(AbstractMiddleware):
    """Middleware for handling Inertia.js protocol requirements.

    This middleware:
    1. Creates the request's :class:`~litestar_inertia.responder.Inertia` responder
    2. Returns 409 Conflict with X-Inertia-Location header when asset versions differ
    3. Turns 302 redirects into 303 for PUT, PATCH and DELETE Inertia requests
    """

    scopes = {ScopeType.HTTP}

    def __init__(self, app: "ASGIApp") -> None:
        super().__init__(app)
        self.app = app

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        request: InertiaRequest[Any, Any, Any] = InertiaRequest(scope=scope)
        inertia = get_inertia(request)
        redirect = redirect_on_asset_version_mismatch(request, inertia)
        if redirect is not None:
            response = redirect.to_asgi_response(app=None, request=request)  # pyright: ignore[reportUnknownMemberType]
            await response(scope, receive, send)
            return
        if request.is_inertia and request.method in SEE_OTHER_METHODS:
            send = see_other_send(send)
        await self.app(scope, receive, send)
