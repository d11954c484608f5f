"""The per-request Inertia responder.

:class:`Inertia` decides, for one request, which shape of response to produce:
a JSON page object for client-side navigations, or the root HTML document for
first loads. One instance exists per request; shared props accumulate on its
page until ``render`` is called.
"""

import logging
from collections.abc import Callable, Coroutine, Mapping
from functools import partial
from typing import TYPE_CHECKING, Any, TypeVar, cast

from litestar import MediaType, Request, Response
from litestar.response import Redirect
from litestar.status_codes import HTTP_200_OK, HTTP_302_FOUND, HTTP_409_CONFLICT

from litestar_inertia._utils import page_object_headers, redirect_location_headers
from litestar_inertia.config import InertiaConfig
from litestar_inertia.helpers import LazyProp, filter_partial_props, lazy, resolve_props, strip_lazy_props
from litestar_inertia.plugin import InertiaPlugin
from litestar_inertia.request import InertiaDetails, InertiaRequest
from litestar_inertia.root_view import TemplateRootView, html_root_view
from litestar_inertia.types import Page

if TYPE_CHECKING:
    from anyio.from_thread import BlockingPortal
    from litestar.connection import ASGIConnection

    from litestar_inertia.root_view import RootViewRenderer

__all__ = (
    "HTML_ENCODING",
    "INERTIA_SCOPE_KEY",
    "Inertia",
    "create_inertia",
    "get_inertia",
    "provide_inertia",
    "share",
)

T = TypeVar("T")

logger = logging.getLogger("litestar_inertia")

# Litestar appends `; charset=<encoding>` to text media types.
HTML_ENCODING = "UTF-8"
INERTIA_SCOPE_KEY = "_litestar_inertia"


def _get_location_header(response: "Response[Any]") -> str:
    for name, value in response.headers.items():
        if name.lower() == "location":
            return str(value)
    if isinstance(response, Redirect):
        return response.url
    return ""


class Inertia:
    """Build Inertia responses for a single request.

    Example::

        @get("/users")
        def users(inertia: Inertia) -> Response:
            return inertia.render("Users/Index", {
                "users": lambda: list_users(),
                "companies": Inertia.lazy(lambda: list_companies()),
            })
    """

    __slots__ = ("_page", "details", "portal", "request", "response_class", "root_view")

    def __init__(
        self,
        request: "Request[Any, Any, Any]",
        root_view: "RootViewRenderer | None" = None,
        *,
        response_class: "type[Response[Any]]" = Response,
        portal: "BlockingPortal | None" = None,
    ) -> None:
        """Initialize the responder.

        Args:
            request: The request being handled.
            root_view: Renders the HTML document for first loads. Defaults to :func:`html_root_view`.
            response_class: The response type created for every answer.
            portal: Portal used to run async deferred props.
        """
        self.request = request
        self.details = request.inertia if isinstance(request, InertiaRequest) else InertiaDetails(request)
        self.root_view: "RootViewRenderer" = root_view or html_root_view
        self.response_class = response_class
        self.portal = portal
        self._page = Page.create()

    @property
    def page(self) -> "Page":
        """The page accumulated so far."""
        return self._page

    @staticmethod
    def lazy(callback: "Callable[[], T | Coroutine[Any, Any, T]]") -> "LazyProp[T]":
        """Wrap a callable so it is only evaluated on partial reloads naming its key."""
        return lazy(callback)

    def render(
        self,
        component: str,
        props: "Mapping[str, Any] | None" = None,
        url: "str | None" = None,
    ) -> "Response[Any]":
        """Render a component.

        Shared props are merged under ``props``; on a key collision ``props`` wins.

        Args:
            component: The client-side component to mount.
            props: The component's props. Values may be literals, callables or lazy props, nested in
                mappings and sequences.
            url: The URL the client should display. Defaults to the request URL.

        Raises:
            ValueError: If ``component`` is empty.

        Returns:
            A JSON page object for Inertia requests, the root HTML document otherwise.
        """
        if not component:
            msg = "An Inertia component name is required."
            raise ValueError(msg)

        self._page = self._page.with_component(component).with_url(url if url is not None else str(self.request.url))

        page_props: "dict[str, Any]" = {**self._page.props, **(props or {})}
        if self.details.has_partial_data:
            if self.details.is_partial_render(component):
                logger.debug("Partial reload of %s for %s", component, ", ".join(self.details.partial_keys))
                page_props = filter_partial_props(page_props, self.details.partial_keys)
        else:
            page_props = strip_lazy_props(page_props)

        self._page = self._page.with_props(resolve_props(page_props, self.portal))

        if self.details:
            logger.debug("Rendering %s as a page object", component)
            return self._create_response(
                self._page.to_dict(),
                MediaType.JSON,
                headers=page_object_headers(),
            )

        logger.debug("Rendering %s in the root view", component)
        return self._create_response(self.root_view(self._page), MediaType.HTML)

    def version(self, version: "str | None") -> None:
        """Set the asset version sent with the page.

        Args:
            version: An opaque token, usually a hash of the built assets. None disables version negotiation.
        """
        self._page = self._page.with_version(version)

    def get_version(self) -> "str | None":
        """Return the asset version, or None when unset."""
        return self._page.get_version()

    def share(self, key: str, value: "Any" = None) -> None:
        """Share a prop with every component rendered by this responder.

        Args:
            key: The prop name.
            value: The prop value.
        """
        self._page = self._page.add_prop(key, value)

    def share_many(self, props: "Mapping[str, Any]") -> None:
        """Share every item of ``props``, see :meth:`share`."""
        for key, value in props.items():
            self.share(key, value)

    def location(self, destination: "str | Response[Any]", status: int = HTTP_302_FOUND) -> "Response[Any]":
        """Redirect in a way the client-side router understands.

        For Inertia requests this answers ``409 Conflict`` with ``X-Inertia-Location``, making the
        client leave its XHR flow and perform a full browser visit. ``status`` is ignored then.

        Args:
            destination: The target URL, or an existing response whose ``Location`` header is reused.
            status: The redirect status used for regular requests.

        Returns:
            The redirect response.
        """
        if self.details:
            location = _get_location_header(destination) if isinstance(destination, Response) else destination
            return self._create_response(
                "",
                MediaType.HTML,
                status_code=HTTP_409_CONFLICT,
                headers=redirect_location_headers(location),
            )

        if isinstance(destination, Response):
            return destination

        return self._create_response("", MediaType.HTML, status_code=status, headers={"Location": destination})

    def _create_response(
        self,
        content: "Any",
        media_type: "MediaType | str",
        *,
        status_code: int = HTTP_200_OK,
        headers: "dict[str, Any] | None" = None,
    ) -> "Response[Any]":
        return self.response_class(
            content=content,
            media_type=media_type,
            status_code=status_code,
            headers=headers,
            encoding=HTML_ENCODING,
        )


def _get_plugin(connection: "ASGIConnection[Any, Any, Any, Any]") -> "InertiaPlugin | None":
    try:
        return connection.app.plugins.get(InertiaPlugin)
    except KeyError:
        return None


def _get_root_view(connection: "ASGIConnection[Any, Any, Any, Any]", config: "InertiaConfig") -> "RootViewRenderer":
    if config.root_view is not None:
        return config.root_view
    template_engine = connection.app.template_engine
    if template_engine is not None:
        return TemplateRootView(template_engine, config.root_template)
    return partial(html_root_view, element_id=config.element_id)


def create_inertia(connection: "ASGIConnection[Any, Any, Any, Any]") -> "Inertia":
    """Create a responder configured from the application's :class:`InertiaPlugin`.

    Without the plugin, the default :class:`InertiaConfig` is used.

    Args:
        connection: The current connection.

    Returns:
        A responder with the configured version and static props applied.
    """
    plugin = _get_plugin(connection)
    config = plugin.config if plugin is not None else InertiaConfig()
    request = connection if isinstance(connection, Request) else InertiaRequest(connection.scope)
    inertia = Inertia(
        cast("Request[Any, Any, Any]", request),
        _get_root_view(connection, config),
        portal=plugin.portal_or_none if plugin is not None else None,
    )
    inertia.version(config.get_version())
    inertia.share_many(config.extra_static_page_props)
    return inertia


def get_inertia(connection: "ASGIConnection[Any, Any, Any, Any]") -> "Inertia":
    """Return the responder of the current request, creating it on first use.

    Args:
        connection: The current connection.

    Returns:
        The request's responder.
    """
    inertia = cast("Inertia | None", connection.scope.get(INERTIA_SCOPE_KEY))
    if inertia is None:
        inertia = create_inertia(connection)
        connection.scope[INERTIA_SCOPE_KEY] = inertia  # type: ignore[literal-required]
    return inertia


def provide_inertia(request: "Request[Any, Any, Any]") -> "Inertia":
    return get_inertia(request)


def share(connection: "ASGIConnection[Any, Any, Any, Any]", key: str, value: "Any") -> None:
    """Share a prop with every component rendered during this request.

    Args:
        connection: The ASGI connection.
        key: The prop name.
        value: The prop value.
    """
    get_inertia(connection).share(key, value)
