"""Litestar-Inertia: the server side of the Inertia.js protocol for Litestar.

Basic usage:
    from litestar import Litestar, get
    from litestar_inertia import Inertia, InertiaConfig, InertiaPlugin, lazy

    @get("/")
    def index(inertia: Inertia) -> Response:
        return inertia.render("Home", {"user": lambda: load_user(), "stats": lazy(load_stats)})

    app = Litestar(
        route_handlers=[index],
        plugins=[InertiaPlugin(config=InertiaConfig(manifest_path="public/manifest.json"))],
    )
"""

from litestar_inertia.__metadata__ import __version__
from litestar_inertia.config import InertiaConfig
from litestar_inertia.helpers import LazyProp, PropKind, is_deferred_prop, is_lazy_prop, lazy, prop_kind, resolve_props
from litestar_inertia.middleware import InertiaMiddleware
from litestar_inertia.plugin import InertiaPlugin
from litestar_inertia.request import InertiaDetails, InertiaHeaders, InertiaRequest
from litestar_inertia.responder import Inertia, create_inertia, get_inertia, share
from litestar_inertia.root_view import RootViewRenderer, TemplateRootView, html_root_view
from litestar_inertia.types import Page

__all__ = (
    "Inertia",
    "InertiaConfig",
    "InertiaDetails",
    "InertiaHeaders",
    "InertiaMiddleware",
    "InertiaPlugin",
    "InertiaRequest",
    "LazyProp",
    "Page",
    "PropKind",
    "RootViewRenderer",
    "TemplateRootView",
    "create_inertia",
    "get_inertia",
    "html_root_view",
    "is_deferred_prop",
    "is_lazy_prop",
    "lazy",
    "prop_kind",
    "resolve_props",
    "share",
    "__version__",
)
