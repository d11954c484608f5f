from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from anyio.from_thread import start_blocking_portal
from litestar.plugins import InitPluginProtocol

from litestar_inertia.config import InertiaConfig

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from anyio.from_thread import BlockingPortal
    from litestar import Litestar
    from litestar.config.app import AppConfig


class InertiaPlugin(InitPluginProtocol):
    """Inertia plugin.

    This plugin configures Litestar for Inertia.js support:

    - :class:`~litestar_inertia.request.InertiaRequest` as the default request class
    - :class:`~litestar_inertia.middleware.InertiaMiddleware`, creating one responder per request
    - an ``inertia`` dependency giving handlers the request's
      :class:`~litestar_inertia.responder.Inertia` responder

    BlockingPortal Behavior:
        The plugin creates a BlockingPortal during its lifespan for executing
        async deferred props from the synchronous ``render`` call. Outside the
        lifespan, each async prop starts a short-lived portal instead.

    Example::

        from litestar_inertia import InertiaConfig, InertiaPlugin

        app = Litestar(
            route_handlers=[index],
            plugins=[InertiaPlugin(InertiaConfig(version="1"))],
        )
    """

    __slots__ = ("_portal", "config")

    def __init__(self, config: "InertiaConfig | None" = None) -> "None":
        """Initialize the plugin with Inertia configuration."""
        self.config = config or InertiaConfig()
        self._portal: "BlockingPortal | None" = None  # pyright: ignore[reportInvalidTypeForm]

    @asynccontextmanager
    async def lifespan(self, app: "Litestar") -> "AsyncGenerator[None, None]":
        """Lifespan providing the portal for async deferred props.

        Args:
            app: The :class:`Litestar <litestar.app.Litestar>` instance.

        Yields:
            An asynchronous context manager.
        """
        with start_blocking_portal() as portal:
            self._portal = portal
            try:
                yield
            finally:
                self._portal = None

    @property
    def portal(self) -> "BlockingPortal":
        """Return the blocking portal used for deferred prop resolution.

        Returns:
            The BlockingPortal instance.

        Raises:
            RuntimeError: If accessed before app lifespan is active.
        """
        if self._portal is None:
            msg = "BlockingPortal not available. Ensure app lifespan is active."
            raise RuntimeError(msg)
        return self._portal

    @property
    def portal_or_none(self) -> "BlockingPortal | None":
        return self._portal

    def on_app_init(self, app_config: "AppConfig") -> "AppConfig":
        """Configure application for use with Inertia.

        Args:
            app_config: The :class:`AppConfig <litestar.config.app.AppConfig>` instance.

        Raises:
            ImproperlyConfiguredException: If the Inertia plugin is not properly configured.

        Returns:
            The :class:`AppConfig <litestar.config.app.AppConfig>` instance.
        """
        from litestar.di import Provide
        from litestar.exceptions import ImproperlyConfiguredException

        from litestar_inertia.middleware import InertiaMiddleware
        from litestar_inertia.request import InertiaRequest
        from litestar_inertia.responder import Inertia, provide_inertia

        if self.config.root_view is not None and not callable(self.config.root_view):
            msg = "InertiaConfig.root_view must be a callable accepting a page."
            raise ImproperlyConfiguredException(msg)
        if self.config.dependency_key in app_config.dependencies:
            msg = f"A dependency named {self.config.dependency_key!r} is already registered."
            raise ImproperlyConfiguredException(msg)

        app_config.request_class = InertiaRequest
        app_config.middleware.append(InertiaMiddleware)
        app_config.dependencies[self.config.dependency_key] = Provide(provide_inertia, sync_to_thread=False)
        app_config.signature_types.extend([InertiaRequest, Inertia])
        app_config.lifespan.append(self.lifespan)  # pyright: ignore[reportUnknownMemberType]
        return app_config
