"""Inertia configuration."""

import hashlib
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from litestar_inertia.root_view import RootViewRenderer

__all__ = ("InertiaConfig",)


def _empty_dict_factory() -> "dict[str, Any]":
    return {}


@dataclass
class InertiaConfig:
    """Configuration for InertiaJS support.

    Attributes:
        root_template: Name of the root template to use.
        root_view: Renderer producing the first-load HTML document.
        version: Asset version, or a callable returning it.
        manifest_path: Asset manifest hashed into the version when ``version`` is unset.
        extra_static_page_props: Static props added to every page response.
        element_id: Id of the root element used by the default root view.
        dependency_key: Name under which handlers receive the responder.
    """

    root_template: str = "index.html"
    """Name of the root template to use.

    Only used when ``root_view`` is not set and the application has a template engine.
    """
    root_view: "RootViewRenderer | None" = None
    """A callable turning a page into the HTML document served on first load.

    When unset, ``root_template`` is rendered with the application's template engine, or a minimal
    built-in document is used when no template engine is configured.
    """
    version: "str | Callable[[], str | None] | None" = None
    """The current asset version.

    Inertia clients send the version they were built with in ``X-Inertia-Version``. A mismatch
    forces a full page reload.
    """
    manifest_path: "Path | str | None" = None
    """Path to an asset manifest (e.g. Vite's ``manifest.json``).

    When ``version`` is not set, the version is a hash of this file's content.
    """
    extra_static_page_props: "dict[str, Any]" = field(default_factory=_empty_dict_factory)
    """A dictionary of values to automatically share with every page response."""
    element_id: str = "app"
    """The id of the element the client mounts on, used by the built-in root view."""
    dependency_key: str = "inertia"
    """The dependency name used to inject the per-request responder into route handlers."""

    @cached_property
    def manifest_version(self) -> "str | None":
        """Return the hash of the manifest content.

        Returns:
            A SHA-256 hex digest, or None when no manifest is configured or it does not exist.
        """
        if self.manifest_path is None:
            return None
        path = Path(self.manifest_path)
        if not path.exists():
            return None
        return hashlib.sha256(path.read_bytes()).hexdigest()

    def get_version(self) -> "str | None":
        """Return the asset version for the current request.

        Returns:
            The configured version, falling back to the manifest hash.
        """
        if callable(self.version):
            return self.version()
        if self.version is not None:
            return self.version
        return self.manifest_version
