"""Inertia protocol types.

This module defines the page object exchanged with the Inertia.js client. A
:class:`Page` is immutable: every ``with_*`` method returns a new instance, so the
page held by a responder before and after a ``share`` or ``render`` call never
alias each other.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

__all__ = ("Page",)


def _empty_props_factory() -> "Mapping[str, Any]":
    return MappingProxyType({})


def _freeze(props: "Mapping[str, Any]") -> "Mapping[str, Any]":
    return MappingProxyType(dict(props))


@dataclass(frozen=True)
class Page:
    """Inertia page object.

    See: https://inertiajs.com/the-protocol#the-page-object

    Attributes:
        component: JavaScript component name to render.
        props: Page data passed to the component.
        url: The URL the client should reflect.
        version: Asset version identifier. ``None`` disables version negotiation.
    """

    component: str = ""
    props: "Mapping[str, Any]" = field(default_factory=_empty_props_factory)
    url: str = ""
    version: "str | None" = None

    def __post_init__(self) -> None:
        if not isinstance(self.props, MappingProxyType):
            object.__setattr__(self, "props", _freeze(self.props))

    @classmethod
    def create(cls) -> "Page":
        """Return an empty page without a version.

        Returns:
            The initial page.
        """
        return cls()

    def with_component(self, component: str) -> "Page":
        return replace(self, component=component)

    def with_url(self, url: str) -> "Page":
        return replace(self, url=url)

    def with_version(self, version: "str | None") -> "Page":
        return replace(self, version=version)

    def with_props(self, props: "Mapping[str, Any]") -> "Page":
        """Replace the whole props mapping.

        Args:
            props: The new props.

        Returns:
            A new page holding a private copy of ``props``.
        """
        return replace(self, props=_freeze(props))

    def add_prop(self, key: str, value: Any) -> "Page":
        """Merge a single prop into the existing props.

        Args:
            key: The prop name.
            value: The prop value. An existing prop with the same key is overwritten.

        Returns:
            A new page with the prop added.
        """
        return replace(self, props=_freeze({**self.props, key: value}))

    def get_version(self) -> "str | None":
        return self.version

    def to_dict(self) -> "dict[str, Any]":
        """Convert to the Inertia.js page object.

        Returns:
            A dictionary with exactly ``component``, ``props``, ``url`` and ``version``.
        """
        return {
            "component": self.component,
            "props": dict(self.props),
            "url": self.url,
            "version": self.version,
        }
