import inspect
from collections.abc import Callable, Coroutine, Generator, Iterable, Mapping
from contextlib import contextmanager
from enum import Enum
from typing import Any, Generic, TypeGuard, TypeVar, cast

from anyio.from_thread import BlockingPortal, start_blocking_portal

__all__ = (
    "LazyProp",
    "PropKind",
    "filter_partial_props",
    "is_deferred_prop",
    "is_lazy_prop",
    "lazy",
    "prop_kind",
    "resolve_props",
    "strip_lazy_props",
)

T = TypeVar("T")


class PropKind(str, Enum):
    """The kinds of values a page prop can hold."""

    LITERAL = "literal"
    """A plain value, sent as is."""
    DEFERRED = "deferred"
    """An inline callable, always evaluated at render time."""
    LAZY = "lazy"
    """A :class:`LazyProp`, only evaluated when a partial reload asks for it."""


@contextmanager
def with_portal(portal: "BlockingPortal | None" = None) -> "Generator[BlockingPortal, None, None]":
    if portal is None:
        with start_blocking_portal() as p:
            yield p
    else:
        yield portal


def _invoke(callback: "Callable[[], T | Coroutine[Any, Any, T]]", portal: "BlockingPortal | None" = None) -> "T":
    """Call a zero argument callable, awaiting it through a portal when it is async.

    Returns:
        The callable's result.
    """
    if not inspect.iscoroutinefunction(callback):
        return cast("T", callback())
    with with_portal(portal) as p:
        return p.call(cast("Callable[[], Coroutine[Any, Any, T]]", callback))


class LazyProp(Generic[T]):
    """A prop that is only computed when a partial reload explicitly requests it.

    Lazy props are left out of first loads and regular navigations. Only a
    partial reload naming the prop's key will evaluate the callback.
    """

    __slots__ = ("_callback",)

    def __init__(self, callback: "Callable[[], T | Coroutine[Any, Any, T]]") -> None:
        if not callable(callback):
            msg = f"LazyProp expects a callable, got {type(callback).__name__!r}."
            raise TypeError(msg)
        self._callback = callback

    def resolve(self, portal: "BlockingPortal | None" = None) -> "T":
        """Evaluate the wrapped callable.

        The result is not cached; each call invokes the callable again.

        Args:
            portal: Optional portal used to run async callables.

        Returns:
            The computed value.
        """
        return _invoke(self._callback, portal)

    def __call__(self) -> "T":
        return self.resolve()

    def __repr__(self) -> str:
        return f"LazyProp({self._callback!r})"


def lazy(callback: "Callable[[], T | Coroutine[Any, Any, T]]") -> "LazyProp[T]":
    """Wrap a callable so it is only evaluated on partial reloads.

    Args:
        callback: A zero argument callable (sync or async).

    Returns:
        The wrapped callable.

    Example::

        inertia.render("Users/Index", {
            "users": lambda: User.all(),
            "companies": lazy(lambda: Company.all()),
        })
    """
    return LazyProp(callback)


def is_lazy_prop(value: "Any") -> "TypeGuard[LazyProp[Any]]":
    """Check if value is wrapped with :func:`lazy`."""
    return isinstance(value, LazyProp)


def is_deferred_prop(value: "Any") -> "TypeGuard[Callable[[], Any]]":
    """Check if value is an inline deferred callable.

    Classes are callable too but are treated as literal values.

    Args:
        value: Any value to check

    Returns:
        bool: True if value is a callable that is not a :class:`LazyProp`
    """
    return callable(value) and not isinstance(value, (type, LazyProp))


def prop_kind(value: "Any") -> "PropKind":
    """Classify a prop value.

    Args:
        value: Any prop value.

    Returns:
        The :class:`PropKind` deciding how the value is filtered and resolved.
    """
    if is_lazy_prop(value):
        return PropKind.LAZY
    if is_deferred_prop(value):
        return PropKind.DEFERRED
    return PropKind.LITERAL


def filter_partial_props(props: "Mapping[str, Any]", only: "Iterable[str]") -> "dict[str, Any]":
    """Keep the props named by a partial reload.

    Keys in ``only`` that are not in ``props`` are ignored.

    Args:
        props: The props passed to ``render``.
        only: The requested keys.

    Returns:
        The intersection of ``props`` with ``only``, values unchanged.
    """
    wanted = set(only)
    return {key: value for key, value in props.items() if key in wanted}


def strip_lazy_props(props: "Mapping[str, Any]") -> "dict[str, Any]":
    """Drop top level lazy props.

    Inline callables are kept; only values wrapped with :func:`lazy` are opt-in.

    Args:
        props: The props passed to ``render``.

    Returns:
        The props without :class:`LazyProp` values.
    """
    return {key: value for key, value in props.items() if prop_kind(value) is not PropKind.LAZY}


def resolve_props(value: "T", portal: "BlockingPortal | None" = None) -> "T":
    """Recursively evaluate every deferred value.

    Mappings, lists and tuples are walked; any :class:`LazyProp` or inline
    callable is replaced by its result, and the result is walked in turn.

    Args:
        value: The value to resolve.
        portal: Optional portal used to run async callables.

    Returns:
        The value with no deferred values left in it.
    """
    kind = prop_kind(value)
    if kind is PropKind.LAZY:
        return resolve_props(cast("LazyProp[T]", value).resolve(portal), portal)
    if kind is PropKind.DEFERRED:
        return resolve_props(_invoke(cast("Callable[[], T]", value), portal), portal)
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return cast(
            "T",
            {k: resolve_props(v, portal) for k, v in cast("Mapping[str, Any]", value).items()},
        )
    if isinstance(value, (list, tuple)):
        resolved = [resolve_props(v, portal) for v in cast("Iterable[Any]", value)]
        if hasattr(value, "_fields"):
            # namedtuples take their fields positionally
            return cast("T", type(value)(*resolved))
        return cast("T", type(value)(resolved))  # pyright: ignore[reportUnknownArgumentType]
    return value
