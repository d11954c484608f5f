from enum import Enum

__all__ = ("InertiaHeaders", "page_object_headers", "redirect_location_headers")


class InertiaHeaders(str, Enum):
    """Headers exchanged with the Inertia client.

    See: https://inertiajs.com/the-protocol
    """

    ENABLED = "X-Inertia"
    VERSION = "X-Inertia-Version"
    LOCATION = "X-Inertia-Location"

    PARTIAL_DATA = "X-Inertia-Partial-Data"
    PARTIAL_COMPONENT = "X-Inertia-Partial-Component"


def page_object_headers() -> "dict[str, str]":
    """Headers sent with a JSON page object.

    ``Vary: Accept`` keeps caches from serving the JSON answer to a first load of the same URL.
    """
    return {"Vary": "Accept", InertiaHeaders.ENABLED.value: "true"}


def redirect_location_headers(location: str) -> "dict[str, str]":
    """Headers telling the client router to leave the XHR flow and visit ``location``.

    Args:
        location: The URL the browser should visit.

    Returns:
        The ``X-Inertia-Location`` header.
    """
    return {InertiaHeaders.LOCATION.value: location}
