from litestar.testing import RequestFactory

from litestar_inertia import InertiaHeaders
from litestar_inertia.request import InertiaDetails, InertiaRequest


def test_is_inertia_on_header_presence(request_factory: RequestFactory) -> None:
    request = request_factory.get("/", headers={"X-Inertia": "true"})

    assert InertiaDetails(request)
    assert not InertiaDetails(request_factory.get("/"))


def test_headers_are_read_case_insensitively(request_factory: RequestFactory) -> None:
    request = request_factory.get(
        "/",
        headers={"x-inertia-partial-data": "a,b", "X-INERTIA-PARTIAL-COMPONENT": "Home"},
    )
    details = InertiaDetails(request)

    assert details.partial_data == "a,b"
    assert details.partial_component == "Home"


def test_partial_keys(request_factory: RequestFactory) -> None:
    request = request_factory.get("/", headers={InertiaHeaders.PARTIAL_DATA.value: "a, b,,c"})
    details = InertiaDetails(request)

    assert details.has_partial_data
    assert details.partial_keys == ["a", "b", "c"]


def test_empty_partial_data_is_present_without_keys(request_factory: RequestFactory) -> None:
    request = request_factory.get("/", headers={InertiaHeaders.PARTIAL_DATA.value: ""})
    details = InertiaDetails(request)

    assert details.has_partial_data
    assert details.partial_keys == []
    assert not details.is_partial_render("Home")


def test_is_partial_render_requires_matching_component(request_factory: RequestFactory) -> None:
    request = request_factory.get(
        "/",
        headers={InertiaHeaders.PARTIAL_DATA.value: "a", InertiaHeaders.PARTIAL_COMPONENT.value: "Users"},
    )
    details = InertiaDetails(request)

    assert details.is_partial_render("Users")
    assert not details.is_partial_render("Home")


def test_uri_encoded_header(request_factory: RequestFactory) -> None:
    request = request_factory.get(
        "/",
        headers={"X-Inertia-Partial-Component": "Users%2FIndex", "X-Inertia-Partial-Component-Uri-Autoencoded": "true"},
    )

    assert InertiaDetails(request).partial_component == "Users/Index"


def test_inertia_request(request_factory: RequestFactory) -> None:
    scope = request_factory.get(
        "/",
        headers={
            InertiaHeaders.ENABLED.value: "true",
            InertiaHeaders.VERSION.value: "v1",
            InertiaHeaders.PARTIAL_DATA.value: "a,b",
        },
    ).scope
    request = InertiaRequest(scope)

    assert request.is_inertia
    assert request.inertia_version == "v1"
    assert request.partial_keys == {"a", "b"}
