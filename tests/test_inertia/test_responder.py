"""Unit tests for the Inertia responder, without the HTTP stack."""

from typing import Any, NamedTuple

import pytest
from litestar import MediaType, Response
from litestar.serialization import encode_json
from litestar.testing import RequestFactory

from litestar_inertia import Inertia, InertiaHeaders, Page
from litestar_inertia.helpers import lazy
from litestar_inertia.responder import HTML_ENCODING, create_inertia, get_inertia, share

INERTIA = {InertiaHeaders.ENABLED.value: "true"}


class Point(NamedTuple):
    x: int
    y: Any


def partial_headers(keys: str, component: str) -> "dict[str, str]":
    return {
        **INERTIA,
        InertiaHeaders.PARTIAL_DATA.value: keys,
        InertiaHeaders.PARTIAL_COMPONENT.value: component,
    }


def make_inertia(request_factory: RequestFactory, headers: "dict[str, str] | None" = None) -> Inertia:
    return Inertia(request_factory.get("/users", headers=headers), root_view=lambda page: f"<html>{page.component}</html>")


def test_render_html_on_first_load(request_factory: RequestFactory) -> None:
    inertia = make_inertia(request_factory)

    response = inertia.render("Home", {"a": 1})

    assert response.status_code == 200
    assert response.media_type == MediaType.HTML
    assert response.encoding == HTML_ENCODING
    assert response.content == "<html>Home</html>"


def test_render_json_for_inertia_requests(request_factory: RequestFactory) -> None:
    request = request_factory.get("/users", headers=INERTIA)
    inertia = Inertia(request)

    response = inertia.render("Home", {"a": 1})

    assert response.status_code == 200
    assert response.media_type == MediaType.JSON
    assert response.headers["X-Inertia"] == "true"
    assert response.headers["Vary"] == "Accept"
    assert (
        encode_json(response.content)
        == f'{{"component":"Home","props":{{"a":1}},"url":"{request.url}","version":null}}'.encode()
    )


def test_render_passes_page_to_root_view(request_factory: RequestFactory) -> None:
    pages: list[Page] = []

    def root_view(page: Page) -> str:
        pages.append(page)
        return "<html></html>"

    inertia = Inertia(request_factory.get("/"), root_view=root_view)
    inertia.version("v1")
    inertia.render("Dashboard", {"count": lambda: 3}, url="/dashboard")

    assert pages == [Page(component="Dashboard", props={"count": 3}, url="/dashboard", version="v1")]


def test_render_requires_component(request_factory: RequestFactory) -> None:
    with pytest.raises(ValueError):
        make_inertia(request_factory).render("", {})


def test_render_url_defaults_to_request_url(request_factory: RequestFactory) -> None:
    request = request_factory.get("/users", headers=INERTIA, query_params={"page": "2"})
    inertia = Inertia(request)

    response = inertia.render("Users", {})

    assert response.content["url"] == str(request.url)


def test_render_explicit_url(request_factory: RequestFactory) -> None:
    inertia = make_inertia(request_factory, INERTIA)

    assert inertia.render("Users", {}, url="/custom").content["url"] == "/custom"


def test_partial_reload_filters_props(request_factory: RequestFactory) -> None:
    headers = partial_headers("b,missing", "Users")
    inertia = make_inertia(request_factory, headers)

    response = inertia.render("Users", {"a": 1, "b": 2, "c": lazy(lambda: 3)})

    assert response.content["props"] == {"b": 2}


def test_partial_reload_includes_requested_lazy_props(request_factory: RequestFactory) -> None:
    headers = partial_headers("a,c", "Users")
    inertia = make_inertia(request_factory, headers)

    response = inertia.render("Users", {"a": lambda: 1, "b": 2, "c": lazy(lambda: 3)})

    assert response.content["props"] == {"a": 1, "c": 3}


def test_partial_reload_for_other_component_is_unfiltered(request_factory: RequestFactory) -> None:
    headers = partial_headers("a", "Other")
    inertia = make_inertia(request_factory, headers)

    response = inertia.render("Users", {"a": 1, "b": 2, "c": lazy(lambda: 3)})

    assert response.content["props"] == {"a": 1, "b": 2, "c": 3}


def test_empty_partial_data_is_unfiltered(request_factory: RequestFactory) -> None:
    headers = partial_headers("", "Users")
    inertia = make_inertia(request_factory, headers)

    response = inertia.render("Users", {"a": 1, "c": lazy(lambda: 3)})

    assert response.content["props"] == {"a": 1, "c": 3}


def test_lazy_props_are_stripped_without_partial_data(request_factory: RequestFactory) -> None:
    calls: list[str] = []

    def expensive() -> str:
        calls.append("called")
        return "value"

    inertia = make_inertia(request_factory, INERTIA)

    response = inertia.render("Users", {"a": lambda: 1, "b": lazy(expensive)})

    assert response.content["props"] == {"a": 1}
    assert calls == []


def test_nested_deferred_props_are_resolved(request_factory: RequestFactory) -> None:
    inertia = make_inertia(request_factory, INERTIA)

    response = inertia.render("Users", {"nested": {"a": lambda: 1, "b": [lazy(lambda: 2)]}})

    assert response.content["props"] == {"nested": {"a": 1, "b": [2]}}


def test_namedtuple_props_keep_their_type(request_factory: RequestFactory) -> None:
    inertia = make_inertia(request_factory, INERTIA)

    response = inertia.render("Map", {"origin": Point(0, 0), "target": Point(1, lambda: 2)})

    assert response.content["props"] == {"origin": Point(0, 0), "target": Point(1, 2)}


def test_resolution_errors_propagate(request_factory: RequestFactory) -> None:
    def explode() -> Any:
        raise LookupError("missing")

    inertia = make_inertia(request_factory, INERTIA)

    with pytest.raises(LookupError):
        inertia.render("Users", {"a": explode})


def test_share_is_included_in_render(request_factory: RequestFactory) -> None:
    inertia = make_inertia(request_factory, INERTIA)

    inertia.share("auth", {"user": "x"})
    response = inertia.render("Home", {})

    assert response.content["props"] == {"auth": {"user": "x"}}


def test_share_is_applied_immediately(request_factory: RequestFactory) -> None:
    inertia = make_inertia(request_factory)
    before = inertia.page

    inertia.share("auth", {"user": "x"})

    assert dict(before.props) == {}
    assert dict(inertia.page.props) == {"auth": {"user": "x"}}


def test_render_props_override_shared(request_factory: RequestFactory) -> None:
    inertia = make_inertia(request_factory, INERTIA)

    inertia.share_many({"title": "shared", "auth": None})
    response = inertia.render("Home", {"title": "explicit"})

    assert response.content["props"] == {"title": "explicit", "auth": None}


def test_shared_deferred_props_are_resolved(request_factory: RequestFactory) -> None:
    inertia = make_inertia(request_factory, INERTIA)

    inertia.share("user", lambda: "x")

    assert inertia.render("Home").content["props"] == {"user": "x"}


def test_version(request_factory: RequestFactory) -> None:
    inertia = make_inertia(request_factory, INERTIA)

    assert inertia.get_version() is None
    inertia.version("v2")
    assert inertia.get_version() == "v2"
    assert inertia.render("Home").content["version"] == "v2"


def test_location_redirects_regular_requests(request_factory: RequestFactory) -> None:
    response = make_inertia(request_factory).location("/foo")

    assert response.status_code == 302
    assert response.headers == {"Location": "/foo"}


def test_location_custom_status(request_factory: RequestFactory) -> None:
    response = make_inertia(request_factory).location("/foo", 301)

    assert response.status_code == 301


def test_location_returns_existing_response(request_factory: RequestFactory) -> None:
    redirect = Response(content="", status_code=307, headers={"Location": "/elsewhere"})

    assert make_inertia(request_factory).location(redirect) is redirect


def test_location_conflict_for_inertia_requests(request_factory: RequestFactory) -> None:
    response = make_inertia(request_factory, INERTIA).location("/foo", 301)

    assert response.status_code == 409
    assert response.headers == {"X-Inertia-Location": "/foo"}
    assert response.media_type == MediaType.HTML
    assert response.encoding == HTML_ENCODING


def test_location_conflict_reuses_response_location(request_factory: RequestFactory) -> None:
    redirect = Response(content="", status_code=302, headers={"location": "https://example.com/pay"})

    response = make_inertia(request_factory, INERTIA).location(redirect)

    assert response.status_code == 409
    assert response.headers["X-Inertia-Location"] == "https://example.com/pay"


def test_lazy_static_method() -> None:
    assert Inertia.lazy(lambda: 1).resolve() == 1


def test_get_inertia_is_request_scoped(request_factory: RequestFactory) -> None:
    request = request_factory.get("/", headers=INERTIA)

    inertia = get_inertia(request)
    share(request, "auth", "x")

    assert get_inertia(request) is inertia
    assert get_inertia(request_factory.get("/")) is not inertia
    assert dict(inertia.page.props) == {"auth": "x"}


def test_create_inertia_without_plugin_uses_builtin_root_view(request_factory: RequestFactory) -> None:
    inertia = create_inertia(request_factory.get("/"))

    response = inertia.render("Home", {"a": 1})

    assert response.media_type == MediaType.HTML
    assert 'id="app"' in response.content
    assert inertia.get_version() is None
