"""Root view renderers.

A root view turns a :class:`~litestar_inertia.types.Page` into the HTML document
served on first load. The Inertia client boots from the page object found in the
``data-page`` attribute of the root element.
"""

from textwrap import dedent
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from litestar.serialization import encode_json
from markupsafe import Markup, escape

if TYPE_CHECKING:
    from litestar.template import TemplateEngineProtocol

    from litestar_inertia.types import Page

__all__ = (
    "RootViewRenderer",
    "TemplateRootView",
    "html_root_view",
    "page_attribute",
)


@runtime_checkable
class RootViewRenderer(Protocol):
    """Render the HTML document for a page object."""

    def __call__(self, page: "Page") -> str: ...


def page_attribute(page: "Page") -> "Markup":
    """Return the page object as JSON, escaped for use inside an HTML attribute.

    Args:
        page: The page to serialize.

    Returns:
        The escaped JSON string.
    """
    return escape(encode_json(page.to_dict()).decode())


def html_root_view(page: "Page", *, element_id: str = "app", title: str = "") -> str:
    """Render a minimal HTML document mounting the Inertia app.

    Args:
        page: The page to render.
        element_id: The id of the element the client mounts on.
        title: Optional document title.

    Returns:
        The HTML document.
    """
    return dedent(f"""\
        <!DOCTYPE html>
        <html>
        <head>
        <meta charset="utf-8">
        <title>{escape(title)}</title>
        </head>
        <body>
        <div id="{escape(element_id)}" data-page="{page_attribute(page)}"></div>
        </body>
        </html>
        """)


class TemplateRootView:
    """Render the root view with a Litestar template engine.

    The template receives ``page`` (the escaped page JSON, ready for a ``data-page``
    attribute) and ``page_object`` (the :class:`Page` itself) in addition to any
    extra ``context``::

        <div id="app" data-page="{{ page }}"></div>
    """

    __slots__ = ("context", "engine", "template_name", "template_str")

    def __init__(
        self,
        engine: "TemplateEngineProtocol[Any, Any]",
        template_name: "str | None" = None,
        *,
        template_str: "str | None" = None,
        context: "dict[str, Any] | None" = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            engine: The template engine used to render.
            template_name: Path-like name for the template to be rendered, e.g. ``index.html``.
            template_str: A string representing the template.
            context: Extra values passed to the template.

        Raises:
            ValueError: If both or neither of template_name and template_str are provided.
        """
        if template_name and template_str:
            msg = "Either template_name or template_str must be provided, not both."
            raise ValueError(msg)
        if not template_name and template_str is None:
            msg = "One of template_name or template_str must be provided."
            raise ValueError(msg)
        self.engine = engine
        self.template_name = template_name
        self.template_str = template_str
        self.context = context or {}

    def create_template_context(self, page: "Page") -> "dict[str, Any]":
        return {
            **self.context,
            "page": page_attribute(page),
            "page_object": page,
        }

    def __call__(self, page: "Page") -> str:
        context = self.create_template_context(page)
        if self.template_str is not None:
            return self.engine.render_string(self.template_str, context)
        template = self.engine.get_template(self.template_name)  # type: ignore[arg-type]
        return template.render(**context)
