"""
Skyward Notes — Page Rendering
===============================

What:  Pure function from NotebookView to the HTML page.
How:   A Jinja2 environment loading templates from the package, with
       autoescaping on, plus two filters:
         nl2br     — escape a note body and turn newlines into <br>
         timestamp — "Jan 5, 2026 at 14:03"
Who:   Called by the notebook route for every non-redirect response.
"""

from datetime import datetime

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup, escape

from skyward.schemas.note import NotebookView

STYLESHEET_URL = "/assets/style.css"


def nl2br(value: str) -> Markup:
    """Escape `value` and keep its line breaks visible."""
    lines = str(value).replace("\r\n", "\n").replace("\r", "\n").split("\n")
    return Markup("<br>\n").join(escape(line) for line in lines)


def format_timestamp(value: datetime) -> str:
    return f"{value:%b} {value.day}, {value:%Y} at {value:%H:%M}"


def build_environment() -> Environment:
    env = Environment(
        loader=PackageLoader("skyward", "templates"),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["nl2br"] = nl2br
    env.filters["timestamp"] = format_timestamp
    return env


_environment = build_environment()


def render_page(view: NotebookView) -> str:
    """Render the list + form page for `view`."""
    template = _environment.get_template("index.html")
    return template.render(view=view, stylesheet_url=STYLESHEET_URL)


def render_error(message: str, request_id: str = "") -> str:
    """Render the generic failure page shown for 500 responses."""
    template = _environment.get_template("error.html")
    return template.render(
        message=message,
        request_id=request_id,
        stylesheet_url=STYLESHEET_URL,
    )
