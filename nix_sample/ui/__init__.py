"""Shared UI components

Templates under `TEMPLATES_DIR` can be imported by any app that adds the
directory to its template search path, e.g.

    {% from "ui/button.html" import button %}
    {{ button("Docs", variant="secondary", href="/docs") }}
"""
from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).parent / "templates"

BUTTON_COLORS = {
    "primary": "#667eea",
    "secondary": "#48bb78",
}

BUTTON_STYLE = {
    "padding": "12px 24px",
    "font-size": "16px",
    "font-weight": "600",
    "border": "none",
    "border-radius": "8px",
    "cursor": "pointer",
    "transition": "all 0.2s",
    "color": "white",
    "text-decoration": "none",
    "display": "inline-block",
}


def button_style(variant: str = "primary") -> str:
    """Return the inline CSS for a button of the given variant"""
    try:
        color = BUTTON_COLORS[variant]
    except KeyError:
        raise ValueError(f"Unknown button variant: {variant}") from None
    style = BUTTON_STYLE | {"background-color": color}
    return "; ".join(f"{key}: {value}" for key, value in style.items())


def templates(*directories: Path) -> Jinja2Templates:
    """Create a template renderer that also finds the shared components"""
    renderer = Jinja2Templates(directory=[*directories, TEMPLATES_DIR])
    renderer.env.globals["button_style"] = button_style
    return renderer
