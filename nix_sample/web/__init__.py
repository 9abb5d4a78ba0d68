"""Demo web front end, a single static page about the repository setup."""
import os
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from nix_sample import ui

app = FastAPI(title="Nix Sample - Web", docs_url=None, redoc_url=None)
templates = ui.templates(Path(__file__).parent / "templates")

FEATURES = [
    "Reproducible dev environment with Nix",
    "Python packaging with a single pyproject.toml",
    "OCI images built without Docker (using Nix)",
    "Images pushed and inspected with skopeo",
    "Automatic environment loading with direnv",
]

DEFAULT_API_URL = "http://localhost:3001/"

COMMANDS = {
    "Dev": "nix-sample web --reload",
    "Build": "nix build .#image-web",
    "Push": "nix-sample image push web",
}


@app.get("/", response_class=HTMLResponse, name="home")
def home(request: Request):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "features": FEATURES,
            "commands": COMMANDS,
            "api_url": os.environ.get("API_URL", DEFAULT_API_URL),
        },
    )
