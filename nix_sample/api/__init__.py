"""
Demo API, three informational routes and no state.

    GET /           API information
    GET /health     Health check, used by container orchestrators
    GET /api/info   Runtime information of the serving process
"""
import logging
import platform
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Literal

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

import nix_sample
from nix_sample.api.system import SystemInfo, environment, system_info

logger = logging.getLogger(__name__)

ENDPOINTS = {
    "/": "API information",
    "/health": "Health check",
    "/api/info": "Detailed system information",
}


class ServiceInfo(BaseModel):
    name: str
    version: str
    description: str
    endpoints: dict[str, str]


class Health(BaseModel):
    status: Literal["ok"] = "ok"
    timestamp: datetime
    environment: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "API server started, endpoints: %s", ", ".join(f"GET {p}" for p in ENDPOINTS)
    )
    logger.info(
        "Environment: %s, Python: %s", environment(), platform.python_version()
    )
    yield
    logger.info("Closing HTTP server")


app = FastAPI(title="Nix Sample API", version=nix_sample.__version__, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", name="info")
def service_info() -> ServiceInfo:
    return ServiceInfo(
        name="Nix Sample API",
        version=nix_sample.__version__,
        description="API demonstrating Nix-based development and OCI image building",
        endpoints=ENDPOINTS,
    )


@app.get("/health", name="health")
def health() -> Health:
    """Report that the service is up

    Always answers while the process can serve requests.
    """
    return Health(timestamp=datetime.now(timezone.utc), environment=environment())


@app.get("/api/info", name="system_info")
def api_info() -> SystemInfo:
    return system_info()
