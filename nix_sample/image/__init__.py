"""Push and inspect the OCI images built by `nix build`

`nix build .#image-<app>` writes a docker-archive tarball to `result`,
skopeo copies that archive straight to the registry and reads the
digest back for deploy-by-digest.
"""
import logging
from pathlib import Path
from typing import Callable

from nix_sample.image.reference import DEFAULT_REGISTRY, DEFAULT_TAG, ImageReference
from nix_sample.image.skopeo import InspectResult, Skopeo, SkopeoError

__all__ = [
    "ArtifactNotFoundError",
    "DEFAULT_ARCHIVE",
    "DEFAULT_REGISTRY",
    "DEFAULT_TAG",
    "ImageReference",
    "InspectResult",
    "Skopeo",
    "SkopeoError",
    "fetch_digest",
    "push_image",
]

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE = Path("result")


class ArtifactNotFoundError(FileNotFoundError):
    """Raised when the image archive produced by nix is missing."""

    def __init__(self, archive: Path, app: str):
        super().__init__(f"'{archive}' file not found")
        self.archive = archive
        self.app = app

    @property
    def hint(self) -> str:
        return f"Run 'nix build .#image-{self.app}' first"


def push_image(
    image: ImageReference,
    skopeo: Skopeo,
    username: str | None = None,
    password: str | None = None,
    archive: Path = DEFAULT_ARCHIVE,
    echo: Callable[[str], None] = logger.info,
) -> ImageReference:
    """Push a docker-archive to the registry

    :param image: Where to push, usually from `ImageReference.for_app`.
    :param skopeo: The skopeo wrapper to use.
    :param username: Registry username, only used together with `password`.
    :param password: Registry password.
    :param archive: Path of the docker-archive produced by nix.
    :param echo: Receives the progress messages.

    Returns the pushed reference with its digest filled in.
    """
    echo(f"📦 Pushing image for app: {image.app}")
    echo(f"🎯 Target: {image}")

    if username and password:
        echo("🔐 Authenticating with registry...")
        skopeo.login(image.registry, username=username, password=password)

    if not archive.is_file():
        raise ArtifactNotFoundError(archive, image.app)

    echo("🚀 Pushing image to registry...")
    skopeo.copy(f"docker-archive:{archive}", image.transport)
    echo("✅ Image pushed successfully!")

    echo("📋 Fetching image digest...")
    digest = skopeo.inspect_digest(image.transport)
    image.digest = digest
    logger.info("Pushed %s", image.pinned)
    echo(f"🔍 Digest: {digest}")
    return image


def fetch_digest(
    image: ImageReference,
    skopeo: Skopeo,
    echo: Callable[[str], None] = logger.info,
) -> str:
    """Return the digest of a remote image"""
    echo(f"🔍 Fetching digest for: {image.pinned if image.digest else image}")
    digest = skopeo.inspect_digest(image.transport)
    echo(f"Digest: {digest}")
    return digest
