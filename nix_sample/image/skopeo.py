from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

# Exit status a shell reports for a command that could not be found
COMMAND_NOT_FOUND = 127
CANNOT_EXECUTE = 126


class SkopeoError(Exception):
    """Raised when a skopeo invocation fails."""

    def __init__(self, message: str, returncode: int = 1):
        super().__init__(message)
        self.returncode = returncode


class InspectResult(BaseModel):
    """Subset of the `skopeo inspect` output

    ref: https://github.com/containers/skopeo/blob/main/docs/skopeo-inspect.1.md
    """

    Digest: str
    Name: str | None = None
    Tag: str | None = None
    Created: str | None = None
    Architecture: str | None = None
    Os: str | None = None
    Layers: list[str] | None = None


class Skopeo:
    """Thin wrapper around the skopeo CLI.

    skopeo talks to registries directly, so no container daemon is needed
    to push a tar archive or read remote image metadata.
    """

    def __init__(self, executable: str = "skopeo"):
        self.executable = executable

    def run(
        self,
        *args: str,
        input: str | None = None,
        capture_output: bool = True,
    ) -> str:
        """Run skopeo with `args` and return its stdout"""
        command = [self.executable, *args]
        logger.debug("Running: %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                check=True,
                text=True,
                input=input,
                capture_output=capture_output,
            )
        except FileNotFoundError as exc:
            raise SkopeoError(
                f"{self.executable} not found, is it installed and on PATH?",
                returncode=COMMAND_NOT_FOUND,
            ) from exc
        except OSError as exc:
            raise SkopeoError(
                f"{self.executable} cannot be executed: {exc.strerror or exc}",
                returncode=CANNOT_EXECUTE,
            ) from exc
        except UnicodeDecodeError as exc:
            raise SkopeoError(
                f"Unreadable output from {' '.join(command)}: {exc}"
            ) from exc
        except subprocess.CalledProcessError as exc:
            details = (exc.stderr or "").strip() or (exc.stdout or "").strip()
            raise SkopeoError(
                _describe(command, details), returncode=exc.returncode
            ) from exc
        return result.stdout if capture_output else ""

    def login(self, registry: str, username: str, password: str):
        """Store registry credentials, the password is passed on stdin"""
        self.run(
            "login", registry, "-u", username, "--password-stdin", input=password
        )

    def copy(self, source: str, destination: str, compress: bool = True):
        args = ["copy"]
        if compress:
            args.append("--dest-compress")
        self.run(*args, source, destination, capture_output=False)

    def inspect(self, image: str) -> InspectResult:
        """Read the metadata of a remote image without pulling it"""
        output = self.run("inspect", image)
        try:
            return InspectResult.model_validate_json(output)
        except ValidationError as exc:
            raise SkopeoError(
                f"Unexpected output from {self.executable} inspect {image}"
            ) from exc

    def inspect_digest(self, image: str) -> str:
        digest = self.inspect(image).Digest
        if not digest:
            raise SkopeoError(f"Missing digest in inspect output for {image}")
        return digest


def _describe(command: Sequence[str], details: str) -> str:
    message = f"Command failed: {' '.join(command)}"
    if details:
        message = f"{message}\n{details}"
    return message
