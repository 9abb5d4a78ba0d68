import json
import subprocess
from dataclasses import dataclass, field

import pytest
from click.testing import CliRunner

DIGEST = "sha256:4f53cda18c2baa0c0354bb5f9a3ecbe5ed12ab4d8e11ba873c2f11161202b945"


@dataclass
class FakeRun:
    """Stands in for `subprocess.run` and answers like skopeo would"""

    digest: str = DIGEST
    fail: dict[str, int | Exception] = field(default_factory=dict)
    calls: list[tuple[list[str], str | None]] = field(default_factory=list)

    def __call__(
        self, command, check=False, text=False, input=None, capture_output=False
    ):
        self.calls.append((command, input))
        subcommand = command[1]
        failure = self.fail.get(subcommand)
        if isinstance(failure, Exception):
            raise failure
        if failure is not None:
            raise subprocess.CalledProcessError(
                failure, command, output="", stderr=f"{subcommand}: boom"
            )
        stdout = ""
        if subcommand == "inspect":
            stdout = json.dumps({"Name": command[-1], "Digest": self.digest})
        return subprocess.CompletedProcess(command, 0, stdout=stdout, stderr="")

    @property
    def subcommands(self) -> list[str]:
        return [command[1] for command, _ in self.calls]


@pytest.fixture
def fake_run(monkeypatch) -> FakeRun:
    """Replace subprocess.run so no real skopeo is needed"""
    fake = FakeRun()
    monkeypatch.setattr("nix_sample.image.skopeo.subprocess.run", fake)
    return fake


@pytest.fixture
def runner(monkeypatch) -> CliRunner:
    for name in ["REGISTRY", "TAG", "REGISTRY_USER", "REGISTRY_PASSWORD", "SKOPEO"]:
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


@pytest.fixture
def archive(tmp_path):
    """A stand-in for the `result` tarball written by nix build"""
    path = tmp_path / "result"
    path.write_bytes(b"not really a tarball")
    return path
