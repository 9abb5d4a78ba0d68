from dataclasses import dataclass

REPOSITORY_PREFIX = "nix-sample-"
DEFAULT_REGISTRY = "ghcr.io/your-org"
DEFAULT_TAG = "latest"


@dataclass(slots=True)
class ImageReference:
    """Remote image location

    ref: https://github.com/opencontainers/distribution-spec/blob/main/spec.md#pulling-manifests
    """

    registry: str
    repository: str
    tag: str = DEFAULT_TAG
    digest: str | None = None

    def __str__(self):
        return f"{self.registry}/{self.repository}:{self.tag}"

    @property
    def transport(self) -> str:
        """The reference in skopeo's transport syntax, by digest when known"""
        if self.digest:
            return f"docker://{self.pinned}"
        return f"docker://{self}"

    @property
    def app(self) -> str:
        return self.repository.removeprefix(REPOSITORY_PREFIX)

    @property
    def pinned(self) -> str:
        """Return the reference addressed by digest instead of tag

        Deploying by digest guarantees the exact image that was pushed is used,
        even if the tag is moved later.
        """
        if not self.digest:
            raise ValueError(f"{self} has no known digest")
        return f"{self.registry}/{self.repository}@{self.digest}"

    @classmethod
    def for_app(
        cls, app: str, registry: str = DEFAULT_REGISTRY, tag: str = DEFAULT_TAG
    ) -> "ImageReference":
        if not app:
            raise ValueError("app name must not be empty")
        if not registry:
            raise ValueError("registry must not be empty")
        if not tag:
            raise ValueError("tag must not be empty")
        return cls(registry.rstrip("/"), f"{REPOSITORY_PREFIX}{app}", tag)

    @classmethod
    def from_string(cls, value: str) -> "ImageReference":
        value = value.removeprefix("docker://")
        value, _, digest = value.partition("@")
        registry, sep, name = value.rpartition("/")
        if not sep or not registry or not name:
            raise ValueError(f"Not a registry image reference: {value}")
        # A ':' in the registry part is a port, only the last path segment has a tag
        repository, _, tag = name.partition(":")
        return cls(registry, repository, tag or DEFAULT_TAG, digest or None)
