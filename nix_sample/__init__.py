"""Sample repository: Nix built OCI images, pushed with skopeo

Two demo apps live here, a JSON API (`nix_sample.api`) and a static web
page (`nix_sample.web`), plus the tooling to push their images
(`nix_sample.image`).
"""
__version__ = "1.0.0"
