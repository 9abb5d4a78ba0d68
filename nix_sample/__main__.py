import logging
from pathlib import Path

import click
import uvicorn

from nix_sample import image


@click.group()
@click.version_option(package_name="nix-sample")
def cli():
    pass


class Images:
    def __init__(self, skopeo: str = "skopeo", debug: bool = False):
        if debug:
            logging.basicConfig(level=logging.DEBUG)
        self.skopeo = image.Skopeo(executable=skopeo)


@cli.group("image")
@click.option("--skopeo", help="skopeo executable", envvar="SKOPEO", default="skopeo")
@click.option("-d", "--debug", help="Debug output", is_flag=True)
@click.pass_context
def image_group(ctx, skopeo, debug):
    """Push and inspect OCI images."""
    ctx.obj = Images(skopeo=skopeo, debug=debug)


@image_group.command()
@click.argument("app")
@click.option(
    "-r",
    "--registry",
    help="Registry URL",
    envvar="REGISTRY",
    default=image.DEFAULT_REGISTRY,
    show_default=True,
)
@click.option(
    "-t",
    "--tag",
    help="Image tag",
    envvar="TAG",
    default=image.DEFAULT_TAG,
    show_default=True,
)
@click.option("-u", "--username", help="Username", envvar="REGISTRY_USER")
@click.option("-p", "--password", help="Password", envvar="REGISTRY_PASSWORD")
@click.option(
    "--archive",
    help="docker-archive built by nix",
    default=image.DEFAULT_ARCHIVE,
    show_default=True,
    type=click.Path(path_type=Path, dir_okay=False),
)
@click.pass_context
def push(
    ctx,
    app: str,
    registry: str,
    tag: str,
    username: str | None,
    password: str | None,
    archive: Path,
):
    """Push the image archive of APP to the registry and print its digest."""
    obj: Images = ctx.ensure_object(Images)
    if not app:
        raise click.BadParameter("must not be empty", param_hint="APP")
    try:
        target = image.ImageReference.for_app(app, registry=registry, tag=tag)
    except ValueError as e:
        raise click.UsageError(str(e), ctx=ctx) from e

    try:
        pushed = image.push_image(
            target,
            skopeo=obj.skopeo,
            username=username,
            password=password,
            archive=archive,
            echo=click.echo,
        )
    except image.ArtifactNotFoundError as e:
        click.echo(f"❌ Error: {e}", err=True)
        click.echo(e.hint, err=True)
        ctx.exit(1)
    except image.SkopeoError as e:
        click.echo(str(e), err=True)
        ctx.exit(e.returncode)

    # Keep the bare digest as the last line, CI reads it from there
    click.echo(pushed.digest)


@image_group.command()
@click.argument("ref", metavar="IMAGE")
@click.pass_context
def digest(ctx, ref: str):
    """Print the digest of a remote IMAGE."""
    obj: Images = ctx.ensure_object(Images)
    if not ref:
        raise click.BadParameter("must not be empty", param_hint="IMAGE")
    try:
        target = image.ImageReference.from_string(ref)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="IMAGE") from e

    try:
        image.fetch_digest(target, skopeo=obj.skopeo, echo=click.echo)
    except image.SkopeoError as e:
        click.echo(str(e), err=True)
        ctx.exit(e.returncode)


LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "()": "uvicorn.logging.DefaultFormatter",
            "fmt": "%(levelprefix)s %(message)s",
            "use_colors": None,
        },
        "access": {
            "()": "uvicorn.logging.AccessFormatter",
            "fmt": '%(levelprefix)s %(client_addr)s - "%(request_line)s" %(status_code)s',  # noqa: E501
        },
    },
    "handlers": {
        "default": {
            "formatter": "default",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
        },
        "access": {
            "formatter": "access",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "uvicorn": {"handlers": ["default"], "level": "INFO", "propagate": False},
        "uvicorn.error": {"level": "INFO"},
        "uvicorn.access": {"handlers": ["access"], "level": "INFO", "propagate": False},
        "nix_sample": {"handlers": ["default"], "level": "INFO", "propagate": False},
    },
}


def serve(app: str, host: str, port: int, reload: bool):
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="info",
        log_config=LOGGING_CONFIG,
        reload=reload,
    )


@cli.command()
@click.option("--reload", help="Watch for changes", is_flag=True)
@click.option("--host", default="0.0.0.0", show_default=True)
@click.option("-p", "--port", type=int, envvar="PORT", default=3001, show_default=True)
def api(reload: bool = False, host: str = "0.0.0.0", port: int = 3001):
    """Run the demo API."""
    serve("nix_sample.api:app", host=host, port=port, reload=reload)


@cli.command()
@click.option("--reload", help="Watch for changes", is_flag=True)
@click.option("--host", default="0.0.0.0", show_default=True)
@click.option("-p", "--port", type=int, envvar="PORT", default=3000, show_default=True)
def web(reload: bool = False, host: str = "0.0.0.0", port: int = 3000):
    """Run the demo web page."""
    serve("nix_sample.web:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    cli()
