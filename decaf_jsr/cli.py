from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import click
import typer
from typer.core import TyperCommand

from .config import Settings
from .deploy import JsrDeployment
from .errors import DecafJsrError


app = typer.Typer(
    name="decaf-jsr",
    help="decaf deploy step: publish the package to jsr unless the version is already live.",
    add_completion=False,
)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")


def cmd_deploy(package_path: Path, extra_args: List[str], settings: Optional[Settings] = None) -> int:
    settings = settings or Settings()
    configure_logging(settings)
    try:
        resolved = package_path.resolve(strict=True)
    except OSError as e:
        typer.echo(f"Error: package path {package_path} does not exist: {e}", err=True)
        return 1
    try:
        return JsrDeployment(resolved, extra_args=extra_args, settings=settings).run()
    except DecafJsrError as e:
        typer.echo(f"Error: {e}", err=True)
        return 1


def strip_package_path(args: List[str]) -> List[str]:
    """Return ``args`` without ``--package-path`` and its value, everything else verbatim."""
    forwarded: List[str] = []
    skip_next = False
    for arg in args:
        if skip_next:
            skip_next = False
        elif arg == "--package-path":
            skip_next = True
        elif not arg.startswith("--package-path="):
            forwarded.append(arg)
    return forwarded


class PassthroughCommand(TyperCommand):
    """Keeps the command line as given so ``--`` and ``--help`` can be forwarded."""

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        ctx.meta["decaf_jsr.raw_args"] = list(args)
        return super().parse_args(ctx, args)


@app.command(
    cls=PassthroughCommand,
    help="Publish to jsr. Arguments other than --package-path go to `deno publish` as given.",
    add_help_option=False,
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def deploy(
    ctx: typer.Context,
    package_path: Path = typer.Option(Path("."), "--package-path", help="Directory holding jsr.json, deno.jsonc or deno.json"),
):
    code = cmd_deploy(package_path, strip_package_path(ctx.meta.get("decaf_jsr.raw_args", ctx.args)))
    raise typer.Exit(code)


def main(argv: list[str] | None = None) -> int:
    """Programmatic entry point; returns the exit code instead of exiting."""
    try:
        rv = app(args=argv, prog_name="decaf-jsr", standalone_mode=False)
        return int(rv or 0)
    except typer.Exit as e:
        return int(e.exit_code or 0)
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except SystemExit as e:
        return int(e.code or 0)


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover
    run()
