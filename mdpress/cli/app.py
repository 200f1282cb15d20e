"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.errors import PublishError
from ..core.loader import load_config
from ..core.models import PublishConfig
from ..core.settings import Settings
from ..publishing.publisher import Publisher
from .parsers import parse_file_mode, parse_var

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="mdpress",
    help="Publish markdown articles as HTML pages and an RSS feed.",
)

ConfigOption = Annotated[
    str,
    typer.Option(
        "--config",
        "-c",
        help="YAML task configuration (default: mdpress.yaml, or built-in tasks).",
        metavar="FILE",
    ),
]
RootOption = Annotated[
    str,
    typer.Option(
        "--root",
        help="Base directory for relative task paths (default: config file's directory).",
        metavar="DIR",
    ),
]
ModeOption = Annotated[
    str,
    typer.Option(
        "--mode",
        help="File permissions in octal (default: 0644).",
        metavar="OCTAL",
    ),
]
VarOption = Annotated[
    Optional[list[str]],
    typer.Option(
        "--var",
        help="Extra layout variable (format: KEY=VALUE). Repeatable.",
        metavar="KEY=VALUE",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
]


def _setup(config_file: str, root: str) -> tuple[Settings, PublishConfig, Path]:
    settings = Settings()
    config_path = Path(config_file) if config_file else settings.config_file
    config = load_config(config_path)

    if root:
        base = Path(root)
    elif settings.root is not None:
        base = settings.root
    else:
        base = config_path.parent

    logger.debug(f"Root: {base.resolve()}")
    return settings, config, base


def _fail(exc: PublishError) -> typer.Exit:
    typer.echo(f"error: {exc.describe()}", err=True)
    return typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def default(
    ctx: typer.Context,
    config_file: ConfigOption = "",
    root: RootOption = "",
    file_mode: ModeOption = "",
    variables: VarOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Run `publish` when no command is given."""
    if ctx.invoked_subcommand is None:
        publish(config_file, root, file_mode, variables, verbose)
    elif config_file or root or file_mode or variables or verbose:
        raise typer.BadParameter(
            f"Options go after the command: mdpress {ctx.invoked_subcommand} [OPTIONS]"
        )


@app.command()
def publish(
    config_file: ConfigOption = "",
    root: RootOption = "",
    file_mode: ModeOption = "",
    variables: VarOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Render all page and feed tasks."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    logger.debug("Starting mdpress")

    extra = dict(map(parse_var, variables or []))

    try:
        settings, config, base = _setup(config_file, root)
        mode = parse_file_mode(file_mode) if file_mode else settings.file_mode
        publisher = Publisher(
            base,
            template_data={**config.template_data, **extra},
            file_mode=mode,
        )
        outputs = publisher.publish_all(config)
    except PublishError as exc:
        raise _fail(exc) from exc

    logger.debug(f"Completed: {len(outputs)} file(s) written")


@app.command()
def plan(config_file: ConfigOption = "", root: RootOption = "") -> None:
    """Show which output each source maps to, without writing anything."""
    try:
        _, config, base = _setup(config_file, root)
        mapping = Publisher(base).plan(config)
    except PublishError as exc:
        raise _fail(exc) from exc

    for sources, output in mapping:
        typer.echo(f"{', '.join(p.as_posix() for p in sources)} -> {output.as_posix()}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
