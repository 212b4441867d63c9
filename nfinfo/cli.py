from __future__ import annotations

import logging

import typer

from nfinfo.assets import describe_pipeline
from nfinfo.errors import AbortOperationError
from nfinfo.facts import Verbosity
from nfinfo.logs import setup_logging
from nfinfo.report import get_info, status

logger = logging.getLogger(__name__)

# -------------------- Typer app --------------------

app = typer.Typer(add_completion=False, help="Show the system runtime information")

# Typer defaults as module-level constants to avoid B008 in function signature
ARG_PIPELINE = typer.Argument(None, help="Pipeline name")
OPT_DETAILED = typer.Option(False, "-d", help="Show detailed information")
OPT_MORE_DETAILED = typer.Option(False, "-dd", hidden=True)


@app.callback()
def _startup() -> None:
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Runtime status:\n%s", status())


@app.command("info")
def info(
    pipeline: str | None = ARG_PIPELINE,
    detailed: bool = OPT_DETAILED,
    more_detailed: bool = OPT_MORE_DETAILED,
) -> None:
    """Print runtime information, or details of a locally installed pipeline."""
    if not pipeline:
        level = Verbosity.from_flags(detailed, more_detailed)
        typer.echo(get_info(level))
        return

    try:
        lines = describe_pipeline(pipeline)
    except AbortOperationError as err:
        typer.secho(str(err), fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from err
    for line in lines:
        typer.echo(line)


@app.command("status")
def status_cmd(detailed: bool = OPT_DETAILED) -> None:
    """Short runtime summary including the process identity."""
    typer.echo(status(detailed))


def main() -> None:
    setup_logging()
    app()


if __name__ == "__main__":
    main()
