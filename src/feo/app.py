"""feo - command line entry point."""

import logging
import sys

import click

from feo.collector import SystemCollector
from feo.colors import Colors, Theme
from feo.errors import FeoError
from feo.monitor import DEFAULT_DELAY, SampleLoop
from feo.render import Renderer

__version__ = "0.3.0"

DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
COMPATIBILITY_MESSAGE = (
    "Compatibility issue. feo is designed to run on Linux. "
    "GPU temperature monitor option only works for Raspberry Pi."
)

logger = logging.getLogger(__name__)


def setup_logging(log_file: str | None, verbose: bool = False) -> None:
    """
    Set up logging for the ``feo`` package.

    Args:
        log_file: Optional path to a log file. Without one, only warnings
            and errors are written, to stderr.
        verbose: Log DEBUG messages to the log file.
    """
    package_logger = logging.getLogger("feo")
    package_logger.handlers.clear()
    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)

    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file)
        package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    else:
        handler = logging.StreamHandler(sys.stderr)
        package_logger.setLevel(logging.WARNING)
    handler.setFormatter(formatter)
    package_logger.addHandler(handler)


@click.command(
    context_settings={"auto_envvar_prefix": "FEO", "help_option_names": ["-h", "--help"]}
)
@click.option(
    "-c",
    "--color",
    default=Theme.STANDARD.value,
    show_default=True,
    help="Color theme: 'w' for white, 'b' for black, 's' for standard.",
)
@click.option(
    "-g",
    "--gpu",
    is_flag=True,
    default=False,
    help="Monitor the GPU temperature (only available for Raspberry Pi).",
)
@click.option(
    "-d",
    "--delay",
    type=click.IntRange(min=0),
    default=DEFAULT_DELAY,
    show_default=True,
    help="Delay between updates, in whole seconds (0 means 2).",
)
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="File path to save logs.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug details.")
@click.version_option(__version__, prog_name="feo")
def cli(color: str, gpu: bool, delay: int, log_file: str | None, verbose: bool) -> None:
    """Simple system resource monitor for Linux, with GPU temperature for Raspberry Pi."""
    try:
        setup_logging(log_file, verbose)
    except OSError as e:
        raise click.ClickException(f"Failed to set up log file '{log_file}': {e}") from e

    theme = Theme.decode(color)
    if theme.value != color:
        logger.info("Unknown color theme %r, using standard", color)

    collector = SystemCollector()
    loop = SampleLoop(
        Renderer(Colors.for_theme(theme)),
        collector=collector,
        delay=delay,
        gpu=gpu,
    )
    try:
        collector.check_compatibility(gpu)
        loop.run()
    except KeyboardInterrupt:
        loop.stop()
        logger.info("Interrupted, exiting")
    except FeoError as e:
        logger.debug("Monitoring failed", exc_info=True)
        click.echo(f"{COMPATIBILITY_MESSAGE} Error message: {e}", err=True)
        sys.exit(1)


def main() -> None:
    """Entry point for the feo command."""
    cli()


if __name__ == "__main__":
    main()
