"""Main CLI entry point for blog-sync command.

This module provides the Typer application that serves as the entry point
for the blog-sync command-line tool. Running it without options performs a
full sync of both pipelines; every setting comes from the environment.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from src.cli.errors import CLIError, LogSetupError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.cli.sync_command import SyncCommand

VERSION = "0.1.0"

app = typer.Typer(
    name="blog-sync",
    help="""Mirror local blog posts and images into Supabase Storage buckets.

QUICK START:
  blog-sync                      # Sync documents, then images
  blog-sync --dry-run            # Preview uploads, refreshes and prunes
  blog-sync --only images        # Sync a single pipeline

Configuration is read from the environment (or .env):
  SUPABASE_URL, SUPABASE_SERVICE_KEY, BLOG_PATH, IMAGE_PATH,
  SUPABASE_CONTENT_BUCKET_NAME, SUPABASE_IMAGE_BUCKET_NAME""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)

_HANDLER_MARK = "_blog_sync_handler"


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)

    Raises:
        LogSetupError: If the log directory or file cannot be created
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    # Replace handlers from an earlier call instead of stacking them
    for handler in list(app_logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            app_logger.removeHandler(handler)
            handler.close()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    setattr(console_handler, _HANDLER_MARK, True)
    app_logger.addHandler(console_handler)

    if logdir:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(logdir) / f"blog-sync_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        try:
            Path(logdir).mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            raise LogSetupError(logdir, str(e)) from e
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        setattr(file_handler, _HANDLER_MARK, True)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


@app.command()
def main_command(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "--dryrun",
        help="Preview changes without applying them",
    ),
    only: Optional[List[str]] = typer.Option(
        None,
        "--only",
        help="Run only this pipeline: documents or images (can be used multiple times)",
        metavar="PIPELINE",
    ),
    env_file: Optional[str] = typer.Option(
        None,
        "--env-file",
        help="Load environment variables from this file instead of ./.env",
        metavar="PATH",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Mirror local blog posts and images into Supabase Storage buckets."""
    if version:
        typer.echo(f"blog-sync version {VERSION}")
        raise typer.Exit()

    output = OutputHandler(verbosity=verbosity, no_color=no_color)
    try:
        _configure_logging(verbosity, logdir)
    except CLIError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    sync_cmd = SyncCommand(env_file=env_file, only=only, output_handler=output)
    exit_code = sync_cmd.run(dry_run=dry_run)

    raise typer.Exit(int(exit_code))


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
