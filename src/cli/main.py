"""Main CLI entry point for the markdown-mirror command.

This module provides the Typer application that serves as the entry point
for the markdown-mirror command-line tool. It uses options on the main command
rather than subcommands for a simpler user experience.
"""

import logging
import os
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from src.cache.disk_mirror import DiskMirror
from src.cache.snapshot_cache import SnapshotCache
from src.cli.config import DEFAULT_CONFIG_PATH, ConfigLoader
from src.cli.errors import CLIError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.content_converter.post_transformer import PostTransformer
from src.github_client.api_wrapper import GitHubClient
from src.github_client.auth import Authenticator
from src.models.mirror_config import MirrorConfig
from src.sync.scheduler import SyncScheduler
from src.sync.sync_service import SyncService
from src.web.app import APP_VERSION, create_app

app = typer.Typer(
    name="markdown-mirror",
    help="""Mirror a directory of markdown posts from GitHub and serve them over HTTP.

QUICK START:
  markdown-mirror --init --owner <owner> --repo <repo>   # Initialize
  markdown-mirror --once                                 # Run one sync pass
  markdown-mirror                                        # Sync periodically and serve""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)

GETTING_STARTED_MESSAGE = """--init --owner <owner> --repo <repo> [--branch <b>] [--content-dir <d>]  # Initialize
--once                                                                  # One sync pass
--help                                                                  # Show all options

Example:
  markdown-mirror --init --owner octo --repo blog --content-dir data"""


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    log_format = "%(asctime)s [%(levelname)8s] %(threadName)s %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"markdown-mirror_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _build_service(config: MirrorConfig, stop_event: threading.Event) -> SyncService:
    """Wire the client, transformer, cache and mirror for ``config``."""
    client = GitHubClient(
        Authenticator(),
        api_base_url=config.api_base_url,
        timeout=config.request_timeout,
        stop_event=stop_event,
    )
    return SyncService(
        config=config,
        client=client,
        transformer=PostTransformer(config.content_dir, config.excerpt_length),
        cache=SnapshotCache(),
        mirror=DiskMirror(config.mirror_dir),
        stop_event=stop_event,
    )


def _run_init(
    config_path: str,
    owner: str,
    repo: str,
    branch: str,
    content_dir: str,
    verbosity: int,
    no_color: bool,
) -> None:
    """Write a new configuration file.

    Args:
        config_path: Where to write the configuration
        owner: Repository owner
        repo: Repository name
        branch: Branch to mirror
        content_dir: Directory holding the markdown files
        verbosity: Verbosity level
        no_color: Whether to disable colored output
    """
    _configure_logging(verbosity)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    config = MirrorConfig(
        owner=owner,
        repo=repo,
        branch=branch,
        content_dir=content_dir.strip('/'),
    )

    try:
        ConfigLoader.save(config_path, config)
    except CLIError as e:
        logger.error(f"Initialization failed: {e}")
        output.error(f"Initialization failed: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    output.success("Configuration initialized successfully")
    output.info(f"  Config file: {config_path}")
    output.info(f"  Repository: {config.repository_label}")
    output.info(f"  Content directory: {config.content_dir or '/'}")
    output.info("")
    output.info("Next steps:")
    output.info("  1. Optionally set GITHUB_TOKEN in the environment or a .env file")
    output.info("  2. Run 'markdown-mirror --once' to test the sync")
    raise typer.Exit(ExitCode.SUCCESS)


def _load_config(
    config_path: str,
    output: OutputHandler,
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> MirrorConfig:
    try:
        config = ConfigLoader.load(config_path)
    except CLIError as e:
        logger.error(f"Failed to load config: {e}")
        output.error(f"Failed to load config: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if host is not None:
        config.host = host
    if port is not None:
        config.port = port
    return config


def _run_once(config: MirrorConfig, output: OutputHandler) -> None:
    """Run a single sync pass and exit with its outcome."""
    stop_event = threading.Event()
    service = _build_service(config, stop_event)
    service.bootstrap_from_disk()

    try:
        with output.spinner(f"Syncing {config.repository_label}..."):
            result = service.run_sync()
    finally:
        service.client.close()

    output.print_summary(result)
    if result.error is not None:
        raise typer.Exit(ExitCode.for_error(result.error))
    raise typer.Exit(ExitCode.SUCCESS)


def _run_serve(config: MirrorConfig, output: OutputHandler) -> None:
    """Serve the cache over HTTP while syncing in the background."""
    stop_event = threading.Event()
    service = _build_service(config, stop_event)

    if service.bootstrap_from_disk():
        output.info(f"Loaded {len(service.cache.snapshot())} post(s) from disk mirror")

    scheduler = SyncScheduler(service.run_sync, config.sync_interval, stop_event)
    scheduler.start()
    output.success(
        f"Serving {config.repository_label} on http://{config.host}:{config.port}"
    )

    try:
        uvicorn.run(
            create_app(service.cache),
            host=config.host,
            port=config.port,
            log_level="warning",
        )
    finally:
        logger.info("Shutting down sync scheduler")
        scheduler.stop()
        service.client.close()


@app.command()
def main_command(
    init: bool = typer.Option(
        False,
        "--init",
        help="Initialize configuration (requires --owner and --repo)",
    ),
    owner: Optional[str] = typer.Option(
        None,
        "--owner",
        help="Repository owner (used with --init)",
    ),
    repo: Optional[str] = typer.Option(
        None,
        "--repo",
        help="Repository name (used with --init)",
    ),
    branch: str = typer.Option(
        "main",
        "--branch",
        help="Branch to mirror (used with --init)",
    ),
    content_dir: str = typer.Option(
        "data",
        "--content-dir",
        help="Repository directory holding the markdown files (used with --init)",
        metavar="DIR",
    ),
    once: bool = typer.Option(
        False,
        "--once",
        help="Run a single sync pass, print a summary and exit",
    ),
    config_path: str = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        help="Path to the configuration file",
        metavar="PATH",
    ),
    host: Optional[str] = typer.Option(
        None,
        "--host",
        help="Override the address the HTTP server binds to",
    ),
    port: Optional[int] = typer.Option(
        None,
        "--port",
        help="Override the HTTP server port",
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
    """Mirror markdown posts from a GitHub repository and serve them.

    \b
    QUICK START:
      markdown-mirror --init --owner <owner> --repo <repo>   # Initialize
      markdown-mirror --once                                 # Run one sync pass
      markdown-mirror                                        # Sync periodically and serve

    \b
    AUTHENTICATION:
      Set GITHUB_TOKEN in the environment or a .env file to raise rate limits
      and read private repositories. The token is never written to the config.
    """
    if version:
        typer.echo(f"markdown-mirror version {APP_VERSION}")
        raise typer.Exit()

    if init or owner is not None or repo is not None:
        missing = []
        if not init:
            missing.append("--init")
        if owner is None:
            missing.append("--owner")
        if repo is None:
            missing.append("--repo")

        if missing:
            typer.echo(f"Error: Missing required option(s): {', '.join(missing)}", err=True)
            typer.echo("")
            typer.echo("Example:")
            typer.echo("  markdown-mirror --init --owner octo --repo blog --content-dir data")
            raise typer.Exit(ExitCode.GENERAL_ERROR)

        _run_init(config_path, owner, repo, branch, content_dir, verbosity, no_color)
        return

    if not os.path.exists(config_path):
        typer.echo(GETTING_STARTED_MESSAGE)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)
    config = _load_config(config_path, output, host, port)

    if once:
        _run_once(config, output)
    else:
        _run_serve(config, output)


def main() -> None:
    """Main entry point for the CLI application."""
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
