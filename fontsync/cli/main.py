"""
Main CLI entry point for fontsync.
"""

import sys
from pathlib import Path

import click

from fontsync import __version__

EXIT_OK = 0
EXIT_RUN_FAILED = 1
EXIT_CONFIG = 2


def elevated_argv(config_path: Path, silent: bool) -> list[str]:
    """Arguments for the elevated copy of this run, config path made absolute."""
    argv = ["-m", "fontsync.cli.main", "--config", str(config_path.resolve())]
    if silent:
        argv.append("--silent")
    return argv


@click.command()
@click.version_option(version=__version__)
@click.option(
    "--silent",
    is_flag=True,
    default=False,
    help="Do not ask about uninstalling after the install pass.",
)
# Passed on by the elevated relaunch, which does not inherit the environment
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    hidden=True,
)
def cli(silent, config_path):
    """Install the fonts from the synced font folder into the system font store."""
    from fontsync.config.settings import default_config_path, load_settings
    from fontsync.core.errors import ConfigError
    from fontsync.pipeline.runner import run_sync
    from fontsync.utils.logging import logger
    from fontsync.utils.system import is_admin, is_windows, relaunch_elevated

    config_path = config_path or default_config_path()
    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(EXIT_CONFIG)

    if is_windows() and not is_admin():
        logger.info("Administrator rights required; relaunching elevated")
        relaunched = relaunch_elevated(
            elevated_argv(config_path, silent), cwd=Path.cwd()
        )
        sys.exit(EXIT_OK if relaunched else EXIT_RUN_FAILED)

    if not run_sync(settings, silent=silent):
        sys.exit(EXIT_RUN_FAILED)


if __name__ == "__main__":
    cli()
