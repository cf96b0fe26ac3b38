"""CLI application entry point and command routing for forgekit.

This module is the **sole error boundary** for the entire application.
It catches :class:`~forgekit.exceptions.ForgeKitError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* Command results are reported through the logging facade; the console
  is used only for the banner and error-boundary messages.
* A missing or malformed manifest aborts the process before any command
  runs.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from forgekit.cli import exit_codes
from forgekit.cli.banner import banner_enabled, get_descriptions, print_banner
from forgekit.cli.console import console
from forgekit.core.models import Manifest
from forgekit.exceptions import ForgeKitError
from forgekit.utils.logger import LogFacade, install_facade

LONG_DESCRIPTION: str = (
    "{name}: a command-line application scaffold.\n\n"
    "Prints a banner, reads its bundled manifest, checks the source "
    "repository for newer releases and routes every diagnostic line "
    "through a level-filtered logger."
)
SHORT_DESCRIPTION: str = "{name} is a command-line application scaffold."
EXAMPLES: tuple[str, ...] = (
    "version",
    "version check",
    "--log-level debug version latest",
)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _program_name(manifest: Manifest, invoked: str | None) -> str:
    """Name shown in usage: the invoked alias, else the manifest binary."""
    if invoked and invoked in manifest.aliases:
        return invoked
    return manifest.bin or manifest.name


def _build_parser(
    manifest: Manifest, argv: Sequence[str], invoked: str | None = None,
) -> tuple[argparse.ArgumentParser, str]:
    """Construct the top-level argument parser.

    Returns the parser together with the banner selected for this run.
    The CLI supports:
    * ``forgekit``                      — banner and help
    * ``forgekit version [subcommand]`` — version reporting and checks
    * ``forgekit --version``
    """
    from forgekit.cli.version_cmd import VERSION_SUBCOMMANDS

    prog = _program_name(manifest, invoked)
    descriptions = get_descriptions(
        LONG_DESCRIPTION.format(name=manifest.application or manifest.name),
        SHORT_DESCRIPTION.format(name=manifest.application or manifest.name),
        argv,
    )
    examples = "\n".join(f"  {prog} {example}" for example in EXAMPLES)
    epilog = f"examples:\n{examples}"
    if manifest.aliases:
        epilog += f"\n\naliases: {', '.join(manifest.aliases)}"

    parser = argparse.ArgumentParser(
        prog=prog,
        description=descriptions["description"],
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {manifest.version}",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        metavar="LEVEL",
        help="debug, notice, info, success, warn, error, fatal or panic.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print every log record regardless of level.",
    )
    parser.add_argument(
        "--show-trace",
        action="store_true",
        help="Append caller and build context to each log line.",
    )
    parser.add_argument(
        "--no-banner",
        action="store_true",
        help="Do not print the startup banner.",
    )

    commands = parser.add_subparsers(dest="command", metavar="command")
    version_parser = commands.add_parser(
        "version",
        help=f"Print the version number of {manifest.name}.",
        description=(
            f"Print the version number of {manifest.name} "
            "and other related information."
        ),
    )
    version_commands = version_parser.add_subparsers(
        dest="version_command", metavar="subcommand",
    )
    for name, help_text in VERSION_SUBCOMMANDS.items():
        version_commands.add_parser(name, help=help_text, description=help_text)

    return parser, descriptions["banner"]


# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

def _configure_logging(manifest: Manifest, args: argparse.Namespace) -> None:
    """Install the process-wide log facade, applying CLI overrides."""
    facade = LogFacade.from_environment(manifest)
    if args.log_level is not None:
        facade.set_log_level(args.log_level)
    if args.debug:
        facade.set_debug(True)
    if args.show_trace:
        facade.set_show_trace(True)
    install_facade(facade)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the forgekit CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    ManifestError
        If the manifest cannot be loaded.
    """
    from forgekit.infra.manifest_loader import get_manifest

    if argv is None:
        argv = sys.argv[1:]

    manifest = get_manifest()
    parser, banner = _build_parser(manifest, argv, Path(sys.argv[0]).name)
    args = parser.parse_args(argv)
    _configure_logging(manifest, args)

    if args.command is None:
        if banner_enabled(args.no_banner):
            print_banner(banner)
        parser.print_help()
        return exit_codes.SUCCESS

    from forgekit.cli.version_cmd import run_version_command

    return run_version_command(args.version_command)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ForgeKitError as exc:
        console.error(exc, exc.hint)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.error(
            f"Unexpected error. Please report this issue.\n  {type(exc).__name__}: {exc}",
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
