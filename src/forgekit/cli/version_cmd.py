"""``forgekit version`` — version reporting and update checks.

Each subcommand is a thin wrapper around one
:class:`~forgekit.core.version_service.VersionService` operation.  Results
and failures are reported through the logging facade; a failed lookup is
logged at ERROR severity and turned into :data:`exit_codes.GENERAL_ERROR`
rather than an exception.

This module also owns the process-wide service instance, wired with the
bundled manifest and the httpx tag provider on first use.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from forgekit.cli import exit_codes
from forgekit.core.version_service import VersionService
from forgekit.exceptions import ForgeKitError
from forgekit.utils.logger import log

VERSION_SUBCOMMANDS: dict[str, str] = {
    "latest": "Print the latest released version from the Git repository.",
    "check": "Check whether the current version is the latest version.",
    "update": "Fetch the latest version from the Git repository and print it.",
    "get": "Print the current version from the manifest.",
    "restart": "Restart the service to apply any changes made.",
}


# ---------------------------------------------------------------------------
# Process-wide service
# ---------------------------------------------------------------------------

_service: VersionService | None = None
_service_lock = threading.Lock()


def get_version_service() -> VersionService:
    """Return the process-wide service, creating it on first use."""
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                from forgekit.infra.manifest_loader import get_manifest
                from forgekit.infra.tag_provider import HttpTagProvider

                _service = VersionService(get_manifest(), HttpTagProvider())
    return _service


def install_version_service(service: VersionService) -> None:
    """Replace the process-wide service."""
    global _service
    with _service_lock:
        _service = service


def reset_version_service() -> None:
    """Forget the process-wide service; the next call recreates it."""
    global _service
    with _service_lock:
        _service = None


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def _report(exc: ForgeKitError) -> int:
    log("error", str(exc))
    if exc.hint:
        log("error", exc.hint)
    return exit_codes.GENERAL_ERROR


def show_version(service: VersionService) -> int:
    """``forgekit version`` — print version and repository."""
    if service.is_private():
        log("warn", "The information shown may not be accurate for private repositories.")
        log("info", f"Current version: {service.get_version()}")
        log("info", f"Git repository: {service.get_repository()}")
        return exit_codes.SUCCESS

    for line in service.version_info().splitlines():
        log("info", line)
    return exit_codes.SUCCESS


def show_latest(service: VersionService) -> int:
    """``forgekit version latest`` — tag of the latest published release."""
    try:
        latest = service.get_latest_release()
    except ForgeKitError as exc:
        return _report(exc)
    log("info", f"Latest version: {latest}")
    return exit_codes.SUCCESS


def check_version(service: VersionService) -> int:
    """``forgekit version check`` — compare current and latest tag."""
    try:
        up_to_date = service.is_latest_version()
    except ForgeKitError as exc:
        return _report(exc)

    if up_to_date:
        log("info", "You are using the latest version.")
    else:
        log("warn", "You are using an outdated version.")
    log("info", f"Current version: {service.get_current_version()}")
    log("info", f"Latest version: {service.latest_version}")
    return exit_codes.SUCCESS


def update_version(service: VersionService) -> int:
    """``forgekit version update`` — refetch the latest tag."""
    try:
        latest = service.update_latest_version()
    except ForgeKitError as exc:
        log("error", f"Failed to update version: {exc}")
        return exit_codes.GENERAL_ERROR
    log("info", f"Current version: {service.get_current_version()}")
    log("info", f"Latest version: {latest}")
    return exit_codes.SUCCESS


def get_current(service: VersionService) -> int:
    """``forgekit version get`` — current version from the manifest."""
    log("info", f"Current version: {service.get_current_version()}")
    return exit_codes.SUCCESS


def restart(service: VersionService) -> int:
    """``forgekit version restart`` — placeholder service restart."""
    log("info", "Restarting the service...")
    log("success", "Service restarted successfully")
    return exit_codes.SUCCESS


HANDLERS: dict[str | None, Callable[[VersionService], int]] = {
    None: show_version,
    "latest": show_latest,
    "check": check_version,
    "update": update_version,
    "get": get_current,
    "restart": restart,
}


def run_version_command(subcommand: str | None) -> int:
    """Dispatch ``forgekit version [subcommand]``."""
    return HANDLERS[subcommand](get_version_service())
