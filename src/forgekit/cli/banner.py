"""Startup banners and command descriptions.

One banner is picked at random on each run.  Add more entries to
:data:`BANNERS` to widen the rotation.
"""

from __future__ import annotations

import random
from collections.abc import Sequence

from forgekit.cli.console import console
from forgekit.utils.settings import get_settings

BANNERS: tuple[str, ...] = (
    r"""
  __                       _    _ _
 / _| ___  _ __ __ _  ___ | | _(_) |_
| |_ / _ \| '__/ _` |/ _ \| |/ / | __|
|  _| (_) | | | (_| |  __/|   <| | |_
|_|  \___/|_|  \__, |\___||_|\_\_|\__|
               |___/
""",
    r"""
 _____ ___  ____   ____ _____ _  _____ _____
|  ___/ _ \|  _ \ / ___| ____| |/ /_ _|_   _|
| |_ | | | | |_) | |  _|  _| | ' / | |  | |
|  _|| |_| |  _ <| |_| | |___| . \ | |  | |
|_|   \___/|_| \_\\____|_____|_|\_\___| |_|
""",
)


def pick_banner(rng: random.Random | None = None) -> str:
    """Return one banner from :data:`BANNERS`."""
    chooser = rng if rng is not None else random
    return chooser.choice(BANNERS)


def get_descriptions(
    long_description: str,
    short_description: str,
    argv: Sequence[str],
    rng: random.Random | None = None,
) -> dict[str, str]:
    """Return ``{"banner": ..., "description": ...}`` for the root command.

    The long description is used when help was requested (``-h`` or
    ``--help`` on the command line), the short one otherwise.
    """
    wants_help = any(arg in ("-h", "--help") for arg in argv)
    return {
        "banner": pick_banner(rng),
        "description": long_description if wants_help else short_description,
    }


def banner_enabled(disabled_by_flag: bool = False) -> bool:
    """Whether the banner should be printed on this run.

    ``--no-banner`` wins; otherwise ``FORGEKIT_PRINT_BANNER`` decides.
    """
    if disabled_by_flag:
        return False
    return get_settings().print_banner


def print_banner(banner: str) -> None:
    """Print *banner* verbatim; banners may contain markup-like characters."""
    console.print(banner, markup=False)
