"""forgekit — command-line application scaffold.

Banner, bundled manifest, version-check subcommands and a level-filtered
logging facade, arranged in a strict layered architecture.
"""

from forgekit.version import __version__

__all__: list[str] = ["__version__"]
