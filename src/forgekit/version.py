"""Package version, kept in sync with the bundled ``manifest.json``."""

__version__: str = "1.4.0"
