"""CLI layer — argument parsing, banner output and the error boundary.

Outermost layer: it wires the manifest, the logging facade and the
version service together for each run.  It may import from ``core``,
``infra`` and ``utils``; nothing imports from ``cli``.
"""
