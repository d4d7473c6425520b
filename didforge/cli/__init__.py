"""didforge CLI — Typer-based command-line interface.

Provides the ``didforge`` command; ``create-config`` bootstraps the
consortium and stakeholder configuration files.

All output uses Rich for formatted terminal display.
"""
