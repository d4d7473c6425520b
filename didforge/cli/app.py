"""Main Typer application — registers the CLI commands.

Entry point: ``didforge`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import typer

from didforge.cli.commands.create_config import create_config_cmd

app = typer.Typer(
    name="didforge",
    help="didforge: bootstrap the trust configuration of a consortium DID network.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(
    name="create-config",
    help="Create consortium and stakeholder config files with anchored DIDs.",
)(create_config_cmd)


@app.command(name="version", help="Show the didforge version.")
def version_cmd() -> None:
    """Print the installed didforge version."""
    from didforge import __version__

    typer.echo(__version__)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
