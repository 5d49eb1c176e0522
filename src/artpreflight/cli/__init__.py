"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from artpreflight import __version__


@click.group()
@click.version_option(version=__version__, prog_name="artpreflight")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True),
    help="Path to a YAML configuration file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """artpreflight — pre-press risk detection for vector artwork."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _register_commands() -> None:
    from artpreflight.cli.check import check  # noqa: F811
    from artpreflight.cli.rules import rules  # noqa: F811

    main.add_command(check)
    main.add_command(rules)


_register_commands()
