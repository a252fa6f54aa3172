import logging
import sys
from typing import Optional

import click

from jsx2overreact.convert import convert
from jsx2overreact.errors import ConversionError
from jsx2overreact.settings import UnsupportedPolicy, load_settings


def _setup_logging(debug: bool) -> None:
    # stdout carries the converted code, diagnostics go to stderr
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(stream=sys.stderr, format="%(message)s")
    logging.getLogger("jsx2overreact").setLevel(level)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--indent-width",
    type=click.IntRange(min=0),
    default=None,
    help="Spaces per indentation level (default: 2).",
)
@click.option(
    "--placeholders/--strict",
    default=None,
    help="Emit /* unsupported: ... */ comments instead of failing on unknown constructs.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    default=None,
    help="TOML file with converter settings.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Enable debug logging.",
)
def main(
    source,
    indent_width: Optional[int],
    placeholders: Optional[bool],
    config_path: Optional[str],
    debug: bool,
) -> None:
    """
    Convert JSX from SOURCE (a file, or stdin when omitted) into OverReact
    builder code and print it.
    """
    _setup_logging(debug)

    settings = load_settings(toml_file=config_path)
    if indent_width is not None:
        settings.render.indent = " " * indent_width
    if placeholders is not None:
        settings.render.unsupported = (
            UnsupportedPolicy.PLACEHOLDER if placeholders else UnsupportedPolicy.RAISE
        )

    try:
        # the final newline of a file is not part of the markup
        output = convert(source.read().rstrip("\r\n"), settings)
    except ConversionError as e:
        raise click.ClickException(str(e)) from e

    click.echo(output)


if __name__ == "__main__":
    main()
