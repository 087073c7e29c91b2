"""Command-line interface for the GraphQL schema linter."""

import rich_click as click

from .. import __version__
from .lint import lint_command
from .rules import rules_command

# Configure rich-click styling
click.rich_click.TEXT_MARKUP = "rich"
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.STYLE_OPTION = "bold cyan"
click.rich_click.STYLE_ARGUMENT = "bold yellow"
click.rich_click.STYLE_COMMAND = "bold green"
click.rich_click.STYLE_SWITCH = "bold blue"


@click.group(name="gqlint")
@click.version_option(version=__version__, prog_name="gqlint")
def main() -> None:
    """🔎 **gqlint** - Lint GraphQL schemas.

    Finds unused types, checks federation @key directives and verifies Relay
    connection conventions in schema definition files.
    """
    pass


main.add_command(lint_command)
main.add_command(rules_command)


if __name__ == "__main__":
    main()


__all__ = ["main"]
