"""Main CLI entry point for mdagen.

Subcommands are imported only when invoked, so ``mdagen --help`` does not
load the generation pipeline.
"""

import importlib
import sys

import click

from mdagen import __version__


class LazyGroup(click.Group):
    """Click group that lazily loads subcommands only when invoked."""

    commands_by_name = {
        "generate": "mdagen.cli.generate_cmd",
        "platforms": "mdagen.cli.platforms_cmd",
    }

    def get_command(self, ctx, cmd_name):
        if cmd_name not in self.commands_by_name:
            return None
        mod = importlib.import_module(self.commands_by_name[cmd_name])
        return getattr(mod, cmd_name)

    def list_commands(self, ctx):
        return sorted(self.commands_by_name)


@click.group(cls=LazyGroup)
@click.version_option(version=__version__, prog_name="mdagen")
def cli():
    """mdagen - model-driven code generator.

    Generates source trees from a platform-independent model by running the
    scripts and templates a platform provides for each class stereotype.

    Examples:

    \b
      mdagen generate shop.yml                 Generate with the default platform
      mdagen generate shop.yml -p ./platform   Generate with a custom platform
      mdagen platforms                         List bundled platforms
    """


def main():
    """Entry point for the mdagen CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nInterrupted", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
