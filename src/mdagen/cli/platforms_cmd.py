"""The ``mdagen platforms`` command."""

import click

from .styles import Messages, console


@click.command()
def platforms():
    """List the platforms bundled with mdagen."""
    from mdagen.gen.options import bundled_platforms_root, list_bundled_platforms

    names = list_bundled_platforms()
    if not names:
        console.print(Messages.warning("No bundled platforms found"))
        return

    console.print(Messages.header("Bundled platforms"))
    for name in names:
        console.print(f"  {name}  {Messages.path(str(bundled_platforms_root() / name))}")
