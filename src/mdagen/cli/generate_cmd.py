"""The ``mdagen generate`` command."""

import logging
import sys
from contextlib import nullcontext

import click

from .styles import Messages, console


@click.command()
@click.argument("model_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--platform", "-p", default=None, help="Platform name or directory (default: python)")
@click.option(
    "--platform-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Explicit platform directory (overrides --platform)",
)
@click.option("--output", "-o", default=None, help="Output root directory (default: ./gen)")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Configuration file (default: ./mdagen.yml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Only report errors")
def generate(model_file, platform, platform_dir, output, config_path, verbose, quiet):
    """Generate code for MODEL_FILE.

    Settings come from the ``generation`` section of mdagen.yml; options given
    on the command line take precedence.

    Examples:

    \b
      $ mdagen generate shop.yml
      $ mdagen generate shop.yml --platform ./platforms/java --output ./src/gen
      $ mdagen generate shop.yml --config ci/mdagen.yml --quiet
    """
    from mdagen.errors import GenerationError
    from mdagen.gen.options import GenerationOptions
    from mdagen.gen.pipeline import GenerationPipeline
    from mdagen.utils.log_filter import GENERATOR_LOGGERS, quiet_logger
    from mdagen.utils.logger import set_log_level

    if verbose:
        set_log_level(logging.DEBUG)

    try:
        options = GenerationOptions.from_config(
            config_path,
            platform=platform,
            platform_dir=platform_dir,
            output=output,
        )
        pipeline = GenerationPipeline(options)
        if not quiet:
            console.print(Messages.header(f"\nGenerating {model_file}\n"))
            console.print("  " + Messages.label_value("Platform", str(pipeline.platform_dir)))
            console.print("  " + Messages.label_value("Output", options.output))

        with quiet_logger(GENERATOR_LOGGERS) if quiet else nullcontext():
            report = pipeline.generate(model_file)
    except GenerationError as e:
        console.print(f"\n{Messages.error(f'Generation failed: {e}')}")
        sys.exit(1)

    if quiet:
        return

    console.print()
    for mode, path in report.outputs:
        console.print(f"  [dim]{mode:<9}[/dim] {Messages.path(str(path))}")
    for advisory in report.advisories:
        if advisory.kind.value != "missing_hook":
            console.print(f"  {Messages.warning(advisory.message)}")
    console.print(
        f"\n{Messages.success(f'Rendered {len(report.templates)} templates, wrote {len(report.outputs)} files')}"
    )
