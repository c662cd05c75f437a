"""Generation pipeline package.

Modules:
    options: Generation options and bundled plugin locations
    paths: Stereotype-driven file discovery with alias redirection
    engine: Jinja2 engine with global helpers and partials
    plugins: Script, helper and partial loading
    scripts: Once-per-identity hook execution
    directives: The ``##output`` directive
    renderer: Template rendering
    output: Output routing and aggregate files
    context: The render context
    pipeline: The generation pipeline
"""

from .context import RenderContext
from .directives import OutputDirective, OutputMode, parse_directive
from .engine import TemplateEngine
from .options import GenerationOptions, list_bundled_platforms
from .output import AggregateFileManager, OutputRouter
from .paths import PathResolver
from .pipeline import GenerationPipeline, GenerationReport, PipelineState, generate
from .plugins import PluginHandle, PluginLoader
from .renderer import RenderedTemplate, TemplateRenderer
from .scripts import ScriptRunner

__all__ = [
    "AggregateFileManager",
    "GenerationOptions",
    "GenerationPipeline",
    "GenerationReport",
    "OutputDirective",
    "OutputMode",
    "OutputRouter",
    "PathResolver",
    "PipelineState",
    "PluginHandle",
    "PluginLoader",
    "RenderContext",
    "RenderedTemplate",
    "ScriptRunner",
    "TemplateEngine",
    "TemplateRenderer",
    "generate",
    "list_bundled_platforms",
    "parse_directive",
]
