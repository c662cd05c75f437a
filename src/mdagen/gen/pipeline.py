"""Generation pipeline.

One :class:`GenerationPipeline` run turns a meta-model into output files:

1. validate the model
2. load global helpers and partials
3. run ``init_platform`` on the project scripts, then load the platform
   helpers and partials
4. walk the model: for every class and each of its stereotypes, run the
   project scripts and the stereotype scripts (``init_stereotype``,
   ``init_class``), then render the stereotype's templates
5. run ``init_project_templates`` on the project scripts
6. render the project templates
7. close the aggregate files

Any exception moves the pipeline to FAILED and is re-raised; aggregate
files are closed in every case.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from mdagen.errors import Advisory, ErrorKind
from mdagen.meta.model import MetaModel
from mdagen.meta.reader import read_model
from mdagen.meta.validator import validate_model
from mdagen.utils.logger import get_logger

from .context import RenderContext
from .engine import TemplateEngine
from .options import GenerationOptions
from .output import AggregateFileManager, OutputRouter
from .paths import PathResolver
from .plugins import PluginHandle, PluginLoader
from .renderer import RenderedTemplate, TemplateRenderer
from .scripts import ScriptRunner

logger = get_logger("pipeline")


class PipelineState(Enum):
    INIT = "init"
    VALIDATE_MODEL = "validate_model"
    LOAD_GLOBALS = "load_globals"
    LOAD_PLATFORM = "load_platform"
    WALK_MODEL = "walk_model"
    PROJECT_SCRIPTS = "project_scripts"
    PROJECT_TEMPLATES = "project_templates"
    FLUSH_AGGREGATES = "flush_aggregates"
    DONE = "done"
    FAILED = "failed"


@dataclass
class GenerationReport:
    """Summary of one run.

    Attributes:
        scripts: Scripts loaded during the run
        templates: Every rendered template, in render order
        advisories: Non-fatal conditions met during the run
        state: Final pipeline state
        context: The render context at the end of the run
    """

    scripts: list[PluginHandle] = field(default_factory=list)
    templates: list[RenderedTemplate] = field(default_factory=list)
    advisories: list[Advisory] = field(default_factory=list)
    state: PipelineState = PipelineState.INIT
    context: RenderContext | None = None

    @property
    def outputs(self) -> list[tuple[str, Path]]:
        """(mode, path) of every file written."""
        return [(t.mode.value, t.written) for t in self.templates if t.written is not None]

    @property
    def discovered(self) -> int:
        return len(self.scripts) + len(self.templates)

    def advise(self, kind: ErrorKind, message: str) -> Advisory:
        advisory = Advisory(kind, message)
        self.advisories.append(advisory)
        return advisory


class GenerationPipeline:
    """Runs the generation for one platform and set of options."""

    def __init__(self, options: GenerationOptions | None = None):
        self.options = options or GenerationOptions()
        self.platform_dir = self.options.resolved_platform_dir()
        self.global_plugins_dir = self.options.resolved_global_plugins_dir()
        self.state = PipelineState.INIT
        self.state_history: list[PipelineState] = []

    def _transition(self, state: PipelineState) -> None:
        self.state = state
        self.state_history.append(state)
        logger.debug(f"Pipeline state: {state.value}")

    def generate(self, model_file: str | Path) -> GenerationReport:
        """Read a model document and run the pipeline on it.

        Reading is part of the validation state, so a malformed document
        fails the run like an invalid model does.
        """
        return self._execute(lambda: read_model(model_file, self.options.package_delimiter))

    def run(self, model: MetaModel) -> GenerationReport:
        """Run the pipeline on a model.

        Raises:
            GenerationError: On any fatal generation problem
        """
        return self._execute(lambda: model)

    def _execute(self, load_model: Callable[[], MetaModel]) -> GenerationReport:
        report = GenerationReport()
        self.state_history = []
        self._transition(PipelineState.INIT)
        start_time = time.perf_counter()

        try:
            with AggregateFileManager() as aggregates:
                self._run(load_model, report, aggregates)
        except Exception as e:
            self._transition(PipelineState.FAILED)
            report.state = self.state
            logger.error(f"Generation failed in state {self.state_history[-2].value}: {e}")
            raise

        self._transition(PipelineState.DONE)
        report.state = self.state

        if report.discovered == 0:
            message = f"No scripts or templates found for platform {self.platform_dir}"
            report.advise(ErrorKind.EMPTY_DISCOVERY, message)
            logger.warning(message)

        elapsed = time.perf_counter() - start_time
        logger.timing(f"Generation finished in {elapsed:.2f}s")
        logger.success(
            f"Rendered {len(report.templates)} templates, wrote {len(report.outputs)} files"
        )
        return report

    def _run(
        self,
        load_model: Callable[[], MetaModel],
        report: GenerationReport,
        aggregates: AggregateFileManager,
    ) -> None:
        options = self.options

        self._transition(PipelineState.VALIDATE_MODEL)
        model = load_model()
        validate_model(model)

        context = RenderContext(model, options)
        report.context = context
        engine = TemplateEngine()
        resolver = PathResolver(self.platform_dir)
        loader = PluginLoader(engine, resolver, options.script_extension, options.template_extension)
        runner = ScriptRunner(report)
        renderer = TemplateRenderer(engine, OutputRouter(aggregates), options.template_extension)

        self._transition(PipelineState.LOAD_GLOBALS)
        loader.load_helpers(self.global_plugins_dir)
        loader.load_partials(self.global_plugins_dir)

        self._transition(PipelineState.LOAD_PLATFORM)
        if not self.platform_dir.is_dir():
            logger.warning(f"Platform directory {self.platform_dir} does not exist")
        logger.key_info(f"Generating {model.name} with platform {self.platform_dir}")
        project_scripts = loader.load_scripts(self.platform_dir)
        for script in project_scripts:
            runner.run_lifecycle(script, "init_platform", context)
        loader.load_helpers(self.platform_dir)
        loader.load_partials(self.platform_dir)

        self._transition(PipelineState.WALK_MODEL)
        for meta_class in model.classes:
            for stereotype in meta_class.stereotypes:
                logger.status(f"Processing {meta_class.class_name_with_path} <<{stereotype.name}>>")
                context.set_class(meta_class, stereotype)
                self._run_scripts(runner, project_scripts, meta_class, stereotype, context)
                stereotype_scripts = loader.load_scripts(self.platform_dir, stereotype)
                self._run_scripts(runner, stereotype_scripts, meta_class, stereotype, context)

                templates = resolver.resolve(self.platform_dir, stereotype, options.template_extension)
                report.templates.extend(renderer.render_all(meta_class, templates, context))

        self._transition(PipelineState.PROJECT_SCRIPTS)
        context.set_class(None)
        for script in project_scripts:
            runner.run_lifecycle(script, "init_project_templates", context)

        self._transition(PipelineState.PROJECT_TEMPLATES)
        templates = resolver.resolve(self.platform_dir, None, options.template_extension)
        report.templates.extend(renderer.render_all(None, templates, context))

        self._transition(PipelineState.FLUSH_AGGREGATES)
        closed = aggregates.close_all()
        logger.debug(f"Closed {closed} aggregate files")
        report.scripts = loader.loaded_scripts

    @staticmethod
    def _run_scripts(
        runner: ScriptRunner,
        scripts: list[PluginHandle],
        meta_class: Any,
        stereotype: Any,
        context: RenderContext,
    ) -> None:
        for script in scripts:
            runner.run_once(script, "Stereotype", stereotype.name, stereotype, context)
            runner.run_once(script, "Class", meta_class.class_name_with_path, meta_class, context)


def generate(model_file: str | Path, options: GenerationOptions | None = None) -> GenerationReport:
    """Generate code for a model document.

    Example:
        >>> from mdagen.gen import GenerationOptions, generate
        >>> report = generate("shop.yml", GenerationOptions(output="./gen"))
    """
    return GenerationPipeline(options).generate(model_file)
