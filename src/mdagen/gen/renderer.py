"""Template rendering."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mdagen.utils.logger import get_logger

from .context import RenderContext
from .directives import OutputMode, default_extension, parse_directive
from .engine import TemplateEngine
from .output import OutputRouter

logger = get_logger("renderer")


@dataclass(frozen=True)
class RenderedTemplate:
    """Result of rendering one template.

    Attributes:
        template: Template file
        mode: Output mode
        output_path: Target path (explicit or derived)
        body: Rendered text without the directive line
        explicit: Whether the path came from the directive
        written: File written by the router, if any
    """

    template: Path
    mode: OutputMode
    output_path: str
    body: str
    explicit: bool = False
    written: Path | None = None


class TemplateRenderer:
    """Renders templates against the run context and routes the result."""

    def __init__(self, engine: TemplateEngine, router: OutputRouter, template_extension: str = ".j2"):
        self.engine = engine
        self.router = router
        self.template_extension = template_extension

    def render(self, meta_class: Any, template_path: str | Path, context: RenderContext) -> RenderedTemplate:
        """Render one template for a class (or for the project when None).

        Raises:
            OutputDirectiveError: If the template emits a malformed directive
            UnknownOutputDirectiveError: If the template emits an unknown mode
        """
        template_path = Path(template_path)
        context["class"] = meta_class
        context["output"] = context["options"].output

        source = template_path.read_text(encoding="utf-8")
        rendered = self.engine.render(source, context)
        scope = meta_class.name if meta_class is not None else "project"
        logger.debug(f"Processing {scope} with template {template_path}")

        directive, body = parse_directive(rendered, str(template_path))
        mode = directive.mode if directive else OutputMode.OVERWRITE
        explicit_path = directive.path if directive else None
        output_path = explicit_path or self.default_output_path(meta_class, template_path, context["output"])

        logger.debug(f"Output mode {mode.value} to {output_path}")
        written = self.router.route(mode, output_path, body, context)
        return RenderedTemplate(
            template=template_path,
            mode=mode,
            output_path=output_path,
            body=body,
            explicit=explicit_path is not None,
            written=written,
        )

    def render_all(self, meta_class: Any, templates: list[Path], context: RenderContext) -> list[RenderedTemplate]:
        return [self.render(meta_class, template, context) for template in templates]

    def default_output_path(self, meta_class: Any, template_path: str | Path, output_root: str) -> str:
        """Output path used when the directive names none.

        Class templates produce ``<output>/<package dirs>/<ClassName><ext>``;
        project templates produce ``<output>/<template name minus extension>``.
        """
        template_path = Path(template_path)
        if meta_class is None:
            name = template_path.name
            if name.endswith(self.template_extension):
                name = name[: -len(self.template_extension)]
            else:
                name = template_path.stem
            return f"{output_root}/{name}"

        package_dir = meta_class.package_dir_name
        prefix = f"{package_dir}/" if package_dir else ""
        return f"{output_root}/{prefix}{meta_class.name}{default_extension(template_path.name)}"
