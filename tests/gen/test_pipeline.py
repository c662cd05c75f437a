"""Tests for the generation pipeline."""

import pytest

from mdagen.errors import ErrorKind, ModelValidationError, PluginLoadError, UnknownOutputDirectiveError
from mdagen.gen.options import GenerationOptions
from mdagen.gen.pipeline import GenerationPipeline, PipelineState, generate
from tests.conftest import create_test_class, create_test_model, write_files

TRACE_SCRIPT = """\
LABEL = "{label}"


def init_platform(context):
    context.setdefault("trace", []).append(LABEL + ":platform")


def init_stereotype(context, stereotype):
    context.setdefault("trace", []).append(f"{{LABEL}}:stereotype:{{stereotype.name}}")


def init_class(context, meta_class):
    context.setdefault("trace", []).append(f"{{LABEL}}:class:{{meta_class.class_name_with_path}}")


def init_project_templates(context):
    context.setdefault("trace", []).append(LABEL + ":project_templates")
"""

ORDER_TEMPLATE = "##output aggregate {{ output }}/order.txt\n{{ class.name }}<{{ stereotype.name }}>:{% include \"tag\" %}\n"


@pytest.fixture
def trace_platform(platform_dir):
    write_files(
        platform_dir,
        {
            "project.py": TRACE_SCRIPT.format(label="project"),
            "Entity/entity.py": TRACE_SCRIPT.format(label="entity"),
            "Entity/Order.j2": ORDER_TEMPLATE,
            "Service/Order.j2": ORDER_TEMPLATE,
            "Count.j2": "##output property\n{{ trace | length }}\n",
            "Report.txt.j2": "{{ count | join('') }}{{ trace | join(',') }}",
        },
    )
    return platform_dir


@pytest.fixture
def options(tmp_path, platform_dir):
    global_dir = write_files(tmp_path / "global", {"_partials/tag.j2": "global"})
    return GenerationOptions(
        platform_dir=platform_dir,
        global_plugins_dir=global_dir,
        output=str(tmp_path / "gen"),
    )


class TestWalkOrder:
    """Test the order of script hooks and templates."""

    def test_hook_order(self, trace_platform, options):
        model = create_test_model(
            create_test_class("A", stereotypes=["Entity", "Service"]),
            create_test_class("B", stereotypes=["Entity"]),
        )

        report = GenerationPipeline(options).run(model)

        assert report.context["trace"] == [
            "project:platform",
            "project:stereotype:Entity",
            "project:class:orders::A",
            "entity:stereotype:Entity",
            "entity:class:orders::A",
            "project:stereotype:Service",
            "project:class:orders::B",
            "entity:class:orders::B",
            "project:project_templates",
        ]

    def test_templates_render_per_class_and_stereotype(self, tmp_path, trace_platform, options):
        write_files(trace_platform, {"_partials/tag.j2": "platform"})
        model = create_test_model(
            create_test_class("A", stereotypes=["Entity", "Service"]),
            create_test_class("B", stereotypes=["Entity"]),
        )

        GenerationPipeline(options).run(model)

        # Platform partials load after global ones and win
        assert (tmp_path / "gen" / "order.txt").read_text() == (
            "A<Entity>:platform\nA<Service>:platform\nB<Entity>:platform\n"
        )

    def test_project_templates_see_accumulated_properties(self, tmp_path, trace_platform, options):
        GenerationPipeline(options).run(create_test_model())

        report_text = (tmp_path / "gen" / "Report.txt").read_text()
        assert report_text.startswith("6\n")
        assert report_text.endswith("project:project_templates")

    def test_same_simple_name_in_two_packages_runs_class_hook_twice(self, trace_platform, options):
        model = create_test_model(
            create_test_class("Item", package=("a",)),
            create_test_class("Item", package=("b",)),
        )

        report = GenerationPipeline(options).run(model)

        class_calls = [entry for entry in report.context["trace"] if entry.startswith("entity:class")]
        assert class_calls == ["entity:class:a::Item", "entity:class:b::Item"]

    def test_unstereotyped_classes_are_skipped(self, tmp_path, trace_platform, options):
        report = GenerationPipeline(options).run(create_test_model(create_test_class(stereotypes=[])))

        assert not any("class" in entry for entry in report.context["trace"])
        assert not (tmp_path / "gen" / "order.txt").exists()


class TestStates:
    """Test pipeline states and the report."""

    def test_successful_run(self, trace_platform, options):
        pipeline = GenerationPipeline(options)
        report = pipeline.run(create_test_model())

        assert pipeline.state_history == [
            PipelineState.INIT,
            PipelineState.VALIDATE_MODEL,
            PipelineState.LOAD_GLOBALS,
            PipelineState.LOAD_PLATFORM,
            PipelineState.WALK_MODEL,
            PipelineState.PROJECT_SCRIPTS,
            PipelineState.PROJECT_TEMPLATES,
            PipelineState.FLUSH_AGGREGATES,
            PipelineState.DONE,
        ]
        assert report.state is PipelineState.DONE
        assert [s.name for s in report.scripts] == ["project", "entity"]
        assert [mode for mode, _ in report.outputs] == ["aggregate", "overwrite"]
        assert [t.mode.value for t in report.templates] == ["aggregate", "property", "overwrite"]
        assert report.discovered == 5

    def test_validation_failure_writes_nothing(self, tmp_path, trace_platform, options):
        model = create_test_model(create_test_class("Order"), create_test_class("Order"))
        pipeline = GenerationPipeline(options)

        with pytest.raises(ModelValidationError):
            pipeline.run(model)

        assert pipeline.state_history == [
            PipelineState.INIT,
            PipelineState.VALIDATE_MODEL,
            PipelineState.FAILED,
        ]
        assert not (tmp_path / "gen").exists()

    def test_malformed_document_fails_in_validation(self, tmp_path, trace_platform, options):
        model_file = tmp_path / "bad.yml"
        model_file.write_text("classes:\n  - {name: A, attributes: [{name: x, visibility: secret}]}\n")
        pipeline = GenerationPipeline(options)

        with pytest.raises(ModelValidationError):
            pipeline.generate(model_file)

        assert pipeline.state is PipelineState.FAILED
        assert pipeline.state_history == [
            PipelineState.INIT,
            PipelineState.VALIDATE_MODEL,
            PipelineState.FAILED,
        ]
        assert not (tmp_path / "gen").exists()

    def test_unknown_directive_fails_run_and_closes_aggregates(self, tmp_path, platform_dir, options):
        write_files(
            platform_dir,
            {
                "Entity/a.j2": "##output aggregate {{ output }}/all.txt\nfirst\n",
                "Entity/b.j2": "##output scatter\n",
            },
        )
        pipeline = GenerationPipeline(options)

        with pytest.raises(UnknownOutputDirectiveError):
            pipeline.run(create_test_model())

        assert pipeline.state is PipelineState.FAILED
        assert pipeline.state_history[-2] is PipelineState.WALK_MODEL
        assert (tmp_path / "gen" / "all.txt").read_text() == "first\n"

    def test_plugin_load_failure(self, platform_dir, options):
        write_files(platform_dir, {"broken.py": "import not_a_real_module_xyz\n"})

        with pytest.raises(PluginLoadError):
            GenerationPipeline(options).run(create_test_model())

    def test_hook_exception_propagates(self, platform_dir, options):
        write_files(platform_dir, {"Entity/boom.py": "def init_class(context, c):\n    raise KeyError('boom')\n"})
        pipeline = GenerationPipeline(options)

        with pytest.raises(KeyError):
            pipeline.run(create_test_model())
        assert pipeline.state is PipelineState.FAILED

    def test_empty_discovery_is_advisory(self, platform_dir, options):
        report = GenerationPipeline(options).run(create_test_model())

        assert report.state is PipelineState.DONE
        assert [a.kind for a in report.advisories] == [ErrorKind.EMPTY_DISCOVERY]
        assert not ErrorKind.EMPTY_DISCOVERY.fatal

    def test_missing_hooks_are_advisory(self, platform_dir, options):
        write_files(platform_dir, {"Entity/partial.py": "def init_class(context, c):\n    pass\n"})

        report = GenerationPipeline(options).run(create_test_model())

        kinds = {a.kind for a in report.advisories}
        assert kinds == {ErrorKind.MISSING_HOOK}
        assert any("init_stereotype" in a.message for a in report.advisories)


class TestGenerate:
    """Test the file-based entry points."""

    def test_generate_reads_model_file(self, tmp_path, trace_platform, options):
        model_file = tmp_path / "model.yml"
        model_file.write_text("name: shop\nclasses:\n  - {name: Order, stereotypes: [Entity]}\n")

        report = generate(model_file, options)

        assert report.state is PipelineState.DONE
        assert (tmp_path / "gen" / "order.txt").read_text() == "Order<Entity>:global\n"

    def test_pipeline_uses_global_helpers(self, tmp_path, platform_dir, options):
        write_files(options.global_plugins_dir, {"_helpers/shout.py": "def shout(v):\n    return v.upper()\n"})
        write_files(platform_dir, {"Entity/Name.txt.j2": "{{ class.name | shout }}"})

        GenerationPipeline(options).run(create_test_model())

        assert (tmp_path / "gen" / "orders" / "Order.txt").read_text() == "ORDER"
