"""Tests for the mdagen generate command.

Tests the command including:
- Help output and option wiring
- Generation with the bundled python platform
- Configuration file and command line precedence
- Failure reporting and exit codes
"""

import pytest
from click.testing import CliRunner

from mdagen.cli.generate_cmd import generate
from tests.conftest import write_files

SHOP_MODEL = """\
name: shop
classes:
  - name: Customer
    package: crm
    stereotypes: [Entity]
    attributes:
      - {name: name, type: string}
  - name: Order
    package: orders
    stereotypes: [Entity, Service]
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project(tmp_path, monkeypatch):
    """A working directory holding shop.yml."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "shop.yml").write_text(SHOP_MODEL)
    return tmp_path


class TestGenerateHelp:
    def test_help_shows_options(self, runner):
        result = runner.invoke(generate, ["--help"])

        assert result.exit_code == 0
        for option in ("--platform", "--platform-dir", "--output", "--config", "--quiet"):
            assert option in result.output

    def test_missing_model_file(self, runner, tmp_path):
        result = runner.invoke(generate, [str(tmp_path / "missing.yml")])
        assert result.exit_code == 2


class TestGenerateRuns:
    """Run the command against real platforms."""

    def test_generates_python_platform(self, runner, project):
        result = runner.invoke(generate, ["shop.yml", "--output", "out"])

        assert result.exit_code == 0, result.output
        assert (project / "out" / "crm" / "Customer.py").is_file()
        assert (project / "out" / "orders" / "Order.py").is_file()
        assert (project / "out" / "README.md").is_file()
        assert "Rendered" in result.output

    def test_default_output_directory(self, runner, project):
        result = runner.invoke(generate, ["shop.yml", "--quiet"])

        assert result.exit_code == 0, result.output
        assert (project / "gen" / "MANIFEST.txt").is_file()

    def test_quiet_prints_nothing_on_success(self, runner, project):
        result = runner.invoke(generate, ["shop.yml", "-q", "-o", "out"])

        assert result.exit_code == 0
        assert "Rendered" not in result.output

    def test_config_file_is_used(self, runner, project):
        (project / "mdagen.yml").write_text("generation:\n  output: ./from_config\n")

        result = runner.invoke(generate, ["shop.yml", "-q"])

        assert result.exit_code == 0, result.output
        assert (project / "from_config" / "MANIFEST.txt").is_file()

    def test_output_option_overrides_config(self, runner, project):
        config_file = project / "ci.yml"
        config_file.write_text("generation:\n  output: ./from_config\n")

        result = runner.invoke(generate, ["shop.yml", "--config", str(config_file), "-o", "cli", "-q"])

        assert result.exit_code == 0, result.output
        assert (project / "cli" / "MANIFEST.txt").is_file()
        assert not (project / "from_config").exists()

    def test_custom_platform_directory(self, runner, project):
        write_files(
            project / "platform",
            {"Entity/Name.txt.j2": "{{ class.name }}\n"},
        )

        result = runner.invoke(generate, ["shop.yml", "-p", "platform", "-o", "out", "-q"])

        assert result.exit_code == 0, result.output
        assert (project / "out" / "crm" / "Customer.txt").read_text() == "Customer\n"
        assert (project / "out" / "orders" / "Order.txt").read_text() == "Order\n"


class TestGenerateFailures:
    """Fatal errors end with exit code 1."""

    def test_invalid_model(self, runner, project):
        (project / "bad.yml").write_text("classes:\n  - {name: Order}\n  - {name: Order}\n")

        result = runner.invoke(generate, ["bad.yml", "-o", "out"])

        assert result.exit_code == 1
        assert "Generation failed" in result.output
        assert not (project / "out").exists()

    def test_unknown_output_directive(self, runner, project):
        write_files(project / "platform", {"Entity/Bad.j2": "##output sideways x\nbody\n"})

        result = runner.invoke(generate, ["shop.yml", "-p", "platform", "-o", "out"])

        assert result.exit_code == 1
        assert "Unknown output directive" in result.output
