"""Tests for CLI interface."""

import json

from click.testing import CliRunner

from bitlayout.generator.cli import cli


def describe_gen_command():
    def generates_python_code(expect, tmp_path):
        output_file = tmp_path / "mac.py"
        runner = CliRunner()
        result = runner.invoke(cli, ["gen", "-f", "mac", "-o", str(output_file)])

        expect(result.exit_code) == 0
        content = output_file.read_text()
        expect("class Mhr(Struct):" in content) == True
        expect("from bitlayout_runtime import (" in content) == True

    def uses_the_installed_runtime_when_asked(expect, tmp_path):
        output_file = tmp_path / "fc.py"
        runner = CliRunner()
        result = runner.invoke(
            cli, ["gen", "-f", "frame-control", "-o", str(output_file), "--runtime-import"]
        )

        expect(result.exit_code) == 0
        expect("from bitlayout.runtime import (" in output_file.read_text()) == True

    def fails_with_unknown_frame(expect, tmp_path):
        runner = CliRunner()
        result = runner.invoke(cli, ["gen", "-f", "unknown", "-o", str(tmp_path / "out.py")])

        expect(result.exit_code) == 1
        expect("Unknown frame" in result.output) == True

    def requires_a_frame(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["gen", "-o", "out.py"])

        expect(result.exit_code) == 2


def describe_runtime_command():
    def writes_runtime_files(expect, tmp_path):
        runner = CliRunner()
        result = runner.invoke(cli, ["runtime", "-o", str(tmp_path), "--name", "rt"])

        expect(result.exit_code) == 0
        expect("Generated Python runtime" in result.output) == True
        expect(sorted(p.name for p in (tmp_path / "rt").iterdir())) == [
            "__init__.py",
            "fields.py",
            "serialization.py",
        ]


def describe_info_command():
    def shows_offsets_and_sizes(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "-f", "mac"])

        expect(result.exit_code) == 0
        expect("FrameControl" in result.output) == True
        expect("3-23 bytes" in result.output) == True

    def outputs_json(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "-f", "mac", "--json"])

        expect(result.exit_code) == 0
        data = json.loads(result.output)
        fields = {f["ident"]: f for f in data["bitfields"][0]["fields"]}
        expect(fields["dest_addr_mode"]["offset"]) == 10
        expect(data["structs"]["mhr"]) == {"min_size": 3, "max_size": 23, "kind": "bounded"}
        expect(data["structs"]["addr_extended"]["max_size"]) == 8

    def fails_with_unknown_frame(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "-f", "nope"])

        expect(result.exit_code) == 1


def describe_help():
    def lists_commands(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])

        expect(result.exit_code) == 0
        for command in ("gen", "runtime", "info"):
            expect(command in result.output) == True
