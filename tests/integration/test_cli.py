"""Integration tests for the command-line interface.

These tests run ctxl in a subprocess and cover:
- Preset auto-detection and explicit presets
- Ad-hoc filters and .gitignore handling
- Output files and summaries
- Preset management commands
- Exit codes for usage errors and broken pipes
"""

import os
import platform
import subprocess
import sys
import xml.etree.ElementTree as ET

import pytest
import yaml

# Slow tests only run when --run-cli-tests is given
pytestmark = pytest.mark.skipif(
    "not config.getoption('--run-cli-tests')", reason="Only run when --run-cli-tests is given"
)


@pytest.fixture
def temp_project(tmp_path):
    """Create a temporary project directory with test files."""
    base_dir = tmp_path / "project"
    (base_dir / "src" / "utils").mkdir(parents=True)
    (base_dir / "docs").mkdir()
    (base_dir / "node_modules").mkdir()
    (base_dir / "build").mkdir()

    (base_dir / "src" / "main.py").write_text("def main():\n    print('Hello')\n")
    (base_dir / "src" / "utils" / "helpers.py").write_text("def helper():\n    pass\n")
    (base_dir / "docs" / "README.md").write_text("# Test Project\nDescription.\n")
    (base_dir / "src" / "main.pyc").write_bytes(b"compiled python")
    (base_dir / "server.log").write_text("DEBUG: test log\n")
    (base_dir / "package.json").write_text('{"name": "test"}\n')
    (base_dir / "build" / "output.min.js").write_text("console.log('test')\n")
    (base_dir / "node_modules" / "module.js").write_text("export default {}\n")
    (base_dir / ".gitignore").write_text("*.log\nbuild/\n")
    return base_dir


def run_cli(args, cwd=None, timeout=30):
    """Run the ctxl CLI with the given arguments and capture its output as UTF-8 text."""
    cmd = [sys.executable, "-m", "ctxl"] + [str(arg) for arg in args]
    return subprocess.run(
        cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, encoding="utf-8", cwd=cwd, timeout=timeout
    )


def file_paths(xml_text):
    return [element.get("path") for element in ET.fromstring(xml_text.encode("utf-8")).iter("file")]


def test_cli_auto_detection(temp_project, tmp_path):
    result = run_cli([temp_project], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    assert file_paths(result.stdout) == ["docs/README.md", "src/utils/helpers.py", "src/main.py", "package.json"]
    assert "node_modules" not in result.stdout
    assert "server.log" not in result.stdout
    assert "output.min.js" not in result.stdout


def test_cli_explicit_presets_and_filter(temp_project, tmp_path):
    result = run_cli([temp_project, "-p", "python", "-f", "*.md !utils"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    assert file_paths(result.stdout) == ["docs/README.md", "src/main.py"]


def test_cli_directory_structure(temp_project, tmp_path):
    result = run_cli([temp_project, "-p", "python"], cwd=tmp_path)
    tree = ET.fromstring(result.stdout.encode("utf-8")).find("project_context/directory_structure").text

    assert tree == "├── docs\n└── src\n    ├── utils\n    │   └── helpers.py\n    └── main.py\n"


def test_cli_output_file_and_summary(temp_project, tmp_path):
    output_file = tmp_path / "context.xml"
    result = run_cli([temp_project, "-p", "python", "-o", output_file, "-s", "stderr"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    assert result.stdout == ""
    assert file_paths(output_file.read_text(encoding="utf-8")) == ["src/utils/helpers.py", "src/main.py"]
    assert "Files: 2" in result.stderr
    assert "Errors: 0" in result.stderr


def test_cli_json_format(temp_project, tmp_path):
    result = run_cli([temp_project, "-p", "javascript", "--format", "json"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    assert '"project_context"' in result.stdout
    assert "module.js" not in result.stdout


def test_cli_include_dotfiles(temp_project, tmp_path):
    result = run_cli([temp_project, "--no-auto-detect", "-d", "-f", "!*.pyc"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    assert ".gitignore" in file_paths(result.stdout)


def test_cli_verbose_logging(temp_project, tmp_path):
    result = run_cli([temp_project, "-p", "cobol", "-v"], cwd=tmp_path)

    assert result.returncode == 0
    assert "WARNING: Preset 'cobol' not found. Skipping." in result.stderr
    assert "INFO: Processed" in result.stderr


def test_cli_preset_management(tmp_path):
    result = run_cli(["--save-presets"], cwd=tmp_path)
    assert result.returncode == 0, result.stderr
    assert (tmp_path / "ctxl_presets.yaml").is_file()

    result = run_cli(["--view-presets"], cwd=tmp_path)
    assert result.returncode == 0, result.stderr
    assert "python" in yaml.safe_load(result.stdout)


def test_cli_user_presets(temp_project, tmp_path):
    (tmp_path / "ctxl_presets.yaml").write_text("notes:\n  suffixes: [.md]\n  include: ['*.md']\n  exclude: []\n")
    result = run_cli([temp_project, "-p", "notes"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    assert file_paths(result.stdout) == ["docs/README.md"]


def test_cli_malformed_preset_file(temp_project, tmp_path):
    (tmp_path / "ctxl_presets.yaml").write_text("notes: [unclosed\n")
    result = run_cli([temp_project], cwd=tmp_path)

    assert result.returncode == 1
    assert "Invalid preset file" in result.stderr


def test_cli_invalid_directory(tmp_path):
    result = run_cli([tmp_path / "missing"], cwd=tmp_path)
    assert result.returncode == 1
    assert "is not a valid directory" in result.stderr


def test_cli_usage_error(tmp_path):
    result = run_cli(["--format", "yaml"], cwd=tmp_path)
    assert result.returncode == 2


def test_cli_version(tmp_path):
    result = run_cli(["--version"], cwd=tmp_path)
    assert result.returncode == 0
    assert result.stdout.startswith("ctxl ")


def test_cli_task_file(temp_project, tmp_path):
    task_file = tmp_path / "task.txt"
    task_file.write_text("Find the bug & fix it.\n", encoding="utf-8")
    result = run_cli([temp_project, "-p", "python", "--task-file", task_file], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    assert "<task>Find the bug &amp; fix it.\n</task>" in result.stdout


@pytest.mark.skipif(platform.system() == "Windows", reason="SIGPIPE is not available on Windows")
def test_cli_broken_pipe(tmp_path):
    project = tmp_path / "big"
    project.mkdir()
    for i in range(200):
        (project / f"file_{i:03}.txt").write_text("x" * 10_000 + "\n")

    cmd = [sys.executable, "-m", "ctxl", str(project), "-p", "misc"]
    with subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, cwd=tmp_path) as process:
        assert process.stdout is not None
        process.stdout.read(100)
        process.stdout.close()
        process.wait(timeout=30)

    assert process.returncode in (0, 141, -13)


def test_cli_summary_file_requires_output(temp_project, tmp_path):
    result = run_cli([temp_project, "-s", "file"], cwd=tmp_path)
    assert result.returncode == 1
    assert "--summary=file requires -o/--output" in result.stderr


def test_cli_permission_fail(tmp_path):
    if hasattr(os, "geteuid") and os.geteuid() == 0:
        pytest.skip("root can read every directory")
    project = tmp_path / "project"
    locked = project / "locked"
    locked.mkdir(parents=True)
    (project / "a.txt").write_text("a\n")
    locked.chmod(0)
    try:
        result = run_cli([project, "-P", "fail"], cwd=tmp_path)
        ignored = run_cli([project], cwd=tmp_path)
    finally:
        locked.chmod(0o755)

    assert result.returncode == 126
    assert ignored.returncode == 0
    assert file_paths(ignored.stdout) == ["a.txt"]


def test_cli_empty_directory(tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()
    result = run_cli([empty], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    root = ET.fromstring(result.stdout.encode("utf-8"))
    assert file_paths(result.stdout) == []
    assert root.find("project_context/directory_structure").text is None
