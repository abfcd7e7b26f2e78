"""Test configuration and fixtures for ctxl."""

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def sample_project(tmp_path):
    """A small mixed project.

    Layout::

        .gitignore          (*.log, secrets/)
        .env
        README.md
        app.log
        setup.py
        docs/guide.md
        node_modules/lib/index.js
        secrets/key.py
        src/main.py
        src/utils/helpers.py
        src/utils/__pycache__/helpers.cpython-312.pyc
    """
    (tmp_path / "src" / "utils" / "__pycache__").mkdir(parents=True)
    (tmp_path / "docs").mkdir()
    (tmp_path / "node_modules" / "lib").mkdir(parents=True)
    (tmp_path / "secrets").mkdir()

    (tmp_path / ".gitignore").write_text("*.log\nsecrets/\n")
    (tmp_path / ".env").write_text("TOKEN=abc\n")
    (tmp_path / "README.md").write_text("# Sample\n")
    (tmp_path / "app.log").write_text("started\n")
    (tmp_path / "setup.py").write_text("from setuptools import setup\n")
    (tmp_path / "docs" / "guide.md").write_text("Guide\n")
    (tmp_path / "node_modules" / "lib" / "index.js").write_text("module.exports = {}\n")
    (tmp_path / "secrets" / "key.py").write_text("KEY = 1\n")
    (tmp_path / "src" / "main.py").write_text("def main():\n    print('Hello')\n")
    (tmp_path / "src" / "utils" / "helpers.py").write_text("def helper():\n    pass\n")
    (tmp_path / "src" / "utils" / "__pycache__" / "helpers.cpython-312.pyc").write_bytes(b"\x00\x01compiled")
    return tmp_path
