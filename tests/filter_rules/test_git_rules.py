import os
import tempfile
from pathlib import Path

import pytest

from ctxl.filter_rules.git_rules import GitIgnoreExclusionRules


@pytest.fixture
def temp_gitignore():
    with tempfile.NamedTemporaryFile(mode="w", delete=False) as f:
        f.write("*.txt\n")
        f.write("!important.txt\n")
        f.write("subdir/\n")
        f.write("\n")
        f.write("# comment line\n")
        f.write("*.py[cod]\n")
        f.write("**/__pycache__/\n")
    yield f.name
    os.unlink(f.name)


@pytest.fixture
def temp_npmignore():
    with tempfile.NamedTemporaryFile(mode="w", delete=False) as f:
        f.write("*.log\n")
        f.write("node_modules/\n")
        f.write("!important.log\n")
    yield f.name
    os.unlink(f.name)


@pytest.mark.parametrize(
    "path,expected",
    [
        ("file.txt", True),
        ("important.txt", False),
        ("file.py", False),
        ("subdir/file.py", True),
        ("subdir/", True),
        ("subdir/important.txt", True),
        ("another_dir/file.txt", True),
        ("another_dir/file.py", False),
        ("nested/subdir/file.txt", True),
        ("file.pyc", True),
        ("__pycache__/cache_file.py", True),
        ("lib/__pycache__/cache_file.py", True),
        ("# comment line", False),
    ],
)
def test_gitignore_exclusion_rules(temp_gitignore, path, expected):
    rules = GitIgnoreExclusionRules(temp_gitignore)
    assert rules.exclude(path) == expected, f"Failed for path: {path}"


def test_gitignore_exclusion_rules_empty_file():
    with tempfile.NamedTemporaryFile(mode="w", delete=False) as f:
        pass
    try:
        rules = GitIgnoreExclusionRules(f.name)
        assert not rules.exclude("any_file.txt"), "Empty .gitignore should not exclude any files"
    finally:
        os.unlink(f.name)


def test_gitignore_exclusion_rules_nonexistent_file():
    with pytest.raises(FileNotFoundError):
        GitIgnoreExclusionRules("nonexistent_file")


def test_missing_file_is_empty_when_allowed(tmp_path):
    rules = GitIgnoreExclusionRules(tmp_path / ".gitignore", missing_ok=True)
    assert rules.lines == []
    assert not rules.exclude("anything.py")


def test_multiple_exclusion_files(temp_gitignore, temp_npmignore):
    rules = GitIgnoreExclusionRules([temp_gitignore, temp_npmignore])

    assert rules.exclude("file.txt")
    assert not rules.exclude("important.txt")
    assert rules.exclude("debug.log")
    assert not rules.exclude("important.log")
    assert rules.exclude("node_modules/package.json")


def test_load_rules_incrementally(temp_gitignore, temp_npmignore):
    rules = GitIgnoreExclusionRules(temp_gitignore)
    assert not rules.exclude("debug.log")

    rules.load_rules(Path(temp_npmignore))

    assert rules.exclude("file.txt")
    assert rules.exclude("debug.log")


def test_literal_patterns_follow_file_patterns(temp_gitignore):
    rules = GitIgnoreExclusionRules(temp_gitignore, patterns=["*.md", "!file.txt"])
    assert rules.exclude("README.md")
    # A later negation overrides the file's *.txt pattern
    assert not rules.exclude("file.txt")


def test_directory_only_pattern():
    rules = GitIgnoreExclusionRules(patterns=["build/"])
    assert rules.exclude("build/")
    assert rules.exclude("build/output.js")
    assert not rules.exclude("build")
    assert not rules.exclude("src/builder.py")


def test_bare_name_matches_at_any_depth():
    rules = GitIgnoreExclusionRules(patterns=["node_modules"])
    assert rules.exclude("node_modules")
    assert rules.exclude("web/node_modules")
    assert rules.exclude("web/node_modules/react/index.js")
    assert not rules.exclude("web/node_modules_backup")


def test_hidden_pattern_matches_dot_entries_anywhere():
    rules = GitIgnoreExclusionRules(patterns=[".*"])
    assert rules.exclude(".env")
    assert rules.exclude("src/.cache")
    assert rules.exclude(".git/config")
    assert not rules.exclude("src/main.py")
