import pytest

from ctxl.filter_rules.include_rules import InclusionRules


def test_empty_rules_include_everything():
    rules = InclusionRules()
    assert rules.is_open
    assert rules.include("anything/at/all.bin")


@pytest.mark.parametrize(
    "path,expected",
    [
        ("main.py", True),
        ("src/pkg/module.py", True),
        ("src/pkg/module.pyc", False),
        ("Dockerfile", True),
        ("deploy/Dockerfile", True),
        ("Dockerfile.dev", True),
        ("README.md", False),
    ],
)
def test_include_patterns(path, expected):
    rules = InclusionRules(["*.py", "Dockerfile", "Dockerfile.*"])
    assert not rules.is_open
    assert rules.include(path) == expected


def test_anchored_pattern():
    rules = InclusionRules(["/scripts/*.sh"])
    assert rules.include("scripts/build.sh")
    assert not rules.include("tools/scripts/build.sh")
