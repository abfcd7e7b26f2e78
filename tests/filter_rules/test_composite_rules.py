import pytest

from ctxl.filter_rules.base_rules import BaseExclusionRules
from ctxl.filter_rules.composite_rules import CompositeExclusionRules
from ctxl.filter_rules.git_rules import GitIgnoreExclusionRules


class AlwaysExclude(BaseExclusionRules):
    def exclude(self, path: str) -> bool:
        return True


def test_requires_at_least_one_rule():
    with pytest.raises(ValueError):
        CompositeExclusionRules([])


def test_rejects_non_rule_objects():
    with pytest.raises(TypeError, match="index 1"):
        CompositeExclusionRules([GitIgnoreExclusionRules(), "*.py"])  # type: ignore[list-item]


def test_excludes_when_any_rule_excludes():
    composite = CompositeExclusionRules(
        [
            GitIgnoreExclusionRules(patterns=["*.txt"]),
            GitIgnoreExclusionRules(patterns=["build/"]),
        ]
    )
    assert composite.exclude("notes.txt")
    assert composite.exclude("build/")
    assert not composite.exclude("main.py")


def test_negation_does_not_cross_rule_boundaries():
    composite = CompositeExclusionRules(
        [
            GitIgnoreExclusionRules(patterns=["*.txt"]),
            GitIgnoreExclusionRules(patterns=["!keep.txt"]),
        ]
    )
    assert composite.exclude("keep.txt")


def test_accepts_custom_rule_types():
    composite = CompositeExclusionRules([GitIgnoreExclusionRules(), AlwaysExclude()])
    assert composite.exclude("main.py")


def test_base_rules_cannot_be_instantiated():
    with pytest.raises(TypeError):
        BaseExclusionRules()  # type: ignore[abstract]
