import os
from unittest.mock import patch

import pytest

from ctxl.filter_rules.combiner import FilterRuleSet
from ctxl.project_tree.filter_engine import FilterEngine
from ctxl.project_tree.permission_action import PermissionAction
from ctxl.project_tree.traversal import traverse


def collect(root, engine, **kwargs):
    visits = []
    traverse(root, engine, visits.append, **kwargs)
    return visits


@pytest.fixture
def default_engine():
    return FilterEngine(FilterRuleSet.default())


def test_order_directories_first_then_names(tmp_path, default_engine):
    for name in ("b.txt", "A.txt", "a.txt"):
        (tmp_path / name).write_text("")
    (tmp_path / "zdir").mkdir()
    (tmp_path / "adir").mkdir()
    (tmp_path / "adir" / "inner.txt").write_text("")

    paths = [v.entry.relative_path for v in collect(tmp_path, default_engine)]
    assert paths == ["adir", "adir/inner.txt", "zdir", "A.txt", "a.txt", "b.txt"]


def test_lineage_and_depth(tmp_path, default_engine):
    (tmp_path / "y").mkdir()
    (tmp_path / "y" / "z").write_text("")
    (tmp_path / "w").write_text("")
    (tmp_path / "x").write_text("")

    visits = {v.entry.relative_path: v for v in collect(tmp_path, default_engine)}
    assert visits["y"].lineage == (False,)
    assert visits["y/z"].lineage == (False, True)
    assert visits["y/z"].depth == 1
    assert not visits["w"].is_last
    assert visits["x"].is_last


def test_excluded_directories_are_pruned(tmp_path):
    (tmp_path / "build" / "deep").mkdir(parents=True)
    (tmp_path / "build" / "deep" / "out.py").write_text("")
    engine = FilterEngine(FilterRuleSet.create([], ["build"]))

    assert collect(tmp_path, engine) == []


def test_is_last_ignores_filtered_siblings(tmp_path, default_engine):
    (tmp_path / "a.py").write_text("")
    (tmp_path / ".zz").write_text("")

    (visit,) = collect(tmp_path, default_engine)
    assert visit.entry.relative_path == "a.py"
    assert visit.is_last


def test_missing_root(tmp_path, default_engine):
    with pytest.raises(FileNotFoundError):
        traverse(tmp_path / "missing", default_engine, lambda v: None)


def test_root_is_file(tmp_path, default_engine):
    path = tmp_path / "file.txt"
    path.write_text("")
    with pytest.raises(NotADirectoryError):
        traverse(path, default_engine, lambda v: None)


def test_unreadable_directory_ignored(tmp_path, default_engine, caplog):
    (tmp_path / "locked").mkdir()
    (tmp_path / "open.py").write_text("")
    real_listdir = os.listdir

    def listdir(path):
        if str(path).endswith("locked"):
            raise PermissionError(13, "Permission denied")
        return real_listdir(path)

    with patch("ctxl.project_tree.traversal.os.listdir", side_effect=listdir):
        paths = [v.entry.relative_path for v in collect(tmp_path, default_engine)]

    assert paths == ["locked", "open.py"]
    assert "Skipping unreadable directory" in caplog.text


def test_unreadable_directory_raises(tmp_path, default_engine):
    (tmp_path / "locked").mkdir()
    real_listdir = os.listdir

    def listdir(path):
        if str(path).endswith("locked"):
            raise PermissionError(13, "Permission denied")
        return real_listdir(path)

    with patch("ctxl.project_tree.traversal.os.listdir", side_effect=listdir):
        with pytest.raises(PermissionError, match="Access denied"):
            collect(tmp_path, default_engine, permission_action=PermissionAction.RAISE)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
def test_symlinked_directory_is_followed(tmp_path, default_engine):
    target = tmp_path / "real"
    target.mkdir()
    (target / "mod.py").write_text("")
    (tmp_path / "link").symlink_to(target, target_is_directory=True)

    paths = [v.entry.relative_path for v in collect(tmp_path, default_engine)]
    assert paths == ["link", "link/mod.py", "real", "real/mod.py"]
