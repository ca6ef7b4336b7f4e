"""Tests for dispatcher.py: argument validation and result normalisation."""

from pathlib import Path

import pytest

from dispatcher import Dispatcher
from errors import ArgumentError
from settings import WorkspaceConfig
from tools import TOOL_REGISTRY, Param, ToolSpec


@pytest.fixture
def dispatcher(config: WorkspaceConfig) -> Dispatcher:
    return Dispatcher(config)


class TestArgumentValidation:
    def test_unknown_tool(self, dispatcher: Dispatcher):
        with pytest.raises(ArgumentError, match="Unknown tool: format_disk"):
            dispatcher.dispatch("format_disk", {})

    def test_missing_required(self, dispatcher: Dispatcher):
        with pytest.raises(ArgumentError, match="missing required parameter 'file_path'"):
            dispatcher.dispatch("read_file", {})

    def test_null_counts_as_missing(self, dispatcher: Dispatcher):
        with pytest.raises(ArgumentError):
            dispatcher.dispatch("read_file", {"file_path": None})

    def test_wrong_type(self, dispatcher: Dispatcher):
        with pytest.raises(ArgumentError, match="must be a string"):
            dispatcher.dispatch("list_directory", {"directory_path": 42})

    def test_arguments_must_be_a_mapping(self, dispatcher: Dispatcher):
        with pytest.raises(ArgumentError):
            dispatcher.dispatch("read_file", ["a.txt"])

    def test_invalid_write_touches_nothing(self, dispatcher: Dispatcher, root: Path):
        with pytest.raises(ArgumentError):
            dispatcher.dispatch("write_file", {"file_path": "new/a.txt", "content": 123})
        assert list(root.iterdir()) == []

    def test_lone_surrogate_content_touches_nothing(self, dispatcher: Dispatcher, root: Path):
        with pytest.raises(ArgumentError, match="not valid UTF-8"):
            dispatcher.dispatch("write_file", {"file_path": "a.txt", "content": "\ud800"})
        assert list(root.iterdir()) == []

    def test_lone_surrogate_path(self, dispatcher: Dispatcher):
        with pytest.raises(ArgumentError, match="file_path"):
            dispatcher.dispatch("read_file", {"file_path": "a\udc00\ud800"})

    @pytest.mark.parametrize("depth", [True, "2", [1], float("nan"), float("inf")])
    def test_bad_max_depth(self, dispatcher: Dispatcher, depth):
        with pytest.raises(ArgumentError):
            dispatcher.dispatch("tree_view", {"directory_path": "", "max_depth": depth})

    def test_handler_not_called_on_invalid_request(self, config: WorkspaceConfig):
        calls = []
        spy = ToolSpec(
            "spy", "records calls", lambda root, **kw: calls.append(kw) or "ok",
            [Param("target", "string", "anything")],
        )
        d = Dispatcher(config, registry={"spy": spy})
        with pytest.raises(ArgumentError):
            d.dispatch("spy", {"target": 1})
        assert calls == []
        assert d.dispatch("spy", {"target": "x", "extra": 1}).ok
        assert calls == [{"target": "x"}]


class TestResults:
    def test_write_then_read(self, dispatcher: Dispatcher, root: Path):
        written = dispatcher.dispatch("write_file", {"file_path": "d/a.txt", "content": "hi\nthere\n"})
        assert written.ok
        assert written.text == "Successfully wrote 9 bytes to d/a.txt"

        read = dispatcher.dispatch("read_file", {"file_path": "d/a.txt"})
        assert read.ok
        assert read.text == "hi\nthere\n"

    def test_not_found_is_soft_failure(self, dispatcher: Dispatcher):
        result = dispatcher.dispatch("delete_file", {"file_path": "never.txt"})
        assert not result.ok
        assert result.kind == "not_found"
        assert result.text.startswith("delete_file:")
        assert "never.txt" in result.text

    def test_containment_is_soft_failure_naming_the_operation(self, dispatcher: Dispatcher):
        result = dispatcher.dispatch("read_file", {"file_path": "../secret.txt"})
        assert not result.ok
        assert result.kind == "containment_violation"
        assert result.text.startswith("read_file: access denied")
        assert "../secret.txt" in result.text

    def test_type_mismatch(self, dispatcher: Dispatcher, root: Path):
        (root / "f.txt").write_text("x")
        result = dispatcher.dispatch("delete_directory", {"directory_path": "f.txt"})
        assert result.kind == "type_mismatch"

    def test_create_directory_twice(self, dispatcher: Dispatcher):
        first = dispatcher.dispatch("create_directory", {"directory_path": "x/y"})
        second = dispatcher.dispatch("create_directory", {"directory_path": "x/y"})
        assert first.ok and second.ok
        assert second.text == "Successfully created directory: x/y"

    def test_list_empty_directory(self, dispatcher: Dispatcher):
        result = dispatcher.dispatch("list_directory", {"directory_path": ""})
        assert result.ok
        assert result.text == "Contents of directory: .\n\n(empty directory)"

    def test_tree_view_float_depth_truncates(self, dispatcher: Dispatcher, root: Path):
        (root / "a" / "b").mkdir(parents=True)
        (root / "a" / "b" / "c.txt").write_text("x")
        result = dispatcher.dispatch("tree_view", {"directory_path": "", "max_depth": 2.9})
        assert result.ok
        assert "b/" in result.text
        assert "c.txt" not in result.text

    def test_tree_view_defaults_to_unlimited(self, dispatcher: Dispatcher, root: Path):
        (root / "a" / "b").mkdir(parents=True)
        (root / "a" / "b" / "c.txt").write_text("hello")
        result = dispatcher.dispatch("tree_view", {"directory_path": "/"})
        assert result.text.endswith("        └── c.txt (5 bytes)")

    def test_unexpected_os_error_becomes_io_error(self, config: WorkspaceConfig):
        def boom(root, **kw):
            raise PermissionError(13, "Permission denied", str(root / "locked"))

        d = Dispatcher(config, registry={"boom": ToolSpec("boom", "fails", boom)})
        result = d.dispatch("boom", {})
        assert result.kind == "io_error"
        assert "locked" in result.text

    def test_to_dict_shapes(self, dispatcher: Dispatcher):
        ok = dispatcher.dispatch("list_directory", {"directory_path": ""}).to_dict()
        assert ok == {"ok": True, "tool": "list_directory", "result": ok["result"]}
        bad = dispatcher.dispatch("read_file", {"file_path": "nope"}).to_dict()
        assert set(bad) == {"ok", "tool", "kind", "error"}
        assert bad["ok"] is False


def test_registry_covers_every_operation():
    assert set(TOOL_REGISTRY) == {
        "read_file",
        "write_file",
        "delete_file",
        "create_directory",
        "delete_directory",
        "list_directory",
        "tree_view",
    }
