"""Tests for Workspace reload, path index and element queries."""

from types import SimpleNamespace

import pytest

from wsnav.errors import ArgumentError, NotFoundError, NotInitializedError
from wsnav.types import ElementType, WorkspaceElement
from wsnav.workspace import Workspace


class TestIndex:
    def test_root_is_retrievable(self, folder_workspace):
        ws = folder_workspace("root")
        assert ws.get_element_info("root").path == ws.get_root_path()

    def test_normalizes_paths_when_retrieving(self, folder_workspace):
        ws = folder_workspace("/some/folder//")
        info = ws.get_element_info("some/folder")
        assert info.path == ws.get_root_path() == "/some/folder//"

    def test_every_node_is_indexed(self, workspace: Workspace, nodes: SimpleNamespace):
        for node in vars(nodes).values():
            assert workspace.contains(node.path)
            info = workspace.get_element_info(node.path)
            assert list(info.child_paths) == [c.path for c in node.children]
            assert info.type == node.type

    def test_contains_unknown_and_none(self, workspace: Workspace):
        assert workspace.contains("root/nope") is False
        assert workspace.contains(None) is False

    def test_unknown_element_info_raises(self, workspace: Workspace):
        with pytest.raises(NotFoundError):
            workspace.get_element_info("root/nope")

    def test_none_element_info_raises(self, workspace: Workspace):
        with pytest.raises(ArgumentError):
            workspace.get_element_info(None)

    def test_constructor_accepts_root(self, nodes: SimpleNamespace):
        ws = Workspace(nodes.root)
        assert ws.initialized
        assert ws.is_expanded(nodes.root.path)


class TestNotInitialized:
    def test_initial_state(self):
        assert Workspace().initialized is False

    @pytest.mark.parametrize(
        "call",
        [
            lambda ws: ws.contains("a"),
            lambda ws: ws.get_element_info("a"),
            lambda ws: ws.get_parent("a"),
            lambda ws: ws.get_root_path(),
            lambda ws: ws.set_marker_value("a", "f", 1),
            lambda ws: ws.get_marker_value("a", "f"),
            lambda ws: ws.has_marker("a", "f"),
            lambda ws: ws.get_markers("a"),
        ],
    )
    def test_path_queries_fail(self, call):
        with pytest.raises(NotInitializedError):
            call(Workspace())

    def test_reload_none_uninitializes(self, workspace: Workspace):
        workspace.reload(None)
        assert workspace.initialized is False
        with pytest.raises(NotInitializedError):
            workspace.contains("root")


class TestGetParent:
    def test_returns_parent_element(self, workspace: Workspace, nodes: SimpleNamespace):
        assert workspace.get_parent(nodes.grand.path) is nodes.middle

    def test_none_for_root(self, workspace: Workspace, nodes: SimpleNamespace):
        assert workspace.get_parent(nodes.root.path) is None

    def test_none_for_empty_path(self, folder_workspace):
        assert folder_workspace("/").get_parent("") is None

    def test_empty_root_is_parent_of_top_level(self):
        child = WorkspaceElement("firstChild", "firstChild", ElementType.FILE)
        ws = Workspace(WorkspaceElement("root", "/", ElementType.FOLDER, [child]))
        assert ws.get_parent("firstChild") is ws.get_parent("/firstChild/")
        assert ws.get_parent("firstChild").path == ws.get_root_path()


class TestElementHelpers:
    def test_has_sub_elements(self, workspace: Workspace, nodes: SimpleNamespace):
        assert workspace.has_sub_elements(nodes.middle.path) is True
        assert workspace.has_sub_elements(nodes.first.path) is False

    def test_name_without_file_extension(self):
        child = WorkspaceElement("test.case.tcl", "test.case.tcl", ElementType.FILE)
        plain = WorkspaceElement("Makefile", "Makefile", ElementType.FILE)
        ws = Workspace(WorkspaceElement("root", "", ElementType.FOLDER, [child, plain]))
        assert ws.name_without_file_extension("test.case.tcl") == "test.case"
        assert ws.name_without_file_extension("Makefile") == "Makefile"

    def test_get_subpaths_is_exposed(self, workspace: Workspace):
        assert workspace.get_subpaths("a/b/c") == ["a", "a/b"]


class TestReloadSelection:
    def test_selection_follows_path_into_new_tree(
        self, workspace: Workspace, nodes: SimpleNamespace, fresh_nodes: SimpleNamespace
    ):
        workspace.set_selected(nodes.middle.path)
        fresh = fresh_nodes
        workspace.reload(fresh.root)

        assert workspace.get_selected() == nodes.middle.path
        workspace.select_successor()
        assert workspace.get_selected() == fresh.grand.path

    def test_selection_cleared_when_path_vanishes(
        self, workspace: Workspace, nodes: SimpleNamespace
    ):
        workspace.set_selected(nodes.last.path)
        workspace.reload(WorkspaceElement("folder", "root", ElementType.FOLDER))
        assert workspace.get_selected() is None

    def test_rename_request_dropped_when_path_vanishes(
        self, workspace: Workspace, nodes: SimpleNamespace
    ):
        workspace.set_selected(nodes.last.path)
        workspace.rename_selected_element()
        workspace.reload(WorkspaceElement("folder", "root", ElementType.FOLDER))
        assert workspace.has_rename_element_request() is False

    def test_expansion_survives_reload(
        self, workspace: Workspace, nodes: SimpleNamespace, fresh_nodes: SimpleNamespace
    ):
        workspace.reload(fresh_nodes.root)
        assert workspace.is_expanded(nodes.middle.path)


class TestElementModel:
    def test_dict_round_trip(self, nodes: SimpleNamespace):
        data = nodes.root.to_dict()
        assert data["type"] == "folder"
        assert data["children"][1]["children"][0]["path"] == nodes.grand.path
        assert WorkspaceElement.from_dict(data) == nodes.root

    def test_from_dict_defaults(self):
        element = WorkspaceElement.from_dict({"name": "a.tcl", "path": "a.tcl"})
        assert element.type == ElementType.FILE
        assert element.children == []
