"""Shared workspace fixtures.

    + root
      - firstChild
      + middleChild
        + grandChild
          - greatGrandChild
      - lastChild
"""

from types import SimpleNamespace

import pytest

from wsnav.types import ElementType, WorkspaceElement
from wsnav.workspace import Workspace


def build_tree() -> SimpleNamespace:
    first = WorkspaceElement("firstChild", "root/firstChild", ElementType.FILE)
    great = WorkspaceElement(
        "greatGrandChild", "root/middleChild/grandChild/greatGrandChild", ElementType.FILE
    )
    grand = WorkspaceElement(
        "grandChild", "root/middleChild/grandChild", ElementType.FOLDER, [great]
    )
    middle = WorkspaceElement("middleChild", "root/middleChild", ElementType.FOLDER, [grand])
    last = WorkspaceElement("lastChild", "root/lastChild", ElementType.FILE)
    root = WorkspaceElement("folder", "root", ElementType.FOLDER, [first, middle, last])
    return SimpleNamespace(
        root=root, first=first, middle=middle, grand=grand, great=great, last=last
    )


@pytest.fixture
def nodes() -> SimpleNamespace:
    return build_tree()


@pytest.fixture
def workspace(nodes: SimpleNamespace) -> Workspace:
    """Workspace over the fixture tree with every folder expanded."""
    ws = Workspace()
    ws.reload(nodes.root)
    ws.set_expanded(nodes.root.path, True)
    ws.set_expanded(nodes.middle.path, True)
    ws.set_expanded(nodes.grand.path, True)
    return ws


@pytest.fixture
def folder_workspace():
    """Factory: workspace whose tree is a single empty folder at ``path``."""

    def _make(path: str) -> Workspace:
        return Workspace(WorkspaceElement("folder", path, ElementType.FOLDER))

    return _make


@pytest.fixture
def fresh_nodes() -> SimpleNamespace:
    """A second, structurally identical tree made of new element objects."""
    return build_tree()
