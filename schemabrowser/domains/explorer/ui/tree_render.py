"""Render a projected object list into a Textual tree."""

from __future__ import annotations

from rich.markup import escape as escape_markup
from textual.widgets import Tree

from schemabrowser.shared.core.utils import highlight_matches, substring_match

from ..app.projection import BrowserView
from ..domain.object_types import Node, ObjectType


def node_label(node: Node, highlight: str = "") -> str:
    """Markup label for a node, with the search match highlighted."""
    name = node.display_name
    label = escape_markup(name)
    if highlight:
        matched, indices = substring_match(highlight, name)
        if matched:
            label = highlight_matches(name, indices)

    table_name = node.metadata.get("table_name")
    if node.object_type is ObjectType.TRIGGERS and table_name:
        label = f"{label} [dim]({escape_markup(str(table_name))})[/]"
    return label


def populate_tree(tree: Tree, view: BrowserView) -> None:
    """Replace the tree's children with the view's items."""
    tree.clear()
    root = tree.root

    if view.error:
        root.add_leaf(f"[dim red]{escape_markup(view.error)}[/]")
    elif not view.items and not view.is_loading:
        root.add_leaf("[dim](Empty)[/]")

    highlight = view.search_text if view.is_filtered else ""
    for node in view.items:
        if node.has_children:
            root.add(node_label(node, highlight), data=node, allow_expand=True)
        else:
            root.add_leaf(node_label(node, highlight), data=node)

    root.expand()
