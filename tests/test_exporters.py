"""Tests for exporters."""

import json
import pytest

from tree.model import DependencyTree
from exporters.text_exporter import to_text
from exporters.ascii_exporter import to_ascii
from exporters.json_exporter import to_json


def make_tree():
    """Build app.js -> (b.js -> c.js, c.js, ghost.js missing)."""
    tree = DependencyTree("/repo/app.js")
    tree.add_files(["/repo/app.js", "/repo/b.js", "/repo/c.js"])
    tree.set_dependencies("/repo/app.js", ["/repo/b.js", "/repo/c.js", "/repo/ghost.js"])
    tree.set_dependencies("/repo/b.js", ["/repo/c.js"])
    tree.set_dependencies("/repo/c.js", [])
    tree.add_missing("/repo/ghost.js")
    return tree


class TestTextExporter:
    """Tests for the plain list exporter."""

    def test_absolute_paths(self):
        output = to_text(make_tree())

        assert output.splitlines() == ["/repo/app.js", "/repo/b.js", "/repo/c.js"]

    def test_relative_paths(self):
        output = to_text(make_tree(), base="/repo")

        assert output.splitlines() == ["app.js", "b.js", "c.js"]

    def test_empty_tree(self):
        assert to_text(DependencyTree("/repo/app.js")) == ""


class TestASCIIExporter:
    """Tests for ASCII exporter."""

    def test_empty_tree(self):
        """Test exporting empty tree."""
        output = to_ascii(DependencyTree("/repo/app.js"))

        assert output == ""

    def test_simple_tree(self):
        """Test simple tree structure."""
        output = to_ascii(make_tree(), base="/repo")

        assert output.splitlines()[0] == "app.js"
        assert "b.js" in output
        assert "└──" in output

    def test_repeated_file_marked(self):
        """Test that files shown earlier are marked with [*]."""
        output = to_ascii(make_tree(), base="/repo")

        assert "c.js [*]" in output
        assert output.count("c.js") == 2

    def test_missing_hidden_by_default(self):
        output = to_ascii(make_tree(), base="/repo")

        assert "ghost.js" not in output

    def test_missing_shown(self):
        output = to_ascii(make_tree(), base="/repo", include_missing=True)

        assert "ghost.js [MISSING]" in output

    def test_unreadable_marked(self):
        tree = make_tree()
        tree.add_unreadable("/repo/b.js", "permission denied")

        output = to_ascii(tree, base="/repo")

        assert "b.js [UNREADABLE]" in output

    def test_ascii_style(self):
        """Test pure ASCII tree style."""
        output = to_ascii(make_tree(), base="/repo", style="ascii")

        # Should NOT have Unicode characters
        assert "├" not in output
        assert "└" not in output
        assert "│" not in output
        assert "\\-- " in output

    def test_nested_indentation(self):
        output = to_ascii(make_tree(), base="/repo", style="ascii")

        assert output.splitlines() == [
            "app.js",
            "|-- b.js",
            "|   \\-- c.js",
            "\\-- c.js [*]",
        ]


class TestJSONExporter:
    """Tests for JSON exporter."""

    def test_empty_tree(self):
        """Test exporting empty tree."""
        data = json.loads(to_json(DependencyTree("/repo/app.js")))

        assert data["files"] == []
        assert data["edges"] == []

    def test_simple_tree(self):
        data = json.loads(to_json(make_tree(), base="/repo"))

        assert data["root"] == "app.js"
        assert data["files"] == ["app.js", "b.js", "c.js"]
        assert {"source": "app.js", "target": "b.js"} in data["edges"]
        assert {"source": "app.js", "target": "ghost.js", "missing": True} in data["edges"]
        assert data["missing"] == ["ghost.js"]

    def test_without_missing(self):
        data = json.loads(to_json(make_tree(), include_missing=False))

        assert "missing" not in data
        assert all(edge["target"] != "/repo/ghost.js" for edge in data["edges"])

    def test_unreadable(self):
        tree = make_tree()
        tree.add_unreadable("/repo/c.js", "permission denied")

        data = json.loads(to_json(tree))

        assert data["unreadable"] == {"/repo/c.js": "permission denied"}
