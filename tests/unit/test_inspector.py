"""Unit tests for the project inspector."""

import pytest

from qodana_cli.core.inspector import ProjectInspector


@pytest.fixture
def inspector():
    return ProjectInspector()


def touch(root, *names):
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")


class TestProjectInspector:
    """Tests for ProjectInspector."""

    def test_python_project(self, inspector, project_dir):
        """Test a Python project maps to the Python linter."""
        assert inspector.detect(project_dir) == "jetbrains/qodana-python:2022.1"

    def test_dominant_language_wins(self, inspector, tmp_path):
        """Test the language with most files is chosen."""
        touch(tmp_path, "a.java", "b/B.java", "c.kt", "d.py")
        assert inspector.languages(tmp_path) == ["Java", "Kotlin", "Python"]
        assert inspector.detect(tmp_path) == "jetbrains/qodana-jvm-community:2022.1"

    def test_tie_is_alphabetical(self, inspector, tmp_path):
        """Test equally common languages are ordered by name."""
        touch(tmp_path, "main.go", "index.php")
        assert inspector.languages(tmp_path) == ["Go", "PHP"]

    def test_skipped_directories(self, inspector, tmp_path):
        """Test vendored and build directories are ignored."""
        touch(tmp_path, "app.ts", "node_modules/x/a.js", "node_modules/x/b.js", ".git/hooks/c.py")
        assert inspector.languages(tmp_path) == ["TypeScript"]

    def test_unknown_project(self, inspector, tmp_path):
        """Test no known languages means no linter."""
        touch(tmp_path, "README.md", "Makefile")
        assert inspector.detect(tmp_path) is None
