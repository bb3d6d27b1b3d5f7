"""Project inspector that picks a default linter for a project."""

from __future__ import annotations

import os
from collections import Counter
from pathlib import Path

from qodana_cli.knowledge import get_extension_languages, get_language_linters, get_linter_image
from qodana_cli.utils.logging import get_logger

logger = get_logger("inspector")

SKIP_DIRS = frozenset(
    {".git", ".hg", ".svn", ".idea", ".qodana", "node_modules", "vendor", "build", "target", "dist", "venv", ".venv", "__pycache__"}
)


class ProjectInspector:
    """Detects the dominant language of a project.

    Example:
        inspector = ProjectInspector()
        linter = inspector.detect(Path("."))
        # "jetbrains/qodana-python:2022.1"
    """

    def __init__(self, max_files: int = 10000) -> None:
        self._max_files = max_files

    def languages(self, project_dir: Path) -> list[str]:
        """Languages found in the project, most files first."""
        extensions = get_extension_languages()
        counts: Counter[str] = Counter()
        seen = 0

        for root, dirs, files in os.walk(project_dir):
            dirs[:] = sorted(d for d in dirs if d not in SKIP_DIRS)
            for name in files:
                language = extensions.get(Path(name).suffix.lower())
                if language:
                    counts[language] += 1
                seen += 1
                if seen >= self._max_files:
                    break
            if seen >= self._max_files:
                break

        # Ties are broken alphabetically so the answer is stable
        return [lang for lang, _ in sorted(counts.items(), key=lambda item: (-item[1], item[0]))]

    def detect(self, project_dir: Path) -> str | None:
        """Return the linter image for the project, or None if unknown."""
        languages = self.languages(project_dir)
        if not languages:
            logger.debug(f"No known languages found in {project_dir}")
            return None

        linter_id = get_language_linters()[languages[0]]
        image = get_linter_image(linter_id)
        logger.debug(f"Detected {languages[0]} in {project_dir}, using {image}")
        return image
