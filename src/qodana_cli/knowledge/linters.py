"""Known Qodana linters and native IDE distributions."""

from typing import Any

RELEASE = "2022.1"


def get_linters() -> dict[str, dict[str, Any]]:
    """Get the Docker linters keyed by short identifier.

    Returns:
        Dictionary mapping linter ids to image and language info
    """
    return {
        "QDJVMC": {
            "image": "jetbrains/qodana-jvm-community",
            "name": "Qodana Community for JVM",
            "languages": ["Java", "Kotlin", "Groovy"],
        },
        "QDJVM": {
            "image": "jetbrains/qodana-jvm",
            "name": "Qodana for JVM",
            "languages": ["Java", "Kotlin", "Groovy"],
        },
        "QDAND": {
            "image": "jetbrains/qodana-jvm-android",
            "name": "Qodana Community for Android",
            "languages": ["Java", "Kotlin"],
        },
        "QDPY": {
            "image": "jetbrains/qodana-python",
            "name": "Qodana for Python",
            "languages": ["Python"],
        },
        "QDPYC": {
            "image": "jetbrains/qodana-python-community",
            "name": "Qodana Community for Python",
            "languages": ["Python"],
        },
        "QDJS": {
            "image": "jetbrains/qodana-js",
            "name": "Qodana for JS",
            "languages": ["JavaScript", "TypeScript"],
        },
        "QDPHP": {
            "image": "jetbrains/qodana-php",
            "name": "Qodana for PHP",
            "languages": ["PHP"],
        },
        "QDGO": {
            "image": "jetbrains/qodana-go",
            "name": "Qodana for Go",
            "languages": ["Go"],
        },
        "QDNET": {
            "image": "jetbrains/qodana-dotnet",
            "name": "Qodana for .NET",
            "languages": ["C#", "F#", "Visual Basic .NET"],
        },
    }


def get_linter_image(linter_id: str, release: str = RELEASE) -> str:
    """Get the full image reference for a linter id.

    Raises:
        KeyError: If the linter id is unknown
    """
    return f"{get_linters()[linter_id]['image']}:{release}"


def get_language_linters() -> dict[str, str]:
    """Map each language to the linter used for it by default."""
    return {
        "Java": "QDJVMC",
        "Kotlin": "QDJVMC",
        "Groovy": "QDJVMC",
        "Python": "QDPY",
        "JavaScript": "QDJS",
        "TypeScript": "QDJS",
        "PHP": "QDPHP",
        "Go": "QDGO",
        "C#": "QDNET",
        "F#": "QDNET",
        "Visual Basic .NET": "QDNET",
    }


def get_extension_languages() -> dict[str, str]:
    """Map source file extensions to languages."""
    return {
        ".java": "Java",
        ".kt": "Kotlin",
        ".kts": "Kotlin",
        ".groovy": "Groovy",
        ".py": "Python",
        ".js": "JavaScript",
        ".jsx": "JavaScript",
        ".mjs": "JavaScript",
        ".ts": "TypeScript",
        ".tsx": "TypeScript",
        ".php": "PHP",
        ".go": "Go",
        ".cs": "C#",
        ".fs": "F#",
        ".vb": "Visual Basic .NET",
    }


def get_native_ides() -> dict[str, dict[str, Any]]:
    """Get native IDE distributions keyed by identifier.

    Each entry lists launcher names searched for on PATH or in the
    QODANA_DIST directory, and the platforms the distribution runs on
    (values of ``sys.platform`` prefixes).
    """
    unix_and_windows = ["linux", "darwin", "win32"]
    return {
        "QDJVMC": {"launchers": ["idea", "idea.sh", "idea64.exe"], "platforms": unix_and_windows},
        "QDJVM": {"launchers": ["idea", "idea.sh", "idea64.exe"], "platforms": unix_and_windows},
        "QDAND": {"launchers": ["idea", "idea.sh", "idea64.exe"], "platforms": unix_and_windows},
        "QDPY": {"launchers": ["pycharm", "pycharm.sh", "pycharm64.exe"], "platforms": unix_and_windows},
        "QDPYC": {"launchers": ["pycharm", "pycharm.sh", "pycharm64.exe"], "platforms": unix_and_windows},
        "QDJS": {"launchers": ["webstorm", "webstorm.sh", "webstorm64.exe"], "platforms": unix_and_windows},
        "QDPHP": {"launchers": ["phpstorm", "phpstorm.sh", "phpstorm64.exe"], "platforms": unix_and_windows},
        "QDGO": {"launchers": ["goland", "goland.sh", "goland64.exe"], "platforms": unix_and_windows},
        "QDNET": {"launchers": ["rider64.exe", "rider.bat"], "platforms": ["win32"]},
    }
