"""Top-level package for the Quiz Toolkit.

Provides subpackages:
- quiz_toolkit.core – immutable quiz models and schemas
- quiz_toolkit.extractor – normalize, detect and extract questions from documents
- quiz_toolkit.analysis – question and quiz quality scoring
- quiz_toolkit.merge – multi-file merge strategies and batch processing
- quiz_toolkit.export – JSON/CSV/TXT/HTML/Markdown renderers
- quiz_toolkit.search – search, replace and bulk edits over question sets
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    # In dev mode, read directly from pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    try:
        from importlib.metadata import PackageNotFoundError, version as pkg_version
        return pkg_version("quiz-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
