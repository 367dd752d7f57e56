from pathlib import Path


def load_prompt(path: Path, error_cls: type[Exception] = RuntimeError) -> str:
    """Load a prompt template from a file.

    Args:
        path: Path to the template file.
        error_cls: Exception type raised when the file cannot be read,
            so each caller surfaces its own error family.

    Returns:
        The raw template string with placeholders.
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise error_cls(f"Failed to load prompt template {path.name}: {exc}") from exc
