"""Input sanitization utilities."""

import re

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def sanitize_filename(filename: str | None, max_length: int = 120) -> str:
    """Sanitize an uploaded report filename for safe logging.

    Strips directory components and control characters (log injection) and
    caps the length while keeping the extension.

    Args:
        filename: The raw filename from the multipart upload
        max_length: Maximum allowed filename length

    Returns:
        A safe filename string, "upload" when nothing usable remains
    """
    if not filename:
        return "upload"

    safe_name = filename.replace("\\", "/").split("/")[-1]
    safe_name = safe_name.replace("..", "")
    safe_name = _CONTROL_CHARS.sub("", safe_name)

    if len(safe_name) > max_length:
        if "." in safe_name:
            name, ext = safe_name.rsplit(".", 1)
            ext = ext[:10]
            safe_name = name[: max_length - len(ext) - 1] + "." + ext
        else:
            safe_name = safe_name[:max_length]

    return safe_name or "upload"


def sanitize_text(value: str, max_length: int = 500) -> str:
    """Collapse whitespace and drop control characters in free-text cells."""
    cleaned = _CONTROL_CHARS.sub(" ", value)
    cleaned = " ".join(cleaned.split())
    return cleaned[:max_length]
