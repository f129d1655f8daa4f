"""Path validation utilities to prevent dangerous file operations.

Provides validation for paths used in file operations to prevent:
- Path traversal when extracting archives
- Invalid characters in generated file names
"""

from pathlib import Path

from ..logging_config import get_logger

logger = get_logger("path_validator")


def is_path_under_root(path: Path, root: Path) -> bool:
    """Check if a path is under a given root directory.

    Args:
        path: The path to check
        root: The root directory

    Returns:
        True if path is under root, False otherwise
    """
    try:
        path_resolved = path.resolve()
        root_resolved = root.resolve()
        return path_resolved == root_resolved or root_resolved in path_resolved.parents
    except (OSError, ValueError) as e:
        logger.warning("Failed to check path relationship: %s", e)
        return False


def is_safe_archive_member(member_name: str, destination: Path) -> bool:
    """Check that an archive member extracts inside the destination.

    Args:
        member_name: Name of the entry inside the archive
        destination: Directory the archive is extracted into

    Returns:
        True if the extracted file stays under destination
    """
    if not member_name or Path(member_name).is_absolute() or member_name.startswith(("/", "\\")):
        return False
    return is_path_under_root(destination / member_name, destination)


def sanitize_filename(filename: str) -> str:
    """Sanitize a filename by removing dangerous characters.

    Args:
        filename: The filename to sanitize

    Returns:
        Sanitized filename safe for use in file operations
    """
    # Remove or replace dangerous characters
    dangerous_chars = ['<', '>', ':', '"', '/', '\\', '|', '?', '*', '\0']
    result = filename

    for char in dangerous_chars:
        result = result.replace(char, '_')

    # Remove leading/trailing dots and spaces
    result = result.strip('. ')

    # Limit length
    if len(result) > 200:
        result = result[:200]

    # Ensure not empty
    if not result:
        result = "unnamed"

    return result
