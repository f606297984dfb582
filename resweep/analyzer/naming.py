"""Logical-name derivation shared by resource discovery and source scanning."""
from pathlib import PurePosixPath
from typing import Iterable, List, Optional


# Directory extensions whose interior files belong to the container itself
BUNDLE_EXTENSIONS = (
    "imageset",
    "launchimage",
    "appiconset",
    "stickersiconset",
    "complicationset",
    "bundle",
)


def path_extension(value: str) -> Optional[str]:
    """Return the extension of the final path component without its dot.

    Args:
        value: A filesystem path or a string extracted from source

    Returns:
        Extension string, or None when the component has none
    """
    suffix = PurePosixPath(value).suffix
    return suffix[1:] if suffix else None


def plain_name(value: str, extensions: Iterable[str]) -> str:
    """Derive the logical lookup key for a path or extracted string.

    'Assets/logo.png' -> 'logo' when 'png' is a recognized extension.
    Anything without a recognized extension is returned verbatim.

    Args:
        value: Path or extracted string
        extensions: Recognized resource extensions

    Returns:
        Final component without its extension, or the unchanged input
    """
    ext = path_extension(value)
    if ext is not None and ext in extensions:
        return PurePosixPath(value).stem
    return value


def is_bundle_extension(ext: Optional[str]) -> bool:
    """Check whether a directory extension marks a bundle-like container."""
    return ext in BUNDLE_EXTENSIONS


def non_bundle_extensions(extensions: Iterable[str]) -> List[str]:
    """Resource extensions that are only valid on regular files."""
    return [ext for ext in extensions if not is_bundle_extension(ext)]
