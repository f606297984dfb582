"""Per-file-type extraction rules for resource names referenced in text.

Each rule is a list of regular expressions applied case-insensitively to the
whole file content; the first capturing group of every match is a candidate
resource name. Nothing here parses source grammar: a name counts as
referenced as soon as it shows up in a string-literal-like token.
"""
import re
from enum import Enum
from functools import lru_cache
from typing import Iterable, List, Optional, Set, Tuple

from .naming import plain_name


class FileType(Enum):
    """Closed set of source file kinds, each with its own extraction rule."""

    SWIFT = "swift"
    OBJC = "objc"
    XIB = "xib"
    PLIST = "plist"
    PBXPROJ = "pbxproj"
    PLAIN = "plain"

    @classmethod
    def from_extension(cls, ext: Optional[str]) -> Optional["FileType"]:
        """Map a source file extension to its file type.

        Returns:
            FileType, or None when the extension has no dedicated rule
        """
        return _EXTENSION_TYPES.get(ext)

    def patterns(self, extensions: Iterable[str]) -> List[str]:
        """Raw regular expressions for this rule.

        Args:
            extensions: Configured resource extensions (only PLAIN uses them)
        """
        if self is FileType.PLAIN:
            extensions = list(extensions)
            if not extensions:
                return []
            joined = "|".join(re.escape(ext) for ext in extensions)
            return [rf'"(.+?)\.({joined})"']
        return list(_FIXED_PATTERNS[self])

    def search(self, content: str, extensions: Iterable[str]) -> Set[str]:
        """Extract every candidate resource name from a text blob.

        Args:
            content: Full text of a source file
            extensions: Configured resource extensions

        Returns:
            Set of names, each stripped of a recognized resource extension
        """
        extensions = tuple(extensions)
        # Interface files hold raw attribute values; the scanner normalizes
        # them against the configured extensions afterwards.
        normalize_with = () if self is FileType.XIB else extensions

        names = set()
        for regex in _compiled_patterns(self, extensions):
            for match in regex.finditer(content):
                names.add(plain_name(match.group(1), normalize_with))
        return names


_EXTENSION_TYPES = {
    "swift": FileType.SWIFT,
    "h": FileType.OBJC,
    "m": FileType.OBJC,
    "mm": FileType.OBJC,
    "xib": FileType.XIB,
    "storyboard": FileType.XIB,
    "plist": FileType.PLIST,
    "pbxproj": FileType.PBXPROJ,
}

_FIXED_PATTERNS = {
    FileType.SWIFT: (r'"(.*?)"',),
    FileType.OBJC: (r'@"(.*?)"', r'"(.*?)"'),
    FileType.XIB: (r'image name="(.*?)"', r'image="(.*?)"', r'value="(.*?)"'),
    FileType.PLIST: (r'<string>(.*?)</string>',),
    FileType.PBXPROJ: (
        r'ASSETCATALOG_COMPILER_APPICON_NAME = "?(.*?)"?;',
        r'ASSETCATALOG_COMPILER_COMPLICATION_NAME = "?(.*?)"?;',
    ),
}


@lru_cache(maxsize=None)
def _compiled_patterns(file_type: FileType, extensions: Tuple[str, ...]) -> Tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in file_type.patterns(extensions))


def rule_for_extension(ext: Optional[str]) -> FileType:
    """Select the extraction rule for a scanned file.

    Files whose extension has no dedicated rule fall back to PLAIN, which
    only picks up quoted names that end in a resource extension.
    """
    return FileType.from_extension(ext) or FileType.PLAIN
