"""Extractors for pulling raw dependency specifiers out of source text."""

import re
from typing import Callable, Dict, Iterable, List

from .errors import ExtractionFailure, UnreadableFile
from .kinds import Dialect


# Script patterns (ES modules, CommonJS, AMD)
_ES_IMPORT_FROM_RE = re.compile(
    r"""(?<![.@$])\bimport\s+(?:type\s+)?[\w*{}\s,$]+?\s+from\s*['"]([^'"\n]+)['"]""",
)
_ES_IMPORT_BARE_RE = re.compile(r"""(?<![.@$])\bimport\s*['"]([^'"\n]+)['"]""")
_ES_EXPORT_FROM_RE = re.compile(
    r"""(?<![.@$])\bexport\s+(?:type\s+)?[\w*{}\s,$]+?\s+from\s*['"]([^'"\n]+)['"]""",
)
_DYNAMIC_IMPORT_RE = re.compile(r"""(?<![.@$])\bimport\s*\(\s*['"]([^'"\n]+)['"]\s*\)""")
_REQUIRE_CALL_RE = re.compile(r"""(?<![.@$])\brequire\s*\(\s*['"]([^'"\n]+)['"]\s*\)""")
_AMD_DEPS_RE = re.compile(
    r"""(?<![.@$])\b(?:define|require|requirejs)\s*\(\s*(?:['"][^'"\n]*['"]\s*,\s*)?\[([^\]]*)\]""",
)
_QUOTED_RE = re.compile(r"""['"]([^'"\n]+)['"]""")

# Style sheet patterns (Sass/SCSS)
_SASS_RULE_RE = re.compile(r"""@(?:import|use|forward)\s+([^;{}\n]+)""")

_BLOCK_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")
_LINE_COMMENT_RE = re.compile(r"(^|[^:\\'\"])//.*$", re.MULTILINE)


def strip_comments(content: str) -> str:
    """
    Remove block and line comments from script or SCSS text.

    Only meant to keep commented-out imports from matching; string
    contents containing comment markers may be trimmed.
    """
    content = _BLOCK_COMMENT_RE.sub("", content)
    return _LINE_COMMENT_RE.sub(r"\1", content)


def extract_script_specifiers(content: str) -> List[str]:
    """
    Extract specifiers from JavaScript source.

    Args:
        content: Script source text.

    Returns:
        Specifiers in source order, first occurrence of each kept.
    """
    text = strip_comments(content)
    found = []

    for pattern in (
        _ES_IMPORT_FROM_RE,
        _ES_IMPORT_BARE_RE,
        _ES_EXPORT_FROM_RE,
        _DYNAMIC_IMPORT_RE,
        _REQUIRE_CALL_RE,
    ):
        for match in pattern.finditer(text):
            found.append((match.start(1), match.group(1)))

    # AMD dependency arrays: define(['a', 'b'], fn) / require(['a'], fn)
    for match in _AMD_DEPS_RE.finditer(text):
        offset = match.start(1)
        for dep in _QUOTED_RE.finditer(match.group(1)):
            found.append((offset + dep.start(1), dep.group(1)))

    found.sort(key=lambda item: item[0])
    return _unique(spec.strip() for _, spec in found)


def extract_sass_specifiers(content: str) -> List[str]:
    """
    Extract @import, @use and @forward targets from Sass/SCSS source.

    Plain CSS imports (url(...), remote URLs, .css files) are skipped
    because the Sass compiler leaves them to the browser.

    Args:
        content: Style sheet source text.

    Returns:
        Specifiers in source order, first occurrence of each kept.
    """
    text = strip_comments(content)
    specifiers = []

    for match in _SASS_RULE_RE.finditer(text):
        rule = match.group(1).strip()
        if rule.lower().startswith("url("):
            continue
        quoted = _QUOTED_RE.findall(rule)
        if quoted:
            targets = quoted
        else:
            # Indented syntax allows unquoted targets: @import foo, bar
            targets = [
                part.strip() for part in rule.split(",") if " " not in part.strip()
            ]

        for target in targets:
            target = target.strip()
            if target and not _is_plain_css_import(target):
                specifiers.append(target)

    return _unique(specifiers)


def _is_plain_css_import(target: str) -> bool:
    """Check if an @import target is a plain CSS import or a built-in module."""
    lowered = target.lower()
    return (
        lowered.startswith(("url(", "http://", "https://", "//", "sass:"))
        or lowered.endswith(".css")
    )


def _unique(specifiers: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for spec in specifiers:
        if spec and spec not in seen:
            seen.add(spec)
            result.append(spec)
    return result


EXTRACTORS: Dict[Dialect, Callable[[str], List[str]]] = {
    Dialect.DEFAULT: extract_script_specifiers,
    Dialect.SASS: extract_sass_specifiers,
}


def extract_specifiers(content: str, dialect: Dialect = Dialect.DEFAULT) -> List[str]:
    """
    Extract raw dependency specifiers from file content.

    Args:
        content: The file content.
        dialect: Extraction mode selected from the file's extension.

    Returns:
        List of raw specifier strings.

    Raises:
        ExtractionFailure: If the content cannot be scanned.
    """
    try:
        return EXTRACTORS[dialect](content)
    except (TypeError, KeyError, re.error) as e:
        raise ExtractionFailure(str(e)) from e


def read_source(file_path: str) -> str:
    """
    Read a source file as UTF-8 text.

    Args:
        file_path: Absolute path of the file.

    Returns:
        The file content.

    Raises:
        UnreadableFile: If the file cannot be opened or decoded.
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise UnreadableFile(file_path, str(e)) from e
