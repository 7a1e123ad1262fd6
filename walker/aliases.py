"""Alias table lookup for RequireJS-style module configurations."""

import json
import logging
import posixpath
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

try:
    import tomllib
except ImportError:
    import toml as tomllib  # type: ignore

from .errors import AliasConfigError
from .parser import strip_comments


logger = logging.getLogger(__name__)

# Where a RequireJS config object starts inside a JavaScript file
_JS_CONFIG_START_RE = re.compile(
    r"\b(?:require|requirejs)\s*(?:\.\s*config\s*\(|=)\s*(?=\{)",
)

_PLUGIN_SEPARATOR = "!"

# Members of a RequireJS config read by AliasTable; the rest (shim, deps, callback) is skipped
_JS_CONFIG_MEMBERS = {"paths", "baseUrl"}

# A member key followed by its colon: quoted or bare identifier
_JS_KEY_RE = re.compile(
    r"""\s*(?:'((?:[^'\\]|\\.)*)'|"((?:[^"\\]|\\.)*)"|([A-Za-z_$][\w$]*))\s*:""",
)

# Tokens of a JSON-like JavaScript literal
_JS_TOKEN_RE = re.compile(
    r"""\s+|'(?:[^'\\\n]|\\.)*'|"(?:[^"\\\n]|\\.)*"|[A-Za-z_$][\w$]*|-?\d+(?:\.\d+)?|[{}\[\],:]""",
)

_UNESCAPE_RE = re.compile(r"\\(.)")

_JSON_KEYWORDS = {"true", "false", "null"}


class AliasTable:
    """
    Module alias configuration (RequireJS 'paths' and 'baseUrl').

    Lookups map a bare module name onto the location configured for its
    longest matching path prefix; relative specifiers pass through.
    """

    def __init__(self, paths: Optional[Dict[str, str]] = None, base_url: str = ""):
        self.paths: Dict[str, str] = dict(paths or {})
        self.base_url = base_url

    @classmethod
    def load(cls, config_path: str) -> "AliasTable":
        """
        Load an alias table from a configuration file.

        Args:
            config_path: Path to a .json, .yaml/.yml, .toml or .js config.

        Returns:
            AliasTable built from the file's 'paths' and 'baseUrl' keys.

        Raises:
            AliasConfigError: If the file cannot be read or parsed.
        """
        data = parse_config(config_path)
        if not isinstance(data, dict):
            raise AliasConfigError(f"alias config is not a mapping: {config_path}")

        paths: Dict[str, str] = {}
        raw_paths = data.get("paths") or {}
        if not isinstance(raw_paths, dict):
            raise AliasConfigError(f"'paths' must be a mapping: {config_path}")
        for alias, target in raw_paths.items():
            # RequireJS accepts fallback lists; the first entry is the primary location
            if isinstance(target, (list, tuple)):
                if not target:
                    continue
                target = target[0]
            if target is None:
                continue
            paths[str(alias)] = str(target)

        base_url = data.get("baseUrl") or ""
        logger.debug("Loaded %d aliases from %s", len(paths), config_path)
        return cls(paths=paths, base_url=str(base_url))

    def lookup(self, specifier: str) -> str:
        """
        Map a specifier through the alias table.

        Args:
            specifier: Raw specifier, optionally carrying a loader plugin
                      prefix such as 'text!'.

        Returns:
            The aliased specifier, still to be resolved against the
            referencing file or the root.
        """
        if _PLUGIN_SEPARATOR in specifier:
            specifier = specifier.split(_PLUGIN_SEPARATOR, 1)[1]

        if specifier.startswith("."):
            return specifier

        alias = self._match(specifier)
        if alias is not None:
            specifier = self.paths[alias] + specifier[len(alias):]

        if self.base_url and not _is_absolute(specifier):
            specifier = posixpath.normpath(posixpath.join(self.base_url, specifier))

        return specifier

    def _match(self, specifier: str) -> Optional[str]:
        """Find the longest alias that is a whole-segment prefix of the specifier."""
        best = None
        for alias in self.paths:
            if specifier == alias or specifier.startswith(alias + "/"):
                if best is None or len(alias) > len(best):
                    best = alias
        return best

    def __len__(self) -> int:
        return len(self.paths)

    def __repr__(self) -> str:
        return f"AliasTable(paths={len(self.paths)}, base_url={self.base_url!r})"


def _is_absolute(specifier: str) -> bool:
    return specifier.startswith("/") or "://" in specifier


def parse_config(config_path: str) -> Any:
    """
    Parse an alias configuration file and return its contents.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Parsed data structure.

    Raises:
        AliasConfigError: If the file cannot be read or parsed.
    """
    suffix = Path(config_path).suffix.lower()

    try:
        with open(config_path, encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise AliasConfigError(f"cannot read alias config {config_path}: {e}") from e

    try:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(content)

        elif suffix == ".json":
            return json.loads(content)

        elif suffix == ".toml":
            return tomllib.loads(content)

        elif suffix == ".js":
            return _parse_js_config(content)

        else:
            # Try JSON first, then a RequireJS config script
            try:
                return json.loads(content)
            except json.JSONDecodeError:
                return _parse_js_config(content)

    except AliasConfigError:
        raise
    except Exception as e:
        raise AliasConfigError(f"cannot parse alias config {config_path}: {e}") from e


def _parse_js_config(content: str) -> Dict[str, Any]:
    """
    Extract the alias settings from a RequireJS config script.

    Handles require.config({...}), requirejs.config({...}) and
    var require = {...}. Only the 'paths' and 'baseUrl' members are
    converted to JSON and loaded; other members such as 'shim' may hold
    functions and are skipped unparsed.
    """
    text = strip_comments(content)
    match = _JS_CONFIG_START_RE.search(text)
    start = match.end() if match else text.find("{")
    if start < 0:
        raise AliasConfigError("no configuration object found")

    literal = _balanced_object(text, start)
    data: Dict[str, Any] = {}
    for key, value in _object_members(literal):
        if key in _JS_CONFIG_MEMBERS:
            data[key] = json.loads(_js_to_json(value))
    return data


def _balanced_object(text: str, start: int) -> str:
    """Return the brace-balanced object literal beginning at text[start]."""
    depth = 0
    quote = None
    i = start
    while i < len(text):
        char = text[i]
        if quote:
            if char == "\\":
                i += 1
            elif char == quote:
                quote = None
        elif char in "'\"`":
            quote = char
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
        i += 1
    raise AliasConfigError("unterminated configuration object")


def _object_members(literal: str) -> List[Tuple[str, str]]:
    """
    Split an object literal into (key, value source) pairs.

    Values are returned as raw source text; members without a plain
    'key: value' shape (methods, spreads) are skipped.
    """
    members: List[Tuple[str, str]] = []
    end = len(literal) - 1
    i = 1
    while i < end:
        if literal[i] in ", \t\r\n":
            i += 1
            continue

        match = _JS_KEY_RE.match(literal, i)
        value_start = match.end() if match else i
        value_end = _value_end(literal, value_start, end)
        if match:
            key = next(group for group in match.groups() if group is not None)
            members.append((key, literal[value_start:value_end].strip()))
        i = value_end + 1
    return members


def _value_end(text: str, i: int, end: int) -> int:
    """Return the index of the comma closing the member value starting at i."""
    depth = 0
    quote = None
    while i < end:
        char = text[i]
        if quote:
            if char == "\\":
                i += 1
            elif char == quote:
                quote = None
        elif char in "'\"`":
            quote = char
        elif char in "{[(":
            depth += 1
        elif char in "}])":
            depth -= 1
        elif char == "," and depth == 0:
            return i
        i += 1
    return end


def _js_to_json(source: str) -> str:
    """
    Rewrite a JavaScript literal of strings, numbers, arrays and objects as JSON.

    Bare keys are quoted, single-quoted strings become double-quoted and
    trailing commas are dropped.
    """
    pieces: List[str] = []
    pos = 0
    while pos < len(source):
        match = _JS_TOKEN_RE.match(source, pos)
        if not match:
            raise AliasConfigError(f"unsupported value in configuration: {source!r}")
        token = match.group()
        pos = match.end()

        if token.isspace():
            continue
        if token in ("}", "]") and pieces and pieces[-1] == ",":
            pieces.pop()

        if token[0] in "'\"":
            token = json.dumps(_UNESCAPE_RE.sub(r"\1", token[1:-1]))
        elif (token[0].isalpha() or token[0] in "_$") and token not in _JSON_KEYWORDS:
            token = json.dumps(token)
        pieces.append(token)

    return "".join(pieces)


def resolve_alias(config_path: str, specifier: str) -> str:
    """
    Resolve a specifier against the alias configuration at config_path.

    Loads the configuration on every call; traversals hold one
    AliasTable for their whole run instead.
    """
    return AliasTable.load(config_path).lookup(specifier)
