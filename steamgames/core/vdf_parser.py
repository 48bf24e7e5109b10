"""Text VDF (Valve KeyValues) parser.

Parses the text format used by ``libraryfolders.vdf``, ``loginusers.vdf`` and
``appmanifest_*.acf`` into nested dictionaries whose leaves are strings.

Supported syntax:
  - ``"key" "value"`` pairs and ``"key" { ... }`` blocks
  - ``//`` comments to end of line
  - quoted strings with ``\\"``, ``\\\\``, ``\\n`` and ``\\t`` escapes
  - unquoted bare tokens
  - conditional suffixes such as ``[$WIN32]`` (ignored)

The top level is implicitly one object, so files without outer braces parse
fine. Repeated keys at the same level overwrite earlier ones.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO, Union

__all__ = [
    "VdfObject",
    "VdfParseError",
    "VdfValue",
    "get_obj",
    "get_str",
    "load",
    "load_file",
    "loads",
    "unwrap",
]

logger = logging.getLogger("steamgames.vdf")

VdfValue = Union[str, "VdfObject"]
VdfObject = dict[str, VdfValue]

SECTION_START = "{"
SECTION_END = "}"

_WHITESPACE = frozenset(" \t\r\n\ufeff")
_ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"'}
_TOKEN_END = _WHITESPACE | {SECTION_START, SECTION_END, '"'}


class VdfParseError(ValueError):
    """Raised when VDF text is malformed or truncated."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at offset {position}")
        self.position = position


class _TextVDFParser:
    """Single-pass parser over a VDF string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._len = len(text)

    def parse(self) -> VdfObject:
        """Parse the whole document.

        Returns:
            The top-level object.

        Raises:
            VdfParseError: If the text is malformed.
        """
        self._skip_ignored()
        if self._peek() == SECTION_START:
            # Document wrapped in a single outer brace pair
            self._pos += 1
            result = self._parse_object(closed=True)
            self._skip_ignored()
            if self._pos < self._len:
                raise VdfParseError("Unexpected data after closing brace", self._pos)
            return result
        return self._parse_object(closed=False)

    def _parse_object(self, *, closed: bool) -> VdfObject:
        # Open sections, innermost last
        root: VdfObject = {}
        sections: list[VdfObject] = [root]
        while True:
            self._skip_ignored()
            ch = self._peek()
            if ch is None:
                if closed or len(sections) > 1:
                    raise VdfParseError("Unterminated object", self._pos)
                return root
            if ch == SECTION_END:
                if len(sections) == 1 and not closed:
                    raise VdfParseError("Unexpected closing brace", self._pos)
                self._pos += 1
                sections.pop()
                if not sections:
                    return root
                self._skip_condition()
                continue
            if ch == SECTION_START:
                raise VdfParseError("Object without a key", self._pos)

            obj = sections[-1]
            key = self._read_token()
            self._skip_ignored()
            ch = self._peek()
            if ch is None:
                raise VdfParseError(f"Missing value for key {key!r}", self._pos)
            if ch == SECTION_START:
                self._pos += 1
                child: VdfObject = {}
                obj[key] = child
                sections.append(child)
                continue
            if ch == SECTION_END:
                raise VdfParseError(f"Missing value for key {key!r}", self._pos)
            obj[key] = self._read_token()
            self._skip_condition()

    def _read_token(self) -> str:
        if self._peek() == '"':
            return self._read_quoted()
        start = self._pos
        while self._pos < self._len and self._text[self._pos] not in _TOKEN_END:
            if self._text.startswith("//", self._pos):
                break
            self._pos += 1
        return self._text[start : self._pos]

    def _read_quoted(self) -> str:
        start = self._pos
        self._pos += 1
        out: list[str] = []
        while self._pos < self._len:
            ch = self._text[self._pos]
            if ch == "\\" and self._pos + 1 < self._len:
                nxt = self._text[self._pos + 1]
                if nxt in _ESCAPES:
                    out.append(_ESCAPES[nxt])
                    self._pos += 2
                    continue
            if ch == '"':
                self._pos += 1
                return "".join(out)
            out.append(ch)
            self._pos += 1
        raise VdfParseError("Unterminated string", start)

    def _skip_condition(self) -> None:
        """Skips an optional ``[$PLATFORM]`` suffix after a value."""
        save = self._pos
        self._skip_ignored()
        if self._peek() != "[":
            self._pos = save
            return
        end = self._text.find("]", self._pos)
        if end == -1:
            raise VdfParseError("Unterminated condition", self._pos)
        self._pos = end + 1

    def _skip_ignored(self) -> None:
        while self._pos < self._len:
            ch = self._text[self._pos]
            if ch in _WHITESPACE:
                self._pos += 1
            elif self._text.startswith("//", self._pos):
                newline = self._text.find("\n", self._pos)
                self._pos = self._len if newline == -1 else newline + 1
            else:
                break

    def _peek(self) -> str | None:
        return self._text[self._pos] if self._pos < self._len else None


def loads(data: str) -> VdfObject:
    """Parses a VDF string into a dictionary.

    Args:
        data: The VDF-formatted text.

    Returns:
        A nested dictionary; leaves are strings.

    Raises:
        TypeError: If data is not a string.
        VdfParseError: If the text is malformed or truncated.
    """
    if not isinstance(data, str):
        raise TypeError(f"Can only load str, got {type(data).__name__}")
    return _TextVDFParser(data).parse()


def load(fp: TextIO) -> VdfObject:
    """Parses a VDF file object opened in text mode."""
    return loads(fp.read())


def load_file(path: Path) -> VdfObject | None:
    """Reads and parses a VDF file, treating every failure as "no data".

    Args:
        path: Path to the VDF file.

    Returns:
        The parsed object, or None if the file is missing, unreadable or malformed.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return load(f)
    except FileNotFoundError:
        logger.debug("VDF file not found: %s", path)
    except OSError as e:
        logger.debug("Could not read %s: %s", path, e)
    except VdfParseError as e:
        logger.debug("Malformed VDF in %s: %s", path, e)
    return None


def get_str(node: VdfObject, key: str, default: str = "") -> str:
    """Returns the string leaf stored under key, or default on any mismatch."""
    value = node.get(key) if isinstance(node, dict) else None
    return value if isinstance(value, str) else default


def get_obj(node: VdfObject, key: str) -> VdfObject:
    """Returns the child object stored under key, or an empty dict on any mismatch."""
    value = node.get(key) if isinstance(node, dict) else None
    return value if isinstance(value, dict) else {}


def unwrap(node: VdfObject, key: str) -> VdfObject:
    """Returns node[key] when it is an object, else node itself.

    Steam files nest their entries under a root key ("AppState", "users",
    "libraryfolders"), but older or hand-edited files keep them at the top level.
    """
    child = node.get(key) if isinstance(node, dict) else None
    return child if isinstance(child, dict) else node
