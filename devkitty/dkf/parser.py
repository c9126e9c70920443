"""DKF parser — recursive descent over the flat token stream.

Grammar (token level):

    document      := '@meta' '{' meta-pairs '}' '@icons' '{' icon* '}'
    meta-pairs    := (key value)*
    icon          := 'icon' NAME '{' icon-body '}'
    icon-body     := (viewbox-entry | paths-entry)*
    viewbox-entry := 'viewBox:' NUM NUM NUM NUM
    paths-entry   := 'paths' '{' quoted-path* '}'

Repetitions stop at the closing brace, so one token of lookahead is all the
grammar needs. The parser is pure: it returns a ``ParsedDocument`` and never
touches a registry, which lets the loader commit only fully valid documents.
"""

from __future__ import annotations

import logging
import re

from devkitty.dkf import (
    CLOSE_BRACE,
    DOCUMENT_TYPE,
    FORMAT_NAME,
    ICON_KEYWORD,
    ICONS_SECTION,
    META_SECTION,
    MODES,
    OPEN_BRACE,
    PATHS_KEY,
    QUOTE,
    REQUIRED_META,
    VIEWBOX_KEY,
)
from devkitty.dkf.tokenizer import tokenize
from devkitty.errors import (
    CountMismatchError,
    DuplicatePropertyError,
    IncompleteIconError,
    InvalidValueError,
    MalformedPathError,
    MissingFieldError,
    StructuralError,
    UnknownPropertyError,
)
from devkitty.registry.models import IconRecord, MetadataBlock, ParsedDocument

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?")
_COUNT_RE = re.compile(r"[0-9]+")


class _Cursor:
    """Single forward cursor over the token list. Never backtracks."""

    def __init__(self, tokens: list[str]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> str | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def expect(self, value: str) -> None:
        """Advance past ``value`` or fail naming expected and actual token."""
        token = self.peek()
        if token != value:
            raise StructuralError(value, token, self.pos)
        self.pos += 1

    def next(self, what: str) -> str:
        """Return the current token and advance unconditionally."""
        token = self.peek()
        if token is None:
            raise StructuralError(what, None, self.pos)
        self.pos += 1
        return token

    def before_close(self) -> bool:
        """True while the current token is not a closing brace."""
        token = self.peek()
        if token is None:
            raise StructuralError(CLOSE_BRACE, None, self.pos)
        return token != CLOSE_BRACE

    @property
    def remaining(self) -> int:
        return len(self.tokens) - self.pos


def parse_document(text: str) -> ParsedDocument:
    """Parse and validate DKF text.

    Raises:
        DKFParseError: on the first violated grammar or validation rule.
    """
    tokens = tokenize(text)
    logger.debug("Tokenized DKF document: %d tokens", len(tokens))

    cursor = _Cursor(tokens)
    meta = _parse_meta(cursor)
    icons, icon_blocks = _parse_icons(cursor)

    if icon_blocks != meta.icon_count:
        raise CountMismatchError(declared=meta.icon_count, found=icon_blocks)

    if cursor.remaining:
        logger.debug("Ignoring %d tokens after @icons block", cursor.remaining)

    return ParsedDocument(meta=meta, icons=icons, icon_blocks=icon_blocks)


# ── @meta ────────────────────────────────────────────────────────────


def _parse_meta(cursor: _Cursor) -> MetadataBlock:
    cursor.expect(META_SECTION)
    cursor.expect(OPEN_BRACE)

    raw: dict[str, str] = {}
    while cursor.before_close():
        key = cursor.next("meta key")
        if key.endswith(":"):
            key = key[:-1]
        value = cursor.next(f"value for {key}")
        if value in (OPEN_BRACE, CLOSE_BRACE):
            raise StructuralError(f"value for {key}", value, cursor.pos - 1)
        raw[key] = value

    cursor.expect(CLOSE_BRACE)
    return _validate_meta(raw)


def _validate_meta(raw: dict[str, str]) -> MetadataBlock:
    for key in REQUIRED_META:
        if not raw.get(key):
            raise MissingFieldError(key)

    if raw["format"] != FORMAT_NAME:
        raise InvalidValueError("format", raw["format"], (FORMAT_NAME,))
    if raw["type"] != DOCUMENT_TYPE:
        raise InvalidValueError("type", raw["type"], (DOCUMENT_TYPE,))
    if raw["mode"] not in MODES:
        raise InvalidValueError("mode", raw["mode"], MODES)
    if not _COUNT_RE.fullmatch(raw["iconCount"]):
        raise InvalidValueError("iconCount", raw["iconCount"])

    return MetadataBlock(
        format=raw["format"],
        version=raw["version"],
        type=raw["type"],
        mode=raw["mode"],
        icon_count=int(raw["iconCount"]),
        extra={k: v for k, v in raw.items() if k not in REQUIRED_META},
    )


# ── @icons ───────────────────────────────────────────────────────────


def _parse_icons(cursor: _Cursor) -> tuple[dict[str, IconRecord], int]:
    cursor.expect(ICONS_SECTION)
    cursor.expect(OPEN_BRACE)

    icons: dict[str, IconRecord] = {}
    blocks = 0
    while cursor.before_close():
        icon = _parse_icon(cursor)
        if icon.name in icons:
            logger.debug('Icon "%s" redefined within the same document', icon.name)
        icons[icon.name] = icon
        blocks += 1

    cursor.expect(CLOSE_BRACE)
    return icons, blocks


def _parse_icon(cursor: _Cursor) -> IconRecord:
    cursor.expect(ICON_KEYWORD)
    name = cursor.next("icon name")
    cursor.expect(OPEN_BRACE)

    view_box: str | None = None
    paths: list[str] = []

    while cursor.before_close():
        key = cursor.next("icon property")
        if key == VIEWBOX_KEY:
            if view_box is not None:
                raise DuplicatePropertyError(key, name)
            view_box = _parse_viewbox(cursor, name)
        elif key == PATHS_KEY:
            paths.extend(_parse_paths(cursor, name))
        else:
            raise UnknownPropertyError(key, name)

    cursor.expect(CLOSE_BRACE)

    if view_box is None:
        raise IncompleteIconError(name, "viewBox")
    if not paths:
        raise IncompleteIconError(name, "paths")

    return IconRecord(name=name, view_box=view_box, paths=tuple(paths))


def _parse_viewbox(cursor: _Cursor, icon: str) -> str:
    components = []
    for _ in range(4):
        token = cursor.next("viewBox component")
        if token in (OPEN_BRACE, CLOSE_BRACE):
            raise StructuralError("viewBox component", token, cursor.pos - 1)
        if not _NUMBER_RE.fullmatch(token):
            raise InvalidValueError("viewBox", token, icon=icon)
        components.append(token)
    return " ".join(components)


def _parse_paths(cursor: _Cursor, icon: str) -> list[str]:
    cursor.expect(OPEN_BRACE)
    paths = []
    while cursor.before_close():
        paths.append(_parse_quoted_path(cursor, icon))
    cursor.expect(CLOSE_BRACE)
    return paths


def _parse_quoted_path(cursor: _Cursor, icon: str) -> str:
    """Read one quoted path, re-joining tokens split on embedded spaces."""
    token = cursor.next("quoted path")
    if not token.startswith(QUOTE):
        raise MalformedPathError(token, icon)

    path = token
    # A lone quote opens the string; it cannot also close it.
    while len(path) < 2 or not path.endswith(QUOTE):
        path += " " + cursor.next("closing quote")

    return path[1:-1]
