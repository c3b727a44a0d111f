"""Streaming JSON tokenizer feeding the digest engine.

The tokenizer reads its source in fixed-size chunks and hands out one
primitive token at a time.  Separators (``,`` and ``:``) are validated and
consumed internally, so callers only ever see values, object keys, and the
container delimiters.  ``more()`` reports whether the innermost open
container has another element.

Number tokens keep their exact source text; string and key tokens carry the
decoded value (escapes resolved via ``json.decoder.scanstring``).

Example::

    with open_tokenizer(b'{"a": [1, 2]}') as tok:
        tok.next_token()   # Token(BEGIN_OBJECT)
        tok.next_token()   # Token(KEY, "a")
        tok.next_token()   # Token(BEGIN_ARRAY)
        tok.more()         # True
"""

from __future__ import annotations

import codecs
import io
import json
import os
import re
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum, auto
from json.decoder import scanstring
from typing import IO, Any

from json_signature.errors import MalformedInput, NestingTooDeep, StreamFailure

__all__ = ["Lexeme", "Source", "Token", "Tokenizer", "open_tokenizer"]

# Anything the engine can read a JSON document from.
Source = bytes | bytearray | memoryview | str | os.PathLike[str] | IO[Any]

_WHITESPACE = re.compile(r"[ \t\n\r]*")

# Characters of a string body up to (not including) the closing quote.  Stops
# early on a backslash that is the last buffered character.
_STRING_RUN = re.compile(r'[^"\\]*(?:\\.[^"\\]*)*', re.DOTALL)

# RFC 8259 number grammar, ASCII digits only.
_NUMBER = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][-+]?[0-9]+)?")

# Characters that may continue a number literal; used to make sure a literal
# split across two chunks is fully buffered before _NUMBER runs.
_NUMBER_RUN = re.compile(r"[-+0-9.eE]*")

_LITERALS = {"t": "true", "f": "false", "n": "null"}

# Container states kept on the tokenizer stack.
_ARRAY_START = 0  # just after '[': value or ']'
_ARRAY_NEXT = 1  # after an element: ',' or ']'
_OBJECT_START = 2  # just after '{': key or '}'
_OBJECT_NEXT = 3  # after a member: ',' or '}'
_OBJECT_VALUE = 4  # after 'key:': value


class Lexeme(Enum):
    """Primitive token types produced by ``Tokenizer.next_token``."""

    BEGIN_ARRAY = auto()
    END_ARRAY = auto()
    BEGIN_OBJECT = auto()
    END_OBJECT = auto()
    KEY = auto()
    STRING = auto()
    NUMBER = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()


_LITERAL_LEXEMES = {"true": Lexeme.TRUE, "false": Lexeme.FALSE, "null": Lexeme.NULL}


@dataclass(frozen=True, slots=True)
class Token:
    """A single token.

    Attributes:
        lexeme: The token type.
        text:   Decoded value for KEY and STRING, literal source text for
                NUMBER, TRUE, FALSE and NULL; empty for delimiters.
        offset: Character offset of the token in the decoded input.
    """

    lexeme: Lexeme
    text: str = ""
    offset: int = 0


class Tokenizer:
    """Pull-based tokenizer over a ``read(n)`` callable.

    ``read`` may return ``bytes`` (decoded as UTF-8 incrementally) or
    ``str``.  An empty return value signals end of input.

    Args:
        read:       Callable returning up to ``n`` bytes or characters.
        chunk_size: Amount requested from ``read`` per call.
        max_depth:  Maximum container nesting depth before ``NestingTooDeep``.
    """

    def __init__(
        self,
        read: Callable[[int], Any],
        chunk_size: int = 65536,
        max_depth: int = 10000,
    ) -> None:
        self._read = read
        self._chunk_size = chunk_size
        self._max_depth = max_depth
        self._decoder = codecs.getincrementaldecoder("utf-8")()
        self._buf = ""
        self._pos = 0
        self._base = 0
        self._eof = False
        self._stack: list[int] = []
        self._started = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def depth(self) -> int:
        """Number of containers currently open."""
        return len(self._stack)

    def next_token(self) -> Token:
        """Return the next token, validating separators on the way.

        Raises:
            MalformedInput: On invalid syntax or premature end of input.
            StreamFailure:  When the source raises while being read.
        """
        ch = self._peek()
        if not self._stack:
            if self._started:
                raise MalformedInput("no further tokens after top-level value", self._offset())
            self._started = True
            return self._value(ch)

        if ch == "":
            raise MalformedInput("unexpected end of input", self._offset())

        state = self._stack[-1]
        if state in (_ARRAY_START, _ARRAY_NEXT):
            if ch == "]":
                return self._close(Lexeme.END_ARRAY)
            if state == _ARRAY_NEXT:
                if ch != ",":
                    raise MalformedInput(
                        f"invalid character {ch!r} after array element", self._offset()
                    )
                self._pos += 1
                ch = self._peek()
            self._stack[-1] = _ARRAY_NEXT
            return self._value(ch)

        if state in (_OBJECT_START, _OBJECT_NEXT):
            if ch == "}":
                return self._close(Lexeme.END_OBJECT)
            if state == _OBJECT_NEXT:
                if ch != ",":
                    raise MalformedInput(
                        f"invalid character {ch!r} after object member", self._offset()
                    )
                self._pos += 1
                ch = self._peek()
            if ch != '"':
                raise MalformedInput(
                    "expected string for object key"
                    if ch
                    else "unexpected end of input",
                    self._offset(),
                )
            offset = self._offset()
            key = self._scan_string()
            if self._peek() != ":":
                raise MalformedInput("expected ':' after object key", self._offset())
            self._pos += 1
            self._stack[-1] = _OBJECT_VALUE
            return Token(Lexeme.KEY, key, offset)

        # _OBJECT_VALUE
        self._stack[-1] = _OBJECT_NEXT
        return self._value(ch)

    def more(self) -> bool:
        """Return True if the innermost open container has another element."""
        ch = self._peek()
        return ch != "" and ch not in "]}"

    def finish(self) -> None:
        """Check that only whitespace remains after the top-level value.

        Raises:
            MalformedInput: If any other character follows.
        """
        ch = self._peek()
        if ch != "":
            raise MalformedInput(
                f"invalid character {ch!r} after top-level value", self._offset()
            )

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _value(self, ch: str) -> Token:
        offset = self._offset()
        if ch == "":
            raise MalformedInput("unexpected end of input", offset)
        if ch == "[":
            self._open(_ARRAY_START)
            return Token(Lexeme.BEGIN_ARRAY, offset=offset)
        if ch == "{":
            self._open(_OBJECT_START)
            return Token(Lexeme.BEGIN_OBJECT, offset=offset)
        if ch == '"':
            return Token(Lexeme.STRING, self._scan_string(), offset)
        if ch in _LITERALS:
            word = _LITERALS[ch]
            self._ensure(len(word))
            if not self._buf.startswith(word, self._pos):
                raise MalformedInput(f"invalid literal, expected {word!r}", offset)
            self._pos += len(word)
            return Token(_LITERAL_LEXEMES[word], word, offset)
        if ch == "-" or "0" <= ch <= "9":
            return Token(Lexeme.NUMBER, self._scan_number(), offset)
        raise MalformedInput(
            f"invalid character {ch!r} looking for beginning of value", offset
        )

    def _open(self, state: int) -> None:
        if len(self._stack) >= self._max_depth:
            raise NestingTooDeep(
                f"nesting exceeds maximum depth of {self._max_depth}", self._offset()
            )
        self._pos += 1
        self._stack.append(state)

    def _close(self, lexeme: Lexeme) -> Token:
        offset = self._offset()
        self._pos += 1
        self._stack.pop()
        return Token(lexeme, offset=offset)

    def _scan_string(self) -> str:
        # self._pos is on the opening quote.  Long strings span several
        # chunks: the scanned part of each chunk is set aside and only the
        # unread tail (at most a dangling backslash) is carried into _fill.
        offset = self._offset()
        start = self._pos
        pieces: list[str] = []
        end = _STRING_RUN.match(self._buf, start + 1).end()
        while end == len(self._buf) or self._buf[end] != '"':
            pieces.append(self._buf[start:end])
            self._pos = end
            if not self._fill():
                raise MalformedInput("unterminated string", offset)
            start = 0
            end = _STRING_RUN.match(self._buf, 0).end()

        if pieces:
            pieces.append(self._buf[: end + 1])
            text, first, base = "".join(pieces), 1, offset
        else:
            text, first, base = self._buf, start + 1, self._base
        try:
            value, _ = scanstring(text, first, True)
        except json.JSONDecodeError as exc:
            raise MalformedInput(f"invalid string: {exc.msg}", base + exc.pos) from exc
        self._pos = end + 1
        return value

    def _scan_number(self) -> str:
        offset = self._offset()
        pieces: list[str] = []
        end = _NUMBER_RUN.match(self._buf, self._pos).end()
        while end == len(self._buf):
            pieces.append(self._buf[self._pos :])
            self._pos = end
            if not self._fill():
                break
            end = _NUMBER_RUN.match(self._buf, 0).end()

        if pieces:
            # Rebuild the buffer around the whole run so _NUMBER sees it at once.
            pieces.append(self._buf[self._pos :])
            self._buf = "".join(pieces)
            self._base = offset
            self._pos = 0
        match = _NUMBER.match(self._buf, self._pos)
        if match is None:
            raise MalformedInput("invalid number literal", offset)
        self._pos = match.end()
        return match.group(0)

    # ------------------------------------------------------------------
    # Buffering
    # ------------------------------------------------------------------

    def _offset(self) -> int:
        return self._base + self._pos

    def _peek(self) -> str:
        """Skip whitespace and return the next character, or "" at end of input."""
        while True:
            self._pos = _WHITESPACE.match(self._buf, self._pos).end()
            if self._pos < len(self._buf):
                return self._buf[self._pos]
            if not self._fill():
                return ""

    def _ensure(self, n: int) -> None:
        while len(self._buf) - self._pos < n and self._fill():
            pass

    def _fill(self) -> bool:
        """Append one chunk from the source; return False at end of input."""
        if self._eof:
            return False
        try:
            chunk = self._read(self._chunk_size)
        except UnicodeDecodeError as exc:
            raise MalformedInput(f"input is not valid UTF-8: {exc.reason}", self._offset()) from exc
        except (OSError, ValueError) as exc:
            raise StreamFailure(f"reading source failed: {exc}", self._offset()) from exc

        if isinstance(chunk, (bytes, bytearray, memoryview)):
            try:
                text = self._decoder.decode(bytes(chunk), final=not chunk)
            except UnicodeDecodeError as exc:
                raise MalformedInput(
                    f"input is not valid UTF-8: {exc.reason}", self._offset()
                ) from exc
        elif isinstance(chunk, str):
            text = chunk
        else:
            raise TypeError(
                f"source read() returned {type(chunk).__name__}, expected bytes or str"
            )

        if not chunk:
            self._eof = True
            return False

        # Drop consumed text.  Long tokens are collected by their scanners, so
        # only a short unread tail is ever carried over.
        self._base += self._pos
        self._buf = self._buf[self._pos :] + text
        self._pos = 0
        return True


@contextmanager
def open_tokenizer(
    source: Source,
    chunk_size: int = 65536,
    max_depth: int = 10000,
) -> Iterator[Tokenizer]:
    """Yield a ``Tokenizer`` reading from ``source``.

    ``bytes``-like and ``str`` sources are read from memory; ``os.PathLike``
    sources are opened in binary mode and closed on exit; any other object
    with a ``read`` method is read as-is and left open.

    Raises:
        StreamFailure: If a path source cannot be opened.
        TypeError:     If ``source`` is none of the supported types.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        yield Tokenizer(io.BytesIO(bytes(source)).read, chunk_size, max_depth)
    elif isinstance(source, str):
        yield Tokenizer(io.StringIO(source).read, chunk_size, max_depth)
    elif isinstance(source, os.PathLike):
        try:
            fh = open(source, "rb")  # noqa: SIM115
        except OSError as exc:
            raise StreamFailure(f"cannot open {os.fspath(source)!r}: {exc}") from exc
        with fh:
            yield Tokenizer(fh.read, chunk_size, max_depth)
    elif hasattr(source, "read"):
        yield Tokenizer(source.read, chunk_size, max_depth)
    else:
        raise TypeError(f"Unsupported JSON source type: {type(source)!r}")
