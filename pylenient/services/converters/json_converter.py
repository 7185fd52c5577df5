"""
Lenient JSON: bare identifier keys, optional commas, `//` and `/* */` comments.

    {
      name: "pylenient"
      tags: [
        "json"
        "lenient"
      ]
      "needs quotes": true
    }

Numbers keep their source spelling in both directions, so `1.50` or `1e3`
never get re-rendered by a float round trip. Objects keep every member in
source order, duplicate keys included. `NaN` and `Infinity` are not JSON
and are rejected.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

from pylenient.domain.errors import ParseError
from pylenient.domain.models import ConverterSet
from pylenient.utils.constants import DEFAULT_JSON_INDENT, LANGUAGE_JSON

_BARE_KEY_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*\Z")
_RESERVED_WORDS = {"true": True, "false": False, "null": None}

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
    |(?P<comment>//[^\n]*|/\*.*?\*/)
    |(?P<punct>[{}\[\]:,])
    |(?P<string>"(?:[^"\\\n]|\\.)*")
    |(?P<number>-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?)
    |(?P<word>[A-Za-z_$][A-Za-z0-9_$]*)
    """,
    re.VERBOSE | re.DOTALL,
)


class _Number(str):
    """A JSON number kept as written."""


class _Object(list):
    """A JSON object as its (key, value) members, in order."""


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    offset: int


class _LenientParser:
    def __init__(self, text: str) -> None:
        self._text = text
        self._tokens = list(self._lex())
        self._pos = 0

    def _lex(self):
        text = self._text
        offset = 0
        while offset < len(text):
            m = _TOKEN_RE.match(text, offset)
            if m is None:
                raise ParseError.at_offset(f"Unexpected character {text[offset]!r}", text, offset)
            if m.lastgroup not in ("ws", "comment"):
                yield _Token(m.lastgroup or "", m.group(), offset)
            offset = m.end()

    def _error(self, message: str, offset: int) -> ParseError:
        return ParseError.at_offset(message, self._text, offset)

    def _peek(self) -> _Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _next(self) -> _Token:
        tok = self._peek()
        if tok is None:
            raise self._error("Unexpected end of input", len(self._text))
        self._pos += 1
        return tok

    def _skip_comma(self) -> None:
        tok = self._peek()
        if tok is not None and tok.kind == "punct" and tok.text == ",":
            self._pos += 1

    def _closes(self, start: _Token, closer: str) -> bool:
        tok = self._peek()
        if tok is None:
            raise self._error(f"Unclosed {start.text!r}", start.offset)
        if tok.kind == "punct" and tok.text == closer:
            self._pos += 1
            return True
        return False

    def parse(self) -> Any:
        value = self._value()
        extra = self._peek()
        if extra is not None:
            raise self._error(f"Unexpected {extra.text!r} after the top-level value", extra.offset)
        return value

    def _string(self, tok: _Token) -> str:
        try:
            return json.loads(tok.text)
        except json.JSONDecodeError as e:
            raise self._error(f"Invalid string: {e.msg}", tok.offset + e.pos) from e

    def _value(self) -> Any:
        tok = self._next()
        if tok.kind == "punct" and tok.text == "{":
            return self._object(tok)
        if tok.kind == "punct" and tok.text == "[":
            return self._array(tok)
        if tok.kind == "string":
            return self._string(tok)
        if tok.kind == "number":
            return _Number(tok.text)
        if tok.kind == "word" and tok.text in _RESERVED_WORDS:
            return _RESERVED_WORDS[tok.text]
        raise self._error(f"Unexpected {tok.text!r}", tok.offset)

    def _object(self, start: _Token) -> _Object:
        result = _Object()
        while not self._closes(start, "}"):
            key_tok = self._next()
            if key_tok.kind == "string":
                key = self._string(key_tok)
            elif key_tok.kind == "word":
                key = key_tok.text
            else:
                raise self._error(f"Expected a key, got {key_tok.text!r}", key_tok.offset)
            colon = self._next()
            if colon.kind != "punct" or colon.text != ":":
                raise self._error(f"Expected ':' after key {key!r}", colon.offset)
            result.append((key, self._value()))
            self._skip_comma()
        return result

    def _array(self, start: _Token) -> list[Any]:
        result: list[Any] = []
        while not self._closes(start, "]"):
            result.append(self._value())
            self._skip_comma()
        return result


def _reject_constant(name: str) -> Any:
    raise ParseError(f"Unexpected {name!r}")


def _parse_canonical(text: str) -> Any:
    try:
        return json.loads(
            text,
            object_pairs_hook=_Object,
            parse_int=_Number,
            parse_float=_Number,
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError as e:
        raise ParseError(e.msg, line=e.lineno, column=e.colno) from e


def _scalar(value: Any) -> str:
    if isinstance(value, _Number):
        return str(value)
    return json.dumps(value, ensure_ascii=False)


def _key(key: str, *, lenient: bool) -> str:
    if lenient and _BARE_KEY_RE.match(key) and key not in _RESERVED_WORDS:
        return key
    return json.dumps(key, ensure_ascii=False)


def _render(value: Any, *, indent: int, lenient: bool, level: int = 0) -> str:
    if isinstance(value, _Object):
        items = [
            f"{_key(k, lenient=lenient)}: {_render(v, indent=indent, lenient=lenient, level=level + 1)}"
            for k, v in value
        ]
        opener, closer = "{", "}"
    elif isinstance(value, list):
        items = [_render(v, indent=indent, lenient=lenient, level=level + 1) for v in value]
        opener, closer = "[", "]"
    else:
        return _scalar(value)

    if not items:
        return opener + closer
    pad = " " * (indent * (level + 1))
    separator = "\n" if lenient else ",\n"
    body = separator.join(pad + item for item in items)
    return f"{opener}\n{body}\n{' ' * (indent * level)}{closer}"


def _document(value: Any, *, indent: int, lenient: bool) -> str:
    return _render(value, indent=indent, lenient=lenient) + "\n"


def build_json_converters(*, indent: int = DEFAULT_JSON_INDENT) -> ConverterSet:
    """Lenient JSON converters rendering nested values `indent` spaces deep."""
    indent = max(1, indent)

    def to_lenient(text: str) -> str:
        if not text.strip():
            return ""
        return _document(_parse_canonical(text), indent=indent, lenient=True)

    def to_canonical(text: str) -> str:
        if not text.strip():
            return ""
        return _document(_LenientParser(text).parse(), indent=indent, lenient=False)

    def lenient_to_lenient(text: str) -> str:
        if not text.strip():
            return ""
        return _document(_LenientParser(text).parse(), indent=indent, lenient=True)

    return ConverterSet(
        language=LANGUAGE_JSON,
        to_lenient=to_lenient,
        to_canonical=to_canonical,
        lenient_to_lenient=lenient_to_lenient,
    )
