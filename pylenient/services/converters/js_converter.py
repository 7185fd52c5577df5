"""
Semicolon-free JavaScript as the lenient dialect.

Both directions work on the Pygments token stream and only ever add or remove
`;` tokens, so everything else in the file (comments, blank lines, layout)
survives a round trip untouched.

Rules, in short:
  - to_lenient drops a `;` that ends its line in statement context, unless
    the next line starts with `(`, `[`, a template literal or a regex (where
    ASI would glue the two lines together).
  - to_canonical inserts `;` at every line end that terminates a statement,
    i.e. not after openers, commas, operators, a block-closing `}` or a
    control head like `if (...)`, and not before a line that continues the
    expression (`.then()`, `&& b`, `)` ...).
  - A `{` after an operator, `(`, `,`, `return` or `export default` opens an
    object literal and its closing `}` ends the statement; after a label or a
    `case x:` clause it opens a block.
"""

from __future__ import annotations

from collections.abc import Set as AbstractSet
from dataclasses import dataclass

from pygments.lexers import JavascriptLexer
from pygments.token import Comment, Error, Keyword, Operator, Punctuation, String, _TokenType

from pylenient.domain.errors import ParseError
from pylenient.domain.models import ConverterSet
from pylenient.utils.constants import LANGUAGE_JS

_LEXER = JavascriptLexer(stripnl=False, ensurenl=False)

_PAIRS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_PAIRS.values())

_CONTROL_KEYWORDS = frozenset({"if", "for", "while", "with", "switch", "catch"})
_NO_SEMI_AFTER = frozenset({"{", "(", "[", ",", ";", ".", "=>", "...", "}"})
_NO_SEMI_AFTER_KEYWORDS = frozenset({"else", "do", "try", "finally"})
_POSTFIX_OPERATORS = frozenset({"++", "--"})
_PREFIX_OPERATORS = frozenset({"++", "--", "!", "~", "typeof", "void", "delete", "new"})
_CONTINUES_LINE = frozenset({".", ")", "]", ",", "?", ":", "=>", "{", "(", "[", "`"})
# `default` directly before `{` only occurs in `export default {...}`
_OBJECT_AFTER = frozenset({"(", "[", ",", "return", "...", "default"})
# A line starting with one of these would be parsed as part of the previous one
_ASI_HAZARDS = ("(", "[", "`", "/")


@dataclass(frozen=True)
class _Token:
    offset: int
    ttype: _TokenType
    value: str

    @property
    def is_comment(self) -> bool:
        return self.ttype in Comment

    @property
    def is_significant(self) -> bool:
        return bool(self.value.strip()) and not self.is_comment

    @property
    def breaks_line(self) -> bool:
        return "\n" in self.value and (not self.value.strip() or self.is_comment)

    @property
    def is_bracket(self) -> bool:
        return self.ttype in Punctuation and (self.value in _PAIRS or self.value in _CLOSERS)


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    for offset, ttype, value in _LEXER.get_tokens_unprocessed(text):
        if not value:
            continue
        if ttype in Error:
            raise ParseError.at_offset(f"Unexpected character {value!r}", text, offset)
        tokens.append(_Token(offset, ttype, value))
    _check_brackets(text, tokens)
    return tokens


def _check_brackets(text: str, tokens: list[_Token]) -> None:
    stack: list[_Token] = []
    for tok in tokens:
        if not tok.is_bracket:
            continue
        if tok.value in _PAIRS:
            stack.append(tok)
        elif not stack or _PAIRS[stack[-1].value] != tok.value:
            raise ParseError.at_offset(f"Unexpected {tok.value!r}", text, tok.offset)
        else:
            stack.pop()
    if stack:
        raise ParseError.at_offset(f"Unclosed {stack[-1].value!r}", text, stack[-1].offset)


def _next_significant(tokens: list[_Token], start: int) -> _Token | None:
    for tok in tokens[start:]:
        if tok.is_significant:
            return tok
    return None


def _ends_line(tokens: list[_Token], index: int) -> bool:
    for tok in tokens[index + 1 :]:
        if tok.breaks_line:
            return True
        if tok.is_significant:
            return False
    return True


def _join(
    tokens: list[_Token],
    *,
    skip: AbstractSet[int] = frozenset(),
    semicolon_after: AbstractSet[int] = frozenset(),
) -> str:
    out: list[str] = []
    for i, tok in enumerate(tokens):
        if i in skip:
            continue
        out.append(tok.value)
        if i in semicolon_after:
            out.append(";")
    return "".join(out)


def js_to_lenient(text: str) -> str:
    tokens = _tokenize(text)
    stack: list[str] = []
    drop: set[int] = set()
    for i, tok in enumerate(tokens):
        if tok.is_bracket:
            if tok.value in _PAIRS:
                stack.append(tok.value)
            else:
                stack.pop()
            continue
        if tok.ttype not in Punctuation or tok.value != ";":
            continue
        if stack and stack[-1] != "{":
            continue
        if not _ends_line(tokens, i):
            continue
        following = _next_significant(tokens, i + 1)
        if following is not None and following.value.startswith(_ASI_HAZARDS):
            continue
        drop.add(i)
    return _join(tokens, skip=drop)


def _terminates_statement(last: _Token, closed: str | None) -> bool:
    if closed == "{}":
        return True
    if last.value in _NO_SEMI_AFTER:
        return False
    if last.ttype in Operator and last.value not in _POSTFIX_OPERATORS:
        return False
    if last.ttype in Keyword and last.value in _NO_SEMI_AFTER_KEYWORDS:
        return False
    return closed != "if("


def _continues_previous_line(following: _Token | None) -> bool:
    if following is None:
        return False
    if following.value in _CONTINUES_LINE or following.value.startswith(_ASI_HAZARDS):
        return True
    if following.ttype in String.Backtick:
        return True
    return following.ttype in Operator and following.value not in _PREFIX_OPERATORS


def _opener_kind(opener: _Token, previous: _Token | None, *, after_label: bool = False) -> str:
    """
    Classify an opener: "(" / "[" / "if(" (control head) / "{" (block) / "{}" (object literal).

    `after_label` marks a `{` right after a statement-level `:` (a label or a
    `case`/`default` clause), which always opens a block.
    """
    if opener.value == "(":
        if previous is not None and previous.ttype in Keyword and previous.value in _CONTROL_KEYWORDS:
            return "if("
        return "("
    if opener.value == "[":
        return "["
    if after_label:
        return "{"
    if previous is not None and (
        (previous.ttype in Operator and previous.value not in _POSTFIX_OPERATORS)
        or previous.value in _OBJECT_AFTER
    ):
        return "{}"
    return "{"


def _is_optional_chain(tokens: list[_Token], index: int) -> bool:
    """`a?.b` lexes as `?` followed by `.`; that `?` opens no conditional."""
    if index + 1 >= len(tokens):
        return False
    following = tokens[index + 1]
    return following.value == "." and following.offset == tokens[index].offset + 1


def js_to_canonical(text: str) -> str:
    tokens = _tokenize(text)
    stack: list[str] = []
    # Unanswered `?` per nesting level, to tell a conditional's `:` from a label's
    conditionals: list[int] = [0]
    insert: set[int] = set()

    pending: int | None = None
    pending_in_statement = False
    pending_closed: str | None = None
    previous: _Token | None = None
    after_label = False

    def settle(following: _Token | None) -> None:
        nonlocal pending
        if pending is None:
            return
        if (
            pending_in_statement
            and _terminates_statement(tokens[pending], pending_closed)
            and not _continues_previous_line(following)
        ):
            insert.add(pending)
        pending = None

    for i, tok in enumerate(tokens):
        if tok.breaks_line:
            settle(_next_significant(tokens, i + 1))
            continue
        if not tok.is_significant:
            continue

        closed: str | None = None
        if tok.is_bracket:
            if tok.value in _PAIRS:
                stack.append(_opener_kind(tok, previous, after_label=after_label))
                conditionals.append(0)
            else:
                closed = stack.pop()
                conditionals.pop()

        after_label = False
        if tok.ttype in Operator and tok.value == "?" and not _is_optional_chain(tokens, i):
            conditionals[-1] += 1
        elif tok.ttype in Operator and tok.value == ":":
            if conditionals[-1]:
                conditionals[-1] -= 1
            else:
                after_label = not stack or stack[-1] == "{"

        pending = i
        pending_in_statement = not stack or stack[-1] == "{"
        pending_closed = closed
        previous = tok

    settle(None)
    return _join(tokens, semicolon_after=insert)


def js_lenient_to_lenient(text: str) -> str:
    return js_to_lenient(js_to_canonical(text))


def build_js_converters() -> ConverterSet:
    return ConverterSet(
        language=LANGUAGE_JS,
        to_lenient=js_to_lenient,
        to_canonical=js_to_canonical,
        lenient_to_lenient=js_lenient_to_lenient,
    )
