from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

Convert = Callable[[str], str]


@dataclass(frozen=True)
class Grammar:
    """Host grammar identity. Only `scope_name` takes part in dialect decisions."""

    scope_name: str
    name: str = ""


PLAIN_TEXT = Grammar("text.plain", "Plain Text")
JAVASCRIPT = Grammar("source.js", "JavaScript")
JSON = Grammar("source.json", "JSON")
LENIENT_JAVASCRIPT = Grammar("source.js.lenient", "Lenient JavaScript")
LENIENT_JSON = Grammar("source.json.lenient", "Lenient JSON")


@dataclass(frozen=True)
class ConverterSet:
    """Immutable triple of pure text converters for one language tag."""

    language: str
    to_lenient: Convert
    to_canonical: Convert
    lenient_to_lenient: Convert


@dataclass(frozen=True)
class SwitchOutcome:
    """
    Result of a dialect transition.

    A failed enable carries the grammar the document was reverted to; a failed
    disable still leaves the document canonical (only its text could not be
    transcoded).
    """

    ok: bool
    error: Exception | None = None
    reverted_grammar: Grammar | None = None

    @classmethod
    def success(cls) -> SwitchOutcome:
        return cls(ok=True)

    @classmethod
    def failure(cls, error: Exception, *, reverted_grammar: Grammar | None = None) -> SwitchOutcome:
        return cls(ok=False, error=error, reverted_grammar=reverted_grammar)


@dataclass(eq=False)
class Notification:
    """A user-visible error record. `message` doubles as its category."""

    message: str
    detail: str = ""
    stack: str = ""
    dismissable: bool = True
    source: str | None = None
    dismissed: bool = False
    _on_dismiss: Callable[[Notification], None] | None = field(default=None, repr=False)

    def get_message(self) -> str:
        return self.message

    def dismiss(self) -> None:
        if self.dismissed:
            return
        self.dismissed = True
        if self._on_dismiss is not None:
            self._on_dismiss(self)
