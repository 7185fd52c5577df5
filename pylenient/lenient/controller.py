from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from pylenient.domain.interfaces import IConverterProvider, IDisposable, IEditorDocument
from pylenient.domain.models import Grammar, SwitchOutcome
from pylenient.lenient.failure_policy import FailurePolicy
from pylenient.lenient.file_proxy import get_mapped_file, get_original_file, is_mapped_file
from pylenient.lenient.transcoder import transcode_document
from pylenient.utils.constants import (
    COULDNT_CONVERT_FROM_LENIENT,
    COULDNT_CONVERT_TO_LENIENT,
    COULDNT_SAVE_LENIENT_FILE,
)
from pylenient.utils.events import CompositeDisposable

logger = logging.getLogger(__name__)


@dataclass
class _LenientState:
    document: IEditorDocument
    language: str


def _source_key(document: IEditorDocument) -> str:
    return document.get_path() or f"untitled-{id(document):x}"


class LenientController:
    """
    Per-document dialect state machine (canonical <-> lenient).

    Grammar changes drive the transitions:
      - a lenient scope on a canonical document enables lenient mode: the
        backing file handle is swapped for a mapped one and the text is
        reloaded (clean document) or transcoded in memory (dirty document);
      - any other scope on a lenient document disables it again;
      - switching between two lenient scopes disables, then re-enables.

    The controller owns the lenient flag of every document it observes (the
    `_states` side-table, whose entries are also the tracked lenient
    documents). Handle swap and flag change always happen within one
    transition, so a document is lenient exactly when its handle is mapped.
    """

    def __init__(
        self,
        *,
        converters: IConverterProvider,
        policy: FailurePolicy,
        scope_languages: Mapping[str, str],
        reload_on_switch: bool = True,
    ) -> None:
        self._converters = converters
        self._policy = policy
        self._scope_languages = dict(scope_languages)
        self._reload_on_switch = reload_on_switch
        self._states: dict[int, _LenientState] = {}
        self._subscriptions = CompositeDisposable()

    # ----------------------------- queries -----------------------------

    def language_for(self, grammar: Grammar) -> str | None:
        return self._scope_languages.get(grammar.scope_name)

    def is_lenient(self, document: IEditorDocument) -> bool:
        return id(document) in self._states

    def lenient_documents(self) -> list[IEditorDocument]:
        return [state.document for state in self._states.values()]

    # ----------------------------- observation -----------------------------

    def observe(self, document: IEditorDocument) -> IDisposable:
        """Follow `document`'s grammar until it is destroyed or the controller deactivates."""
        previous: Grammar | None = None

        def on_grammar(grammar: Grammar) -> None:
            nonlocal previous
            self.handle_grammar(document, grammar, previous)
            # Read back: a failed enable has already put the old grammar back.
            previous = document.get_grammar()

        subscription = CompositeDisposable()
        subscription.add(document.observe_grammar(on_grammar))

        def on_destroy() -> None:
            # Closing one editor only forgets it; its file stays as saved.
            subscription.dispose()
            self._subscriptions.remove(subscription)
            self._states.pop(id(document), None)

        subscription.add(document.on_did_destroy(on_destroy))
        self._subscriptions.add(subscription)
        return subscription

    def handle_grammar(
        self,
        document: IEditorDocument,
        grammar: Grammar,
        previous: Grammar | None = None,
    ) -> SwitchOutcome:
        language = self.language_for(grammar)
        state = self._states.get(id(document))
        outcome = SwitchOutcome.success()
        if state is not None:
            if state.language == language:
                return outcome
            outcome = self.disable(document)
        if language is None:
            return outcome
        return self.enable(document, previous, language)

    # ----------------------------- transitions -----------------------------

    def enable(
        self,
        document: IEditorDocument,
        previous: Grammar | None,
        language: str,
    ) -> SwitchOutcome:
        """
        Switch `document` to lenient. On failure the document keeps its
        original handle and text, and its grammar is set back to `previous`.
        """
        if self.is_lenient(document):
            return SwitchOutcome.success()

        source = _source_key(document)
        try:
            converters = self._converters.get_converters(language)
        except KeyError as e:
            self._policy.report(COULDNT_CONVERT_TO_LENIENT, e, source=source)
            return self._abort_enable(document, previous, e)

        has_backing_file = bool(document.get_path()) and document.file is not None
        has_unsaved_changes = document.is_modified()
        original_file = document.file

        if has_backing_file:
            document.file = get_mapped_file(
                original_file,
                converters,
                on_error=self._policy.error_reporter(COULDNT_SAVE_LENIENT_FILE, source),
                on_success=self._policy.success_reporter(source),
            )

        # Without a previous grammar the document was opened lenient: its text already is.
        if has_unsaved_changes and previous is not None:
            try:
                transcode_document(
                    document,
                    converters.to_lenient,
                    self._policy.error_reporter(COULDNT_CONVERT_TO_LENIENT, source),
                )
            except Exception as e:
                document.file = original_file
                return self._abort_enable(document, previous, e)

        self._states[id(document)] = _LenientState(document=document, language=language)
        logger.debug("Lenient %s enabled for %s", language, source)

        if has_backing_file and not has_unsaved_changes and self._reload_on_switch:
            try:
                document.load(internal=True)
            except Exception as e:
                self._policy.report(COULDNT_CONVERT_TO_LENIENT, e, source=source)
                self._states.pop(id(document), None)
                document.file = original_file
                return self._abort_enable(document, previous, e)

        return SwitchOutcome.success()

    def disable(self, document: IEditorDocument) -> SwitchOutcome:
        """
        Switch `document` back to canonical. Always leaves it canonical; a text
        that cannot be transcoded is reported and returned as a failed outcome.
        """
        state = self._states.pop(id(document), None)
        if state is None:
            return SwitchOutcome.success()

        source = _source_key(document)
        has_unsaved_changes = document.is_modified()
        if is_mapped_file(document.file):
            document.file = get_original_file(document.file)
        has_backing_file = bool(document.get_path()) and document.file is not None
        logger.debug("Lenient %s disabled for %s", state.language, source)

        reported = False

        def report(error: Exception) -> None:
            nonlocal reported
            reported = True
            self._policy.report(COULDNT_CONVERT_FROM_LENIENT, error, source=source)

        try:
            if has_unsaved_changes:
                converters = self._converters.get_converters(state.language)
                transcode_document(document, converters.to_canonical, report)
            elif has_backing_file and self._reload_on_switch:
                document.load(internal=True)
        except Exception as e:
            if not reported:
                report(e)
            return SwitchOutcome.failure(e)
        return SwitchOutcome.success()

    def deactivate(self, *, unloading: bool = False) -> None:
        """
        Stop observing. Unless the whole editor is unloading, put every lenient
        document back to canonical; a failure there never stops deactivation.
        """
        self._subscriptions.dispose()
        self._subscriptions = CompositeDisposable()
        if not unloading:
            for state in list(self._states.values()):
                try:
                    self.disable(state.document)
                except Exception:
                    logger.exception("Could not restore %s to canonical", _source_key(state.document))
        self._states.clear()

    # ----------------------------- internals -----------------------------

    def _abort_enable(
        self,
        document: IEditorDocument,
        previous: Grammar | None,
        error: Exception,
    ) -> SwitchOutcome:
        logger.warning("Lenient mode not enabled for %s: %s", _source_key(document), error)
        if previous is not None:
            document.set_grammar(previous)
        return SwitchOutcome.failure(error, reverted_grammar=previous)
