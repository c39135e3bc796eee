"""Host-facing orchestration of the spelling pipeline.

``SpellCheckSession`` is what an editor integration (or the CLI watcher)
talks to. It owns the current settings, the loaded dictionary, the ignore
policy and the per-document diagnostic sets, and routes document events
through the debounce scheduler.

Threading model: dictionary loads run on a single worker thread and deferred
checks fire on timer threads. Every check and every mutation of the session
state happens under one re-entrant lock, so checks never overlap.
"""

from __future__ import annotations

import logging
import re
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Protocol

from spellguard.config import LoadedSettings, SettingsLoader, SpellSettings
from spellguard.errors import ConfigError, DictionaryLoadError, PreconditionError
from spellguard.models import (
    ActionKind,
    CheckResult,
    CodeAction,
    Diagnostic,
    DictionaryCode,
    DocumentSnapshot,
    IgnoreScope,
    SchedulerDecision,
)
from spellguard.spelling.actions import SuggestionMapper, apply_replacement
from spellguard.spelling.dictionary import BackendFactory, DictionaryOracle
from spellguard.spelling.engine import DiagnosticEngine, overflow_notice
from spellguard.spelling.ignore_policy import IgnorePolicy
from spellguard.spelling.sanitizer import compile_user_patterns
from spellguard.spelling.scheduler import DebounceScheduler, TimerFactory, start_daemon_timer

LOGGER = logging.getLogger(__name__)

ALREADY_IGNORED_MESSAGE = "The word has already been added to the ignore list."
AUTO_CHECK_ENABLED_MESSAGE = "Spell Checker enabled."
AUTO_CHECK_PAUSED_MESSAGE = "Spell Checker paused."


class Notifier(Protocol):
    """User-facing messages raised by the session."""

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingNotifier:
    """Default notifier: forwards messages to the module logger."""

    def info(self, message: str) -> None:
        LOGGER.info("%s", message)

    def warning(self, message: str) -> None:
        LOGGER.warning("%s", message)

    def error(self, message: str) -> None:
        LOGGER.error("%s", message)


DiagnosticPublisher = Callable[[str, list[Diagnostic]], None]


def _dictionary_inputs(settings: SpellSettings) -> tuple[str, str, Path]:
    return settings.language.value, settings.dictionary_backend, settings.dictionary_path


class SpellCheckSession:
    """One checking session over a set of open documents.

    Args:
            loader: Source of the effective settings
            notifier: Receives user-facing info/warning/error messages
            publisher: Called with ``(uri, diagnostics)`` whenever a document's
                    diagnostic set is replaced or cleared
            clock: Monotonic clock in seconds, used by the scheduler
            timer_factory: Creates deferred-check timers
            backend_factory: Overrides how dictionary backends are built
    """

    def __init__(
        self,
        loader: SettingsLoader,
        *,
        notifier: Notifier | None = None,
        publisher: DiagnosticPublisher | None = None,
        clock: Callable[[], float] = time.monotonic,
        timer_factory: TimerFactory = start_daemon_timer,
        backend_factory: BackendFactory | None = None,
    ) -> None:
        self.loader = loader
        self.notifier: Notifier = notifier or LoggingNotifier()
        self._publisher = publisher
        self._backend_factory = backend_factory
        self._lock = threading.RLock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="spellguard-dictionary")
        self._documents: dict[str, DocumentSnapshot] = {}
        self._diagnostics: dict[str, list[Diagnostic]] = {}
        self._settings = SpellSettings()
        self._oracle: DictionaryOracle | None = None
        self._ignore_policy = IgnorePolicy(persist=self._persist_ignore_word)
        self._user_patterns: list[re.Pattern[str]] = []
        self.scheduler: DebounceScheduler[DocumentSnapshot] = DebounceScheduler(
            self.check_document,
            check_interval=self._settings.check_interval,
            auto_check=self._settings.auto_check,
            clock=clock,
            timer_factory=timer_factory,
        )
        self._disposed = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def activate(self) -> bool:
        """Load settings and the configured dictionary.

        Returns:
                True when the dictionary loaded and checking is possible.
        """
        self.load_settings()
        return self.load_dictionary_async().result()

    def load_settings(self) -> SpellSettings:
        """Load settings and rebuild the ignore policy without a dictionary."""
        loaded = self.loader.load()
        with self._lock:
            self._install(loaded)
            return self._settings

    def dispose(self) -> None:
        """Cancel pending checks and drop all diagnostic state."""
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            self.scheduler.dispose()
            uris = list(self._diagnostics)
            self._diagnostics.clear()
            self._documents.clear()
        self._executor.shutdown(wait=False, cancel_futures=True)
        LOGGER.debug("Session disposed (%d document(s) cleared)", len(uris))

    @property
    def settings(self) -> SpellSettings:
        return self._settings

    @property
    def ignore_policy(self) -> IgnorePolicy:
        return self._ignore_policy

    @property
    def oracle(self) -> DictionaryOracle | None:
        return self._oracle

    def is_ready(self) -> bool:
        oracle = self._oracle
        return oracle is not None and oracle.is_ready()

    # ------------------------------------------------------------------
    # Document events
    # ------------------------------------------------------------------
    def should_check(self, document: DocumentSnapshot) -> bool:
        if not self.is_ready():
            return False
        if document.scheme != "file":
            return False
        settings = self._settings
        if document.language_id not in settings.document_types:
            return False
        name = Path(document.file_name)
        if name.suffix in settings.ignore_file_extensions:
            return False
        if name.name in settings.ignore_filenames:
            return False
        return True

    def did_open(self, document: DocumentSnapshot) -> CheckResult | None:
        with self._lock:
            self._documents[document.uri] = document
        return self._maybe_auto_check(document)

    def did_save(self, document: DocumentSnapshot) -> CheckResult | None:
        with self._lock:
            self._documents[document.uri] = document
        return self._maybe_auto_check(document)

    def did_change(self, document: DocumentSnapshot) -> SchedulerDecision:
        with self._lock:
            self._documents[document.uri] = document
        if not self.should_check(document):
            return SchedulerDecision.SKIPPED
        return self.scheduler.on_change(document.uri, document)

    def did_close(self, document: DocumentSnapshot) -> None:
        self.scheduler.cancel(document.uri)
        with self._lock:
            self._documents.pop(document.uri, None)
            had_diagnostics = self._diagnostics.pop(document.uri, None) is not None
            if had_diagnostics:
                self._publish(document.uri, [])

    def check_document(self, document: DocumentSnapshot) -> CheckResult | None:
        """Check ``document`` now, regardless of the auto-check switch.

        Returns None when the document is not eligible for checking.
        """
        with self._lock:
            if self._disposed or not self.should_check(document):
                return None
            engine = self._build_engine()
            result = engine.check(document)
            self._diagnostics[document.uri] = list(result.diagnostics)
            self._publish(document.uri, self._diagnostics[document.uri])
            if result.overflowed:
                self.notifier.info(overflow_notice(engine.max_diagnostics))
        self.scheduler.record_check(document.uri)
        return result

    def diagnostics(self, uri: str) -> list[Diagnostic]:
        with self._lock:
            return list(self._diagnostics.get(uri, []))

    def open_documents(self) -> list[DocumentSnapshot]:
        with self._lock:
            return list(self._documents.values())

    # ------------------------------------------------------------------
    # Code actions
    # ------------------------------------------------------------------
    def code_actions(self, diagnostic: Diagnostic) -> list[CodeAction]:
        return self._build_mapper().actions_for(diagnostic)

    def suggestions(self, word: str, limit: int | None = None) -> list[str]:
        mapper = self._build_mapper()
        if limit is not None:
            mapper.suggestion_limit = limit
        return mapper.suggestions_for(word)

    def apply_action(self, document: DocumentSnapshot, action: CodeAction) -> DocumentSnapshot:
        """Carry out ``action`` and re-check the affected document.

        Returns the document as it stands afterwards (edited for replacements).
        """
        if action.kind is ActionKind.REPLACE:
            if action.replacement is None:
                raise ValueError("Replace action has no replacement text")
            updated = document.with_text(
                apply_replacement(document.text, action.diagnostic, action.replacement)
            )
            with self._lock:
                if document.uri in self._documents:
                    self._documents[document.uri] = updated
            self.check_document(updated)
            return updated

        scope = action.scope or IgnoreScope.WORKSPACE
        if self.add_ignore_word(action.word, scope):
            self.check_document(document)
        return document

    def add_ignore_word(self, word: str, scope: IgnoreScope = IgnoreScope.WORKSPACE) -> bool:
        """Add ``word`` to the ignore set and persist it for ``scope``.

        Warns and returns False when the word is already ignored or cannot be
        stored.
        """
        try:
            with self._lock:
                inserted = self._ignore_policy.add(word, scope)
        except (ConfigError, OSError) as exc:
            self.notifier.error(f"Could not store '{word}': {exc}")
            return False
        if not inserted:
            self.notifier.warning(ALREADY_IGNORED_MESSAGE)
        return inserted

    # ------------------------------------------------------------------
    # Settings and dictionary
    # ------------------------------------------------------------------
    def toggle_auto_check(self) -> bool:
        """Flip the runtime auto-check switch. Returns the new state."""
        with self._lock:
            enabled = not self.scheduler.auto_check
            self.scheduler.auto_check = enabled
            if not enabled:
                self.scheduler.cancel_all()
        self.notifier.info(AUTO_CHECK_ENABLED_MESSAGE if enabled else AUTO_CHECK_PAUSED_MESSAGE)
        if enabled:
            self._recheck_open_documents()
        return enabled

    def set_language(self, language: str | DictionaryCode) -> Future:
        """Switch to ``language``; the returned future resolves to success.

        Raises:
                ValueError: if ``language`` is not a known dictionary code
        """
        code = DictionaryCode(language)
        return self.load_dictionary_async(code.value)

    def load_dictionary_async(self, language: str | None = None) -> Future:
        """Load a dictionary on the worker thread.

        The future resolves to True once the dictionary is active and open
        documents have been re-checked, or False when loading failed.
        """
        with self._lock:
            settings = self._settings
        return self._executor.submit(
            self._load_dictionary, language or settings.language.value, settings
        )

    def reload_settings(self) -> SpellSettings:
        """Re-derive settings from the loader and invalidate dependent state.

        The dictionary is only reloaded when the language, backend or
        dictionary path changed.
        """
        loaded = self.loader.load()
        with self._lock:
            previous = self._settings
            self._install(loaded)
            settings = self._settings
        if not self.is_ready() or _dictionary_inputs(previous) != _dictionary_inputs(settings):
            self.load_dictionary_async().result()
        else:
            self._recheck_open_documents()
        return settings

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _install(self, loaded: LoadedSettings) -> None:
        settings = loaded.settings
        for message in loaded.warnings:
            self.notifier.warning(message)

        policy = IgnorePolicy(persist=self._persist_ignore_word)
        policy.seed(loaded.global_ignore_words, IgnoreScope.GLOBAL)
        policy.seed(loaded.workspace_ignore_words, IgnoreScope.WORKSPACE)
        policy.seed(loaded.legacy_ignore_words, IgnoreScope.WORKSPACE)
        # words contributed by overrides rather than a settings file
        from_files = set(loaded.global_ignore_words)
        from_files.update(loaded.workspace_ignore_words, loaded.legacy_ignore_words)
        policy.seed(
            [word for word in settings.ignore_words_list if word not in from_files],
            IgnoreScope.SESSION,
        )
        # words ignored during this session survive a reload
        policy.adopt(self._ignore_policy, IgnoreScope.SESSION)

        self._settings = settings
        self._ignore_policy = policy
        self._user_patterns = compile_user_patterns(settings.ignore_regexp)
        self.scheduler.check_interval = settings.check_interval
        self.scheduler.auto_check = settings.auto_check
        LOGGER.debug(
            "Settings applied: language=%s, %d ignore word(s), %d user pattern(s)",
            settings.language.value,
            len(policy),
            len(self._user_patterns),
        )

    def _load_dictionary(self, language: str, settings: SpellSettings) -> bool:
        oracle = DictionaryOracle(
            settings.dictionary_path,
            backend=settings.dictionary_backend,
            backend_factory=self._backend_factory,
        )
        try:
            oracle.load(language)
        except DictionaryLoadError as exc:
            LOGGER.error("%s", exc)
            self.notifier.error(str(exc))
            with self._lock:
                # checking stays disabled until a later load succeeds
                self._oracle = oracle
                stale = list(self._diagnostics)
                self._diagnostics.clear()
                for uri in stale:
                    self._publish(uri, [])
            return False

        with self._lock:
            if self._disposed:
                return False
            self._oracle = oracle
            if self._settings.language.value != language:
                self._settings = self._settings.model_copy(
                    update={"language": DictionaryCode(language)}
                )
        self._recheck_open_documents()
        return True

    def _build_engine(self) -> DiagnosticEngine:
        if self._oracle is None:
            raise PreconditionError("No dictionary has been loaded for this session.")
        settings = self._settings
        return DiagnosticEngine(
            self._oracle,
            self._ignore_policy,
            severity=settings.suggestion_severity,
            max_diagnostics=settings.max_diagnostics,
            user_patterns=self._user_patterns,
        )

    def _build_mapper(self) -> SuggestionMapper:
        with self._lock:
            oracle = self._oracle
            limit = self._settings.suggestion_limit
        if oracle is None:
            oracle = DictionaryOracle(self._settings.dictionary_path, backend_factory=self._backend_factory)
        return SuggestionMapper(oracle, suggestion_limit=limit)

    def _maybe_auto_check(self, document: DocumentSnapshot) -> CheckResult | None:
        if not self.scheduler.enabled:
            return None
        return self.check_document(document)

    def _recheck_open_documents(self) -> None:
        for document in self.open_documents():
            self.check_document(document)

    def _persist_ignore_word(self, word: str, scope: IgnoreScope) -> None:
        self.loader.persist_ignore_word(word, scope)

    def _publish(self, uri: str, diagnostics: list[Diagnostic]) -> None:
        if self._publisher is not None:
            self._publisher(uri, list(diagnostics))
