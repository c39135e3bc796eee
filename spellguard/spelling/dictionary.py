"""Dictionary access for the spelling pipeline.

The oracle owns exactly one loaded language at a time. A new dictionary is
built completely before it replaces the current one, so a check never sees a
partially loaded dictionary. Parsing of the dictionary formats themselves is
delegated to third-party libraries behind the ``DictionaryBackend`` protocol:

- ``hunspell``: affix/word-list pairs read with ``spylls``
- ``frequency``: word-frequency lists bundled with ``pyspellchecker``
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import Any, Callable, Iterable, Protocol

from spellchecker import SpellChecker
from spylls.hunspell import Dictionary

from spellguard.errors import DictionaryLoadError, PreconditionError

LOGGER = logging.getLogger(__name__)

HUNSPELL_BACKEND = "hunspell"
FREQUENCY_BACKEND = "frequency"

# pyspellchecker ships one list per language, not per regional variant.
_FREQUENCY_LANGUAGES = {
    "en_US": "en",
    "en_GB-ize": "en",
    "en_GB-ise": "en",
    "es_ANY": "es",
    "fr": "fr",
}

# Upper bound on candidates pulled from a lazy suggestion generator.
_MAX_RAW_SUGGESTIONS = 50


class DictionaryBackend(Protocol):
    """Capability exposed by a parsed dictionary."""

    def check(self, word: str) -> bool:
        """Return True when ``word`` is spelled correctly."""
        ...

    def suggest(self, word: str) -> Iterable[str]:
        """Yield replacement candidates, best first."""
        ...


BackendFactory = Callable[[str, Path], DictionaryBackend]


class HunspellBackend:
    """Backend over a hunspell ``<code>.aff`` / ``<code>.dic`` pair."""

    def __init__(self, dictionary: Any) -> None:
        self._dictionary = dictionary

    @classmethod
    def from_directory(cls, language: str, dictionary_dir: Path) -> "HunspellBackend":
        base = Path(dictionary_dir) / language
        missing = [
            path.name
            for path in (Path(f"{base}.aff"), Path(f"{base}.dic"))
            if not path.is_file()
        ]
        if missing:
            raise DictionaryLoadError(
                language, f"missing {', '.join(missing)} in {dictionary_dir}"
            )
        try:
            dictionary = Dictionary.from_files(str(base))
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            raise DictionaryLoadError(language, f"could not read dictionary files: {exc}") from exc
        return cls(dictionary)

    def check(self, word: str) -> bool:
        return bool(self._dictionary.lookup(word))

    def suggest(self, word: str) -> Iterable[str]:
        return self._dictionary.suggest(word)


class FrequencyBackend:
    """Backend over pyspellchecker's bundled word-frequency lists."""

    def __init__(self, checker: SpellChecker) -> None:
        self._checker = checker

    @classmethod
    def for_language(cls, language: str, dictionary_dir: Path | None = None) -> "FrequencyBackend":
        code = _FREQUENCY_LANGUAGES.get(language)
        if code is None:
            raise DictionaryLoadError(language, "no word-frequency dictionary available")
        try:
            checker = SpellChecker(language=code)
        except (OSError, ValueError) as exc:
            raise DictionaryLoadError(language, str(exc)) from exc
        return cls(checker)

    def check(self, word: str) -> bool:
        return bool(self._checker.known([word]))

    def suggest(self, word: str) -> Iterable[str]:
        candidates = set(self._checker.candidates(word) or ())
        candidates.discard(word.lower())
        return sorted(
            candidates,
            key=lambda candidate: (-self._checker.word_usage_frequency(candidate), candidate),
        )


_BACKEND_FACTORIES: dict[str, BackendFactory] = {
    HUNSPELL_BACKEND: HunspellBackend.from_directory,
    FREQUENCY_BACKEND: FrequencyBackend.for_language,
}


def available_backends() -> list[str]:
    return sorted(_BACKEND_FACTORIES)


def backend_factory_for(name: str) -> BackendFactory:
    try:
        return _BACKEND_FACTORIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown dictionary backend '{name}' (expected one of: {available_backends()})"
        ) from None


@dataclass(frozen=True)
class _LoadedDictionary:
    language: str
    backend: DictionaryBackend


class DictionaryOracle:
    """Word validity and suggestion capability for one loaded language."""

    def __init__(
        self,
        dictionary_dir: Path | str,
        *,
        backend: str = HUNSPELL_BACKEND,
        backend_factory: BackendFactory | None = None,
    ) -> None:
        self.dictionary_dir = Path(dictionary_dir)
        self.backend_name = backend
        self._backend_factory = backend_factory or backend_factory_for(backend)
        self._loaded: _LoadedDictionary | None = None

    def load(self, language: str) -> None:
        """Load ``language`` and make it the active dictionary.

        Raises:
                DictionaryLoadError: if the dictionary cannot be built. The
                previously active dictionary, if any, stays in place.
        """
        LOGGER.info(
            "Loading %s dictionary (%s backend) from %s",
            language,
            self.backend_name,
            self.dictionary_dir,
        )
        try:
            backend = self._backend_factory(language, self.dictionary_dir)
        except DictionaryLoadError:
            raise
        except Exception as exc:
            raise DictionaryLoadError(language, str(exc)) from exc
        self._loaded = _LoadedDictionary(language=language, backend=backend)
        LOGGER.info("Dictionary %s ready", language)

    def is_ready(self) -> bool:
        return self._loaded is not None

    @property
    def language(self) -> str | None:
        return self._loaded.language if self._loaded else None

    def check(self, word: str) -> bool:
        return self._require_loaded().backend.check(word)

    def suggest(self, word: str, limit: int = 5) -> list[str]:
        """Return at most ``limit`` candidates for ``word``, best first.

        Failures inside the backend are logged and produce no suggestions.
        """
        loaded = self._require_loaded()
        if limit <= 0:
            return []
        suggestions: list[str] = []
        try:
            # Backends may be lazy; stop pulling once enough are collected.
            for candidate in islice(loaded.backend.suggest(word), _MAX_RAW_SUGGESTIONS):
                if candidate == word or candidate in suggestions:
                    continue
                suggestions.append(candidate)
                if len(suggestions) >= limit:
                    break
        except Exception:
            LOGGER.exception("Suggestion lookup failed for %r", word)
            return []
        return suggestions

    def _require_loaded(self) -> _LoadedDictionary:
        loaded = self._loaded
        if loaded is None:
            raise PreconditionError("Dictionary oracle is not loaded with a dictionary.")
        return loaded
