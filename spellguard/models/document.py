"""Immutable document snapshot handed to the checker by a host."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

_EXTENSION_LANGUAGE_IDS = {
    ".md": "markdown",
    ".markdown": "markdown",
    ".tex": "latex",
    ".txt": "plaintext",
    ".rst": "restructuredtext",
    ".adoc": "asciidoc",
    ".html": "html",
    ".htm": "html",
}


def known_extensions() -> list[str]:
    return sorted(_EXTENSION_LANGUAGE_IDS)


def language_id_for(path: Path | str) -> str:
    """Return the document type for ``path`` based on its extension."""
    suffix = Path(path).suffix.lower()
    return _EXTENSION_LANGUAGE_IDS.get(suffix, "plaintext")


@dataclass(frozen=True)
class DocumentSnapshot:
    """Text of a document at the moment a check pass starts.

    ``uri`` is the identity used to key diagnostics and scheduling state.
    """

    uri: str
    text: str
    language_id: str = "plaintext"
    file_name: str = ""
    scheme: str = "file"

    @classmethod
    def from_path(cls, path: Path, *, text: str | None = None) -> "DocumentSnapshot":
        resolved = path.resolve()
        if text is None:
            text = resolved.read_text(encoding="utf-8")
        return cls(
            uri=resolved.as_uri(),
            text=text,
            language_id=language_id_for(resolved),
            file_name=str(resolved),
        )

    def with_text(self, text: str) -> "DocumentSnapshot":
        return replace(self, text=text)

    def position_at(self, offset: int) -> tuple[int, int]:
        """Return a 0-based (line, character) tuple for ``offset``.

        The character is counted in UTF-16 code units, which is what editor
        hosts use to address columns.
        """
        offset = max(0, min(offset, len(self.text)))
        line = self.text.count("\n", 0, offset)
        line_start = self.text.rfind("\n", 0, offset) + 1
        segment = self.text[line_start:offset]
        return line, len(segment.encode("utf-16-le")) // 2
