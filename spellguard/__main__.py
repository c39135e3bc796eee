"""Allow ``python -m spellguard``."""

from __future__ import annotations

from spellguard.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
