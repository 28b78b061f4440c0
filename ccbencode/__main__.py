"""Allow ``python -m ccbencode``."""

from __future__ import annotations

from ccbencode.cli import main

if __name__ == "__main__":
    main()
