"""Module entrypoint for running blockconf as ``python -m blockconf``."""

from __future__ import annotations

from blockconf.cli import main


if __name__ == "__main__":
    main()
