from __future__ import annotations

import sys

from pylenient.app import run_app


def main() -> int:
    """Module entrypoint for `python -m pylenient.main` or the `pylenient` script."""
    return run_app(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
