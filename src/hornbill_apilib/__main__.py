"""Permite `python -m hornbill_apilib ...` además del script `hornbill`."""

from __future__ import annotations

import sys

# Workaround para UnicodeEncodeError en terminales Windows (cp1252 vs utf-8).
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from hornbill_apilib.cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
