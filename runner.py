from __future__ import annotations

"""Repo-root convenience shim for running the job log monitor.

This keeps the most common local workflow short:

    python runner.py [LOGFILE]

It delegates to the canonical entry point:

    python -m jobwatch report [LOGFILE]
"""

import sys


def main() -> int:
    """Run `jobwatch report` with the given arguments."""

    from jobwatch.cli import main as cli_main

    return cli_main(["report", *sys.argv[1:]])


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
