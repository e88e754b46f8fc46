from __future__ import annotations

from jobwatch.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
