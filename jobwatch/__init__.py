"""Job log triage: pair START/END events and classify job durations.

The core (`reconcile`, `report`) is pure and logging-free; anomalies are
returned as `Diagnostic` values. Boundary modules (`ingest`, `io`, `cli`) do
the file handling.

Run from source:

    python -m jobwatch report logs.log
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
