"""Service module exports."""

from . import (
    currency,
    debts,
    export_csv,
    import_csv,
    liabilities,
    reports,
    scenarios,
)

__all__ = [
    "currency",
    "debts",
    "export_csv",
    "import_csv",
    "liabilities",
    "reports",
    "scenarios",
]
