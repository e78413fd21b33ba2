"""Service module exports."""

from . import (
    aggregation,
    auth,
    budgeting,
    debts,
    export_csv,
    forms,
    import_csv,
    ledger_service,
    notes,
    reports,
)

__all__ = [
    "aggregation",
    "auth",
    "budgeting",
    "debts",
    "export_csv",
    "forms",
    "import_csv",
    "ledger_service",
    "notes",
    "reports",
]
