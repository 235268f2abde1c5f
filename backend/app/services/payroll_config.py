"""
Payroll configuration — tax rate, reporting window and fetch limits.

Read once at process start from the environment (``.env`` is loaded by
app.main before this runs). Values are passed explicitly into the report
builder; nothing in the engine reads the environment itself.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date

DEFAULT_TAX_RATE: float = 0.25
DEFAULT_REPORT_START_DATE: str = "2025-04-01"
DEFAULT_REPORT_FINISH_DATE: str = "2025-04-30"
GENERAL_LABORER_LEVEL: str = "L18"
DEFAULT_FETCH_CONCURRENCY: int = 5


@dataclass(frozen=True)
class PayrollSettings:
    tax_rate: float = DEFAULT_TAX_RATE
    report_start_date: date = date.fromisoformat(DEFAULT_REPORT_START_DATE)
    report_finish_date: date = date.fromisoformat(DEFAULT_REPORT_FINISH_DATE)
    general_laborer_level: str = GENERAL_LABORER_LEVEL
    fetch_concurrency: int = DEFAULT_FETCH_CONCURRENCY


def load_payroll_settings() -> PayrollSettings:
    """Build settings from env vars; malformed values raise ValueError."""
    return PayrollSettings(
        # 0 <= TAX_RATE <= 1 is expected but not enforced
        tax_rate=float(os.getenv("TAX_RATE", str(DEFAULT_TAX_RATE))),
        report_start_date=date.fromisoformat(
            os.getenv("REPORT_START_DATE", DEFAULT_REPORT_START_DATE)
        ),
        report_finish_date=date.fromisoformat(
            os.getenv("REPORT_FINISH_DATE", DEFAULT_REPORT_FINISH_DATE)
        ),
        general_laborer_level=os.getenv("GENERAL_LABORER_LEVEL", GENERAL_LABORER_LEVEL),
        fetch_concurrency=int(os.getenv("PAYROLL_FETCH_CONCURRENCY", str(DEFAULT_FETCH_CONCURRENCY))),
    )
