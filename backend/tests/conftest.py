"""
conftest.py — Shared pytest fixtures for the Site Crew Payroll test suite.

No database fixtures are defined here. Engine tests exercise pure functions;
report and route tests replace the store with the in-memory fakes below.

Import-path bootstrapping:
    The ``backend/`` directory is inserted into sys.path so that all
    ``app.*`` imports resolve correctly regardless of where pytest is invoked.
"""

import sys
import os
import pytest

_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from app.services.payroll_engine import EmployeeIdentity, ShiftRecord  # noqa: E402


class FakeShiftStore:
    """
    In-memory stand-in for the time-tracking store.

    ``shifts`` maps employee_id → list of ShiftRecord; ``failing`` holds ids
    whose fetch raises. Every call is recorded in ``calls``.
    """

    def __init__(self, shifts=None, failing=None, employees=None):
        self.shifts = shifts or {}
        self.failing = set(failing or ())
        self.employees = list(employees or [])
        self.calls = []

    async def fetch_shift_records(self, employee_id, start_date, finish_date):
        self.calls.append((employee_id, start_date, finish_date))
        if employee_id in self.failing:
            from app.services.payroll_repository import DataAccessError
            raise DataAccessError(f"work records unavailable for employee {employee_id}")
        return list(self.shifts.get(employee_id, []))

    async def fetch_employees(self, level=None):
        if level is None:
            return list(self.employees)
        return [e for e in self.employees if e.level == level]


# ---------------------------------------------------------------------------
# Directory fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def bole_crew():
    """
    Three employees in Bole:
      1 — L18 general laborer, 08:00–17:00 at 50        → 9 h, 450.00
      2 — L18 general laborer, no shifts                 → 0 h, 0.00
      3 — L14 foreman, 08:00–17:00 + 08:00–14:00 at 150  → 15 h, 2250.00
    """
    return [
        EmployeeIdentity(1, "Worku", "Kebede", "L18", "Bole"),
        EmployeeIdentity(2, "Tola", "Gudeta", "L18", "Bole"),
        EmployeeIdentity(3, "Jane", "Smith", "L14", "Bole"),
    ]


@pytest.fixture
def bole_shifts():
    return {
        1: [ShiftRecord("08:00", "17:00", 50.0)],
        3: [
            ShiftRecord("08:00", "17:00", 150.0),
            ShiftRecord("08:00", "14:00", 150.0),
        ],
    }


@pytest.fixture
def mixed_directory():
    """Five employees in Bole, Kirkos and one with no sub-city, in id order."""
    return [
        EmployeeIdentity(10, "John", "Doe", "L13", "Bole"),
        EmployeeIdentity(11, "Peter", "Jones", "L15", "Kirkos"),
        EmployeeIdentity(12, "Mohammed", "Ali", "L16", "Bole"),
        EmployeeIdentity(13, "Genet", "Fantu", "L18", None),
        EmployeeIdentity(14, "Bereket", "Lemma", "L17", "Kirkos"),
    ]


@pytest.fixture
def mixed_shifts():
    return {
        10: [ShiftRecord("09:00", "17:00", 200.0)],                # 8 h → 1600
        11: [ShiftRecord("22:00", "02:00", 120.0)],                # 4 h → 480
        12: [ShiftRecord("07:00", "15:30", 100.0)],                # 8.5 h → 850
        13: [ShiftRecord("06:00", "14:00", 50.0)],                 # 8 h → 400
        14: [],                                                    # no shifts
    }


@pytest.fixture
def make_store():
    def _make(shifts=None, failing=None, employees=None):
        return FakeShiftStore(shifts=shifts, failing=failing, employees=employees)
    return _make
