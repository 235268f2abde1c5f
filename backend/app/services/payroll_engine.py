"""
payroll_engine.py — Per-employee payroll aggregation.

Covers:
  - Shift, identity and summary records shared by the report builder
  - Total hours across a reporting window (overnight shifts included)
  - Gross pay at the employee's hourly wage for their job level
  - Flat-rate tax withholding

All monetary values are in the store's currency; no conversion is applied.
"""

from dataclasses import dataclass, field
from datetime import time
from typing import Any, Dict, List, Optional, Sequence, Union

from app.services.shift_calculator import duration_hours


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ShiftRecord:
    """One clocked start/finish pair joined with the wage for the employee's level."""
    start_time: Union[time, str]
    finish_time: Union[time, str]
    wage_per_hour: float


@dataclass(frozen=True)
class EmployeeIdentity:
    employee_id: int
    first_name: str
    last_name: str
    level: str
    sub_city: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class EmployeePayrollSummary:
    employee_id: int
    total_hours: float = 0.0
    total_pay: float = 0.0
    tax: float = 0.0



@dataclass
class RegionAggregate:
    """Running totals for one sub-city; ``employees`` keeps supply order."""
    sub_city: Optional[str]
    total_pay: float = 0.0
    total_tax: float = 0.0
    employees: List[Dict[str, Any]] = field(default_factory=list)

    def add(self, identity: EmployeeIdentity, summary: EmployeePayrollSummary) -> None:
        self.total_pay += summary.total_pay
        self.total_tax += summary.tax
        self.employees.append({
            "id": identity.employee_id,
            "name": identity.display_name,
            "level": identity.level,
            "total_pay": summary.total_pay,
            "tax": summary.tax,
        })

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_pay": self.total_pay,
            "total_tax": self.total_tax,
            "employees": list(self.employees),
        }


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def calculate_employee_payroll(
    employee_id: int,
    shift_records: Sequence[ShiftRecord],
    tax_rate: float,
) -> EmployeePayrollSummary:
    """
    Total hours, gross pay and tax for one employee over a reporting window.

    The wage is taken from the last record iterated; hours from every record
    are paid at that single wage. An employee with no records gets an
    all-zero summary rather than an error.

    Returned figures are rounded to 2 dp.
    """
    if not shift_records:
        return EmployeePayrollSummary(employee_id=employee_id)

    total_hours: float = 0.0
    wage_per_hour: float = 0.0

    for record in shift_records:
        total_hours += duration_hours(record.start_time, record.finish_time)
        wage_per_hour = float(record.wage_per_hour)

    total_pay = total_hours * wage_per_hour
    tax = total_pay * tax_rate

    return EmployeePayrollSummary(
        employee_id=employee_id,
        total_hours=round(total_hours, 2),
        total_pay=round(total_pay, 2),
        tax=round(tax, 2),
    )
