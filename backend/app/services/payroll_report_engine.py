"""
payroll_report_engine.py — Population-level payroll reports.

Two report shapes share one pipeline: fetch every employee's shifts for the
window, then run each through calculate_employee_payroll independently.

  - Level report:  flat per-employee listing, directory order preserved
  - Region report: sub-city → RegionAggregate, insertion ordered

Shift fetches run with bounded concurrency; results are always consumed in
directory order so output never depends on fetch completion order. A failed
fetch propagates and aborts the whole report; no further fetch is issued.
"""

import asyncio
import logging
from datetime import date
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from app.services.payroll_config import DEFAULT_FETCH_CONCURRENCY
from app.services.payroll_engine import (
    EmployeeIdentity,
    EmployeePayrollSummary,
    RegionAggregate,
    ShiftRecord,
    calculate_employee_payroll,
)

logger = logging.getLogger("crew-payroll.reports")

ShiftFetcher = Callable[[int, date, date], Awaitable[Sequence[ShiftRecord]]]


class PayrollReportBuilder:
    """
    Builds level and region payroll reports for a supplied set of employees.

    ``fetch_shift_records`` is any async callable with the signature
    ``(employee_id, start_date, finish_date) -> Sequence[ShiftRecord]``.
    ``max_concurrency=1`` gives strictly sequential fetching.
    """

    def __init__(
        self,
        fetch_shift_records: ShiftFetcher,
        tax_rate: float,
        max_concurrency: int = DEFAULT_FETCH_CONCURRENCY,
    ) -> None:
        self._fetch_shift_records = fetch_shift_records
        self.tax_rate = tax_rate
        self.max_concurrency = max(1, int(max_concurrency))

    async def _summarise(
        self,
        employees: Sequence[EmployeeIdentity],
        start_date: date,
        finish_date: date,
    ) -> List[EmployeePayrollSummary]:
        semaphore = asyncio.Semaphore(self.max_concurrency)
        failed = asyncio.Event()

        async def _one(identity: EmployeeIdentity) -> EmployeePayrollSummary:
            async with semaphore:
                if failed.is_set():
                    raise asyncio.CancelledError()
                try:
                    records = await self._fetch_shift_records(
                        identity.employee_id, start_date, finish_date
                    )
                except Exception:
                    failed.set()
                    raise
            return calculate_employee_payroll(identity.employee_id, records, self.tax_rate)

        tasks = [asyncio.ensure_future(_one(e)) for e in employees]
        try:
            # gather() returns results in argument order
            return list(await asyncio.gather(*tasks))
        except Exception:
            # No new fetch starts after a failure; cancel the ones in flight
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    # -----------------------------------------------------------------------
    # 1. Level report
    # -----------------------------------------------------------------------

    async def build_level_report(
        self,
        employees: Sequence[EmployeeIdentity],
        start_date: date,
        finish_date: date,
    ) -> List[Dict[str, Any]]:
        """
        One row per employee, in the order supplied. The caller filters the
        directory to a single level; employees without shifts get zero rows.
        """
        employees = list(employees)
        summaries = await self._summarise(employees, start_date, finish_date)

        rows: List[Dict[str, Any]] = []
        for identity, summary in zip(employees, summaries):
            rows.append({
                "employee_id": identity.employee_id,
                "first_name": identity.first_name,
                "last_name": identity.last_name,
                "total_hours": summary.total_hours,
                "total_pay": summary.total_pay,
                "tax": summary.tax,
            })

        logger.info(
            f"Level report built: {len(rows)} employees, {start_date} to {finish_date}"
        )
        return rows

    # -----------------------------------------------------------------------
    # 2. Region report
    # -----------------------------------------------------------------------

    async def build_region_report(
        self,
        employees: Sequence[EmployeeIdentity],
        start_date: date,
        finish_date: date,
    ) -> Dict[Optional[str], RegionAggregate]:
        """
        Fold every employee's summary into the aggregate for their sub-city.

        Regions are created on first encounter; a missing sub-city is its own
        key. Region totals are sums of already-rounded employee figures.
        """
        employees = list(employees)
        summaries = await self._summarise(employees, start_date, finish_date)

        regions: Dict[Optional[str], RegionAggregate] = {}
        for identity, summary in zip(employees, summaries):
            if identity.sub_city not in regions:
                regions[identity.sub_city] = RegionAggregate(sub_city=identity.sub_city)
            regions[identity.sub_city].add(identity, summary)

        logger.info(
            f"Region report built: {len(employees)} employees across "
            f"{len(regions)} sub-cities, {start_date} to {finish_date}"
        )
        return regions
