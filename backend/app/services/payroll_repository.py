"""
Read-only access to the employee directory and the time-tracking tables.

Both fetches are thin SELECTs; any database failure is logged and re-raised
as DataAccessError so a report fails as a whole instead of returning a
partial result.
"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.orm_models import Employee, HoursWorked, PayRate
from app.services.payroll_engine import EmployeeIdentity, ShiftRecord

logger = logging.getLogger("crew-payroll-db")


class DataAccessError(Exception):
    """A shift or employee fetch against the store failed."""


class PayrollRepository:
    """
    Each fetch opens its own session so the report builder may run several
    shift fetches at once; an AsyncSession must not be shared between tasks.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def fetch_shift_records(
        self, employee_id: int, start_date: date, finish_date: date
    ) -> List[ShiftRecord]:
        """Shifts in [start_date, finish_date], each joined with the wage for the employee's level."""
        query = (
            select(HoursWorked.start_time, HoursWorked.finish_time, PayRate.wage_per_hour)
            .join(Employee, HoursWorked.employee_id == Employee.employee_id)
            .join(PayRate, Employee.level == PayRate.level)
            .where(
                Employee.employee_id == employee_id,
                HoursWorked.work_date.between(start_date, finish_date),
            )
        )
        try:
            async with self.session_factory() as session:
                rows = (await session.execute(query)).all()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Error fetching work records for employee {employee_id}: {e}")
            raise DataAccessError(f"work records unavailable for employee {employee_id}") from e

        return [
            ShiftRecord(
                start_time=row.start_time,
                finish_time=row.finish_time,
                wage_per_hour=float(row.wage_per_hour),
            )
            for row in rows
        ]

    async def fetch_employees(self, level: Optional[str] = None) -> List[EmployeeIdentity]:
        query = select(
            Employee.employee_id,
            Employee.first_name,
            Employee.last_name,
            Employee.level,
            Employee.sub_city,
        ).order_by(Employee.employee_id)
        if level is not None:
            query = query.where(Employee.level == level)
        try:
            async with self.session_factory() as session:
                rows = (await session.execute(query)).all()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Error fetching employees (level={level}): {e}")
            raise DataAccessError("employee directory unavailable") from e

        return [
            EmployeeIdentity(
                employee_id=row.employee_id,
                first_name=row.first_name,
                last_name=row.last_name,
                level=row.level,
                sub_city=row.sub_city,
            )
            for row in rows
        ]
