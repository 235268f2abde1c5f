"""ORM Models for Site Crew Payroll — SQLAlchemy 2.0"""
from datetime import date, time
from decimal import Decimal
from typing import Optional
from sqlalchemy import String, Integer, Numeric, Date, Time, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db import Base


# ── PAY RATES ─────────────────────────────────────────────────────────────────
class PayRate(Base):
    __tablename__ = "pay_rates"
    level: Mapped[str] = mapped_column(String(10), primary_key=True)
    job_title: Mapped[str] = mapped_column(String(50), nullable=False)
    wage_per_hour: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    employees: Mapped[list["Employee"]] = relationship("Employee", back_populates="pay_rate")


# ── EMPLOYEES ─────────────────────────────────────────────────────────────────
class Employee(Base):
    __tablename__ = "employees"
    employee_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    level: Mapped[str] = mapped_column(String(10), ForeignKey("pay_rates.level"), nullable=False)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    phone_number: Mapped[Optional[str]] = mapped_column(String(20))
    sub_city: Mapped[Optional[str]] = mapped_column(String(50))
    pay_rate: Mapped["PayRate"] = relationship("PayRate", back_populates="employees")
    hours: Mapped[list["HoursWorked"]] = relationship("HoursWorked", back_populates="employee")


# ── HOURS WORKED ──────────────────────────────────────────────────────────────
class HoursWorked(Base):
    __tablename__ = "hours_worked"
    work_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(Integer, ForeignKey("employees.employee_id"), nullable=False)
    work_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    finish_time: Mapped[time] = mapped_column(Time, nullable=False)
    employee: Mapped["Employee"] = relationship("Employee", back_populates="hours")

    __table_args__ = (
        Index("ix_hours_worked_employee_date", "employee_id", "work_date"),
    )
