"""
Payroll reporting routes — read-only, fixed reporting window.

GET /api/payroll/general-laborers   — per-employee payroll for the general-laborer level
GET /api/reports/subcity-payments   — payments and totals grouped by sub-city
"""
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.db import AsyncSessionLocal
from app.models.payroll_schemas import (
    ErrorResponse,
    LevelPayrollResponse,
    RegionReportResponse,
)
from app.services.payroll_config import PayrollSettings, load_payroll_settings
from app.services.payroll_report_engine import PayrollReportBuilder
from app.services.payroll_repository import PayrollRepository

router = APIRouter(prefix="/api", tags=["Payroll Reports"])
logger = logging.getLogger("crew-payroll-api")


def get_payroll_settings(request: Request) -> PayrollSettings:
    settings = getattr(request.app.state, "payroll_settings", None)
    if settings is None:
        settings = load_payroll_settings()
        request.app.state.payroll_settings = settings
    return settings


def get_payroll_repository() -> PayrollRepository:
    return PayrollRepository(AsyncSessionLocal)


def _builder(repo: PayrollRepository, settings: PayrollSettings) -> PayrollReportBuilder:
    return PayrollReportBuilder(
        repo.fetch_shift_records,
        tax_rate=settings.tax_rate,
        max_concurrency=settings.fetch_concurrency,
    )


@router.get(
    "/payroll/general-laborers",
    response_model=LevelPayrollResponse,
    response_model_by_alias=True,
    responses={500: {"model": ErrorResponse}},
)
async def get_general_laborer_payroll(
    settings: PayrollSettings = Depends(get_payroll_settings),
    repo: PayrollRepository = Depends(get_payroll_repository),
):
    """Payroll details for every employee at the general-laborer level."""
    start, finish = settings.report_start_date, settings.report_finish_date
    try:
        laborers = await repo.fetch_employees(level=settings.general_laborer_level)
        rows = await _builder(repo, settings).build_level_report(laborers, start, finish)
    except Exception as e:
        logger.error(f"General laborer payroll failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to retrieve general laborer payroll."},
        )

    return {
        "message": f"General Laborer Payroll for {start} to {finish}",
        "data": rows,
    }


@router.get(
    "/reports/subcity-payments",
    response_model=RegionReportResponse,
    responses={500: {"model": ErrorResponse}},
)
async def get_subcity_payments_report(
    settings: PayrollSettings = Depends(get_payroll_settings),
    repo: PayrollRepository = Depends(get_payroll_repository),
):
    """Payments and tax totals grouped by sub-city, with each employee's contribution."""
    start, finish = settings.report_start_date, settings.report_finish_date
    try:
        employees = await repo.fetch_employees()
        regions = await _builder(repo, settings).build_region_report(employees, start, finish)
    except Exception as e:
        logger.error(f"SubCity payments report failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to generate SubCity payments report."},
        )

    return {
        "message": f"Employee Payments by SubCity Report for {start} to {finish}",
        "data": {
            "null" if sub_city is None else sub_city: region.to_dict()
            for sub_city, region in regions.items()
        },
    }
