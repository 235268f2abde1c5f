"""
Response envelopes for the payroll reporting endpoints.

Every successful response is ``{"message": ..., "data": ...}``; failures are
``{"error": ...}`` with HTTP 500.
"""
from typing import Dict, List
from pydantic import BaseModel, Field


class LevelPayrollRow(BaseModel):
    # Serialised with the column names clients already consume
    employee_id: int = Field(alias="EmployeeID")
    first_name: str = Field(alias="FirstName")
    last_name: str = Field(alias="LastName")
    total_hours: float = Field(alias="TotalHours")
    total_pay: float = Field(alias="TotalPay")
    tax: float = Field(alias="Tax")

    model_config = {"populate_by_name": True}


class RegionEmployeeRow(BaseModel):
    id: int
    name: str
    level: str
    total_pay: float
    tax: float


class RegionReportEntry(BaseModel):
    total_pay: float = 0.0
    total_tax: float = 0.0
    employees: List[RegionEmployeeRow] = []


class LevelPayrollResponse(BaseModel):
    message: str
    data: List[LevelPayrollRow]


class RegionReportResponse(BaseModel):
    message: str
    # Keyed by sub-city; a missing sub-city is rendered as "null"
    data: Dict[str, RegionReportEntry]

    model_config = {"json_schema_extra": {
        "example": {
            "message": "Employee Payments by SubCity Report for 2025-04-01 to 2025-04-30",
            "data": {
                "Bole": {
                    "total_pay": 450.0,
                    "total_tax": 112.5,
                    "employees": [
                        {"id": 1, "name": "John Doe", "level": "L13", "total_pay": 450.0, "tax": 112.5},
                    ],
                },
            },
        }
    }}


class ErrorResponse(BaseModel):
    error: str
