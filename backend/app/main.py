"""
Site Crew Payroll API v1.0
FastAPI backend with async PostgreSQL serving read-only payroll reports:
general-laborer payroll and payments grouped by sub-city.
"""
import os
import logging
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.services.logging_config import setup_logging
from app.services.middleware import RequestTimingMiddleware
from app.services.payroll_config import load_payroll_settings

load_dotenv()

_log_level = os.getenv("LOG_LEVEL", "INFO")
_json_logs = os.getenv("LOG_FORMAT", "json").lower() != "text"
setup_logging(level=_log_level, json_output=_json_logs)
logger = logging.getLogger("crew-payroll-api")

APP_VERSION = "1.0.0"

if not os.getenv("DATABASE_URL"):
    logger.warning("MISSING env var: DATABASE_URL — running in dev mode")

# Tax rate and reporting window are fixed for the life of the process
payroll_settings = load_payroll_settings()
logger.info(
    f"Payroll settings: tax_rate={payroll_settings.tax_rate}, "
    f"window={payroll_settings.report_start_date}..{payroll_settings.report_finish_date}"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    from app.db import engine, init_db
    try:
        await init_db()
    except Exception as e:
        logger.warning(f"Table init skipped (DB not available): {e}")
    yield
    await engine.dispose()


app = FastAPI(
    title="Site Crew Payroll API",
    version=APP_VERSION,
    description="Payroll reporting for construction site crews",
    lifespan=lifespan,
)
app.state.payroll_settings = payroll_settings

_cors_default = "http://localhost:3000,http://localhost:8000"
cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", _cors_default).split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "X-Requested-With", "X-Request-ID"],
)
# Request timing + X-Request-ID must be outermost so it wraps all other middleware
app.add_middleware(RequestTimingMiddleware)

from app.api.payroll_routes import router as payroll_router  # noqa: E402

app.include_router(payroll_router)


@app.get("/health")
async def health_check():
    return {
        "status": "active",
        "version": APP_VERSION,
        "db_configured": bool(os.getenv("DATABASE_URL")),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), reload=True)
