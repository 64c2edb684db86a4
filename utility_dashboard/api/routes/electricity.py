"""Electricity dashboard routes."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from utility_dashboard.core.database import get_db
from utility_dashboard.schemas.dashboard import (
    ElectricityOverview,
    MeterDatabase,
    MonthOption,
    TypeAnalysis,
)
from utility_dashboard.services import electricity as electricity_service
from utility_dashboard.services.months import ELECTRICITY_MONTHS
from utility_dashboard.services.presentation import month_options

router = APIRouter(prefix="/electricity", tags=["electricity"])


@router.get("/months", response_model=list[MonthOption])
def list_months() -> list[MonthOption]:
    """Months the range selector can address."""
    return month_options(ELECTRICITY_MONTHS)


@router.get("/overview", response_model=ElectricityOverview)
def get_overview(
    start: int | None = Query(None, description="First month position (inclusive)"),
    end: int | None = Query(None, description="Last month position (inclusive)"),
    db: Session = Depends(get_db),
) -> ElectricityOverview:
    """Consumption overview across all electricity meters.

    Omitted range ends default to the first and last month. A range with
    end < start is empty and yields zero totals.
    """
    return electricity_service.get_overview(db, start, end)


@router.get("/types", response_model=list[str])
def list_types(db: Session = Depends(get_db)) -> list[str]:
    """Meter types available for filtering."""
    return electricity_service.get_types(db)


@router.get("/types/{meter_type}", response_model=TypeAnalysis)
def get_type_analysis(
    meter_type: str,
    start: int | None = Query(None, description="First month position (inclusive)"),
    end: int | None = Query(None, description="Last month position (inclusive)"),
    db: Session = Depends(get_db),
) -> TypeAnalysis:
    """Consumption analysis for one meter type."""
    return electricity_service.get_type_analysis(db, meter_type, start, end)


@router.get("/database", response_model=MeterDatabase)
def get_database(db: Session = Depends(get_db)) -> MeterDatabase:
    """All meters with all-time totals over the stored history."""
    return electricity_service.get_database(db)
