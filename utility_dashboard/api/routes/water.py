"""Water dashboard routes."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from utility_dashboard.core.database import get_db
from utility_dashboard.schemas.dashboard import (
    MeterDatabase,
    MonthOption,
    WaterOverview,
    WaterTypeConsumption,
    ZoneAnalysisOut,
)
from utility_dashboard.services import water as water_service
from utility_dashboard.services.months import WATER_MONTHS
from utility_dashboard.services.presentation import month_options

router = APIRouter(prefix="/water", tags=["water"])


@router.get("/months", response_model=list[MonthOption])
def list_months() -> list[MonthOption]:
    """Months the range selector can address."""
    return month_options(WATER_MONTHS)


@router.get("/overview", response_model=WaterOverview)
def get_overview(
    start: int | None = Query(None, description="First month position (inclusive)"),
    end: int | None = Query(None, description="Last month position (inclusive)"),
    db: Session = Depends(get_db),
) -> WaterOverview:
    """A1..A4 level totals, stage losses and the monthly loss trend.

    Stage totals are computed from the range totals; the monthly series
    applies the same formulas to each month on its own.
    """
    return water_service.get_overview(db, start, end)


@router.get("/zones", response_model=list[str])
def list_zones(db: Session = Depends(get_db)) -> list[str]:
    """Zones available for zone analysis."""
    return water_service.get_zones(db)


@router.get("/zones/{zone}", response_model=ZoneAnalysisOut)
def get_zone_analysis(
    zone: str,
    start: int | None = Query(None, description="First month position (inclusive)"),
    end: int | None = Query(None, description="Last month position (inclusive)"),
    db: Session = Depends(get_db),
) -> ZoneAnalysisOut:
    """Zone bulk meter versus building meters."""
    return water_service.get_zone_analysis(db, zone, start, end)


@router.get("/types", response_model=WaterTypeConsumption)
def get_consumption_by_type(
    start: int | None = Query(None, description="First month position (inclusive)"),
    end: int | None = Query(None, description="Last month position (inclusive)"),
    db: Session = Depends(get_db),
) -> WaterTypeConsumption:
    """Water consumption grouped by meter type."""
    return water_service.get_consumption_by_type(db, start, end)


@router.get("/database", response_model=MeterDatabase)
def get_database(db: Session = Depends(get_db)) -> MeterDatabase:
    """All meters with all-time totals over the stored history."""
    return water_service.get_database(db)
