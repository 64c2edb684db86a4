"""Meter record routes: import and browse the record snapshot source."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from utility_dashboard.core.database import get_db
from utility_dashboard.models.enums import Domain
from utility_dashboard.schemas.meter import (
    ElectricityMeterBulkCreate,
    ElectricityMeterCreate,
    MeterRecordResponse,
    WaterMeterBulkCreate,
    WaterMeterCreate,
)
from utility_dashboard.services import meters as meter_service

router = APIRouter(prefix="/meters", tags=["meters"])


@router.post(
    "/electricity/",
    response_model=MeterRecordResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_electricity_meter(
    data: ElectricityMeterCreate,
    db: Session = Depends(get_db),
) -> MeterRecordResponse:
    """Import one electricity meter with its monthly readings."""
    meter = meter_service.create_meter(db, Domain.ELECTRICITY, data)
    return meter_service.meter_to_response(meter)


@router.post(
    "/electricity/bulk",
    response_model=list[MeterRecordResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_electricity_meters(
    data: ElectricityMeterBulkCreate,
    db: Session = Depends(get_db),
) -> list[MeterRecordResponse]:
    """Import many electricity meters, preserving their order."""
    meters = meter_service.create_meters(db, Domain.ELECTRICITY, data.meters)
    return [meter_service.meter_to_response(m) for m in meters]


@router.post(
    "/water/",
    response_model=MeterRecordResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_water_meter(
    data: WaterMeterCreate,
    db: Session = Depends(get_db),
) -> MeterRecordResponse:
    """Import one water meter with its hierarchy label and readings."""
    meter = meter_service.create_meter(db, Domain.WATER, data)
    return meter_service.meter_to_response(meter)


@router.post(
    "/water/bulk",
    response_model=list[MeterRecordResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_water_meters(
    data: WaterMeterBulkCreate,
    db: Session = Depends(get_db),
) -> list[MeterRecordResponse]:
    """Import many water meters, preserving their order."""
    meters = meter_service.create_meters(db, Domain.WATER, data.meters)
    return [meter_service.meter_to_response(m) for m in meters]


@router.get("/{domain}/", response_model=list[MeterRecordResponse])
def list_meters(
    domain: Domain,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
) -> list[MeterRecordResponse]:
    """List meter records of a domain."""
    meters = meter_service.list_meters(db, domain, skip, limit)
    return [meter_service.meter_to_response(m) for m in meters]


@router.get("/{domain}/{meter_id}", response_model=MeterRecordResponse)
def get_meter(
    domain: Domain,
    meter_id: int,
    db: Session = Depends(get_db),
) -> MeterRecordResponse:
    """Get a meter record by ID."""
    meter = meter_service.get_meter(db, domain, meter_id)
    return meter_service.meter_to_response(meter)


@router.delete("/{domain}/{meter_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meter(
    domain: Domain,
    meter_id: int,
    db: Session = Depends(get_db),
) -> None:
    """Remove a meter record."""
    meter_service.delete_meter(db, domain, meter_id)
