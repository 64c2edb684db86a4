"""Meter record service: importing, listing and loading record snapshots."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from utility_dashboard.models.enums import Domain
from utility_dashboard.models.meter import ElectricityMeter, WaterMeter
from utility_dashboard.schemas.meter import (
    ElectricityMeterCreate,
    MeterRecordResponse,
    WaterMeterCreate,
)
from utility_dashboard.services.records import MeterRecord, record_from_model

log = logging.getLogger(__name__)

MeterModel = type[ElectricityMeter] | type[WaterMeter]


def model_for(domain: Domain) -> MeterModel:
    """Table holding a domain's meter records."""
    if domain == Domain.WATER:
        return WaterMeter
    return ElectricityMeter


def _build_meter(
    domain: Domain,
    data: ElectricityMeterCreate | WaterMeterCreate,
) -> ElectricityMeter | WaterMeter:
    if domain == Domain.WATER:
        if not isinstance(data, WaterMeterCreate):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Water meters require a hierarchy label",
            )
        meter: ElectricityMeter | WaterMeter = WaterMeter(
            name=data.name,
            account=data.account,
            type=data.type,
            label=data.label.value,
            zone=data.zone,
        )
    else:
        meter = ElectricityMeter(name=data.name, account=data.account, type=data.type)
    meter.set_readings(data.readings)
    return meter


def create_meter(
    db: Session,
    domain: Domain,
    data: ElectricityMeterCreate | WaterMeterCreate,
) -> ElectricityMeter | WaterMeter:
    """Store a single meter record."""
    meter = _build_meter(domain, data)
    db.add(meter)
    db.commit()
    db.refresh(meter)
    return meter


def create_meters(
    db: Session,
    domain: Domain,
    items: list[ElectricityMeterCreate] | list[WaterMeterCreate],
) -> list[ElectricityMeter | WaterMeter]:
    """Store many meter records in one transaction, keeping their order."""
    created = [_build_meter(domain, data) for data in items]
    db.add_all(created)
    db.commit()
    for meter in created:
        db.refresh(meter)
    log.info("Imported %d %s meter records", len(created), domain.value)
    return created


def get_meter(db: Session, domain: Domain, meter_id: int) -> ElectricityMeter | WaterMeter:
    """Get a meter record by ID."""
    model = model_for(domain)
    meter = db.query(model).filter(model.id == meter_id).first()
    if not meter:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{domain.value.capitalize()} meter not found",
        )
    return meter


def list_meters(
    db: Session,
    domain: Domain,
    skip: int = 0,
    limit: int = 100,
) -> list[ElectricityMeter | WaterMeter]:
    """List meter records in insertion order with pagination."""
    model = model_for(domain)
    return db.query(model).order_by(model.id).offset(skip).limit(limit).all()


def delete_meter(db: Session, domain: Domain, meter_id: int) -> None:
    """Remove a meter record."""
    meter = get_meter(db, domain, meter_id)
    db.delete(meter)
    db.commit()


def load_snapshot(db: Session, domain: Domain) -> list[MeterRecord]:
    """Fetch every record of a domain as immutable snapshots, in ID order."""
    model = model_for(domain)
    rows = db.query(model).order_by(model.id).all()
    log.debug("Loaded %d %s meter records", len(rows), domain.value)
    return [record_from_model(row) for row in rows]


def meter_to_response(meter: ElectricityMeter | WaterMeter) -> MeterRecordResponse:
    """Convert a meter model to a response schema."""
    return MeterRecordResponse(
        id=meter.id,
        name=meter.name,
        account=meter.account,
        type=meter.type,
        label=getattr(meter, "label", None),
        zone=getattr(meter, "zone", None),
        readings=meter.get_readings(),
        created_at=meter.created_at,
    )
