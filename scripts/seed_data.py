"""Seed script to populate the database with sample meter records."""

from decimal import Decimal

from utility_dashboard.core.database import Base, SessionLocal, engine
from utility_dashboard.models.meter import ElectricityMeter, WaterMeter
from utility_dashboard.services.months import ELECTRICITY_HISTORY, WATER_HISTORY

ELECTRICITY_SAMPLES = [
    # name, account, type, base monthly kWh
    ("Pumping Station 01", "R52330", "PS", Decimal("1608")),
    ("Pumping Station 03", "R52329", "PS", Decimal("31")),
    ("Lifting Station 02", "R52328", "LS", Decimal("44")),
    ("Irrigation Tank 01", "R52324", "IRR", Decimal("1543")),
    ("Actuator DB 01 (Z8)", "R53196", "DB", Decimal("39")),
    ("Street Light FP 01 (Z8)", "R53197", "Street Light", Decimal("2773")),
    ("Beachwell", "R51903", "D_Building", Decimal("16908")),
    ("Central Park", "R54672", "Retail", Decimal("12208")),
]

WATER_SAMPLES = [
    # name, account, label, zone, type, base monthly m3
    ("Main Bulk (NAMA)", "C43659", "L1", "Main Bulk", "Main BULK", Decimal("32580")),
    ("ZONE 8 (Bulk Zone 8)", "4300342", "L2", "Zone_08", "Zone Bulk", Decimal("1547")),
    ("ZONE 3A (Bulk Zone 3A)", "4300343", "L2", "Zone_03_(A)", "Zone Bulk", Decimal("4235")),
    ("Z8-11", "4300023", "L3", "Zone_08", "Residential (Villa)", Decimal("412")),
    ("Z8-13", "4300024", "L3", "Zone_08", "Residential (Villa)", Decimal("903")),
    ("Z3-42 (Villa)", "4300002", "L3", "Zone_03_(A)", "Residential (Villa)", Decimal("3180")),
    ("D-44 Building Bulk Meter", "4300144", "L3", "Zone_03_(A)", "D_Building_Bulk", Decimal("812")),
    ("Z3-44(1A) (Building)", "4300030", "L4", "Zone_03_(A)", "Residential (Apart)", Decimal("390")),
    ("Z3-44(2A) (Building)", "4300031", "L4", "Zone_03_(A)", "Residential (Apart)", Decimal("355")),
    ("Hotel Main Building", "4300334", "DC", "Direct Connection", "Retail", Decimal("17200")),
]


def _readings(keys: tuple[str, ...], base: Decimal) -> dict[str, Decimal]:
    """Vary a base value a little from month to month."""
    return {key: base + base * Decimal(i % 4) / Decimal(20) for i, key in enumerate(keys)}


def seed_database() -> None:
    """Seed the database with sample data."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(ElectricityMeter).first() or db.query(WaterMeter).first():
            print("Database already has data. Skipping seed.")
            return

        print("Seeding database...")

        for name, account, meter_type, base in ELECTRICITY_SAMPLES:
            meter = ElectricityMeter(name=name, account=account, type=meter_type)
            meter.set_readings(_readings(ELECTRICITY_HISTORY.keys, base))
            db.add(meter)

        for name, account, label, zone, meter_type, base in WATER_SAMPLES:
            meter = WaterMeter(name=name, account=account, label=label, zone=zone, type=meter_type)
            meter.set_readings(_readings(WATER_HISTORY.keys, base))
            db.add(meter)

        db.commit()

        print(f"Created {len(ELECTRICITY_SAMPLES)} electricity meters")
        print(f"Created {len(WATER_SAMPLES)} water meters")
        print("\nSeed data created successfully!")
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
