"""Enum definitions for utility domains and water hierarchy levels."""

from enum import Enum


class Domain(str, Enum):
    """Metered utility."""

    ELECTRICITY = "electricity"
    WATER = "water"


class WaterLevel(str, Enum):
    """Water distribution hierarchy tier."""

    L1 = "L1"  # Main source (bulk supply)
    L2 = "L2"  # Zone bulk meters
    L3 = "L3"  # Building/villa meters
    L4 = "L4"  # Individual end-user meters
    DC = "DC"  # Direct connection, outside the A1..A4 chain

