"""
Commands du domaine.

Les commands représentent des intentions : quelque chose que
le système doit faire. Elles portent les données brutes reçues
de l'extérieur ; la validation a lieu dans les handlers, au moment
de construire les entités.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


class Command:
    """Classe de base pour toutes les commands."""
    pass


# --- Expéditions ---


@dataclass(frozen=True)
class CreateShipment(Command):
    """Demande de création d'une expédition."""

    shipment_type: Optional[str]
    tracking_number: Optional[str]
    sender_name: Optional[str]
    recipient_name: Optional[str]
    weight: Optional[float]
    origin: Optional[str] = None
    destination: Optional[str] = None
    name: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    estimated_delivery: Optional[date] = None
    vehicle_id: Optional[int] = None
    warehouse_id: Optional[int] = None
    is_fragile: Optional[bool] = None
    temperature_controlled: Optional[bool] = None
    customs_cleared: Optional[bool] = None


@dataclass(frozen=True)
class UpdateShipment(CreateShipment):
    """Remplacement complet d'une expédition existante."""

    id: int = 0


@dataclass(frozen=True)
class DeleteShipment(Command):
    id: int


# --- Véhicules ---


@dataclass(frozen=True)
class CreateVehicle(Command):
    """Demande de création d'un véhicule."""

    vehicle_type: Optional[str]
    name: Optional[str]
    license_plate: Optional[str]
    capacity: Optional[float]
    status: Optional[str] = None
    max_altitude: Optional[int] = None
    cargo_type: Optional[str] = None
    fuel_type: Optional[str] = None


@dataclass(frozen=True)
class UpdateVehicle(CreateVehicle):
    id: int = 0


@dataclass(frozen=True)
class DeleteVehicle(Command):
    id: int


# --- Entrepôts ---


@dataclass(frozen=True)
class CreateWarehouse(Command):
    """Demande de création d'un entrepôt."""

    name: Optional[str]
    location: Optional[str]
    capacity: Optional[int]
    current_load: int = 0


@dataclass(frozen=True)
class UpdateWarehouse(CreateWarehouse):
    id: int = 0


@dataclass(frozen=True)
class DeleteWarehouse(Command):
    id: int
