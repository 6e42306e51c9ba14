"""
Modèle de domaine logistique.

Ce module contient les entités du domaine : les expéditions (Shipment)
et les véhicules (Vehicle), chacun décliné en trois variantes fermées,
ainsi que les entrepôts (Warehouse).

Chaque variante porte un tag stable (ShipmentType / VehicleType) :
c'est ce tag, et non un test de type, qui sert à choisir la variante
dans la factory et dans le mapping vers la base de données.
"""

from __future__ import annotations

import abc
import enum
from datetime import date, datetime
from typing import Optional

from logistics.domain.exceptions import ValidationError


class ShipmentType(str, enum.Enum):
    """Tags des variantes d'expédition."""

    EXPRESS = "EXPRESS"
    STANDARD = "STANDARD"
    ECONOMY = "ECONOMY"


class VehicleType(str, enum.Enum):
    """Tags des variantes de véhicule."""

    AIR = "AIR"
    SEA = "SEA"
    LAND = "LAND"


class ShipmentStatus:
    """Statuts usuels d'une expédition (ensemble ouvert)."""

    PENDING = "PENDING"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class Priority:
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"


class VehicleStatus:
    """Statuts usuels d'un véhicule (ensemble ouvert)."""

    AVAILABLE = "AVAILABLE"
    IN_USE = "IN_USE"
    MAINTENANCE = "MAINTENANCE"


def _non_vide(valeur: Optional[str]) -> bool:
    return valeur is not None and valeur != ""


class BaseEntity(abc.ABC):
    """
    Entité de base : identité attribuée par le stockage, nom, date de création.

    L'id reste None tant que l'entité n'a pas été persistée.
    """

    entity_type: str

    def __init__(self) -> None:
        self.id: Optional[int] = None
        self._name: Optional[str] = None
        self.created_at: datetime = datetime.now()

    def __repr__(self) -> str:
        return f"<{self.display_info()}>"

    @property
    def name(self) -> Optional[str]:
        return self._name

    @name.setter
    def name(self, valeur: Optional[str]) -> None:
        if valeur is None or not valeur.strip():
            raise ValidationError("name cannot be empty")
        self._name = valeur

    def display_info(self) -> str:
        return f"{self.entity_type} [ID: {self.id}, Name: {self.name}]"

    @abc.abstractmethod
    def validate(self) -> bool:
        raise NotImplementedError


# --- Expéditions ---


class Shipment(BaseEntity):
    """
    Expédition abstraite.

    Les champs communs sont vides à la construction : c'est la factory
    ou le builder qui les renseigne. Le poids est contrôlé dès
    l'affectation (un poids nul ou négatif lève ValidationError).
    """

    shipment_type: ShipmentType
    default_priority: str = Priority.NORMAL

    def __init__(self) -> None:
        super().__init__()
        self.tracking_number: Optional[str] = None
        self.sender_name: Optional[str] = None
        self.recipient_name: Optional[str] = None
        self.origin: Optional[str] = None
        self.destination: Optional[str] = None
        self._weight: Optional[float] = None
        self.status: str = ShipmentStatus.PENDING
        self.priority: str = self.default_priority
        self.estimated_delivery: Optional[date] = None
        self.vehicle_id: Optional[int] = None
        self.warehouse_id: Optional[int] = None
        self.updated_at: Optional[datetime] = None

    @property
    def weight(self) -> Optional[float]:
        return self._weight

    @weight.setter
    def weight(self, valeur: Optional[float]) -> None:
        if valeur is not None and valeur <= 0:
            raise ValidationError("weight must be positive")
        self._weight = float(valeur) if valeur is not None else None

    def validate(self) -> bool:
        return (
            _non_vide(self.tracking_number)
            and _non_vide(self.sender_name)
            and _non_vide(self.recipient_name)
            and self.weight is not None
            and self.weight > 0
        )

    @abc.abstractmethod
    def shipping_cost(self) -> float:
        raise NotImplementedError

    @abc.abstractmethod
    def estimated_delivery_days(self) -> int:
        raise NotImplementedError


class ExpressShipment(Shipment):
    """Expédition express : prioritaire, livrée en 2 jours, surcoût si fragile."""

    shipment_type = ShipmentType.EXPRESS
    entity_type = "EXPRESS_SHIPMENT"
    default_priority = Priority.HIGH

    RATE = 15.0
    DELIVERY_DAYS = 2
    FRAGILE_SURCHARGE = 1.5

    def __init__(self) -> None:
        super().__init__()
        self.fragile = False

    def validate(self) -> bool:
        return super().validate() and self.priority == Priority.HIGH

    def shipping_cost(self) -> float:
        coût = self.weight * self.RATE
        return coût * self.FRAGILE_SURCHARGE if self.fragile else coût

    def estimated_delivery_days(self) -> int:
        return self.DELIVERY_DAYS


class StandardShipment(Shipment):
    """Expédition standard : 5 jours, surcoût si sous température dirigée."""

    shipment_type = ShipmentType.STANDARD
    entity_type = "STANDARD_SHIPMENT"
    default_priority = Priority.NORMAL

    RATE = 8.0
    DELIVERY_DAYS = 5
    TEMPERATURE_SURCHARGE = 1.3

    def __init__(self) -> None:
        super().__init__()
        self.temperature_controlled = False

    def shipping_cost(self) -> float:
        coût = self.weight * self.RATE
        return coût * self.TEMPERATURE_SURCHARGE if self.temperature_controlled else coût

    def estimated_delivery_days(self) -> int:
        return self.DELIVERY_DAYS


class EconomyShipment(Shipment):
    """
    Expédition économique : 10 jours, 3 de plus sans dédouanement.

    Une expédition non dédouanée bénéficie d'une remise de 10 % :
    règle métier conservée telle quelle.
    """

    shipment_type = ShipmentType.ECONOMY
    entity_type = "ECONOMY_SHIPMENT"
    default_priority = Priority.LOW

    RATE = 5.0
    DELIVERY_DAYS = 10
    CUSTOMS_DELAY_DAYS = 3
    UNCLEARED_DISCOUNT = 0.9

    def __init__(self) -> None:
        super().__init__()
        self.customs_cleared = False

    def shipping_cost(self) -> float:
        coût = self.weight * self.RATE
        return coût if self.customs_cleared else coût * self.UNCLEARED_DISCOUNT

    def estimated_delivery_days(self) -> int:
        if self.customs_cleared:
            return self.DELIVERY_DAYS
        return self.DELIVERY_DAYS + self.CUSTOMS_DELAY_DAYS


# --- Véhicules ---


class Vehicle(BaseEntity):
    """Véhicule abstrait. La capacité est contrôlée dès l'affectation."""

    vehicle_type: VehicleType
    OPERATING_RATE: float

    def __init__(self) -> None:
        super().__init__()
        self.license_plate: Optional[str] = None
        self._capacity: Optional[float] = None
        self.status: str = VehicleStatus.AVAILABLE

    @property
    def capacity(self) -> Optional[float]:
        return self._capacity

    @capacity.setter
    def capacity(self, valeur: Optional[float]) -> None:
        if valeur is not None and valeur <= 0:
            raise ValidationError("capacity must be positive")
        self._capacity = float(valeur) if valeur is not None else None

    def validate(self) -> bool:
        return (
            _non_vide(self.license_plate)
            and self.capacity is not None
            and self.capacity > 0
        )

    def operating_cost(self) -> float:
        return self.capacity * self.OPERATING_RATE


class AirVehicle(Vehicle):
    """Avions, hélicoptères."""

    vehicle_type = VehicleType.AIR
    entity_type = "AIR_VEHICLE"
    OPERATING_RATE = 2.5

    def __init__(self) -> None:
        super().__init__()
        self.max_altitude: Optional[int] = None


class SeaVehicle(Vehicle):
    vehicle_type = VehicleType.SEA
    entity_type = "SEA_VEHICLE"
    OPERATING_RATE = 1.2

    def __init__(self) -> None:
        super().__init__()
        self.cargo_type: Optional[str] = None


class LandVehicle(Vehicle):
    vehicle_type = VehicleType.LAND
    entity_type = "LAND_VEHICLE"
    OPERATING_RATE = 0.8

    def __init__(self) -> None:
        super().__init__()
        self.fuel_type: Optional[str] = None


# --- Entrepôts ---


class Warehouse(BaseEntity):
    """
    Entrepôt de stockage.

    Seule la capacité est contrôlée à l'affectation ; la cohérence
    entre charge et capacité est vérifiée par validate().
    """

    entity_type = "WAREHOUSE"

    def __init__(
        self,
        name: Optional[str] = None,
        location: Optional[str] = None,
        capacity: Optional[int] = None,
        current_load: int = 0,
    ):
        super().__init__()
        if name is not None:
            self.name = name
        self.location = location
        self._capacity: Optional[int] = None
        self.capacity = capacity
        self.current_load = current_load

    @property
    def capacity(self) -> Optional[int]:
        return self._capacity

    @capacity.setter
    def capacity(self, valeur: Optional[int]) -> None:
        if valeur is not None and valeur <= 0:
            raise ValidationError("capacity must be positive")
        self._capacity = valeur

    def validate(self) -> bool:
        return (
            _non_vide(self.location)
            and self.capacity is not None
            and self.capacity > 0
            and self.current_load is not None
            and 0 <= self.current_load <= self.capacity
        )
