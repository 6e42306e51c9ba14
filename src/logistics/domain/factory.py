"""
Factory des variantes d'expédition et de véhicule.

La factory traduit une chaîne de type (insensible à la casse) en une
instance vide de la variante correspondante. Les variantes sont
indexées par leur tag : ajouter une variante revient à ajouter une
entrée dans la table, sans toucher aux appelants.
"""

from __future__ import annotations

from typing import Optional, Union

from logistics.domain import model
from logistics.domain.exceptions import UnknownType

SHIPMENT_VARIANTS: dict[model.ShipmentType, type[model.Shipment]] = {
    model.ShipmentType.EXPRESS: model.ExpressShipment,
    model.ShipmentType.STANDARD: model.StandardShipment,
    model.ShipmentType.ECONOMY: model.EconomyShipment,
}

VEHICLE_VARIANTS: dict[model.VehicleType, type[model.Vehicle]] = {
    model.VehicleType.AIR: model.AirVehicle,
    model.VehicleType.SEA: model.SeaVehicle,
    model.VehicleType.LAND: model.LandVehicle,
}

# Attribut spécial (booléen) propre à chaque variante d'expédition.
SPECIAL_ATTRIBUTES: dict[model.ShipmentType, str] = {
    model.ShipmentType.EXPRESS: "fragile",
    model.ShipmentType.STANDARD: "temperature_controlled",
    model.ShipmentType.ECONOMY: "customs_cleared",
}

# Attribut propre à chaque variante de véhicule.
VEHICLE_ATTRIBUTES: dict[model.VehicleType, str] = {
    model.VehicleType.AIR: "max_altitude",
    model.VehicleType.SEA: "cargo_type",
    model.VehicleType.LAND: "fuel_type",
}


def shipment_type_of(type_: Union[str, model.ShipmentType, None]) -> model.ShipmentType:
    """Résout une chaîne de type en tag d'expédition, ou lève UnknownType."""
    if type_ is None:
        raise UnknownType("Shipment type cannot be null")
    try:
        return model.ShipmentType(str(getattr(type_, "value", type_)).upper())
    except ValueError:
        raise UnknownType(f"Unknown shipment type: {type_}") from None


def vehicle_type_of(type_: Union[str, model.VehicleType, None]) -> model.VehicleType:
    """Résout une chaîne de type en tag de véhicule, ou lève UnknownType."""
    if type_ is None:
        raise UnknownType("Vehicle type cannot be null")
    try:
        return model.VehicleType(str(getattr(type_, "value", type_)).upper())
    except ValueError:
        raise UnknownType(f"Unknown vehicle type: {type_}") from None


def create_shipment(type_: Union[str, model.ShipmentType, None]) -> model.Shipment:
    """Retourne une expédition vide de la variante demandée."""
    return SHIPMENT_VARIANTS[shipment_type_of(type_)]()


def create_populated_shipment(
    type_: Union[str, model.ShipmentType, None],
    tracking_number: str,
    sender_name: str,
    recipient_name: str,
    origin: Optional[str],
    destination: Optional[str],
    weight: float,
) -> model.Shipment:
    """Crée une expédition avec tous ses champs communs renseignés."""
    shipment = create_shipment(type_)
    shipment.tracking_number = tracking_number
    shipment.sender_name = sender_name
    shipment.recipient_name = recipient_name
    shipment.origin = origin
    shipment.destination = destination
    shipment.weight = weight
    return shipment


def create_shipment_with_attribute(
    type_: Union[str, model.ShipmentType, None],
    tracking_number: str,
    sender_name: str,
    recipient_name: str,
    origin: Optional[str],
    destination: Optional[str],
    weight: float,
    special_attribute: bool,
) -> model.Shipment:
    """
    Crée une expédition complète et affecte l'attribut spécial.

    L'appelant ne précise pas quel champ reçoit la valeur : c'est le
    tag de la variante obtenue qui le détermine (fragile pour Express,
    temperature_controlled pour Standard, customs_cleared pour Economy).
    """
    shipment = create_populated_shipment(
        type_, tracking_number, sender_name, recipient_name,
        origin, destination, weight,
    )
    setattr(shipment, SPECIAL_ATTRIBUTES[shipment.shipment_type], bool(special_attribute))
    return shipment


def create_vehicle(type_: Union[str, model.VehicleType, None]) -> model.Vehicle:
    """Retourne un véhicule vide de la variante demandée."""
    return VEHICLE_VARIANTS[vehicle_type_of(type_)]()


def create_populated_vehicle(
    type_: Union[str, model.VehicleType, None],
    name: str,
    license_plate: str,
    capacity: float,
) -> model.Vehicle:
    vehicle = create_vehicle(type_)
    vehicle.name = name
    vehicle.license_plate = license_plate
    vehicle.capacity = capacity
    return vehicle
