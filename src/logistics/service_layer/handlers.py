"""
Handlers pour les commands.

Les handlers sont les fonctions qui traitent les commands transitant
par le message bus. Ils construisent les entités via le builder ou la
factory, puis les persistent au travers du Unit of Work.

Toute erreur (ValidationError, UnknownType, NotFound, Duplicate,
PersistenceError) remonte telle quelle à l'appelant.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from logistics.domain import commands, factory, model
from logistics.domain.builder import ShipmentBuilder
from logistics.domain.exceptions import ValidationError

if TYPE_CHECKING:
    from logistics.config import Settings
    from logistics.service_layer.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


# --- Construction des entités ---


def _nombre(champ: str, valeur, conversion):
    """Convertit une valeur numérique reçue telle quelle ; None reste None."""
    if valeur is None:
        return None
    if isinstance(valeur, bool):
        raise ValidationError(f"{champ} must be a number: {valeur!r}")
    try:
        return conversion(valeur)
    except (TypeError, ValueError):
        raise ValidationError(f"{champ} must be a number: {valeur!r}") from None


def _special_attribute(cmd: commands.CreateShipment) -> bool | None:
    """Premier attribut spécial renseigné ; la variante décide du champ affecté."""
    for valeur in (cmd.is_fragile, cmd.temperature_controlled, cmd.customs_cleared):
        if valeur is not None:
            return valeur
    return None


def build_shipment(cmd: commands.CreateShipment, settings: Settings) -> model.Shipment:
    shipment = (
        ShipmentBuilder()
        .type(cmd.shipment_type)
        .tracking_number(cmd.tracking_number)
        .sender(cmd.sender_name)
        .recipient(cmd.recipient_name)
        .origin(cmd.origin)
        .destination(cmd.destination)
        .weight(cmd.weight)
        .name(cmd.name)
        .status(cmd.status)
        .priority(cmd.priority)
        .estimated_delivery(cmd.estimated_delivery)
        .vehicle_id(cmd.vehicle_id)
        .warehouse_id(cmd.warehouse_id)
        .special_attribute(_special_attribute(cmd))
        .build()
    )
    if shipment.weight > settings.max_shipment_weight:
        raise ValidationError(
            f"Weight exceeds the maximum of {settings.max_shipment_weight}"
        )
    if not shipment.validate():
        raise ValidationError(
            f"Invalid {shipment.shipment_type.value} shipment (priority: {shipment.priority})"
        )
    return shipment


def build_vehicle(cmd: commands.CreateVehicle) -> model.Vehicle:
    if not cmd.vehicle_type:
        raise ValidationError("Vehicle type is required")
    if not cmd.name:
        raise ValidationError("Name is required")
    if not cmd.license_plate:
        raise ValidationError("License plate is required")
    capacity = _nombre("capacity", cmd.capacity, float)
    if capacity is None or capacity <= 0:
        raise ValidationError("Capacity must be positive")

    vehicle = factory.create_populated_vehicle(
        cmd.vehicle_type, cmd.name, cmd.license_plate, capacity
    )
    if cmd.status:
        vehicle.status = cmd.status
    attribut = factory.VEHICLE_ATTRIBUTES[vehicle.vehicle_type]
    setattr(vehicle, attribut, getattr(cmd, attribut))
    return vehicle


def build_warehouse(cmd: commands.CreateWarehouse) -> model.Warehouse:
    if not cmd.name:
        raise ValidationError("Name is required")
    if not cmd.location:
        raise ValidationError("Location is required")
    capacity = _nombre("capacity", cmd.capacity, int)
    if capacity is None or capacity <= 0:
        raise ValidationError("Capacity must be positive")

    warehouse = model.Warehouse(
        name=cmd.name,
        location=cmd.location,
        capacity=capacity,
        current_load=_nombre("current_load", cmd.current_load, int),
    )
    if not warehouse.validate():
        raise ValidationError("Current load must be between 0 and capacity")
    return warehouse


# --- Expéditions ---


def create_shipment(
    cmd: commands.CreateShipment,
    uow: AbstractUnitOfWork,
    settings: Settings,
) -> model.Shipment:
    """
    Crée une expédition.

    L'unicité du numéro de suivi n'est pas vérifiée ici : c'est la
    contrainte du stockage qui la garantit (Duplicate).
    """
    logger.info("Creating new shipment: %s", cmd.tracking_number)
    shipment = build_shipment(cmd, settings)
    with uow:
        uow.shipments.add(shipment)
        uow.commit()
    logger.info("Shipment created successfully with ID: %s", shipment.id)
    return shipment


def update_shipment(
    cmd: commands.UpdateShipment,
    uow: AbstractUnitOfWork,
    settings: Settings,
) -> model.Shipment:
    logger.info("Updating shipment ID: %s", cmd.id)
    shipment = build_shipment(cmd, settings)
    shipment.id = cmd.id
    with uow:
        uow.shipments.update(shipment)
        shipment = uow.shipments.get(cmd.id)
        uow.commit()
    logger.info("Shipment updated successfully: %s", cmd.id)
    return shipment


def delete_shipment(cmd: commands.DeleteShipment, uow: AbstractUnitOfWork) -> None:
    logger.info("Deleting shipment ID: %s", cmd.id)
    with uow:
        uow.shipments.delete(cmd.id)
        uow.commit()


# --- Véhicules ---


def create_vehicle(cmd: commands.CreateVehicle, uow: AbstractUnitOfWork) -> model.Vehicle:
    logger.info("Creating vehicle: %s", cmd.name)
    vehicle = build_vehicle(cmd)
    with uow:
        uow.vehicles.add(vehicle)
        uow.commit()
    return vehicle


def update_vehicle(cmd: commands.UpdateVehicle, uow: AbstractUnitOfWork) -> model.Vehicle:
    logger.info("Updating vehicle ID: %s", cmd.id)
    vehicle = build_vehicle(cmd)
    vehicle.id = cmd.id
    with uow:
        uow.vehicles.update(vehicle)
        uow.commit()
    return vehicle


def delete_vehicle(cmd: commands.DeleteVehicle, uow: AbstractUnitOfWork) -> None:
    logger.info("Deleting vehicle ID: %s", cmd.id)
    with uow:
        uow.vehicles.delete(cmd.id)
        uow.commit()


# --- Entrepôts ---


def create_warehouse(
    cmd: commands.CreateWarehouse, uow: AbstractUnitOfWork
) -> model.Warehouse:
    logger.info("Creating warehouse: %s", cmd.name)
    warehouse = build_warehouse(cmd)
    with uow:
        uow.warehouses.add(warehouse)
        uow.commit()
    return warehouse


def update_warehouse(
    cmd: commands.UpdateWarehouse, uow: AbstractUnitOfWork
) -> model.Warehouse:
    logger.info("Updating warehouse ID: %s", cmd.id)
    warehouse = build_warehouse(cmd)
    warehouse.id = cmd.id
    with uow:
        uow.warehouses.update(warehouse)
        uow.commit()
    return warehouse


def delete_warehouse(cmd: commands.DeleteWarehouse, uow: AbstractUnitOfWork) -> None:
    logger.info("Deleting warehouse ID: %s", cmd.id)
    with uow:
        uow.warehouses.delete(cmd.id)
        uow.commit()
