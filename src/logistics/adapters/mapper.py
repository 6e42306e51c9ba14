"""
Mapping entre les objets du domaine et les lignes plates des tables.

Une ligne de `shipments` contient les colonnes de toutes les variantes :
is_fragile, temperature_controlled et customs_cleared. À l'encodage,
seule la colonne de la variante porte la valeur de l'instance, les
autres reçoivent leur valeur vide (False). Au décodage, le discriminant
choisit la variante via la factory, puis seule la colonne de cette
variante est lue ; les autres sont ignorées pour cette ligne.

Le même principe s'applique aux véhicules (max_altitude, cargo_type,
fuel_type, vides à None). Le choix de la colonne passe toujours par le
tag de la variante, jamais par un test de type.
"""

from __future__ import annotations

from typing import Any, Mapping, Union

from logistics.domain import factory, model

Row = Mapping[str, Any]

# Colonne portant l'attribut spécial de chaque variante d'expédition.
SHIPMENT_COLUMNS: dict[model.ShipmentType, str] = {
    model.ShipmentType.EXPRESS: "is_fragile",
    model.ShipmentType.STANDARD: "temperature_controlled",
    model.ShipmentType.ECONOMY: "customs_cleared",
}

# Les colonnes propres aux véhicules portent le nom de leur attribut.
VEHICLE_COLUMNS: dict[model.VehicleType, str] = dict(factory.VEHICLE_ATTRIBUTES)


def discriminator(entity: Union[model.Shipment, model.Vehicle]) -> str:
    """EXPRESS_SHIPMENT -> EXPRESS, AIR_VEHICLE -> AIR."""
    return entity.entity_type.removesuffix("_SHIPMENT").removesuffix("_VEHICLE")


# --- Expéditions ---


def encode_shipment(shipment: model.Shipment) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": shipment.id,
        "tracking_number": shipment.tracking_number,
        "shipment_type": discriminator(shipment),
        "name": shipment.name,
        "sender_name": shipment.sender_name,
        "recipient_name": shipment.recipient_name,
        "origin": shipment.origin,
        "destination": shipment.destination,
        "weight": shipment.weight,
        "status": shipment.status,
        "priority": shipment.priority,
        "estimated_delivery": shipment.estimated_delivery,
        "vehicle_id": shipment.vehicle_id,
        "warehouse_id": shipment.warehouse_id,
        "created_at": shipment.created_at,
        "updated_at": shipment.updated_at,
    }
    for column in SHIPMENT_COLUMNS.values():
        row[column] = False
    attribute = factory.SPECIAL_ATTRIBUTES[shipment.shipment_type]
    row[SHIPMENT_COLUMNS[shipment.shipment_type]] = bool(getattr(shipment, attribute))
    return row


def decode_shipment(row: Row) -> model.Shipment:
    """
    Reconstruit l'expédition décrite par une ligne de `shipments`.

    Lève UnknownType si le discriminant ne correspond à aucune variante :
    une ligne illisible n'est jamais rabattue sur une variante par défaut.
    """
    shipment = factory.create_shipment(row["shipment_type"])
    shipment.id = row["id"]
    if row.get("name") is not None:
        shipment.name = row["name"]
    shipment.tracking_number = row["tracking_number"]
    shipment.sender_name = row["sender_name"]
    shipment.recipient_name = row["recipient_name"]
    shipment.origin = row["origin"]
    shipment.destination = row["destination"]
    shipment.weight = row["weight"]
    shipment.status = row["status"]
    shipment.priority = row["priority"]
    # Colonnes optionnelles : absentes = pas de date, pas d'association
    shipment.estimated_delivery = row.get("estimated_delivery")
    shipment.vehicle_id = row.get("vehicle_id")
    shipment.warehouse_id = row.get("warehouse_id")
    if row.get("created_at") is not None:
        shipment.created_at = row["created_at"]
    shipment.updated_at = row.get("updated_at")

    column = SHIPMENT_COLUMNS[shipment.shipment_type]
    setattr(
        shipment,
        factory.SPECIAL_ATTRIBUTES[shipment.shipment_type],
        bool(row[column]),
    )
    return shipment


# --- Véhicules ---


def encode_vehicle(vehicle: model.Vehicle) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": vehicle.id,
        "vehicle_type": discriminator(vehicle),
        "name": vehicle.name,
        "license_plate": vehicle.license_plate,
        "capacity": vehicle.capacity,
        "status": vehicle.status,
    }
    for column in VEHICLE_COLUMNS.values():
        row[column] = None
    column = VEHICLE_COLUMNS[vehicle.vehicle_type]
    row[column] = getattr(vehicle, column)
    return row


def decode_vehicle(row: Row) -> model.Vehicle:
    """Reconstruit le véhicule décrit par une ligne de `vehicles`."""
    vehicle = factory.create_vehicle(row["vehicle_type"])
    vehicle.id = row["id"]
    vehicle.name = row["name"]
    vehicle.license_plate = row["license_plate"]
    vehicle.capacity = row["capacity"]
    vehicle.status = row["status"]

    column = VEHICLE_COLUMNS[vehicle.vehicle_type]
    setattr(vehicle, column, row[column])
    return vehicle


# --- Entrepôts ---


def encode_warehouse(warehouse: model.Warehouse) -> dict[str, Any]:
    return {
        "id": warehouse.id,
        "name": warehouse.name,
        "location": warehouse.location,
        "capacity": warehouse.capacity,
        "current_load": warehouse.current_load,
    }


def decode_warehouse(row: Row) -> model.Warehouse:
    warehouse = model.Warehouse(
        name=row["name"],
        location=row["location"],
        capacity=row["capacity"],
        current_load=row["current_load"],
    )
    warehouse.id = row["id"]
    return warehouse
