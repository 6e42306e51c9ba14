"""
Views (lecture).

Les views sont des fonctions de lecture : elles chargent les entités
via les repositories du Unit of Work et les renvoient sous forme de
dictionnaires prêts à être sérialisés en JSON.

C'est le côté Query : les écritures passent par le message bus,
les lectures passent par ici. Une lecture par id ou par numéro de
suivi sans résultat lève NotFound.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from logistics.adapters import mapper
from logistics.domain import model, pricing
from logistics.domain.exceptions import NotFound
from logistics.service_layer import unit_of_work


def _json(valeur: Any) -> Any:
    if isinstance(valeur, (date, datetime)):
        return valeur.isoformat()
    return valeur


def serialize_shipment(shipment: model.Shipment, currency: str = "USD") -> dict:
    """
    Dictionnaire d'une expédition : champs communs, discriminant `type`,
    le seul attribut propre à sa variante, et son devis.
    """
    row = mapper.encode_shipment(shipment)
    colonne = mapper.SHIPMENT_COLUMNS[shipment.shipment_type]
    autres = set(mapper.SHIPMENT_COLUMNS.values()) - {colonne}
    data = {k: _json(v) for k, v in row.items() if k not in autres}
    data["type"] = data.pop("shipment_type")
    if shipment.validate():
        devis = pricing.quote(shipment, currency=currency)
        data["shipping_cost"] = devis.cost
        data["currency"] = devis.currency
        data["delivery_days"] = devis.delivery_days
    return data


def serialize_vehicle(vehicle: model.Vehicle) -> dict:
    row = mapper.encode_vehicle(vehicle)
    colonne = mapper.VEHICLE_COLUMNS[vehicle.vehicle_type]
    autres = set(mapper.VEHICLE_COLUMNS.values()) - {colonne}
    data = {k: v for k, v in row.items() if k not in autres}
    data["type"] = data.pop("vehicle_type")
    if vehicle.validate():
        data["operating_cost"] = pricing.operating_cost(vehicle)
    return data


def serialize_warehouse(warehouse: model.Warehouse) -> dict:
    return mapper.encode_warehouse(warehouse)


# --- Expéditions ---


def shipment(id_: int, uow: unit_of_work.AbstractUnitOfWork, currency: str = "USD") -> dict:
    with uow:
        trouvé = uow.shipments.get(id_)
    if trouvé is None:
        raise NotFound(f"Shipment not found with id: {id_}")
    return serialize_shipment(trouvé, currency)


def shipment_by_tracking_number(
    tracking_number: str, uow: unit_of_work.AbstractUnitOfWork, currency: str = "USD"
) -> dict:
    with uow:
        trouvé = uow.shipments.get_by_tracking_number(tracking_number)
    if trouvé is None:
        raise NotFound(f"Shipment not found with tracking number: {tracking_number}")
    return serialize_shipment(trouvé, currency)


def shipments(
    uow: unit_of_work.AbstractUnitOfWork,
    status: Optional[str] = None,
    currency: str = "USD",
) -> list[dict]:
    """Toutes les expéditions, ou celles d'un statut donné, par id croissant."""
    with uow:
        trouvées = uow.shipments.list(status=status)
    return [serialize_shipment(s, currency) for s in trouvées]


# --- Véhicules ---


def vehicle(id_: int, uow: unit_of_work.AbstractUnitOfWork) -> dict:
    with uow:
        trouvé = uow.vehicles.get(id_)
    if trouvé is None:
        raise NotFound(f"Vehicle not found with id: {id_}")
    return serialize_vehicle(trouvé)


def vehicles(uow: unit_of_work.AbstractUnitOfWork) -> list[dict]:
    with uow:
        return [serialize_vehicle(v) for v in uow.vehicles.list()]


# --- Entrepôts ---


def warehouse(id_: int, uow: unit_of_work.AbstractUnitOfWork) -> dict:
    with uow:
        trouvé = uow.warehouses.get(id_)
    if trouvé is None:
        raise NotFound(f"Warehouse not found with id: {id_}")
    return serialize_warehouse(trouvé)


def warehouses(uow: unit_of_work.AbstractUnitOfWork) -> list[dict]:
    with uow:
        return [serialize_warehouse(w) for w in uow.warehouses.list()]
