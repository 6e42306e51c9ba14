"""
Point d'entrée Flask.

L'API Flask est un thin adapter : elle se contente de
convertir les requêtes HTTP en commands, les envoie au
message bus, et convertit les résultats en réponses HTTP.

Les erreurs du domaine sont traduites en codes HTTP :
ValidationError / UnknownType -> 400, NotFound -> 404,
Duplicate -> 409, PersistenceError -> 500.

L'API ne contient aucune logique métier.
"""

from __future__ import annotations

from datetime import datetime

from flask import Flask, jsonify, request

from logistics.domain import commands
from logistics.domain.exceptions import (
    Duplicate,
    LogisticsError,
    NotFound,
    PersistenceError,
    UnknownType,
    ValidationError,
)
from logistics.service_layer import bootstrap
from logistics.views import views


app = Flask(__name__)
bus = bootstrap.bootstrap()

STATUS_CODES: dict[type[LogisticsError], int] = {
    ValidationError: 400,
    UnknownType: 400,
    NotFound: 404,
    Duplicate: 409,
    PersistenceError: 500,
}


@app.errorhandler(LogisticsError)
def handle_logistics_error(error: LogisticsError):
    status = next(
        (code for kind, code in STATUS_CODES.items() if isinstance(error, kind)), 500
    )
    return jsonify({"message": str(error)}), status


def _currency() -> str:
    return bus.dependencies["settings"].currency


def _date(valeur):
    if valeur is None:
        return None
    try:
        return datetime.fromisoformat(valeur).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {valeur}") from None


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


# --- Expéditions ---


def _shipment_fields(data: dict) -> dict:
    return dict(
        shipment_type=data.get("shipment_type", data.get("type")),
        tracking_number=data.get("tracking_number"),
        sender_name=data.get("sender_name"),
        recipient_name=data.get("recipient_name"),
        weight=data.get("weight"),
        origin=data.get("origin"),
        destination=data.get("destination"),
        name=data.get("name"),
        status=data.get("status"),
        priority=data.get("priority"),
        estimated_delivery=_date(data.get("estimated_delivery")),
        vehicle_id=data.get("vehicle_id"),
        warehouse_id=data.get("warehouse_id"),
        is_fragile=data.get("is_fragile"),
        temperature_controlled=data.get("temperature_controlled"),
        customs_cleared=data.get("customs_cleared"),
    )


@app.route("/api/shipments", methods=["GET"])
def list_shipments_endpoint():
    return jsonify(views.shipments(bus.uow, currency=_currency())), 200


@app.route("/api/shipments", methods=["POST"])
def create_shipment_endpoint():
    """
    POST /api/shipments
    Body JSON : { shipment_type, tracking_number, sender_name,
                  recipient_name, weight, ... }
    """
    cmd = commands.CreateShipment(**_shipment_fields(_json_body()))
    shipment = bus.handle(cmd)
    return jsonify(views.serialize_shipment(shipment, _currency())), 201


@app.route("/api/shipments/<int:shipment_id>", methods=["GET"])
def get_shipment_endpoint(shipment_id: int):
    return jsonify(views.shipment(shipment_id, bus.uow, _currency())), 200


@app.route("/api/shipments/tracking/<tracking_number>", methods=["GET"])
def get_shipment_by_tracking_number_endpoint(tracking_number: str):
    result = views.shipment_by_tracking_number(tracking_number, bus.uow, _currency())
    return jsonify(result), 200


@app.route("/api/shipments/status/<status>", methods=["GET"])
def list_shipments_by_status_endpoint(status: str):
    return jsonify(views.shipments(bus.uow, status=status, currency=_currency())), 200


@app.route("/api/shipments/<int:shipment_id>", methods=["PUT"])
def update_shipment_endpoint(shipment_id: int):
    cmd = commands.UpdateShipment(id=shipment_id, **_shipment_fields(_json_body()))
    shipment = bus.handle(cmd)
    return jsonify(views.serialize_shipment(shipment, _currency())), 200


@app.route("/api/shipments/<int:shipment_id>", methods=["DELETE"])
def delete_shipment_endpoint(shipment_id: int):
    bus.handle(commands.DeleteShipment(id=shipment_id))
    return "", 204


# --- Véhicules ---


def _vehicle_fields(data: dict) -> dict:
    return dict(
        vehicle_type=data.get("vehicle_type", data.get("type")),
        name=data.get("name"),
        license_plate=data.get("license_plate"),
        capacity=data.get("capacity"),
        status=data.get("status"),
        max_altitude=data.get("max_altitude"),
        cargo_type=data.get("cargo_type"),
        fuel_type=data.get("fuel_type"),
    )


@app.route("/api/vehicles", methods=["GET"])
def list_vehicles_endpoint():
    return jsonify(views.vehicles(bus.uow)), 200


@app.route("/api/vehicles", methods=["POST"])
def create_vehicle_endpoint():
    vehicle = bus.handle(commands.CreateVehicle(**_vehicle_fields(_json_body())))
    return jsonify(views.serialize_vehicle(vehicle)), 201


@app.route("/api/vehicles/<int:vehicle_id>", methods=["GET"])
def get_vehicle_endpoint(vehicle_id: int):
    return jsonify(views.vehicle(vehicle_id, bus.uow)), 200


@app.route("/api/vehicles/<int:vehicle_id>", methods=["PUT"])
def update_vehicle_endpoint(vehicle_id: int):
    cmd = commands.UpdateVehicle(id=vehicle_id, **_vehicle_fields(_json_body()))
    vehicle = bus.handle(cmd)
    return jsonify(views.serialize_vehicle(vehicle)), 200


@app.route("/api/vehicles/<int:vehicle_id>", methods=["DELETE"])
def delete_vehicle_endpoint(vehicle_id: int):
    bus.handle(commands.DeleteVehicle(id=vehicle_id))
    return "", 204


# --- Entrepôts ---


def _warehouse_fields(data: dict) -> dict:
    return dict(
        name=data.get("name"),
        location=data.get("location"),
        capacity=data.get("capacity"),
        current_load=data.get("current_load", 0),
    )


@app.route("/api/warehouses", methods=["GET"])
def list_warehouses_endpoint():
    return jsonify(views.warehouses(bus.uow)), 200


@app.route("/api/warehouses", methods=["POST"])
def create_warehouse_endpoint():
    warehouse = bus.handle(commands.CreateWarehouse(**_warehouse_fields(_json_body())))
    return jsonify(views.serialize_warehouse(warehouse)), 201


@app.route("/api/warehouses/<int:warehouse_id>", methods=["GET"])
def get_warehouse_endpoint(warehouse_id: int):
    return jsonify(views.warehouse(warehouse_id, bus.uow)), 200


@app.route("/api/warehouses/<int:warehouse_id>", methods=["PUT"])
def update_warehouse_endpoint(warehouse_id: int):
    cmd = commands.UpdateWarehouse(id=warehouse_id, **_warehouse_fields(_json_body()))
    warehouse = bus.handle(cmd)
    return jsonify(views.serialize_warehouse(warehouse)), 200


@app.route("/api/warehouses/<int:warehouse_id>", methods=["DELETE"])
def delete_warehouse_endpoint(warehouse_id: int):
    bus.handle(commands.DeleteWarehouse(id=warehouse_id))
    return "", 204
