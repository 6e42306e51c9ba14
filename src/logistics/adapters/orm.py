"""
Schéma relationnel avec SQLAlchemy Core.

Une table par famille d'entités. Les variantes d'expédition et de
véhicule partagent une seule table : la colonne `shipment_type` /
`vehicle_type` sert de discriminant, et chaque attribut propre à une
variante a sa propre colonne, renseignée uniquement pour cette variante.

La traduction entre ces lignes plates et les objets du domaine est
faite par le module `mapper` : le modèle de domaine reste ignorant
de la persistance.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    false,
)
from sqlalchemy.engine import Engine

metadata = MetaData()

# --- Définition des tables ---

warehouses = Table(
    "warehouses",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("location", String(255), nullable=False),
    Column("capacity", Integer, nullable=False),
    Column("current_load", Integer, nullable=False, server_default="0"),
)

vehicles = Table(
    "vehicles",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("vehicle_type", String(20), nullable=False),
    Column("name", String(255), nullable=False),
    Column("license_plate", String(50), nullable=False),
    Column("capacity", Float, nullable=False),
    Column("status", String(50), nullable=False),
    Column("max_altitude", Integer, nullable=True),
    Column("cargo_type", String(100), nullable=True),
    Column("fuel_type", String(50), nullable=True),
)

shipments = Table(
    "shipments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("tracking_number", String(100), nullable=False, unique=True),
    Column("shipment_type", String(20), nullable=False),
    Column("name", String(255), nullable=True),
    Column("sender_name", String(255), nullable=False),
    Column("recipient_name", String(255), nullable=False),
    Column("origin", String(255)),
    Column("destination", String(255)),
    Column("weight", Float, nullable=False),
    Column("status", String(50), nullable=False),
    Column("priority", String(20), nullable=False),
    Column("estimated_delivery", Date, nullable=True),
    Column("vehicle_id", Integer, ForeignKey("vehicles.id"), nullable=True),
    Column("warehouse_id", Integer, ForeignKey("warehouses.id"), nullable=True),
    Column("is_fragile", Boolean, nullable=False, server_default=false()),
    Column("temperature_controlled", Boolean, nullable=False, server_default=false()),
    Column("customs_cleared", Boolean, nullable=False, server_default=false()),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=True),
)


def create_tables(engine: Engine) -> None:
    """Crée les tables manquantes (idempotent)."""
    metadata.create_all(engine)
