"""
Bootstrap : assemblage de l'application (Composition Root).

Ce module construit le message bus avec toutes ses dépendances :
configuration, Unit of Work et journal en mémoire. C'est ici que
l'injection de dépendances est réalisée : on assemble les composants
concrets (ou les fakes pour les tests).

C'est le seul endroit de l'application qui connaît les
implémentations concrètes de chaque abstraction.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine

from logistics import config
from logistics.adapters import log_buffer, orm
from logistics.domain import commands
from logistics.service_layer import handlers, messagebus, unit_of_work


def bootstrap(
    start_orm: bool = True,
    uow: unit_of_work.AbstractUnitOfWork | None = None,
    settings: config.Settings | None = None,
    logs: log_buffer.LogBuffer | None = None,
    **extra_dependencies: Any,
) -> messagebus.MessageBus:
    """
    Construit et retourne un MessageBus configuré.

    En production, ouvre la base désignée par settings.database_uri
    et y crée les tables manquantes (si start_orm). En test, on injecte
    des fakes via les paramètres.
    """
    if settings is None:
        settings = config.get_settings()

    if logs is None:
        logs = log_buffer.LogBuffer()
    log_buffer.attach(logs, level=settings.log_level)

    if uow is None:
        engine = create_engine(settings.database_uri)
        if start_orm:
            orm.create_tables(engine)
        uow = unit_of_work.SqlAlchemyUnitOfWork(
            session_factory=unit_of_work.make_session_factory(engine)
        )

    dependencies: dict[str, Any] = {
        "settings": settings,
        **extra_dependencies,
    }

    return messagebus.MessageBus(
        uow=uow,
        command_handlers=COMMAND_HANDLERS,
        dependencies=dependencies,
    )


# --- Routage des commands vers les handlers ---

COMMAND_HANDLERS: dict[type[commands.Command], Any] = {
    commands.CreateShipment: handlers.create_shipment,
    commands.UpdateShipment: handlers.update_shipment,
    commands.DeleteShipment: handlers.delete_shipment,
    commands.CreateVehicle: handlers.create_vehicle,
    commands.UpdateVehicle: handlers.update_vehicle,
    commands.DeleteVehicle: handlers.delete_vehicle,
    commands.CreateWarehouse: handlers.create_warehouse,
    commands.UpdateWarehouse: handlers.update_warehouse,
    commands.DeleteWarehouse: handlers.delete_warehouse,
}
