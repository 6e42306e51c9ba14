"""
Tests d'intégration du composition root avec une base SQLite sur disque.
"""

from sqlalchemy import create_engine, inspect

from logistics.adapters.log_buffer import LogBuffer
from logistics.config import Settings
from logistics.domain import commands
from logistics.service_layer import bootstrap


def test_la_base_configurée_reçoit_tables_et_écritures(tmp_path):
    uri = f"sqlite:///{tmp_path / 'logistics.db'}"

    bus = bootstrap.bootstrap(settings=Settings(database_uri=uri), logs=LogBuffer())
    bus.handle(commands.CreateWarehouse(name="Central", location="Lyon", capacity=100))

    engine = create_engine(uri)
    tables = inspect(engine).get_table_names()
    assert {"shipments", "vehicles", "warehouses"} <= set(tables)
    with engine.connect() as connection:
        noms = connection.exec_driver_sql("SELECT name FROM warehouses").scalars().all()
    assert noms == ["Central"]
    engine.dispose()


def test_sans_start_orm_aucune_table_créée(tmp_path):
    uri = f"sqlite:///{tmp_path / 'vide.db'}"

    bootstrap.bootstrap(start_orm=False, settings=Settings(database_uri=uri), logs=LogBuffer())

    engine = create_engine(uri)
    assert inspect(engine).get_table_names() == []
    engine.dispose()
