"""
Pattern Unit of Work.

Le Unit of Work (UoW) délimite une transaction : il ouvre une session,
expose un repository par famille d'entités (shipments, vehicles,
warehouses) et gère commit/rollback.

Le UoW agit comme un context manager :
    with uow:
        # ... opérations sur les repositories ...
        uow.commit()
"""

from __future__ import annotations

import abc

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from logistics import config
from logistics.adapters import repository
from logistics.domain.exceptions import PersistenceError


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine)


DEFAULT_ENGINE = create_engine(config.get_settings().database_uri)
DEFAULT_SESSION_FACTORY = make_session_factory(DEFAULT_ENGINE)


class AbstractUnitOfWork(abc.ABC):
    """
    Interface abstraite du Unit of Work.

    Le rollback est automatique si commit() n'est pas appelé
    (grâce au __exit__ du context manager).
    """

    shipments: repository.AbstractShipmentRepository
    vehicles: repository.AbstractVehicleRepository
    warehouses: repository.AbstractWarehouseRepository

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, *args: object) -> None:
        self.rollback()

    def commit(self) -> None:
        self._commit()

    @abc.abstractmethod
    def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    Implémentation concrète du UoW avec SQLAlchemy.

    Crée une session à l'entrée du context manager,
    la ferme à la sortie. Rollback automatique si pas de commit.
    """

    def __init__(self, session_factory: sessionmaker = DEFAULT_SESSION_FACTORY):
        self.session_factory = session_factory

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self.session: Session = self.session_factory()
        self.shipments = repository.SqlAlchemyShipmentRepository(self.session)
        self.vehicles = repository.SqlAlchemyVehicleRepository(self.session)
        self.warehouses = repository.SqlAlchemyWarehouseRepository(self.session)
        return super().__enter__()

    def __exit__(self, *args: object) -> None:
        super().__exit__(*args)
        self.session.close()

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Commit failed: {e}") from e

    def rollback(self) -> None:
        self.session.rollback()
