"""
Pattern Repository.

Le repository fournit une abstraction sur la couche de persistance.
Il expose une interface de type collection (add, get, list, update,
delete) qui masque les détails de l'accès aux données.

L'implémentation SQLAlchemy passe par des requêtes paramétrées sur
les tables de `orm` et confie la traduction ligne <-> objet au module
`mapper`. Les erreurs du stockage sont traduites dans la taxonomie du
domaine : violation d'unicité -> Duplicate, tout le reste ->
PersistenceError.
"""

from __future__ import annotations

import abc
import logging
from datetime import datetime
from typing import Any, Callable, Generic, Optional, TypeVar

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from logistics.adapters import mapper, orm
from logistics.domain import model
from logistics.domain.exceptions import Duplicate, NotFound, PersistenceError

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=model.BaseEntity)


class AbstractRepository(abc.ABC, Generic[E]):
    """
    Interface abstraite du repository.

    Le pattern Template Method est utilisé : les méthodes publiques
    contrôlent le résultat (id attribué, ligne trouvée), puis délèguent
    aux méthodes abstraites préfixées _ que les sous-classes implémentent.
    """

    label: str = "Entity"

    def add(self, entity: E) -> None:
        """Persiste une entité ; le stockage lui attribue son id."""
        self._add(entity)
        if entity.id is None:
            raise PersistenceError(f"Creating {self.label.lower()} failed, no ID obtained")

    def get(self, id_: int) -> Optional[E]:
        return self._get(id_)

    def list(self, **filters: Any) -> list[E]:
        """Liste les entités, avec filtres d'égalité exacte optionnels."""
        return self._list({k: v for k, v in filters.items() if v is not None})

    def update(self, entity: E) -> None:
        """Remplace l'enregistrement complet d'id `entity.id`."""
        if not self._update(entity):
            raise NotFound(f"{self.label} not found with id: {entity.id}")

    def delete(self, id_: int) -> None:
        if not self._delete(id_):
            raise NotFound(f"{self.label} not found with id: {id_}")

    @abc.abstractmethod
    def _add(self, entity: E) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def _get(self, id_: int) -> Optional[E]:
        raise NotImplementedError

    @abc.abstractmethod
    def _list(self, filters: dict[str, Any]) -> list[E]:
        raise NotImplementedError

    @abc.abstractmethod
    def _update(self, entity: E) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def _delete(self, id_: int) -> bool:
        raise NotImplementedError


class AbstractShipmentRepository(AbstractRepository[model.Shipment]):
    label = "Shipment"

    def get_by_tracking_number(self, tracking_number: str) -> Optional[model.Shipment]:
        return self._get_by_tracking_number(tracking_number)

    @abc.abstractmethod
    def _get_by_tracking_number(self, tracking_number: str) -> Optional[model.Shipment]:
        raise NotImplementedError


class AbstractVehicleRepository(AbstractRepository[model.Vehicle]):
    label = "Vehicle"


class AbstractWarehouseRepository(AbstractRepository[model.Warehouse]):
    label = "Warehouse"


def _is_unique_violation(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "unique" in message or "duplicate" in message


class _SqlAlchemyRepository(AbstractRepository[E]):
    """
    Implémentation commune sur une table SQLAlchemy.

    Chaque instruction est atomique à elle seule ; le commit est du
    ressort du Unit of Work.
    """

    table: Table
    encode: Callable[[E], dict[str, Any]]
    decode: Callable[[Any], E]

    def __init__(self, session: Session):
        self.session = session

    def _values(self, entity: E) -> dict[str, Any]:
        values = type(self).encode(entity)
        values.pop("id")
        return values

    def _execute(self, statement, action: str):
        try:
            return self.session.execute(statement)
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise Duplicate(f"{self.label} already exists: {e.orig}") from e
            raise PersistenceError(f"Error {action} {self.label.lower()}: {e.orig}") from e
        except SQLAlchemyError as e:
            raise PersistenceError(f"Error {action} {self.label.lower()}: {e}") from e

    def _add(self, entity: E) -> None:
        result = self._execute(insert(self.table).values(**self._values(entity)), "creating")
        primary_key = result.inserted_primary_key
        if primary_key is None or primary_key[0] is None:
            return
        entity.id = primary_key[0]
        logger.debug("%s inséré avec l'id %s", self.label, entity.id)

    def _get(self, id_: int) -> Optional[E]:
        statement = select(self.table).where(self.table.c.id == id_)
        row = self._execute(statement, "finding").first()
        return type(self).decode(row._mapping) if row is not None else None

    def _list(self, filters: dict[str, Any]) -> list[E]:
        statement = select(self.table).filter_by(**filters).order_by(self.table.c.id)
        rows = self._execute(statement, "fetching")
        return [type(self).decode(row._mapping) for row in rows]

    def _update(self, entity: E) -> bool:
        statement = (
            update(self.table)
            .where(self.table.c.id == entity.id)
            .values(**self._values(entity))
        )
        return self._execute(statement, "updating").rowcount > 0

    def _delete(self, id_: int) -> bool:
        statement = delete(self.table).where(self.table.c.id == id_)
        return self._execute(statement, "deleting").rowcount > 0


class SqlAlchemyShipmentRepository(
    _SqlAlchemyRepository[model.Shipment], AbstractShipmentRepository
):
    table = orm.shipments
    encode = staticmethod(mapper.encode_shipment)
    decode = staticmethod(mapper.decode_shipment)

    def _values(self, shipment: model.Shipment) -> dict[str, Any]:
        values = super()._values(shipment)
        if shipment.id is not None:
            # Remplacement complet : la date de création d'origine est conservée
            values.pop("created_at")
            values["updated_at"] = datetime.now()
        return values

    def _get_by_tracking_number(self, tracking_number: str) -> Optional[model.Shipment]:
        statement = select(self.table).where(self.table.c.tracking_number == tracking_number)
        row = self._execute(statement, "finding").first()
        return mapper.decode_shipment(row._mapping) if row is not None else None


class SqlAlchemyVehicleRepository(
    _SqlAlchemyRepository[model.Vehicle], AbstractVehicleRepository
):
    table = orm.vehicles
    encode = staticmethod(mapper.encode_vehicle)
    decode = staticmethod(mapper.decode_vehicle)


class SqlAlchemyWarehouseRepository(
    _SqlAlchemyRepository[model.Warehouse], AbstractWarehouseRepository
):
    table = orm.warehouses
    encode = staticmethod(mapper.encode_warehouse)
    decode = staticmethod(mapper.decode_warehouse)
