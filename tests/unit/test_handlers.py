"""
Tests des handlers et des views via la service layer (high gear).

Ces tests utilisent des fakes (FakeRepository, FakeUnitOfWork)
pour tester le comportement métier sans base de données ni I/O.
C'est le "high gear" : on teste les cas d'usage complets.
"""

from __future__ import annotations

import pytest

from logistics.adapters.repository import (
    AbstractRepository,
    AbstractShipmentRepository,
    AbstractVehicleRepository,
    AbstractWarehouseRepository,
)
from logistics.config import Settings
from logistics.domain import commands
from logistics.domain.exceptions import (
    BuildValidationError,
    Duplicate,
    NotFound,
    PersistenceError,
    UnknownType,
    ValidationError,
)
from logistics.domain.model import (
    AirVehicle,
    EconomyShipment,
    ExpressShipment,
    Priority,
    ShipmentStatus,
)
from logistics.service_layer import bootstrap, messagebus, unit_of_work
from logistics.views import views


# --- Fakes pour les tests ---


class FakeRepository(AbstractRepository):
    """
    Repository en mémoire pour les tests.

    Utilise un dict id -> entité au lieu d'une base de données ;
    les ids sont attribués à l'ajout, comme le ferait le stockage.
    """

    def __init__(self) -> None:
        self._entités: dict[int, object] = {}
        self._prochain_id = 1

    def _add(self, entity) -> None:
        entity.id = self._prochain_id
        self._prochain_id += 1
        self._entités[entity.id] = entity

    def _get(self, id_):
        return self._entités.get(id_)

    def _list(self, filters):
        return [
            e for _, e in sorted(self._entités.items())
            if all(getattr(e, k) == v for k, v in filters.items())
        ]

    def _update(self, entity) -> bool:
        if entity.id not in self._entités:
            return False
        self._entités[entity.id] = entity
        return True

    def _delete(self, id_) -> bool:
        return self._entités.pop(id_, None) is not None


class FakeShipmentRepository(FakeRepository, AbstractShipmentRepository):
    """Reproduit la contrainte d'unicité du numéro de suivi."""

    def _add(self, shipment) -> None:
        if self._get_by_tracking_number(shipment.tracking_number) is not None:
            raise Duplicate(f"Shipment already exists: {shipment.tracking_number}")
        super()._add(shipment)

    def _get_by_tracking_number(self, tracking_number):
        return next(
            (s for s in self._entités.values() if s.tracking_number == tracking_number),
            None,
        )


class FakeVehicleRepository(FakeRepository, AbstractVehicleRepository):
    pass


class FakeWarehouseRepository(FakeRepository, AbstractWarehouseRepository):
    pass


class FakeUnitOfWork(unit_of_work.AbstractUnitOfWork):
    """
    Unit of Work en mémoire pour les tests.

    L'attribut `committed` permet de vérifier que le commit
    a bien été appelé dans les tests.
    """

    def __init__(self) -> None:
        self.shipments = FakeShipmentRepository()
        self.vehicles = FakeVehicleRepository()
        self.warehouses = FakeWarehouseRepository()
        self.committed = False

    def __enter__(self) -> FakeUnitOfWork:
        return super().__enter__()

    def _commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        pass


# --- Bootstrap de test ---


def bootstrap_test_bus(
    uow: FakeUnitOfWork | None = None,
    settings: Settings | None = None,
) -> messagebus.MessageBus:
    """
    Construit un MessageBus configuré avec des fakes.

    Même wiring que la production, mais avec des implémentations
    en mémoire pour l'isolation et la rapidité.
    """
    if uow is None:
        uow = FakeUnitOfWork()
    return bootstrap.bootstrap(
        start_orm=False,
        uow=uow,
        settings=settings or Settings(),
    )


def créer_expédition(**surcharges) -> commands.CreateShipment:
    champs = dict(
        shipment_type="EXPRESS",
        tracking_number="TRK-001",
        sender_name="Alice",
        recipient_name="Bob",
        weight=10.0,
        origin="Paris",
        destination="Lyon",
    )
    champs.update(surcharges)
    return commands.CreateShipment(**champs)


def modifier_expédition(id_: int, **surcharges) -> commands.UpdateShipment:
    cmd = créer_expédition(**surcharges)
    return commands.UpdateShipment(id=id_, **vars(cmd))


# --- Tests des Commands : expéditions ---


class TestCréerExpédition:
    def test_créer_une_expédition(self):
        bus = bootstrap_test_bus()

        shipment = bus.handle(créer_expédition(is_fragile=True))

        assert shipment.id == 1
        assert isinstance(shipment, ExpressShipment)
        assert shipment.fragile is True
        assert bus.uow.committed
        assert bus.uow.shipments.get(1) is shipment

    def test_l_attribut_spécial_suit_la_variante(self):
        bus = bootstrap_test_bus()

        shipment = bus.handle(
            créer_expédition(shipment_type="economy", is_fragile=None, customs_cleared=True)
        )

        assert isinstance(shipment, EconomyShipment)
        assert shipment.customs_cleared is True
        assert shipment.priority == Priority.LOW

    def test_numéro_de_suivi_en_double(self):
        bus = bootstrap_test_bus()
        bus.handle(créer_expédition())

        with pytest.raises(Duplicate):
            bus.handle(créer_expédition(shipment_type="STANDARD"))

    def test_sans_numéro_de_suivi_rien_n_est_persisté(self):
        bus = bootstrap_test_bus()

        with pytest.raises(BuildValidationError) as exc:
            bus.handle(créer_expédition(tracking_number=None))

        assert exc.value.field == "tracking_number"
        assert bus.uow.shipments.list() == []
        assert not bus.uow.committed

    def test_type_inconnu(self):
        bus = bootstrap_test_bus()

        with pytest.raises(UnknownType):
            bus.handle(créer_expédition(shipment_type="TELEPORT"))

    def test_express_sans_priorité_haute_refusée(self):
        bus = bootstrap_test_bus()

        with pytest.raises(ValidationError):
            bus.handle(créer_expédition(priority=Priority.LOW))

    def test_poids_maximal_configuré(self):
        bus = bootstrap_test_bus(settings=Settings(max_shipment_weight=100.0))

        with pytest.raises(ValidationError, match="maximum"):
            bus.handle(créer_expédition(weight=150.0))

    def test_poids_non_numérique(self):
        bus = bootstrap_test_bus()

        with pytest.raises(ValidationError) as exc:
            bus.handle(créer_expédition(weight="lourd"))

        assert exc.value.field == "weight"
        assert bus.uow.shipments.list() == []

    def test_poids_numérique_en_texte_accepté(self):
        bus = bootstrap_test_bus()

        shipment = bus.handle(créer_expédition(weight="12.5"))

        assert shipment.weight == 12.5

    def test_attribut_spécial_non_booléen(self):
        bus = bootstrap_test_bus()

        with pytest.raises(ValidationError):
            bus.handle(créer_expédition(is_fragile="false"))

        assert not bus.uow.committed


class TestModifierExpédition:
    def test_remplacement_complet(self):
        bus = bootstrap_test_bus()
        bus.handle(créer_expédition(is_fragile=True))

        modifiée = bus.handle(modifier_expédition(
            1, shipment_type="STANDARD", status=ShipmentStatus.IN_TRANSIT,
            temperature_controlled=True,
        ))

        assert modifiée.id == 1
        rechargée = bus.uow.shipments.get(1)
        assert rechargée.shipment_type.value == "STANDARD"
        assert rechargée.temperature_controlled is True
        assert rechargée.status == ShipmentStatus.IN_TRANSIT

    def test_id_inexistant(self):
        bus = bootstrap_test_bus()

        with pytest.raises(NotFound, match="99"):
            bus.handle(modifier_expédition(99))


class TestSupprimerExpédition:
    def test_supprimer(self):
        bus = bootstrap_test_bus()
        bus.handle(créer_expédition())

        bus.handle(commands.DeleteShipment(id=1))

        assert bus.uow.shipments.get(1) is None

    def test_id_inexistant(self):
        bus = bootstrap_test_bus()

        with pytest.raises(NotFound):
            bus.handle(commands.DeleteShipment(id=5))


# --- Tests des Commands : véhicules et entrepôts ---


class TestVéhicules:
    def test_créer_un_véhicule_aérien(self):
        bus = bootstrap_test_bus()

        vehicle = bus.handle(commands.CreateVehicle(
            vehicle_type="air", name="A320", license_plate="F-GKXA",
            capacity=100.0, max_altitude=12000, fuel_type="KEROSENE",
        ))

        assert isinstance(vehicle, AirVehicle)
        assert vehicle.max_altitude == 12000
        assert not hasattr(vehicle, "fuel_type")
        assert vehicle.id == 1

    @pytest.mark.parametrize("champ, valeur", [
        ("vehicle_type", None),
        ("name", ""),
        ("license_plate", None),
        ("capacity", 0),
        ("capacity", "cent"),
        ("capacity", True),
    ])
    def test_champs_requis(self, champ, valeur):
        champs = dict(vehicle_type="LAND", name="Camion", license_plate="AB-1", capacity=10.0)
        champs[champ] = valeur
        bus = bootstrap_test_bus()

        with pytest.raises(ValidationError):
            bus.handle(commands.CreateVehicle(**champs))

    def test_type_inconnu(self):
        bus = bootstrap_test_bus()
        with pytest.raises(UnknownType):
            bus.handle(commands.CreateVehicle(
                vehicle_type="ROCKET", name="R1", license_plate="X", capacity=1.0,
            ))

    def test_modifier_et_supprimer(self):
        bus = bootstrap_test_bus()
        bus.handle(commands.CreateVehicle(
            vehicle_type="SEA", name="Cargo", license_plate="SH-1", capacity=500.0,
        ))

        bus.handle(commands.UpdateVehicle(
            id=1, vehicle_type="SEA", name="Cargo", license_plate="SH-1",
            capacity=600.0, status="MAINTENANCE", cargo_type="BULK",
        ))
        vehicle = bus.uow.vehicles.get(1)
        assert (vehicle.capacity, vehicle.status, vehicle.cargo_type) == (600.0, "MAINTENANCE", "BULK")

        bus.handle(commands.DeleteVehicle(id=1))
        with pytest.raises(NotFound):
            bus.handle(commands.DeleteVehicle(id=1))


class TestEntrepôts:
    def test_créer_un_entrepôt(self):
        bus = bootstrap_test_bus()

        warehouse = bus.handle(commands.CreateWarehouse(
            name="Central", location="Lyon", capacity=1000, current_load=1000,
        ))

        assert warehouse.id == 1
        assert warehouse.validate()

    @pytest.mark.parametrize("charge", [-1, 1001, "beaucoup", None])
    def test_charge_hors_limites(self, charge):
        bus = bootstrap_test_bus()

        with pytest.raises(ValidationError):
            bus.handle(commands.CreateWarehouse(
                name="Central", location="Lyon", capacity=1000, current_load=charge,
            ))

    def test_capacité_non_numérique(self):
        bus = bootstrap_test_bus()

        with pytest.raises(ValidationError, match="capacity"):
            bus.handle(commands.CreateWarehouse(
                name="Central", location="Lyon", capacity="mille",
            ))

    def test_modifier_un_entrepôt_inexistant(self):
        bus = bootstrap_test_bus()

        with pytest.raises(NotFound):
            bus.handle(commands.UpdateWarehouse(
                id=3, name="Central", location="Lyon", capacity=10,
            ))


# --- Tests du repository abstrait ---


class RepositorySansId(FakeWarehouseRepository):
    """Simule une insertion dont l'id généré n'a pas pu être relu."""

    def _add(self, entity) -> None:
        self._entités[0] = entity


def test_id_généré_manquant_lève_persistence_error():
    uow = FakeUnitOfWork()
    uow.warehouses = RepositorySansId()
    bus = bootstrap_test_bus(uow=uow)

    with pytest.raises(PersistenceError, match="no ID"):
        bus.handle(commands.CreateWarehouse(name="Sud", location="Nice", capacity=10))
    assert not uow.committed


# --- Tests des views ---


class TestViews:
    def test_lire_une_expédition(self):
        bus = bootstrap_test_bus()
        bus.handle(créer_expédition(is_fragile=True))

        data = views.shipment(1, bus.uow)

        assert data["type"] == "EXPRESS"
        assert data["is_fragile"] is True
        assert "customs_cleared" not in data
        assert "temperature_controlled" not in data
        assert data["shipping_cost"] == 225.0
        assert data["delivery_days"] == 2
        assert data["currency"] == "USD"

    def test_lire_par_numéro_de_suivi(self):
        bus = bootstrap_test_bus()
        bus.handle(créer_expédition())

        assert views.shipment_by_tracking_number("TRK-001", bus.uow)["id"] == 1

    def test_lecture_absente(self):
        bus = bootstrap_test_bus()

        with pytest.raises(NotFound):
            views.shipment(1, bus.uow)
        with pytest.raises(NotFound):
            views.shipment_by_tracking_number("INCONNU", bus.uow)
        with pytest.raises(NotFound):
            views.vehicle(1, bus.uow)
        with pytest.raises(NotFound):
            views.warehouse(1, bus.uow)

    def test_lister_par_statut(self):
        bus = bootstrap_test_bus()
        bus.handle(créer_expédition(tracking_number="TRK-1"))
        bus.handle(créer_expédition(tracking_number="TRK-2", status=ShipmentStatus.DELIVERED))
        bus.handle(créer_expédition(tracking_number="TRK-3", status=ShipmentStatus.DELIVERED))

        livrées = views.shipments(bus.uow, status=ShipmentStatus.DELIVERED)

        assert [s["tracking_number"] for s in livrées] == ["TRK-2", "TRK-3"]
        assert len(views.shipments(bus.uow)) == 3

    def test_coût_d_exploitation_d_un_véhicule(self):
        bus = bootstrap_test_bus()
        bus.handle(commands.CreateVehicle(
            vehicle_type="AIR", name="A320", license_plate="F-GKXA", capacity=100.0,
        ))

        data = views.vehicles(bus.uow)[0]

        assert data["type"] == "AIR"
        assert data["operating_cost"] == 250.0
        assert "cargo_type" not in data
