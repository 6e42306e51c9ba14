"""
Calcul des coûts et des délais.

Fonctions pures, sans I/O. Les formules vivent sur les variantes
(shipping_cost, estimated_delivery_days, operating_cost) ; ce module
les expose comme fonctions et assemble un devis complet.

Précondition : l'entité passée doit être valide (validate() est vrai).
Le résultat n'est pas défini sinon.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from logistics.domain import model


@dataclass(frozen=True)
class Quote:
    """Devis d'une expédition : prix et date de livraison estimée."""

    cost: float
    currency: str
    delivery_days: int
    estimated_delivery: date


def shipping_cost(shipment: model.Shipment) -> float:
    return shipment.shipping_cost()


def delivery_days(shipment: model.Shipment) -> int:
    return shipment.estimated_delivery_days()


def operating_cost(vehicle: model.Vehicle) -> float:
    return vehicle.operating_cost()


def quote(
    shipment: model.Shipment,
    from_date: Optional[date] = None,
    currency: str = "USD",
) -> Quote:
    """Devis à partir de `from_date` (aujourd'hui par défaut)."""
    depart = from_date or date.today()
    jours = delivery_days(shipment)
    return Quote(
        cost=round(shipping_cost(shipment), 2),
        currency=currency,
        delivery_days=jours,
        estimated_delivery=depart + timedelta(days=jours),
    )
