"""
Builder des expéditions.

Le builder accumule les champs via des setters chaînables puis,
au build(), valide les champs requis avant de déléguer la création
à la factory. Aucun appel à la factory n'a lieu si la validation échoue.

    shipment = (
        ShipmentBuilder()
        .express()
        .tracking_number("TRK-001")
        .sender("Alice")
        .recipient("Bob")
        .weight(12.5)
        .fragile(True)
        .build()
    )
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from logistics.domain import factory, model
from logistics.domain.exceptions import BuildValidationError


def _renseigné(valeur: Any) -> bool:
    """Une valeur absente ou une chaîne vide ne remplace jamais un défaut."""
    return valeur is not None and valeur != ""


class ShipmentBuilder:
    """
    Construction validée d'une expédition.

    Les défauts (status=PENDING, priority=NORMAL) sont ceux de la variante
    créée par la factory. Les champs optionnels ne sont appliqués que
    s'ils ont été explicitement renseignés : une priorité non précisée
    laisse donc la priorité de la variante (HIGH pour Express).
    """

    def __init__(self) -> None:
        self._type: Optional[str] = None
        self._tracking_number: Optional[str] = None
        self._sender_name: Optional[str] = None
        self._recipient_name: Optional[str] = None
        self._origin: Optional[str] = None
        self._destination: Optional[str] = None
        self._weight: Any = None
        self._special_attribute: Any = None
        # Champs optionnels explicitement renseignés, appliqués après création
        self._explicites: dict[str, Any] = {}

    def _optionnel(self, champ: str, valeur: Any) -> ShipmentBuilder:
        if _renseigné(valeur):
            self._explicites[champ] = valeur
        return self

    # --- Champs requis ---

    def type(self, shipment_type: Optional[str]) -> ShipmentBuilder:
        if _renseigné(shipment_type):
            self._type = shipment_type
        return self

    def tracking_number(self, tracking_number: Optional[str]) -> ShipmentBuilder:
        if _renseigné(tracking_number):
            self._tracking_number = tracking_number
        return self

    def sender(self, sender_name: Optional[str]) -> ShipmentBuilder:
        if _renseigné(sender_name):
            self._sender_name = sender_name
        return self

    def recipient(self, recipient_name: Optional[str]) -> ShipmentBuilder:
        if _renseigné(recipient_name):
            self._recipient_name = recipient_name
        return self

    def origin(self, origin: Optional[str]) -> ShipmentBuilder:
        if _renseigné(origin):
            self._origin = origin
        return self

    def destination(self, destination: Optional[str]) -> ShipmentBuilder:
        if _renseigné(destination):
            self._destination = destination
        return self

    def weight(self, weight: Optional[float]) -> ShipmentBuilder:
        if weight is not None:
            self._weight = weight
        return self

    # --- Champs optionnels ---

    def status(self, status: Optional[str]) -> ShipmentBuilder:
        return self._optionnel("status", status)

    def priority(self, priority: Optional[str]) -> ShipmentBuilder:
        return self._optionnel("priority", priority)

    def estimated_delivery(self, estimated_delivery: Optional[date]) -> ShipmentBuilder:
        return self._optionnel("estimated_delivery", estimated_delivery)

    def vehicle_id(self, vehicle_id: Optional[int]) -> ShipmentBuilder:
        return self._optionnel("vehicle_id", vehicle_id)

    def warehouse_id(self, warehouse_id: Optional[int]) -> ShipmentBuilder:
        return self._optionnel("warehouse_id", warehouse_id)

    def name(self, name: Optional[str]) -> ShipmentBuilder:
        return self._optionnel("name", name)

    # --- Attribut spécial ---

    def special_attribute(self, value: Optional[bool]) -> ShipmentBuilder:
        if value is not None:
            self._special_attribute = value
        return self

    # Alias lisibles : la variante construite décide du champ affecté.
    fragile = special_attribute
    temperature_controlled = special_attribute
    customs_cleared = special_attribute

    # --- Raccourcis par variante ---

    def express(self) -> ShipmentBuilder:
        self._type = model.ShipmentType.EXPRESS.value
        return self.priority(model.Priority.HIGH)

    def standard(self) -> ShipmentBuilder:
        self._type = model.ShipmentType.STANDARD.value
        return self.priority(model.Priority.NORMAL)

    def economy(self) -> ShipmentBuilder:
        self._type = model.ShipmentType.ECONOMY.value
        return self.priority(model.Priority.LOW)

    # --- Construction ---

    def _validate(self) -> None:
        """Vérifie les champs requis, dans l'ordre, et nomme le premier manquant."""
        if not _renseigné(self._type):
            raise BuildValidationError("type", "Shipment type is required")
        if not _renseigné(self._tracking_number):
            raise BuildValidationError("tracking_number", "Tracking number is required")
        if not _renseigné(self._sender_name):
            raise BuildValidationError("sender_name", "Sender name is required")
        if not _renseigné(self._recipient_name):
            raise BuildValidationError("recipient_name", "Recipient name is required")
        if self._weight is None:
            raise BuildValidationError("weight", "Weight must be positive")
        if isinstance(self._weight, bool):
            raise BuildValidationError("weight", f"Weight must be a number: {self._weight!r}")
        try:
            self._weight = float(self._weight)
        except (TypeError, ValueError):
            raise BuildValidationError(
                "weight", f"Weight must be a number: {self._weight!r}"
            ) from None
        if self._weight <= 0:
            raise BuildValidationError("weight", "Weight must be positive")
        if self._special_attribute is not None and not isinstance(self._special_attribute, bool):
            raise BuildValidationError(
                "special_attribute",
                f"Special attribute must be true or false: {self._special_attribute!r}",
            )

    def build(self) -> model.Shipment:
        self._validate()

        arguments = (
            self._type, self._tracking_number, self._sender_name,
            self._recipient_name, self._origin, self._destination, self._weight,
        )
        if self._special_attribute is not None:
            shipment = factory.create_shipment_with_attribute(
                *arguments, self._special_attribute
            )
        else:
            shipment = factory.create_populated_shipment(*arguments)

        for champ, valeur in self._explicites.items():
            setattr(shipment, champ, valeur)
        return shipment
