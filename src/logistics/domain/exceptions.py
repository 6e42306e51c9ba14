"""
Taxonomie des erreurs du domaine logistique.

Chaque classe correspond à une famille de réponses côté transport :
- ValidationError, UnknownType : entrée invalide (400)
- NotFound : ressource absente (404)
- Duplicate : violation d'unicité (409)
- PersistenceError : échec du stockage (500)
"""

from __future__ import annotations


class LogisticsError(Exception):
    """Classe de base pour toutes les erreurs du domaine."""
    pass


class ValidationError(LogisticsError):
    """Levée quand un champ est manquant ou invalide."""
    pass


class BuildValidationError(ValidationError):
    """
    Levée par ShipmentBuilder.build() quand un champ requis manque.

    L'attribut `field` nomme le premier champ fautif.
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class UnknownType(LogisticsError):
    """Levée quand un type (ou discriminant) ne correspond à aucune variante."""
    pass


class NotFound(LogisticsError):
    """Levée quand une recherche par id ou numéro de suivi ne trouve rien."""
    pass


class Duplicate(LogisticsError):
    """Levée quand le stockage rejette une valeur déjà existante."""
    pass


class PersistenceError(LogisticsError):
    """Levée pour tout échec du stockage non classé ailleurs."""
    pass
