"""
Configuration de l'application.

Les valeurs sont lues dans les variables d'environnement préfixées
LOGISTICS_ (par exemple LOGISTICS_DATABASE_URI). Un objet Settings est
construit explicitement au bootstrap puis injecté là où il sert : il n'y
a pas d'instance globale créée à la volée.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LOGISTICS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    database_uri: str = Field(default="sqlite:///logistics.db")
    currency: str = Field(default="USD")
    log_level: str = Field(default="INFO")
    # Poids maximal accepté pour une expédition (kg)
    max_shipment_weight: float = Field(default=50000.0, gt=0)


def get_settings() -> Settings:
    return Settings()
