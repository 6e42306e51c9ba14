"""
Configuration partagée pour les tests.

La base par défaut est redirigée vers SQLite en mémoire avant tout
import de l'application, pour que l'import de l'app Flask ne crée
pas de fichier. Les tests d'intégration et e2e reçoivent chacun une
base en mémoire neuve, avec ses tables.
"""

import os

os.environ.setdefault("LOGISTICS_DATABASE_URI", "sqlite:///:memory:")

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from logistics.adapters import orm  # noqa: E402


@pytest.fixture
def in_memory_engine():
    engine = create_engine("sqlite:///:memory:")
    orm.create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(in_memory_engine):
    return sessionmaker(bind=in_memory_engine)


@pytest.fixture
def session(session_factory):
    """Session SQLite en mémoire avec les tables."""
    session = session_factory()
    yield session
    session.close()
