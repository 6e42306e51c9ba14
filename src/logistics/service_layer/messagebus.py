"""
Message Bus.

Le message bus est le point central de dispatch des commands
vers leurs handlers respectifs.

Fonctionnement :
1. Une command entre dans le bus
2. Le bus trouve son unique handler
3. Le handler est exécuté avec ses dépendances injectées
4. Le résultat est renvoyé ; une erreur remonte directement à l'appelant
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable

from logistics.domain import commands
from logistics.service_layer import unit_of_work

logger = logging.getLogger(__name__)


class MessageBus:
    """
    Message Bus avec injection de dépendances.

    Les dépendances (uow, settings, etc.) sont injectées
    à la construction et transmises automatiquement aux handlers
    par introspection de leurs signatures.
    """

    def __init__(
        self,
        uow: unit_of_work.AbstractUnitOfWork,
        command_handlers: dict[type[commands.Command], Callable],
        dependencies: dict[str, Any] | None = None,
    ):
        self.uow = uow
        self.command_handlers = command_handlers
        self.dependencies = dependencies or {}

    def handle(self, command: commands.Command) -> Any:
        """
        Dispatch une command vers son unique handler et renvoie son résultat.

        Aucune tolérance : l'erreur d'un handler remonte telle quelle,
        sans nouvelle tentative.
        """
        if not isinstance(command, commands.Command):
            raise ValueError(f"Message de type inconnu : {type(command)}")
        handler = self.command_handlers.get(type(command))
        if handler is None:
            raise ValueError(f"Aucun handler pour la command {type(command)}")
        logger.debug("Traitement de la command %s", command)
        try:
            return self._call_handler(handler, command)
        except Exception:
            logger.warning("Échec de la command %s", type(command).__name__)
            raise

    def _call_handler(self, handler: Callable, command: commands.Command) -> Any:
        """
        Appelle un handler en injectant les dépendances nécessaires.

        Introspection : on lit la signature du handler pour déterminer
        quelles dépendances il attend. Le premier paramètre est toujours
        la command elle-même ; les suivants sont résolus par nom
        dans le dictionnaire de dépendances ou via self.uow.
        """
        params = list(inspect.signature(handler).parameters)
        kwargs: dict[str, Any] = {}
        for name in params[1:]:
            if name == "uow":
                kwargs[name] = self.uow
            elif name in self.dependencies:
                kwargs[name] = self.dependencies[name]

        return handler(command, **kwargs)
