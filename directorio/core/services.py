"""Servicios de aplicación que coordinan el acceso a datos."""

from __future__ import annotations

import logging
from typing import Sequence

from directorio.core.filters import aplicar_filtros
from directorio.infrastructure.repositories import UserRepository
from directorio.models.user import User

logger = logging.getLogger("directorio.services")


class UserService:
    """Orquesta el flujo de datos relacionado con usuarios."""

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    def cargar_usuarios(self) -> list[User]:
        """Obtiene el roster completo. Propaga :class:`APIError` si falla la carga."""

        usuarios = self._repository.obtener_usuarios()
        logger.info("Roster cargado con %d usuario(s)", len(usuarios))
        return usuarios

    def filtrar(
        self,
        usuarios: Sequence[User],
        termino: str = "",
        ciudad: str = "",
        resaltar: bool = False,
    ) -> list[User]:
        return aplicar_filtros(usuarios, termino, ciudad, resaltar)


__all__ = ["UserService"]
