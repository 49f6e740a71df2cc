"""Implementaciones de repositorios para acceso a datos."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from directorio.infrastructure.api_client import APIClient
from directorio.models.user import User

logger = logging.getLogger("directorio.repositories")


def parse_birth_date(valor: object) -> Optional[date]:
    """Interpreta ``birthDate`` en formato ``AAAA-M-D``.

    El API no rellena con ceros el mes ni el día (``1996-5-30``) y algunas
    variantes añaden una parte horaria, que se descarta.
    """

    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    if not isinstance(valor, str):
        return None
    texto = valor.strip().split("T", 1)[0].split(" ", 1)[0]
    try:
        return datetime.strptime(texto, "%Y-%m-%d").date()
    except ValueError:
        return None


class UserRepository:
    """Repositorio de usuarios basado en un cliente API."""

    def __init__(self, api_client: APIClient) -> None:
        self._api_client = api_client

    def obtener_usuarios(self) -> list[User]:
        """Devuelve la lista completa de usuarios en el orden del origen.

        Los registros incompletos se omiten y se registran como advertencia.
        """

        usuarios: list[User] = []
        for indice, datos in enumerate(self._api_client.obtener_usuarios()):
            usuario = self._construir_usuario(datos)
            if usuario is None:
                logger.warning("Registro de usuario #%d malformado, se omite: %r", indice, datos)
                continue
            usuarios.append(usuario)
        return usuarios

    @staticmethod
    def _construir_usuario(datos: object) -> Optional[User]:
        if not isinstance(datos, dict):
            return None

        direccion = datos.get("address")
        ciudad = direccion.get("city") if isinstance(direccion, dict) else None
        nombre = datos.get("firstName")
        apellido = datos.get("lastName")
        nacimiento = parse_birth_date(datos.get("birthDate"))
        identificador = datos.get("id")

        if not isinstance(identificador, int) or isinstance(identificador, bool):
            return None
        if not isinstance(nombre, str) or not isinstance(apellido, str):
            return None
        if not isinstance(ciudad, str) or nacimiento is None:
            return None

        return User(
            id=identificador,
            first_name=nombre,
            last_name=apellido,
            birth_date=nacimiento,
            city=ciudad,
        )


__all__ = ["UserRepository", "parse_birth_date"]
