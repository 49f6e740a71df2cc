"""Cliente HTTP del origen de datos de usuarios.

Realiza una única petición GET contra el endpoint configurado y devuelve los
registros crudos del sobre JSON ``{"users": [...]}``. No hay autenticación,
paginación ni reintentos: cualquier fallo se traduce en :class:`APIError`.
"""

from __future__ import annotations

import json
import logging
import socket
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

logger = logging.getLogger("directorio.api_client")

DEFAULT_API_URL = "https://dummyjson.com/users"


class APIError(RuntimeError):
    """Error al obtener o interpretar la respuesta del API."""


class APIClient:
    """Provee acceso a los datos de usuarios del servicio remoto."""

    def __init__(self, url: str = DEFAULT_API_URL, timeout: float = 10.0) -> None:
        self.url = url
        self.timeout = timeout

    def obtener_usuarios(self) -> list[dict]:
        """Recupera la lista cruda de usuarios del backend."""

        logger.info("Solicitando usuarios a %s", self.url)
        request = Request(self.url, headers={"Accept": "application/json"})
        try:
            with urlopen(request, timeout=self.timeout) as response:
                raw = response.read()
        except HTTPError as exc:
            raise APIError(f"Error HTTP {exc.code} al consultar usuarios.") from exc
        except URLError as exc:
            if isinstance(exc.reason, socket.timeout):
                raise APIError("La consulta de usuarios expiró por timeout.") from exc
            raise APIError(f"No se pudo conectar al servicio: {exc.reason}.") from exc
        except socket.timeout as exc:
            raise APIError("La consulta de usuarios expiró por timeout.") from exc

        try:
            payload = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise APIError(f"Respuesta inválida del servicio de usuarios ({exc}).") from exc

        if not isinstance(payload, dict):
            raise APIError("Formato inesperado: se esperaba un objeto JSON.")
        usuarios = payload.get("users")
        if not isinstance(usuarios, list):
            raise APIError("Formato inesperado: falta la lista 'users'.")
        return usuarios


__all__ = ["APIClient", "APIError", "DEFAULT_API_URL"]
