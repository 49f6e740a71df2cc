"""Estado compartido de la aplicación."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from directorio.core.filters import ciudades
from directorio.models.user import User


class LoadStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass
class AppState:
    """Mantiene el roster, los controles de filtrado y la selección actual.

    El roster se carga una sola vez: ``IDLE -> LOADING -> LOADED | FAILED``.
    """

    usuarios: List[User] = field(default_factory=list)
    termino_busqueda: str = ""
    ciudad_seleccionada: str = ""
    resaltar_mayores: bool = False
    estado: LoadStatus = LoadStatus.IDLE
    error: str | None = None
    usuario_seleccionado: User | None = None

    @property
    def cargando(self) -> bool:
        return self.estado is LoadStatus.LOADING

    @property
    def ciudades(self) -> list[str]:
        return ciudades(self.usuarios)

    def iniciar_carga(self) -> None:
        self._exigir_estado(LoadStatus.IDLE, "iniciar la carga")
        self.estado = LoadStatus.LOADING

    def actualizar_usuarios(self, usuarios: list[User]) -> None:
        """Reemplaza el roster y marca la carga como completada."""

        self._exigir_estado(LoadStatus.LOADING, "completar la carga")
        self.usuarios = list(usuarios)
        self.estado = LoadStatus.LOADED
        self.usuario_seleccionado = None

    def marcar_error(self, mensaje: str) -> None:
        self._exigir_estado(LoadStatus.LOADING, "registrar un error de carga")
        self.error = mensaje
        self.estado = LoadStatus.FAILED

    def actualizar_busqueda(self, termino: str) -> None:
        self.termino_busqueda = termino.lower()

    def seleccionar_usuario(self, usuario: User | None) -> None:
        self.usuario_seleccionado = usuario

    def _exigir_estado(self, esperado: LoadStatus, accion: str) -> None:
        if self.estado is not esperado:
            raise RuntimeError(
                f"No se puede {accion} en estado {self.estado.value}; se esperaba {esperado.value}."
            )


__all__ = ["AppState", "LoadStatus"]
