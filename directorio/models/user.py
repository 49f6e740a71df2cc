"""Definiciones de modelos de dominio."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, slots=True)
class User:
    """Usuario del directorio tal como lo entrega el API.

    ``is_oldest`` no proviene del origen de datos: lo calcula el pipeline de
    filtros en cada pasada sobre una copia del registro.
    """

    id: int
    first_name: str
    last_name: str
    birth_date: date
    city: str
    is_oldest: bool = False

    @property
    def nombre_completo(self) -> str:
        return f"{self.first_name} {self.last_name}"


__all__ = ["User"]
