"""Exportación de la lista visible a CSV."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from directorio.models.user import User

logger = logging.getLogger("directorio.exporter")

COLUMNAS = ["id", "nombre", "apellido", "ciudad", "fecha_nacimiento", "es_mayor"]


def usuarios_a_dataframe(usuarios: Iterable[User]) -> pd.DataFrame:
    registros = [
        {
            "id": usuario.id,
            "nombre": usuario.first_name,
            "apellido": usuario.last_name,
            "ciudad": usuario.city,
            "fecha_nacimiento": usuario.birth_date.isoformat(),
            "es_mayor": usuario.is_oldest,
        }
        for usuario in usuarios
    ]
    return pd.DataFrame(registros, columns=COLUMNAS)


def exportar_csv(path: str | Path, usuarios: Iterable[User]) -> int:
    """Escribe los usuarios en ``path`` y devuelve cuántas filas se exportaron."""

    df = usuarios_a_dataframe(usuarios)
    df.to_csv(path, index=False)
    logger.info("Exportados %d usuario(s) a %s", len(df), path)
    return len(df)


__all__ = ["COLUMNAS", "exportar_csv", "usuarios_a_dataframe"]
