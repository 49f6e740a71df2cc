"""Pipeline de filtrado del directorio.

Funciones puras sobre la lista completa de usuarios. Ninguna ordena ni muta
los registros recibidos: el resultado conserva siempre el orden relativo del
roster y las anotaciones se aplican sobre copias.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from directorio.models.user import User


def filtrar_por_nombre(usuarios: Iterable[User], termino: str) -> list[User]:
    """Conserva los usuarios cuyo nombre o apellido contiene ``termino``.

    La comparación no distingue mayúsculas. Un término vacío conserva a
    todos. La ciudad nunca participa en la búsqueda.
    """

    termino = termino.lower()
    if not termino:
        return list(usuarios)
    return [
        usuario
        for usuario in usuarios
        if termino in usuario.first_name.lower() or termino in usuario.last_name.lower()
    ]


def filtrar_por_ciudad(usuarios: Iterable[User], ciudad: str) -> list[User]:
    """Conserva los usuarios de ``ciudad`` (coincidencia exacta); vacío no filtra."""

    if not ciudad:
        return list(usuarios)
    return [usuario for usuario in usuarios if usuario.city == ciudad]


def mayores_por_ciudad(usuarios: Iterable[User]) -> dict[str, int]:
    """Devuelve, por ciudad, el ``id`` del usuario con fecha de nacimiento más antigua.

    Ante fechas iguales gana el primero encontrado.
    """

    mayores: dict[str, User] = {}
    for usuario in usuarios:
        actual = mayores.get(usuario.city)
        if actual is None or usuario.birth_date < actual.birth_date:
            mayores[usuario.city] = usuario
    return {ciudad: usuario.id for ciudad, usuario in mayores.items()}


def ciudades(usuarios: Iterable[User]) -> list[str]:
    """Ciudades distintas en orden de primera aparición."""

    return list(dict.fromkeys(usuario.city for usuario in usuarios))


def aplicar_filtros(
    usuarios: Sequence[User],
    termino: str,
    ciudad: str,
    resaltar: bool,
) -> list[User]:
    """Calcula la lista visible a partir del roster y de los controles de la vista.

    El mayor de cada ciudad se calcula sobre el roster completo, de modo que
    los filtros activos nunca cambian qué usuario se considera el mayor.
    """

    visibles = filtrar_por_ciudad(filtrar_por_nombre(usuarios, termino), ciudad)

    if not resaltar:
        return [replace(usuario, is_oldest=False) for usuario in visibles]

    mayores = mayores_por_ciudad(usuarios)
    return [
        replace(usuario, is_oldest=mayores.get(usuario.city) == usuario.id)
        for usuario in visibles
    ]


__all__ = [
    "aplicar_filtros",
    "ciudades",
    "filtrar_por_ciudad",
    "filtrar_por_nombre",
    "mayores_por_ciudad",
]
