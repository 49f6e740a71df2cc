"""Configuración del visor a partir de variables de entorno."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TypeVar

from directorio.core.debounce import DEFAULT_INTERVAL_MS
from directorio.infrastructure.api_client import DEFAULT_API_URL

ENV_API_URL = "DIRECTORIO_API_URL"
ENV_TIMEOUT = "DIRECTORIO_TIMEOUT"
ENV_DEBOUNCE_MS = "DIRECTORIO_DEBOUNCE_MS"

DEFAULT_TIMEOUT = 10.0

T = TypeVar("T", int, float)


@dataclass(frozen=True)
class DirectoryConfig:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    debounce_ms: int = DEFAULT_INTERVAL_MS


def _positive(name: str, raw: Optional[str], default: T, cast: Callable[[str], T]) -> T:
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} debe ser numérico, se recibió {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} debe ser mayor que cero, se recibió {raw!r}")
    return value


def resolve_config(environ: Mapping[str, str] | None = None) -> DirectoryConfig:
    """Construye la configuración leyendo ``DIRECTORIO_*`` del entorno."""

    env = os.environ if environ is None else environ
    api_url = (env.get(ENV_API_URL) or "").strip() or DEFAULT_API_URL
    return DirectoryConfig(
        api_url=api_url,
        timeout=_positive(ENV_TIMEOUT, env.get(ENV_TIMEOUT), DEFAULT_TIMEOUT, float),
        debounce_ms=_positive(ENV_DEBOUNCE_MS, env.get(ENV_DEBOUNCE_MS), DEFAULT_INTERVAL_MS, int),
    )


__all__ = ["DirectoryConfig", "resolve_config"]
