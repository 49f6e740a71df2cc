"""Punto de entrada de la aplicación.

Crea los componentes de infraestructura, servicios y estado, y arranca la
interfaz gráfica principal.
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from directorio.core.config import DirectoryConfig, resolve_config
from directorio.core.services import UserService
from directorio.core.state import AppState
from directorio.infrastructure.api_client import APIClient
from directorio.infrastructure.repositories import UserRepository
from directorio.ui.main_window import MainWindow


def construir_ventana(config: DirectoryConfig) -> MainWindow:
    """Ensambla las dependencias de la ventana principal según ``config``."""

    api_client = APIClient(config.api_url, timeout=config.timeout)
    repository = UserRepository(api_client)
    user_service = UserService(repository)
    state = AppState()

    return MainWindow(state=state, user_service=user_service, debounce_ms=config.debounce_ms)


def main() -> None:
    """Arranca la aplicación PyQt6 con las dependencias configuradas."""

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    try:
        config = resolve_config()
    except ValueError as exc:
        raise SystemExit(f"Configuración inválida: {exc}") from exc

    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    window = construir_ventana(config)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":  # pragma: no cover - punto de entrada interactivo
    main()
