"""Confirmación diferida del texto de búsqueda."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

logger = logging.getLogger("directorio.debounce")

DEFAULT_INTERVAL_MS = 1000


class Debouncer(QObject):
    """Propaga el texto escrito solo tras un periodo de inactividad.

    Cada llamada a :meth:`actualizar` reinicia el temporizador pendiente. Si
    las pulsaciones llegan más rápido que ``intervalo_ms`` nunca se confirma
    nada; tras la última, ``confirmado`` se emite exactamente una vez.
    """

    confirmado = pyqtSignal(str)

    def __init__(self, intervalo_ms: int = DEFAULT_INTERVAL_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._texto_actual = ""
        self._texto_confirmado = ""
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(intervalo_ms)
        self._timer.timeout.connect(self._confirmar)

    @property
    def intervalo_ms(self) -> int:
        return self._timer.interval()

    @property
    def texto_actual(self) -> str:
        return self._texto_actual

    @property
    def texto_confirmado(self) -> str:
        return self._texto_confirmado

    @property
    def pendiente(self) -> bool:
        return self._timer.isActive()

    def actualizar(self, texto: str) -> None:
        self._texto_actual = texto
        # start() sobre un timer activo lo reinicia.
        self._timer.start()

    def _confirmar(self) -> None:
        self._texto_confirmado = self._texto_actual
        logger.debug("Búsqueda confirmada: %r", self._texto_confirmado)
        self.confirmado.emit(self._texto_confirmado)


__all__ = ["Debouncer", "DEFAULT_INTERVAL_MS"]
