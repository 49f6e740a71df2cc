"""Ventana principal de la aplicación."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from PyQt6.QtCore import QDate, QLocale, QObject, Qt, QThread, pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from directorio.core.debounce import DEFAULT_INTERVAL_MS, Debouncer
from directorio.core.services import UserService
from directorio.core.state import AppState, LoadStatus
from directorio.exporter import exportar_csv
from directorio.models.user import User

logger = logging.getLogger("directorio.ui")


class _LoadWorker(QObject):
    finished = pyqtSignal(list)
    error = pyqtSignal(str)

    def __init__(self, user_service: UserService) -> None:
        super().__init__()
        self.user_service = user_service

    def run(self) -> None:
        try:
            usuarios = self.user_service.cargar_usuarios()
        except Exception as exc:  # mostrado en UI
            self.error.emit(str(exc))
            return
        self.finished.emit(usuarios)


@dataclass(slots=True)
class _TableColumns:
    nombre: int = 0
    ciudad: int = 1
    nacimiento: int = 2


def formatear_fecha(fecha, locale: QLocale | None = None) -> str:
    """Representa una fecha en el formato corto del locale del usuario."""

    locale = locale or QLocale()
    return locale.toString(QDate(fecha.year, fecha.month, fecha.day), QLocale.FormatType.ShortFormat)


class MainWindow(QMainWindow):
    """Ventana principal con el directorio de usuarios filtrable."""

    SKELETON_ROWS = 8
    SKELETON_TEXT = "░" * 14
    HIGHLIGHT_COLOR = "#fde68a"
    EMPTY_MESSAGE = "No se encontraron usuarios con los filtros actuales."

    def __init__(
        self,
        *,
        state: AppState,
        user_service: UserService,
        debounce_ms: int = DEFAULT_INTERVAL_MS,
    ) -> None:
        super().__init__()
        self.state = state
        self.user_service = user_service
        self._columns = _TableColumns()
        self._visibles: List[User] = []
        self._load_thread: QThread | None = None
        self._load_worker: _LoadWorker | None = None

        self.setWindowTitle("Directorio de usuarios")
        self.resize(720, 480)

        self.debouncer = Debouncer(debounce_ms, parent=self)
        self.debouncer.confirmado.connect(self._on_search_committed)

        self.search_box = QLineEdit(placeholderText="Buscar por nombre")
        self.search_box.textChanged.connect(self.debouncer.actualizar)

        self.city_combo = QComboBox()
        self.city_combo.setPlaceholderText("Seleccione una ciudad")
        self.city_combo.setMinimumWidth(180)
        self.city_combo.currentIndexChanged.connect(self._on_city_changed)

        self.highlight_check = QCheckBox("Resaltar el mayor por ciudad")
        self.highlight_check.toggled.connect(self._on_highlight_toggled)

        self.export_button = QPushButton("Exportar CSV")
        self.export_button.clicked.connect(self._on_export)

        self.table = QTableWidget(columnCount=3)
        self.table.setHorizontalHeaderLabels(["Nombre", "Ciudad", "Fecha de nacimiento"])
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.itemSelectionChanged.connect(self._on_selection_changed)

        self.detail_label = QLabel("")
        self.detail_label.setObjectName("detailLabel")

        top_bar = QHBoxLayout()
        top_bar.addWidget(QLabel("Usuarios"))
        top_bar.addStretch(1)
        top_bar.addWidget(self.search_box)
        top_bar.addWidget(self.city_combo)
        top_bar.addWidget(self.highlight_check)
        top_bar.addWidget(self.export_button)

        layout = QVBoxLayout()
        layout.addLayout(top_bar)
        layout.addWidget(self.table)
        layout.addWidget(self.detail_label)

        container = QWidget()
        container.setLayout(layout)
        self.setCentralWidget(container)

        self._cargar_usuarios()

    # ------------------------------------------------------------------
    # Carga inicial
    # ------------------------------------------------------------------
    def _cargar_usuarios(self) -> None:
        """Lanza la única lectura del roster en un hilo aparte."""

        self.state.iniciar_carga()
        logger.info("Iniciando carga de usuarios")
        self.statusBar().showMessage("Cargando usuarios...", 0)
        self._toggle_controls(False)
        self._refrescar_tabla()

        self._load_thread = QThread(self)
        self._load_worker = _LoadWorker(self.user_service)
        self._load_worker.moveToThread(self._load_thread)

        self._load_thread.started.connect(self._load_worker.run)
        self._load_worker.finished.connect(self._load_thread.quit)
        self._load_worker.error.connect(self._load_thread.quit)
        self._load_worker.finished.connect(self._on_load_completed)
        self._load_worker.error.connect(self._on_load_failed)
        self._load_thread.finished.connect(self._limpiar_hilo_carga)

        self._load_thread.start()

    def _on_load_completed(self, usuarios: List[User]) -> None:
        self.state.actualizar_usuarios(usuarios)
        self._poblar_ciudades()
        self._toggle_controls(True)
        self.statusBar().showMessage(f"{len(usuarios)} usuario(s) cargados", 5000)
        self._refrescar_tabla()

    def _on_load_failed(self, message: str) -> None:
        logger.warning("Falló la carga de usuarios: %s", message)
        self.state.marcar_error(message)
        self.statusBar().showMessage(f"No se pudieron cargar usuarios: {message}", 0)
        self._refrescar_tabla()

    def _limpiar_hilo_carga(self) -> None:
        if self._load_worker:
            self._load_worker.deleteLater()
            self._load_worker = None
        if self._load_thread:
            self._load_thread.deleteLater()
            self._load_thread = None

    def closeEvent(self, event) -> None:  # pragma: no cover - cierre interactivo
        if self._load_thread is not None and self._load_thread.isRunning():
            self._load_thread.quit()
            self._load_thread.wait()
        super().closeEvent(event)

    # ------------------------------------------------------------------
    # Eventos y acciones
    # ------------------------------------------------------------------
    def _toggle_controls(self, enabled: bool) -> None:
        for widget in (
            self.search_box,
            self.city_combo,
            self.highlight_check,
            self.export_button,
        ):
            widget.setEnabled(enabled)

    def _poblar_ciudades(self) -> None:
        self.city_combo.blockSignals(True)
        self.city_combo.clear()
        for ciudad in self.state.ciudades:
            self.city_combo.addItem(ciudad, ciudad)
        self.city_combo.setCurrentIndex(-1)
        self.city_combo.blockSignals(False)

    def _on_search_committed(self, texto: str) -> None:
        self.state.actualizar_busqueda(texto)
        self._refrescar_tabla()

    def _on_city_changed(self, index: int) -> None:
        ciudad = self.city_combo.itemData(index) if index >= 0 else None
        self.state.ciudad_seleccionada = ciudad or ""
        self._refrescar_tabla()

    def _on_highlight_toggled(self, checked: bool) -> None:
        self.state.resaltar_mayores = checked
        self._refrescar_tabla()

    def _on_selection_changed(self) -> None:
        selected = self.table.selectedIndexes()
        row = selected[0].row() if selected else -1
        if 0 <= row < len(self._visibles):
            self.state.seleccionar_usuario(self._visibles[row])
        else:
            self.state.seleccionar_usuario(None)
        self._mostrar_detalle()

    def _mostrar_detalle(self) -> None:
        usuario = self.state.usuario_seleccionado
        if usuario is None:
            self.detail_label.setText("")
            return
        self.detail_label.setText(
            f"{usuario.nombre_completo} · {usuario.city} · {formatear_fecha(usuario.birth_date)}"
        )

    def _on_export(self) -> None:
        if not self._visibles:
            QMessageBox.information(self, "Sin datos", "No hay usuarios visibles para exportar.")
            return

        save_name, _ = QFileDialog.getSaveFileName(
            self, "Guardar usuarios", "usuarios.csv", "CSV (*.csv)"
        )
        if not save_name:
            return

        total = self.exportar_a(save_name)
        QMessageBox.information(self, "Exportado", f"{total} usuario(s) guardados en {save_name}")

    def exportar_a(self, path: str | Path) -> int:
        """Exporta la lista visible actual a ``path``."""

        return exportar_csv(path, self._visibles)

    # ------------------------------------------------------------------
    # Renderizado
    # ------------------------------------------------------------------
    @property
    def usuarios_visibles(self) -> List[User]:
        return list(self._visibles)

    def _refrescar_tabla(self) -> None:
        self.table.clearSelection()
        if self.state.cargando:
            self._visibles = []
            self._mostrar_skeleton()
            return
        if self.state.estado is LoadStatus.FAILED:
            self._visibles = []
            self._mostrar_mensaje(f"No se pudieron cargar los usuarios: {self.state.error}")
            return

        self._visibles = self.user_service.filtrar(
            self.state.usuarios,
            self.state.termino_busqueda,
            self.state.ciudad_seleccionada,
            self.state.resaltar_mayores,
        )
        if not self._visibles:
            self._mostrar_mensaje(self.EMPTY_MESSAGE)
            return
        self._populate_table(self._visibles)

    def _mostrar_skeleton(self) -> None:
        self.table.clearSpans()
        self.table.setRowCount(self.SKELETON_ROWS)
        placeholder_color = QColor("#d1d5db")
        for row in range(self.SKELETON_ROWS):
            for column in range(self.table.columnCount()):
                item = QTableWidgetItem(self.SKELETON_TEXT)
                item.setForeground(placeholder_color)
                item.setFlags(Qt.ItemFlag.NoItemFlags)
                self.table.setItem(row, column, item)

    def _mostrar_mensaje(self, texto: str) -> None:
        self.table.clearSpans()
        self.table.clearContents()
        self.table.setRowCount(1)
        item = QTableWidgetItem(texto)
        item.setFlags(Qt.ItemFlag.ItemIsEnabled)
        item.setTextAlignment(Qt.AlignmentFlag.AlignCenter)
        self.table.setItem(0, 0, item)
        self.table.setSpan(0, 0, 1, self.table.columnCount())
        self.state.seleccionar_usuario(None)
        self._mostrar_detalle()

    def _populate_table(self, usuarios: List[User]) -> None:
        self.table.clearSpans()
        self.table.setRowCount(len(usuarios))
        highlight = QColor(self.HIGHLIGHT_COLOR)

        for row, usuario in enumerate(usuarios):
            items = {
                self._columns.nombre: QTableWidgetItem(usuario.nombre_completo),
                self._columns.ciudad: QTableWidgetItem(usuario.city),
                self._columns.nacimiento: QTableWidgetItem(formatear_fecha(usuario.birth_date)),
            }
            for column, item in items.items():
                item.setFlags(item.flags() ^ Qt.ItemFlag.ItemIsEditable)
                if usuario.is_oldest:
                    item.setBackground(highlight)
                self.table.setItem(row, column, item)

        self.table.resizeColumnsToContents()


__all__ = ["MainWindow", "formatear_fecha"]
