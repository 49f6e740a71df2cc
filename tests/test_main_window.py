from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable

import pytest
from PyQt6.QtCore import Qt
from PyQt6.QtTest import QTest

from directorio.core.services import UserService
from directorio.core.state import AppState, LoadStatus
from directorio.infrastructure.api_client import APIError
from directorio.ui.main_window import MainWindow, formatear_fecha


class _StubRepository:
    def __init__(self, users=None, error: Exception | None = None, gate: threading.Event | None = None) -> None:
        self.users = users or []
        self.error = error
        self.gate = gate

    def obtener_usuarios(self):
        if self.gate is not None:
            self.gate.wait(5)
        if self.error is not None:
            raise self.error
        return list(self.users)


def _wait_until(predicate: Callable[[], bool], timeout_ms: int = 3000) -> None:
    waited = 0
    while not predicate():
        if waited >= timeout_ms:
            raise AssertionError("condition not met before timeout")
        QTest.qWait(10)
        waited += 10


def _build_window(repository: _StubRepository, debounce_ms: int = 20) -> MainWindow:
    window = MainWindow(
        state=AppState(),
        user_service=UserService(repository),
        debounce_ms=debounce_ms,
    )
    _wait_until(lambda: window.state.estado is not LoadStatus.LOADING)
    return window


def _column(window: MainWindow, column: int) -> list[str]:
    return [window.table.item(row, column).text() for row in range(window.table.rowCount())]


@pytest.fixture()
def window(qapp, roster) -> MainWindow:
    return _build_window(_StubRepository(roster))


def test_loaded_roster_fills_table_and_city_selector(window: MainWindow, roster) -> None:
    assert window.state.estado is LoadStatus.LOADED
    assert window.table.rowCount() == len(roster)
    assert _column(window, 0)[0] == "Emily Johnson"
    assert _column(window, 1) == [user.city for user in roster]
    assert _column(window, 2)[1] == formatear_fecha(roster[1].birth_date)

    cities = [window.city_combo.itemText(i) for i in range(window.city_combo.count())]
    assert cities == ["Phoenix", "Houston", "Washington"]
    assert window.city_combo.currentIndex() == -1
    assert window.search_box.isEnabled()


def test_skeleton_is_shown_while_loading(qapp, roster) -> None:
    gate = threading.Event()
    window = MainWindow(state=AppState(), user_service=UserService(_StubRepository(roster, gate=gate)))

    try:
        assert window.state.cargando is True
        assert window.table.rowCount() == MainWindow.SKELETON_ROWS
        assert window.table.item(0, 0).text() == MainWindow.SKELETON_TEXT
        assert not window.search_box.isEnabled()
        assert not window.highlight_check.isEnabled()
    finally:
        gate.set()
        _wait_until(lambda: window.state.estado is LoadStatus.LOADED)

    assert window.table.rowCount() == len(roster)


def test_failed_load_shows_message_row(qapp) -> None:
    window = _build_window(_StubRepository(error=APIError("No se pudo conectar al servicio")))

    assert window.state.estado is LoadStatus.FAILED
    assert window.table.rowCount() == 1
    assert "No se pudo conectar al servicio" in window.table.item(0, 0).text()
    assert window.table.columnSpan(0, 0) == 3
    assert window.usuarios_visibles == []
    assert not window.search_box.isEnabled()


def test_search_is_applied_after_debounce(window: MainWindow) -> None:
    window.search_box.setText("WIL")

    assert window.table.rowCount() == 6
    _wait_until(lambda: window.state.termino_busqueda == "wil")

    assert _column(window, 0) == ["Michael Williams", "Olivia Wilson"]


def test_search_without_matches_shows_empty_state(window: MainWindow) -> None:
    window.search_box.setText("zzz")
    _wait_until(lambda: window.state.termino_busqueda == "zzz")

    assert window.table.rowCount() == 1
    assert window.table.item(0, 0).text() == MainWindow.EMPTY_MESSAGE
    assert window.table.columnSpan(0, 0) == 3


def test_unknown_city_shows_empty_state(window: MainWindow) -> None:
    window.state.ciudad_seleccionada = "Paris"
    window._refrescar_tabla()

    assert window.usuarios_visibles == []
    assert window.table.item(0, 0).text() == MainWindow.EMPTY_MESSAGE


def test_city_selector_filters_rows(window: MainWindow) -> None:
    window.city_combo.setCurrentIndex(window.city_combo.findText("Houston"))

    assert window.state.ciudad_seleccionada == "Houston"
    assert _column(window, 0) == ["Michael Williams", "James Davis"]


def test_highlight_marks_oldest_rows_and_can_be_turned_off(window: MainWindow) -> None:
    window.highlight_check.setChecked(True)

    highlighted = [
        row
        for row in range(window.table.rowCount())
        if window.table.item(row, 0).background().style() != Qt.BrushStyle.NoBrush
    ]
    assert highlighted == [1, 4, 5]
    assert window.table.item(1, 0).background().color().name() == MainWindow.HIGHLIGHT_COLOR

    window.highlight_check.setChecked(False)

    assert all(
        window.table.item(row, 0).background().style() == Qt.BrushStyle.NoBrush
        for row in range(window.table.rowCount())
    )
    assert not any(user.is_oldest for user in window.usuarios_visibles)
    assert window.table.rowCount() == 6


def test_selection_tracks_visible_user(window: MainWindow) -> None:
    window.table.selectRow(2)

    assert window.state.usuario_seleccionado is not None
    assert window.state.usuario_seleccionado.id == 3
    assert window.detail_label.text().startswith("Sophia Brown · Phoenix · ")

    window.search_box.setText("zzz")
    _wait_until(lambda: window.state.termino_busqueda == "zzz")

    assert window.state.usuario_seleccionado is None
    assert window.detail_label.text() == ""


def test_export_writes_visible_rows(window: MainWindow, tmp_path: Path) -> None:
    window.city_combo.setCurrentIndex(window.city_combo.findText("Phoenix"))

    total = window.exportar_a(tmp_path / "phoenix.csv")

    assert total == 3
    assert (tmp_path / "phoenix.csv").read_text(encoding="utf-8").count("Phoenix") == 3


class _RecordingService(UserService):
    def __init__(self, repository) -> None:
        super().__init__(repository)
        self.filter_calls: list[tuple] = []

    def filtrar(self, usuarios, termino="", ciudad="", resaltar=False):
        self.filter_calls.append((termino, ciudad, resaltar))
        return super().filtrar(usuarios, termino, ciudad, resaltar)


def test_display_list_is_derived_through_user_service(qapp, roster) -> None:
    service = _RecordingService(_StubRepository(roster))
    window = MainWindow(state=AppState(), user_service=service, debounce_ms=20)
    _wait_until(lambda: window.state.estado is LoadStatus.LOADED)

    window.city_combo.setCurrentIndex(window.city_combo.findText("Houston"))
    window.highlight_check.setChecked(True)

    assert service.filter_calls[-2:] == [("", "Houston", False), ("", "Houston", True)]
    assert [(user.id, user.is_oldest) for user in window.usuarios_visibles] == [(2, True), (4, False)]
