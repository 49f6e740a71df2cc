from __future__ import annotations

from PyQt6.QtTest import QTest

from directorio.core.debounce import DEFAULT_INTERVAL_MS, Debouncer


def test_default_window_is_one_second(qapp) -> None:
    assert Debouncer().intervalo_ms == DEFAULT_INTERVAL_MS == 1000


def test_commits_once_after_last_keystroke(qapp) -> None:
    debouncer = Debouncer(200)
    committed: list[str] = []
    debouncer.confirmado.connect(committed.append)

    for text in ("a", "an", "ann"):
        debouncer.actualizar(text)
        QTest.qWait(10)

    assert debouncer.texto_actual == "ann"
    assert debouncer.texto_confirmado == ""
    assert debouncer.pendiente is True
    assert committed == []

    QTest.qWait(600)

    assert committed == ["ann"]
    assert debouncer.texto_confirmado == "ann"
    assert debouncer.pendiente is False


def test_each_keystroke_supersedes_pending_timer(qapp) -> None:
    debouncer = Debouncer(300)
    committed: list[str] = []
    debouncer.confirmado.connect(committed.append)

    debouncer.actualizar("e")
    for _ in range(4):
        QTest.qWait(50)
        debouncer.actualizar(debouncer.texto_actual + "m")

    assert committed == []

    QTest.qWait(900)

    assert committed == ["emmmm"]


def test_separate_bursts_commit_separately(qapp) -> None:
    debouncer = Debouncer(40)
    committed: list[str] = []
    debouncer.confirmado.connect(committed.append)

    debouncer.actualizar("bob")
    QTest.qWait(200)
    debouncer.actualizar("")
    QTest.qWait(200)

    assert committed == ["bob", ""]
