from __future__ import annotations

import os
import sys
from datetime import date
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402

from directorio.models.user import User  # noqa: E402


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


def make_user(
    user_id: int,
    first_name: str = "Ana",
    last_name: str = "García",
    birth: str = "1990-01-01",
    city: str = "Berlin",
) -> User:
    return User(
        id=user_id,
        first_name=first_name,
        last_name=last_name,
        birth_date=date.fromisoformat(birth),
        city=city,
    )


@pytest.fixture()
def roster() -> list[User]:
    return [
        make_user(1, "Emily", "Johnson", "1996-05-30", "Phoenix"),
        make_user(2, "Michael", "Williams", "1969-04-16", "Houston"),
        make_user(3, "Sophia", "Brown", "1982-11-06", "Phoenix"),
        make_user(4, "James", "Davis", "1969-04-16", "Houston"),
        make_user(5, "Emma", "Miller", "1955-07-01", "Washington"),
        make_user(6, "Olivia", "Wilson", "1950-02-12", "Phoenix"),
    ]
