"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from continuity.reader import read_events


SNAPSHOT_RECORDS = [
    # Last year, June
    {'id': 'a1', 'day': '2023-06-10', 'municipio': 'Adeje', 'lugar': 'Plaza Central',
     'orquesta': 'Orquesta Maquinaria, Grupo Aceviño', 'tipo': 'Baile Normal', 'hora': '22:00'},
    {'id': 'a2', 'day': '2023-06-17', 'municipio': 'Güímar', 'lugar': '',
     'orquesta': 'Orquesta Revelación', 'tipo': 'Romería', 'hora': '21:30'},
    {'id': 'a3', 'day': '2023-06-24', 'municipio': 'Arona', 'lugar': 'Los Cristianos',
     'orquesta': 'Orquesta Wamampy', 'tipo': 'Baile Magos', 'hora': '22:00'},
    # Current year
    {'id': 'b1', 'day': '2024-06-08', 'municipio': 'ADEJE', 'lugar': 'plaza central',
     'orquesta': 'Orquesta Maquinaria', 'tipo': 'Baile Normal', 'hora': '22:00'},
    {'id': 'b2', 'day': '2024-06-15', 'municipio': 'Guimar', 'lugar': 'La Plaza',
     'orquesta': 'Orquesta Revelación', 'tipo': 'Romería', 'hora': '21:30',
     'cancelado': True},
    # Outside the window
    {'id': 'b3', 'day': '2024-08-03', 'municipio': 'Arona', 'lugar': 'Los Cristianos',
     'orquesta': 'Orquesta Wamampy', 'tipo': 'Baile Magos', 'hora': '22:00'},
]


@pytest.fixture
def snapshot_json(tmp_path) -> Path:
    """Snapshot export as a JSON list of records."""
    path = tmp_path / 'eventos.json'
    path.write_text(json.dumps(SNAPSHOT_RECORDS, ensure_ascii=False), encoding='utf-8')
    return path


@pytest.fixture
def snapshot_events(snapshot_json):
    """All events from the sample snapshot."""
    return read_events(snapshot_json)
