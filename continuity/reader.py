"""Event store snapshot reader (CSV or JSON) with field normalization."""

import csv
import io
import json
import logging
import re
from datetime import date
from pathlib import Path

from continuity import Event

log = logging.getLogger(__name__)

# Matches any sequence of whitespace (including Unicode whitespace like U+2006)
_WHITESPACE_RE = re.compile(r'\s+')

# Fallback for unparseable dates
EPOCH = date(1970, 1, 1)

REQUIRED_COLUMNS = {'day', 'municipio'}

_TRUE_VALUES = {'1', 'true', 'si', 'sí', 'yes', 'x'}


def detect_encoding(path: Path) -> str:
    """Detect file encoding by checking for BOM bytes.

    Args:
        path: Path to the snapshot file.

    Returns:
        Encoding string suitable for open().
    """
    with open(path, 'rb') as f:
        bom = f.read(2)
    if bom == b'\xff\xfe':
        return 'utf-16-le'
    return 'utf-8-sig'


def normalize_whitespace(value) -> str:
    """Collapse whitespace runs into single spaces and strip the ends.

    Non-string values (e.g. JSON numbers or null) are converted first;
    None becomes an empty string.
    """
    if value is None:
        return ''
    return _WHITESPACE_RE.sub(' ', str(value)).strip()


def parse_event_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` day string as a local calendar date.

    Only the year, month and day components are used, so trailing time
    parts ("2024-06-08T00:00") are ignored. Malformed values degrade to
    EPOCH instead of raising.

    Args:
        value: Day string from the store.

    Returns:
        Parsed date, or EPOCH if the value cannot be parsed.
    """
    parts = value.strip()[:10].split('-')
    try:
        year, month, day = (int(p) for p in parts)
        return date(year, month, day)
    except (ValueError, TypeError) as exc:
        log.warning("Fecha no valida '%s', se usa %s: %s", value, EPOCH, exc)
        return EPOCH


def split_performers(value: str) -> tuple[str, ...]:
    """Split the comma-separated ``orquesta`` field into performer names."""
    names = (normalize_whitespace(n) for n in value.split(','))
    return tuple(n for n in names if n)


def _parse_flag(value) -> bool:
    if isinstance(value, bool):
        return value
    return normalize_whitespace(value).lower() in _TRUE_VALUES


def event_from_record(record: dict) -> Event | None:
    """Build an Event from a raw store record.

    Args:
        record: Mapping with the store fields ``day``, ``municipio``,
            ``lugar``, ``orquesta``, ``tipo``, ``hora`` and optionally
            ``id`` and ``cancelado``.

    Returns:
        The Event, or None if the record has no day at all.
    """
    day = normalize_whitespace(record.get('day'))
    if not day:
        return None
    return Event(
        date=parse_event_date(day),
        municipality=normalize_whitespace(record.get('municipio')),
        venue=normalize_whitespace(record.get('lugar')),
        performers=split_performers(normalize_whitespace(record.get('orquesta'))),
        event_type=normalize_whitespace(record.get('tipo')),
        start_time=normalize_whitespace(record.get('hora')),
        event_id=normalize_whitespace(record.get('id')),
        cancelled=_parse_flag(record.get('cancelado')),
    )


def _records_to_events(records: list[dict], path: Path) -> list[Event]:
    events: list[Event] = []
    for num, record in enumerate(records, start=1):
        if not isinstance(record, dict):
            log.warning("Registro %d en %s omitido: no es un objeto", num, path)
            continue
        event = event_from_record(record)
        if event is None:
            log.warning("Registro %d en %s omitido: sin fecha", num, path)
            continue
        events.append(event)
    return events


def _read_text(path: Path) -> str:
    """Read a snapshot file as text without its BOM."""
    with open(path, 'r', encoding=detect_encoding(path)) as f:
        content = f.read()

    # utf-16-le keeps the BOM as a leading character
    return content.lstrip('\ufeff')


def _read_json_records(path: Path) -> list[dict]:
    data = json.loads(_read_text(path))

    # Store exports are keyed by document id
    if isinstance(data, dict):
        records = []
        for doc_id, record in data.items():
            if isinstance(record, dict):
                record = {'id': doc_id, **record}
            records.append(record)
        return records
    if isinstance(data, list):
        return data
    raise ValueError(f"Formato JSON no soportado en {path}: se esperaba lista u objeto.")


def _read_csv_records(path: Path) -> list[dict]:
    content = _read_text(path)

    header = content.split('\n', 1)[0]
    delimiter = ';' if header.count(';') > header.count(',') else ','
    reader = csv.DictReader(io.StringIO(content), delimiter=delimiter)

    if reader.fieldnames is None:
        raise ValueError(f"El archivo {path} esta vacio o no tiene cabecera.")
    actual_cols = {normalize_whitespace(c).lower() for c in reader.fieldnames}
    missing = REQUIRED_COLUMNS - actual_cols
    if missing:
        raise ValueError(
            f"Faltan columnas en {path}: {', '.join(sorted(missing))}"
        )

    return [
        {normalize_whitespace(k).lower(): v for k, v in row.items() if k is not None}
        for row in reader
    ]


def read_events(path: str | Path) -> list[Event]:
    """Read event records from a store snapshot.

    ``.json`` files may hold a list of records or an object keyed by
    document id; anything else is read as CSV with ``,`` or ``;`` as
    delimiter. Records without a day are skipped.

    Args:
        path: Path to the snapshot file.

    Returns:
        List of Event objects in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If required columns are missing or the JSON shape is
            not supported.
    """
    path = Path(path)
    if path.suffix.lower() == '.json':
        records = _read_json_records(path)
    else:
        records = _read_csv_records(path)

    events = _records_to_events(records, path)
    log.info("%d eventos leidos de %s", len(events), path)
    return events
