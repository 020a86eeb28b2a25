"""Report generation for continuity results (counters, CSV, HTML, summary)."""

import csv
import logging
from datetime import date
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from continuity import Event, MatchResult, MonthComparison

log = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / 'templates'

# Default venue label when an event has no explicit venue
DEFAULT_VENUE = 'Casco'

MONTH_NAMES = [
    'Enero', 'Febrero', 'Marzo', 'Abril', 'Mayo', 'Junio',
    'Julio', 'Agosto', 'Septiembre', 'Octubre', 'Noviembre', 'Diciembre',
]

WEEKDAY_NAMES = [
    'lunes', 'martes', 'miércoles', 'jueves', 'viernes', 'sábado', 'domingo',
]

CSV_COLUMNS = [
    'Estado',
    'Carnaval',
    'Ref_Fecha',
    'Ref_Dia',
    'Ref_Municipio',
    'Ref_Lugar',
    'Ref_Orquesta',
    'Ref_Tipo',
    'Ref_Hora',
    'Actual_Fecha',
    'Actual_Dia',
    'Actual_Lugar',
    'Actual_Orquesta',
    'Actual_Tipo',
    'Actual_Hora',
    'Actual_Cancelado',
    'Distancia',
]


def aggregate(results: list[MatchResult]) -> dict:
    """Compute found/missing counters and coverage.

    Coverage is found / total as a whole percentage, rounded half up.
    An empty result list gives zero everywhere.

    Args:
        results: List of match results.

    Returns:
        Dict with ``found``, ``missing``, ``total``, ``coverage`` and
        ``carnival`` (number of Carnival reference events).
    """
    found = sum(1 for r in results if r.found)
    missing = len(results) - found
    total = found + missing
    denominator = max(total, 1)
    return {
        'found': found,
        'missing': missing,
        'total': total,
        'coverage': (200 * found + denominator) // (2 * denominator),
        'carnival': sum(1 for r in results if r.is_carnival),
    }


def format_day_date(d: date) -> str:
    """Format a plain date as ``13 feb``."""
    return f"{d.day} {MONTH_NAMES[d.month - 1][:3].lower()}"


def format_day(event: Event) -> str:
    """Format an event date for display, e.g. ``sábado 8 jun``."""
    return f"{WEEKDAY_NAMES[event.date.weekday()]} {format_day_date(event.date)}"


def _result_to_row(result: MatchResult) -> dict:
    """Convert a MatchResult to a flat dict for CSV/HTML output."""
    ref = result.reference
    cur = result.matched
    return {
        'Estado': 'LOCALIZADA' if result.found else 'PENDIENTE',
        'Carnaval': 'SI' if result.is_carnival else '',
        'Ref_Fecha': ref.date.isoformat(),
        'Ref_Dia': format_day(ref),
        'Ref_Municipio': ref.municipality,
        'Ref_Lugar': ref.venue or DEFAULT_VENUE,
        'Ref_Orquesta': ', '.join(ref.performers),
        'Ref_Tipo': ref.event_type,
        'Ref_Hora': ref.start_time,
        'Actual_Fecha': cur.date.isoformat() if cur else '',
        'Actual_Dia': format_day(cur) if cur else '',
        'Actual_Lugar': (cur.venue or DEFAULT_VENUE) if cur else '',
        'Actual_Orquesta': ', '.join(cur.performers) if cur else '',
        'Actual_Tipo': cur.event_type if cur else '',
        'Actual_Hora': cur.start_time if cur else '',
        'Actual_Cancelado': 'SI' if cur and cur.cancelled else '',
        'Distancia': str(result.distance) if result.distance is not None else '',
    }


def write_csv_report(comparison: MonthComparison, output_path: Path) -> None:
    """Write continuity results as a CSV report.

    Uses UTF-8 with BOM (utf-8-sig) and semicolon delimiter for
    compatibility with Spanish Excel.

    Args:
        comparison: Results of one month comparison.
        output_path: Path for the output CSV file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='', encoding='utf-8-sig') as f:
        writer = csv.DictWriter(
            f, fieldnames=CSV_COLUMNS, delimiter=';', extrasaction='ignore',
        )
        writer.writeheader()
        for result in comparison.results:
            writer.writerow(_result_to_row(result))

    log.info("Informe CSV escrito: %s (%d filas)", output_path, len(comparison.results))


def write_html_report(comparison: MonthComparison, output_path: Path) -> None:
    """Write continuity results as an HTML report using Jinja2.

    Args:
        comparison: Results of one month comparison.
        output_path: Path for the output HTML file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template('report.html')

    html = template.render(
        year=comparison.year,
        month_name=MONTH_NAMES[comparison.month - 1],
        # The Carnival hint only matters at the start of the year
        carnival_tuesday=(
            format_day_date(comparison.carnival_tuesday)
            if comparison.month <= 3 else None
        ),
        found=[_result_to_row(r) for r in comparison.found],
        missing=[_result_to_row(r) for r in comparison.missing],
        stats=comparison.stats,
    )

    output_path.write_text(html, encoding='utf-8')
    log.info("Informe HTML escrito: %s", output_path)


def print_summary(comparison: MonthComparison) -> None:
    """Print a summary of a month comparison to stdout.

    Args:
        comparison: Results of one month comparison.
    """
    stats = comparison.stats
    month_name = MONTH_NAMES[comparison.month - 1]

    print(f"\n=== Continuidad {month_name} {comparison.year} vs {comparison.year - 1} ===")
    if comparison.month <= 3:
        print(f"Martes de Carnaval {comparison.year}: "
              f"{format_day_date(comparison.carnival_tuesday)}")
    print(f"Base {comparison.year - 1}:               {stats['total']:>5}")
    print(f"Localizadas:             {stats['found']:>5}")
    print(f"Pendientes:              {stats['missing']:>5}")
    print(f"Eventos de Carnaval:     {stats['carnival']:>5}")
    print(f"Cobertura:               {stats['coverage']:>4}%")

    if comparison.missing:
        print("---")
        for result in comparison.missing:
            ref = result.reference
            venue = f" ({ref.venue})" if ref.venue else ''
            print(f"  {format_day(ref):<20} {ref.municipality}{venue}: {', '.join(ref.performers)}")
    print()
