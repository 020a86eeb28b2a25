"""check-continuity – herramienta CLI para comprobar la continuidad anual de los bailes."""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from continuity import Event
from continuity.matching import compare_month
from continuity.reader import read_events
from continuity.reporter import MONTH_NAMES, print_summary, write_csv_report, write_html_report
from continuity.scoring import normalize


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description='Compara los eventos de un mes con el mismo mes de la temporada anterior.',
        prog='check_continuity.py',
    )
    parser.add_argument(
        '--events', required=True, type=Path,
        help='Exportacion del almacen de eventos (CSV o JSON)',
    )
    parser.add_argument(
        '--month', type=int, choices=range(1, 13),
        help='Mes a comprobar (1-12)',
    )
    parser.add_argument(
        '--all-months', action='store_true',
        help='Comprobar los doce meses (modo lote)',
    )
    parser.add_argument(
        '--year', type=int, default=date.today().year,
        help='Temporada actual; la referencia es la temporada anterior (por defecto: la actual)',
    )
    parser.add_argument(
        '--municipio',
        help='Limitar la comprobacion a un municipio',
    )
    parser.add_argument(
        '--output', type=Path,
        help='Ruta del informe CSV',
    )
    parser.add_argument(
        '--output-dir', type=Path,
        help='Directorio para los informes (modo lote)',
    )
    parser.add_argument(
        '--html', action='store_true',
        help='Generar ademas un informe HTML',
    )
    parser.add_argument(
        '--summary', action='store_true',
        help='Mostrar un resumen por la salida estandar',
    )
    parser.add_argument(
        '--verbose', action='store_true',
        help='Mostrar el detalle de cada emparejamiento',
    )
    return parser


def filter_municipality(events: list[Event], municipality: str | None) -> list[Event]:
    """Keep only the events of one municipality (accent/case-insensitive)."""
    if not municipality:
        return events
    wanted = normalize(municipality)
    return [e for e in events if normalize(e.municipality) == wanted]


def _report_path(output_dir: Path | None, year: int, month: int) -> Path | None:
    if output_dir is None:
        return None
    return output_dir / f"continuidad_{year}_{month:02d}.csv"


def process_month(
    events: list[Event],
    year: int,
    month: int,
    output_path: Path | None,
    html: bool,
    summary: bool,
) -> None:
    """Run the continuity check for one month and write the requested outputs."""
    comparison = compare_month(events, year, month)

    if output_path:
        write_csv_report(comparison, output_path)
        if html:
            write_html_report(comparison, output_path.with_suffix('.html'))

    if summary:
        print_summary(comparison)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    if args.month is None and not args.all_months:
        parser.error('Se debe indicar --month o --all-months.')

    if args.month is not None and args.all_months:
        parser.error('--month y --all-months son incompatibles.')

    if args.html and not (args.output or args.output_dir):
        parser.error('--html requiere --output o --output-dir.')

    if args.all_months and args.output:
        parser.error('--all-months usa --output-dir, no --output.')

    if not (args.output or args.output_dir or args.summary):
        parser.error('Se necesita --output, --output-dir o --summary.')

    try:
        events = read_events(args.events)
    except (OSError, ValueError) as exc:
        logging.error("No se pudo leer %s: %s", args.events, exc)
        return 1

    events = filter_municipality(events, args.municipio)

    if args.output_dir:
        args.output_dir.mkdir(parents=True, exist_ok=True)

    if args.month is not None:
        output_path = args.output or _report_path(args.output_dir, args.year, args.month)
        process_month(
            events, args.year, args.month, output_path,
            args.html, args.summary,
        )
        return 0

    for month in range(1, 13):
        output_path = _report_path(args.output_dir, args.year, month)
        logging.info("Procesando %s %d ...", MONTH_NAMES[month - 1], args.year)
        process_month(
            events, args.year, month, output_path,
            args.html, args.summary,
        )
    return 0


if __name__ == '__main__':
    sys.exit(main())
