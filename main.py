#!/usr/bin/env python3
"""
Arrest Calculator

Computes sentence time, fines, points, impound/suspension days and bail
eligibility for a report of penal code charges.

Usage:
    python main.py --report report.json                 # Calculate a report
    python main.py --report report.json --parole-violator
    python main.py --report report.json --output out/calc.json
    python main.py --search robbery --type F            # Search the penal code
    python main.py --export-index out                   # Export the penal code index
    python main.py --penal-code https://cdn.example/    # Fetch the penal code from a CDN
"""

import argparse
import logging
import sys

import requests
from rich.console import Console
from rich.table import Table

from penal_code.config import PENAL_CODE_PATH, ADDITIONS_PATH, OUTPUT_DIR
from penal_code.export import (
    export_calculation_json,
    export_charge_index_csv,
    export_charge_index_json,
)
from penal_code.fetcher import load_json_file, load_penal_code
from penal_code.models import build_charge_index
from penal_code.search import search_charges

from arrest_calculator.api.main import to_response_payload
from arrest_calculator.config import get_settings
from arrest_calculator.core.calculator import calculate_arrest
from arrest_calculator.core.catalog import parse_additions, parse_penal_code
from arrest_calculator.core.formatting import (
    addition_label,
    charge_title,
    format_days,
    format_total_time,
)
from arrest_calculator.core.types import ArrestCalculation, ChargeSelection

console = Console()

BAIL_STYLES = {
    "NOT ELIGIBLE": "bold red",
    "DISCRETIONARY": "bold yellow",
    "ELIGIBLE": "bold green",
}


def setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_report(path: str) -> list[ChargeSelection]:
    """Read a report file: a list of charge rows, or ``{"report": [...]}``."""
    data = load_json_file(path)
    rows = data.get("report") if isinstance(data, dict) else data
    if not isinstance(rows, list):
        raise ValueError(f"Report in {path} is not a list of charges")

    def text(value):
        return None if value is None else str(value)

    return [
        ChargeSelection(
            charge_id=text(row.get("chargeId")),
            class_letter=row.get("class"),
            offense_slot=text(row.get("offense")),
            addition_name=row.get("addition"),
            drug_category_key=text(row.get("category")),
            unique_id=row.get("uniqueId"),
        )
        for row in rows
        if isinstance(row, dict)
    ]


def print_calculation(calc: ArrestCalculation):
    table = Table(title=f"Charges ({len(calc.calculation_results)})")
    table.add_column("Charge", style="cyan")
    table.add_column("Addition", style="magenta")
    table.add_column("Min time")
    table.add_column("Max time")
    table.add_column("Points", justify="right")
    table.add_column("Fine", justify="right", style="green")
    table.add_column("Impound")
    table.add_column("Suspension")
    table.add_column("Bail", justify="right")

    for result in calc.calculation_results:
        bail = "N/A"
        if result.bail_auto is not None:
            bail = f"{result.bail_auto.value} (${result.bail_cost:,.0f})"
        table.add_row(
            charge_title(result.row, result.charge_details),
            addition_label(result),
            format_total_time(result.modified.min_time),
            format_total_time(result.modified.max_time),
            f"{result.modified.points:g}",
            f"${result.fine:,.0f}",
            format_days(result.impound) or "No",
            format_days(result.suspension) or "No",
            bail,
        )
    console.print(table)

    totals = calc.totals
    summary = Table(title="Summary", show_header=False)
    summary.add_column("Field", style="bold")
    summary.add_column("Value")
    summary.add_row(
        "Time",
        f"{format_total_time(calc.min_time_capped)} - {format_total_time(calc.max_time_capped)}"
        + (" [yellow](capped)[/]" if calc.is_capped else ""),
    )
    summary.add_row("Points", f"{totals.modified.points:g}")
    summary.add_row("Fine", f"${totals.fine:,.0f}")
    summary.add_row(
        "Impound",
        (format_days(calc.impound_capped) or "No")
        + (" [yellow](capped)[/]" if calc.is_impound_capped else ""),
    )
    summary.add_row(
        "Suspension",
        (format_days(calc.suspension_capped) or "No")
        + (" [yellow](capped)[/]" if calc.is_suspension_capped else ""),
    )
    style = BAIL_STYLES.get(calc.bail_status, "")
    summary.add_row("Bail status", f"[{style}]{calc.bail_status}[/]" if style else calc.bail_status)
    summary.add_row("Highest bail", f"${totals.highest_bail:,.0f}")
    console.print(summary)

    if calc.extras:
        console.print("\n[bold]Stipulations:[/]")
        for extra in calc.extras:
            console.print(f"  - [cyan]{extra.title}[/]: {extra.extra}")

    if calc.is_streets_eligible:
        console.print(
            "\n[bold yellow]Warning:[/] this arrest is eligible for the Streets code enhancement."
        )


def run_calculation(args) -> ArrestCalculation:
    settings = get_settings()
    penal_code = parse_penal_code(load_penal_code(args.penal_code))
    additions = parse_additions(load_json_file(args.additions))
    selections = load_report(args.report)

    calc = calculate_arrest(
        selections,
        args.parole_violator,
        penal_code,
        additions,
        settings.engine_config(),
    )

    skipped = len(selections) - len(calc.calculation_results)
    if skipped:
        console.print(f"[yellow]{skipped} charge(s) not found in the penal code were skipped.[/]")

    print_calculation(calc)

    if args.output:
        payload = to_response_payload(calc).model_dump(mode="json", by_alias=True)
        path = export_calculation_json(payload, args.output)
        console.print(f"\n[green]Saved to {path}[/]")
    return calc


def run_search(args):
    entries = build_charge_index(load_penal_code(args.penal_code))
    matches = search_charges(entries, args.search, args.type)

    table = Table(title=f"Found {len(matches)} Charges")
    table.add_column("ID", style="cyan")
    table.add_column("Charge")
    table.add_column("Type", style="yellow")
    table.add_column("Classes")
    table.add_column("Offenses")
    for entry in matches:
        table.add_row(
            entry.charge_id,
            entry.charge,
            entry.type_name,
            ", ".join(entry.classes) or "N/A",
            ", ".join(f"#{o}" for o in entry.offenses) or "N/A",
        )
    console.print(table)


def run_export_index(args):
    entries = build_charge_index(load_penal_code(args.penal_code))
    json_path = export_charge_index_json(entries, f"{args.export_index}/penal_code_index.json")
    csv_path = export_charge_index_csv(entries, f"{args.export_index}/penal_code_index.csv")
    console.print(f"[green]Exported {len(entries)} charges[/]")
    console.print(f"  {json_path}")
    console.print(f"  {csv_path}")


def main():
    settings = get_settings()
    default_source = settings.content_delivery_network or PENAL_CODE_PATH

    parser = argparse.ArgumentParser(
        description="Calculate sentences, fines and bail for an arrest report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--report",
        help="Path to a report JSON file (list of charge rows)",
    )
    parser.add_argument(
        "--parole-violator",
        action="store_true",
        help="Apply the parole violation addition to every charge",
    )
    parser.add_argument(
        "--penal-code",
        default=default_source,
        help=f"Penal code JSON path or CDN URL (default: {default_source})",
    )
    parser.add_argument(
        "--additions",
        default=ADDITIONS_PATH,
        help=f"Additions JSON path (default: {ADDITIONS_PATH})",
    )
    parser.add_argument(
        "--output",
        help=f"Write the calculation as JSON (e.g. {OUTPUT_DIR}/arrest_calculation.json)",
    )
    parser.add_argument(
        "--search",
        help="Search the penal code by name, id, definition or stipulation",
    )
    parser.add_argument(
        "--type",
        choices=["F", "M", "I", "all"],
        default="all",
        help="Charge type filter for --search (default: all)",
    )
    parser.add_argument(
        "--export-index",
        metavar="DIR",
        help="Export the simplified penal code index as JSON and CSV",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()
    setup_logging(args.verbose)

    if not (args.report or args.search is not None or args.export_index):
        parser.error("one of --report, --search or --export-index is required")

    try:
        if args.search is not None:
            run_search(args)
        elif args.export_index:
            run_export_index(args)
        else:
            run_calculation(args)
    except (OSError, ValueError, requests.RequestException) as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
