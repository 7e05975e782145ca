"""Export calculations and the penal code index to various formats."""

import json
import csv
import os
import logging
from typing import Any, Optional

from .models import ChargeIndexEntry
from .config import OUTPUT_DIR

logger = logging.getLogger(__name__)


def export_calculation_json(
    payload: dict[str, Any],
    output_path: Optional[str] = None,
    pretty: bool = True,
) -> str:
    """Export a serialized arrest calculation to a JSON file."""
    path = output_path or os.path.join(OUTPUT_DIR, "arrest_calculation.json")
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2 if pretty else None, ensure_ascii=False)

    logger.info(f"Exported arrest calculation to {path}")
    return path


def export_charge_index_json(
    entries: list[ChargeIndexEntry],
    output_path: Optional[str] = None,
) -> str:
    """Export the simplified penal code index as JSON."""
    path = output_path or os.path.join(OUTPUT_DIR, "penal_code_index.json")
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump([e.to_dict() for e in entries], f, indent=2, ensure_ascii=False)

    logger.info(f"Exported {len(entries)} charges to {path}")
    return path


def export_charge_index_csv(
    entries: list[ChargeIndexEntry],
    output_path: Optional[str] = None,
) -> str:
    """Export a CSV summary of every charge in the penal code."""
    path = output_path or os.path.join(OUTPUT_DIR, "penal_code_index.csv")
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow([
            "charge_id",
            "charge",
            "type",
            "classes",
            "offenses",
            "drug_categories",
            "code_enhancement",
            "extra",
        ])

        for entry in entries:
            writer.writerow([
                entry.charge_id,
                entry.charge,
                entry.type_name,
                ", ".join(entry.classes),
                ", ".join(f"#{o}" for o in entry.offenses),
                ", ".join(entry.drug_categories),
                entry.code_enhancement or "",
                entry.extra,
            ])

    logger.info(f"Exported penal code index CSV to {path}")
    return path
