"""Data models for the simplified penal code index."""

from dataclasses import dataclass, field, asdict
from typing import Any, Optional
import json

TYPE_NAMES = {
    "F": "Felony",
    "M": "Misdemeanor",
    "I": "Infraction",
}


@dataclass
class ChargeIndexEntry:
    """A flattened, display-oriented summary of one penal code charge."""

    charge_id: str
    charge: str
    type: str  # "F", "M", "I" or "?"
    type_name: str
    definition: str = ""
    classes: list[str] = field(default_factory=list)  # e.g. ["A", "B"]
    offenses: list[str] = field(default_factory=list)  # e.g. ["1", "2", "3"]
    drug_categories: dict[str, str] = field(default_factory=dict)
    code_enhancement: Optional[str] = None
    extra: str = ""

    @classmethod
    def from_raw(cls, key: str, raw: dict[str, Any]) -> "ChargeIndexEntry":
        charge_type = raw.get("type") or "?"
        classes = raw.get("class") or {}
        offenses = raw.get("offence") or {}
        drugs = raw.get("drugs") or {}
        return cls(
            charge_id=str(raw.get("id") or key),
            charge=raw.get("charge") or "",
            type=charge_type,
            type_name=TYPE_NAMES.get(charge_type, "Other"),
            definition=raw.get("definition") or "",
            classes=[k for k, v in classes.items() if v] if isinstance(classes, dict) else [],
            offenses=[k for k, v in offenses.items() if v] if isinstance(offenses, dict) else [],
            drug_categories=dict(drugs) if isinstance(drugs, dict) else {},
            code_enhancement=raw.get("code_enhancement"),
            extra="" if raw.get("extra") in (None, "N/A") else raw["extra"],
        )

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def build_charge_index(raw_table: dict[str, Any]) -> list[ChargeIndexEntry]:
    """Flatten a raw penal code table, skipping entries that are not objects."""
    return [
        ChargeIndexEntry.from_raw(str(key), raw)
        for key, raw in raw_table.items()
        if isinstance(raw, dict)
    ]
