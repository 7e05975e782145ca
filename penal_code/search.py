"""Search the simplified penal code."""

from .models import ChargeIndexEntry

UNKNOWN_TYPE = "?"


def search_charges(
    entries: list[ChargeIndexEntry],
    term: str = "",
    type_filter: str = "all",
) -> list[ChargeIndexEntry]:
    """Filter charges by a case-insensitive term and an optional type.

    The term matches the charge name, id, definition or stipulation.
    Charges of unknown type are never listed.
    """
    needle = term.lower()
    matches = []
    for entry in entries:
        if entry.type == UNKNOWN_TYPE:
            continue
        if type_filter != "all" and entry.type != type_filter:
            continue

        if (
            needle in entry.charge.lower()
            or needle in entry.charge_id
            or needle in entry.definition.lower()
            or needle in entry.extra.lower()
        ):
            matches.append(entry)
    return matches
