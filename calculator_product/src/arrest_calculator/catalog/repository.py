"""Catalog access layer."""

from __future__ import annotations

import logging
from functools import cached_property

from penal_code.fetcher import PenalCodeFetcher, load_json_file, load_penal_code

from arrest_calculator.config import Settings
from arrest_calculator.core.catalog import parse_additions, parse_penal_code
from arrest_calculator.core.types import Addition, ChargeDefinition

logger = logging.getLogger(__name__)


class CatalogRepository:
    """Loads the penal code table and additions catalog once per instance."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @cached_property
    def penal_code(self) -> dict[str, ChargeDefinition]:
        if self.settings.content_delivery_network:
            fetcher = PenalCodeFetcher(base_url=self.settings.content_delivery_network)
            raw = fetcher.fetch_penal_code()
        else:
            raw = load_penal_code(self.settings.penal_code_path)
        return parse_penal_code(raw)

    @cached_property
    def additions(self) -> list[Addition]:
        additions = parse_additions(load_json_file(self.settings.additions_path))
        logger.info(f"Loaded {len(additions)} additions from {self.settings.additions_path}")
        return additions

    def fetch_charge(self, charge_id: str) -> ChargeDefinition | None:
        return self.penal_code.get(charge_id)
