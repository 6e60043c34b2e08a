"""Static region configuration implementing ``RegionConfigPort``.

Each region maps to an ordered list of carrier ids; index ``0`` is the
region default used to prime the carrier field. Overrides from user settings
replace the default (index ``0``) entry for a region.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Tuple

from ota_updater.domain.ports import RegionConfigPort
from ota_updater.domain.query_models import REGIONS, Region

DEFAULT_CARRIERS: Dict[str, Tuple[str, ...]] = {
    "CN": ("10010111",),
    "EU": ("01000100",),
    "IN": ("00011011",),
    "SG": ("01011010",),
    "RU": ("00110111",),
    "TR": ("01010001",),
    "TH": ("00111001",),
    "GL": ("10100111",),
}


class RegionConfigTable(RegionConfigPort):
    """In-memory carrier table with optional per-region overrides."""

    def __init__(
        self,
        carriers: Optional[Mapping[str, Tuple[str, ...]]] = None,
        *,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        table = {str(k).upper(): tuple(v) for k, v in (carriers or DEFAULT_CARRIERS).items()}
        for region, carrier in (overrides or {}).items():
            key = str(region).upper()
            value = str(carrier or "").strip()
            if key not in REGIONS:
                raise ValueError(f"carrier_overrides contains unsupported region '{region}'.")
            if value:
                table[key] = (value,) + table.get(key, ())[1:]
        self._table = table

    def get_default_carrier(self, region: Region, index: int = 0) -> str:
        """Return the carrier id at ``index`` for ``region``.

        Raises:
            LookupError: If the region has no configuration.
            IndexError: If ``index`` is outside the configured carrier list.
        """
        try:
            carriers = self._table[str(region).upper()]
        except KeyError:
            raise LookupError(f"No carrier configuration for region '{region}'") from None
        if not 0 <= index < len(carriers):
            raise IndexError(f"Carrier index {index} out of range for region '{region}'")
        carrier = carriers[index]
        self._log.debug("Carrier for %s[%d] -> %s", region, index, carrier)
        return carrier


__all__ = ["DEFAULT_CARRIERS", "RegionConfigTable"]
