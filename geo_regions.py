#!/usr/bin/env python3
# filename: geo_regions.py
# -----------------------------------------------------------------------------
# Project: GeoIP List Builder
# Version: 1.1.0 (Region mapping export)
# -----------------------------------------------------------------------------
"""
Built-in region definitions.
Exported as a starter region_mapping.json for the regionMapping converter.
"""

from pathlib import Path
from typing import Dict, List

import orjson as json

from utils import get_logger, normalize_name

logger = get_logger("GeoRegions")

# Region name -> ISO 3166-1 alpha-2 country codes
BUILTIN_REGIONS: Dict[str, List[str]] = {
    'BALTIC_STATES': ['EE', 'LT', 'LV'],
    'BENELUX': ['BE', 'LU', 'NL'],
    'CENTRAL_ASIA': ['KG', 'KZ', 'TJ', 'TM', 'UZ'],
    'DACH': ['AT', 'CH', 'DE'],
    'EU': [
        'AT', 'BE', 'BG', 'CY', 'CZ', 'DE', 'DK', 'EE', 'ES', 'FI', 'FR', 'GR', 'HR', 'HU',
        'IE', 'IT', 'LT', 'LU', 'LV', 'MT', 'NL', 'PL', 'PT', 'RO', 'SE', 'SI', 'SK',
    ],
    'FIVE_EYES': ['AU', 'CA', 'GB', 'NZ', 'US'],
    'G7': ['CA', 'DE', 'FR', 'GB', 'IT', 'JP', 'US'],
    'GCC': ['AE', 'BH', 'KW', 'OM', 'QA', 'SA'],
    'GREATER_CHINA': ['CN', 'HK', 'MO', 'TW'],
    'NORDIC': ['AX', 'DK', 'FI', 'FO', 'GL', 'IS', 'NO', 'SE', 'SJ'],
    'NORTHERN_AMERICA': ['BM', 'CA', 'GL', 'PM', 'US'],
    'OCEANIA': ['AU', 'FJ', 'NC', 'NZ', 'PF', 'PG', 'SB', 'VU', 'WS'],
    'SOUTH_EASTERN_ASIA': ['BN', 'ID', 'KH', 'LA', 'MM', 'MY', 'PH', 'SG', 'TH', 'TL', 'VN'],
}


def get_region_countries(region_name: str) -> List[str]:
    """Get all countries in a built-in region"""
    return list(BUILTIN_REGIONS.get(normalize_name(region_name), []))


def write_region_mapping(path: str, regions: Dict[str, List[str]] = None) -> int:
    """
    Write a region mapping resource (JSON object of region -> countries).

    Returns:
        Number of regions written
    """
    regions = BUILTIN_REGIONS if regions is None else regions
    target = Path(path)
    if target.parent and not target.parent.exists():
        target.parent.mkdir(parents=True)

    with open(target, 'wb') as f:
        f.write(json.dumps(regions, option=json.OPT_INDENT_2))

    logger.info(f"✓ Exported {len(regions)} regions to {target}")
    return len(regions)
