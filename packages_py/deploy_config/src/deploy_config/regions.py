"""
AWS region short code <-> full name lookup.
"""
from types import MappingProxyType
from typing import Mapping

# Short code -> full region name
REGION_CODES: Mapping[str, str] = MappingProxyType({
    'use1': 'us-east-1',
    'use2': 'us-east-2',
    'usw1': 'us-west-1',
    'usw2': 'us-west-2',
    'cac1': 'ca-central-1',
    'euw1': 'eu-west-1',
    'euw2': 'eu-west-2',
    'euw3': 'eu-west-3',
    'euc1': 'eu-central-1',
    'eun1': 'eu-north-1',
    'aps1': 'ap-south-1',
    'apne1': 'ap-northeast-1',
    'apne2': 'ap-northeast-2',
    'apne3': 'ap-northeast-3',
    'apse1': 'ap-southeast-1',
    'apse2': 'ap-southeast-2',
    'apse3': 'ap-southeast-3',
    'ape1': 'ap-east-1',
    'sae1': 'sa-east-1',
})

# Full region name -> short code
REGION_NAMES: Mapping[str, str] = MappingProxyType(
    {full: short for short, full in REGION_CODES.items()}
)


def to_full_name(code: str) -> str:
    """Return the full region name for a short code, or the input unchanged."""
    return REGION_CODES.get(code, code)


def to_short_code(name: str) -> str:
    """Return the short code for a full region name, or the input unchanged."""
    return REGION_NAMES.get(name, name)


def is_known_region(value: str) -> bool:
    """Check if value is a known short code or full region name."""
    return value in REGION_CODES or value in REGION_NAMES
