"""
Target id parsing: ``environment[-region]``.
"""
import logging
from .domain import ParsedTarget
from .regions import REGION_CODES, REGION_NAMES

logger = logging.getLogger(__name__)


def parse_target(target: str) -> ParsedTarget:
    """Split a target id such as ``dev-usw2`` into environment and region.

    Full region names are tried as suffixes before short codes, so
    ``my-env-us-west-2`` and ``my-env-usw2`` both resolve to ``my-env``.
    Only known regions are stripped; hyphens inside the environment name
    are left alone. The returned region is always the full name.
    """
    for full_name in REGION_NAMES:
        suffix = f"-{full_name}"
        if target.endswith(suffix):
            logger.debug(f"parse_target: '{target}' matched region name '{full_name}'")
            return ParsedTarget(env=target[:-len(suffix)], region=full_name)

    for short_code, full_name in REGION_CODES.items():
        suffix = f"-{short_code}"
        if target.endswith(suffix):
            logger.debug(f"parse_target: '{target}' matched region code '{short_code}'")
            return ParsedTarget(env=target[:-len(suffix)], region=full_name)

    return ParsedTarget(env=target, region=None)
