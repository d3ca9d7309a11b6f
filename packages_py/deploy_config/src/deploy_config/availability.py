"""
Availability scan: where does a component (or every component) resolve
without null values, across all environments and their regions.

Never raises for unknown components; they are reported as
``component_not_found`` per environment instead.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from .domain import (
    REGIONS_KEY,
    AvailabilityReport,
    ComponentAvailability,
    ComponentAvailabilityReport,
    ComponentFlag,
    ComponentValidity,
    DeploymentDocument,
    EnvironmentAvailability,
    EnvironmentComponents,
    EnvLevelAvailability,
    RegionValidity,
)
from .merge import deep_merge, find_null_path
from .regions import to_short_code

logger = logging.getLogger(__name__)

COMPONENT_NOT_FOUND = 'component_not_found'
NULL_VALUE_REASON_PREFIX = 'null_value_at_'

Report = Union[ComponentAvailabilityReport, AvailabilityReport]


def _component_at(level: Mapping[str, Any], name: str) -> Optional[Mapping[str, Any]]:
    value = level.get(name)
    return value if isinstance(value, Mapping) else None


def check_component_validity(
    document: DeploymentDocument,
    env_name: str,
    region: Optional[str],
    component: str,
) -> ComponentValidity:
    """Validity of one component for one environment, optionally at one region."""
    default_comp = _component_at(document.defaults, component)
    env_comp = _component_at(document.environment(env_name), component)
    region_comp = _component_at(document.region(env_name, region), component) if region else None

    if default_comp is None and env_comp is None and region_comp is None:
        return ComponentValidity(valid=False, reason=COMPONENT_NOT_FOUND)

    merged = deep_merge(default_comp, env_comp, region_comp)
    null_path = find_null_path(merged)
    if null_path is not None:
        return ComponentValidity(valid=False, reason=f"{NULL_VALUE_REASON_PREFIX}{null_path}")

    level_comp = region_comp if region else env_comp
    return ComponentValidity(valid=True, has_config=bool(level_comp))


def is_region_agnostic(document: DeploymentDocument, env_name: str, component: str) -> bool:
    merged = deep_merge(
        _component_at(document.defaults, component),
        _component_at(document.environment(env_name), component),
    )
    return merged.get(ComponentFlag.REGION_AGNOSTIC.value) is True


def _env_availability(document: DeploymentDocument, env_name: str, component: str) -> EnvLevelAvailability:
    region_agnostic = is_region_agnostic(document, env_name, component)

    env_result = check_component_validity(document, env_name, None, component)
    if env_result.valid:
        env_result.target = env_name

    region_results: List[RegionValidity] = []
    if not region_agnostic:
        for region in document.regions_of(env_name):
            result = check_component_validity(document, env_name, region, component)
            if result.valid:
                region_results.append(RegionValidity(
                    region=region,
                    valid=True,
                    has_config=result.has_config,
                    target=f"{env_name}-{to_short_code(region)}",
                ))
            else:
                region_results.append(RegionValidity(region=region, valid=False, reason=result.reason))

    available = env_result.valid or any(r.valid for r in region_results)
    logger.debug(
        f"availability: '{component}' in '{env_name}' -> available={available} "
        f"(env_level={env_result.valid}, regions={len(region_results)})"
    )
    return EnvLevelAvailability(
        available=available,
        env_level=env_result,
        regions=region_results or None,
        region_agnostic=True if region_agnostic else None,
    )


def check_component_availability(
    document: Union[DeploymentDocument, Mapping[str, Any]],
    component: str,
) -> ComponentAvailabilityReport:
    """Per-environment availability of a single component."""
    document = DeploymentDocument.parse(document)
    environments = []
    for env_name in document.environments:
        availability = _env_availability(document, env_name, component)
        environments.append(EnvironmentAvailability(environment=env_name, **vars(availability)))
    return ComponentAvailabilityReport(component=component, environments=environments)


def list_component_names(document: Union[DeploymentDocument, Mapping[str, Any]]) -> List[str]:
    """Every mapping-valued key in defaults, environments and regions, in first-seen order."""
    document = DeploymentDocument.parse(document)
    names: Dict[str, None] = {}

    def collect(level: Mapping[str, Any]) -> None:
        for key, value in level.items():
            if key != REGIONS_KEY and isinstance(value, Mapping):
                names.setdefault(key, None)

    collect(document.defaults)
    for env_name in document.environments:
        collect(document.environment(env_name))
        for region_config in document.regions_of(env_name).values():
            collect(region_config)
    return list(names)


def check_all_components_availability(
    document: Union[DeploymentDocument, Mapping[str, Any]],
) -> AvailabilityReport:
    """Availability of every discovered component in every environment."""
    document = DeploymentDocument.parse(document)
    component_names = list_component_names(document)
    if not document.environments or not component_names:
        return AvailabilityReport(environments=[])

    environments = []
    for env_name in document.environments:
        components = [
            ComponentAvailability(component=name, **vars(_env_availability(document, env_name, name)))
            for name in component_names
        ]
        environments.append(EnvironmentComponents(
            environment=env_name,
            valid=any(c.available for c in components),
            components=components,
        ))
    return AvailabilityReport(environments=environments)


def check_availability(
    document: Union[DeploymentDocument, Mapping[str, Any]],
    component: Optional[str] = None,
) -> Report:
    """
    Discovery query: where can a component (or each component) be deployed.

    Args:
        document: Parsed deployment document.
        component: Component name; all components when omitted.

    Returns:
        ComponentAvailabilityReport for a named component, otherwise an
        AvailabilityReport covering all components.

    Raises:
        InvalidDocumentError: The document is malformed.
    """
    if component:
        return check_component_availability(document, component)
    return check_all_components_availability(document)


def list_targets(report: Report) -> List[str]:
    """Deployable target ids in a report, de-duplicated in encounter order."""
    if isinstance(report, ComponentAvailabilityReport):
        entries: List[EnvLevelAvailability] = list(report.environments)
    else:
        entries = [c for env in report.environments for c in env.components]

    targets: Dict[str, None] = {}
    for entry in entries:
        if entry.env_level.valid and entry.env_level.target:
            targets.setdefault(entry.env_level.target, None)
        for region in entry.regions or []:
            if region.valid and region.target:
                targets.setdefault(region.target, None)
    return list(targets)
