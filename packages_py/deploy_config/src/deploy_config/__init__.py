from .availability import (
    check_availability,
    check_all_components_availability,
    check_component_availability,
    check_component_validity,
    list_component_names,
    list_targets,
)
from .domain import (
    AvailabilityReport,
    ComponentAvailability,
    ComponentAvailabilityReport,
    ComponentFlag,
    ComponentValidity,
    DeploymentDocument,
    EnvironmentAvailability,
    EnvironmentComponents,
    EnvironmentMatch,
    EnvironmentResolution,
    ParsedTarget,
    RegionValidity,
    ResolveOptions,
)
from .environment import EnvironmentResolver, resolve_environment
from .errors import (
    ComponentNotFoundError,
    DeployConfigError,
    EnvironmentNotFoundError,
    EphemeralNameMismatchError,
    InvalidDocumentError,
    InvalidEphemeralBranchFormatError,
    InvalidRegionError,
    NoValidComponentsError,
    RegionRequiredError,
    RequiredFieldMissingError,
)
from .flatten import flatten
from .loader import convert_document, load_document
from .merge import deep_merge, find_null_path
from .regions import REGION_CODES, is_known_region, to_full_name, to_short_code
from .resolver import DeploymentConfigResolver, resolve_config
from .target import parse_target

__all__ = [
    "check_availability",
    "check_all_components_availability",
    "check_component_availability",
    "check_component_validity",
    "list_component_names",
    "list_targets",
    "AvailabilityReport",
    "ComponentAvailability",
    "ComponentAvailabilityReport",
    "ComponentFlag",
    "ComponentValidity",
    "DeploymentDocument",
    "EnvironmentAvailability",
    "EnvironmentComponents",
    "EnvironmentMatch",
    "EnvironmentResolution",
    "ParsedTarget",
    "RegionValidity",
    "ResolveOptions",
    "EnvironmentResolver",
    "resolve_environment",
    "ComponentNotFoundError",
    "DeployConfigError",
    "EnvironmentNotFoundError",
    "EphemeralNameMismatchError",
    "InvalidDocumentError",
    "InvalidEphemeralBranchFormatError",
    "InvalidRegionError",
    "NoValidComponentsError",
    "RegionRequiredError",
    "RequiredFieldMissingError",
    "flatten",
    "convert_document",
    "load_document",
    "deep_merge",
    "find_null_path",
    "REGION_CODES",
    "is_known_region",
    "to_full_name",
    "to_short_code",
    "DeploymentConfigResolver",
    "resolve_config",
    "parse_target",
]
