"""Data models for deployment configuration resolution."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import InvalidDocumentError

EPHEMERAL_ENV = 'ephemeral'
REGIONS_KEY = 'regions'
# Older documents key environments as accounts; it wins when both are present
ACCOUNTS_KEY = 'accounts'

OutputFormat = Literal['json', 'flatten']


class ComponentFlag(str, Enum):
    """Behavior flags recognized inside a component block.

    Flags take part in the merge but are never part of the resolved output.
    """
    REGION_AGNOSTIC = '_regionAgnostic'


COMPONENT_FLAG_KEYS = frozenset(flag.value for flag in ComponentFlag)


class DeploymentDocument(BaseModel):
    """Root deployment configuration document.

    ``defaults`` holds component blocks and global metadata shared by every
    environment. Each environment may declare ``regions`` keyed by full
    region name.

    A top-level ``accounts`` map is read as ``environments`` and wins when
    both are present.
    """
    model_config = ConfigDict(extra='ignore', frozen=True)

    defaults: Dict[str, Any] = Field(default_factory=dict, description="Component defaults and global metadata")
    environments: Dict[str, Dict[str, Any]] = Field(default_factory=dict, description="Environment name -> environment config")

    @model_validator(mode='before')
    @classmethod
    def _accounts_as_environments(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and data.get(ACCOUNTS_KEY) is not None:
            data = dict(data)
            data['environments'] = data.pop(ACCOUNTS_KEY)
        return data

    @field_validator('defaults', mode='before')
    @classmethod
    def _defaults_or_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator('environments', mode='before')
    @classmethod
    def _normalize_environments(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            return value

        environments: Dict[str, Any] = {}
        for name, env_config in value.items():
            env_config = {} if env_config is None else env_config
            if isinstance(env_config, Mapping) and REGIONS_KEY in env_config:
                env_config = dict(env_config)
                env_config[REGIONS_KEY] = cls._normalize_regions(name, env_config[REGIONS_KEY])
            environments[name] = env_config
        return environments

    @staticmethod
    def _normalize_regions(env_name: str, regions: Any) -> Dict[str, Any]:
        if regions is None:
            return {}
        if not isinstance(regions, Mapping):
            raise ValueError(f"'regions' of environment '{env_name}' must be a mapping")

        normalized: Dict[str, Any] = {}
        for region, region_config in regions.items():
            region_config = {} if region_config is None else region_config
            if not isinstance(region_config, Mapping):
                raise ValueError(f"Region '{region}' of environment '{env_name}' must be a mapping")
            normalized[region] = region_config
        return normalized

    @classmethod
    def parse(cls, raw: Union['DeploymentDocument', Mapping[str, Any]]) -> 'DeploymentDocument':
        """Validate a raw parsed document; returns existing models unchanged."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, Mapping):
            raise InvalidDocumentError(
                f"Config root must be a mapping, got {type(raw).__name__}"
            )
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as e:
            raise InvalidDocumentError(f"Invalid deployment config document: {e}") from e

    def environment(self, name: str) -> Dict[str, Any]:
        return self.environments.get(name) or {}

    def regions_of(self, env_name: str) -> Dict[str, Dict[str, Any]]:
        return self.environment(env_name).get(REGIONS_KEY) or {}

    def region(self, env_name: str, region: Optional[str]) -> Dict[str, Any]:
        if not region:
            return {}
        return self.regions_of(env_name).get(region) or {}


@dataclass
class ParsedTarget:
    """Environment and (full) region name parsed from a target id."""
    env: str
    region: Optional[str] = None


class EnvironmentMatch(str, Enum):
    DIRECT_MATCH = 'direct_match'
    TRUSTED_EPHEMERAL = 'trusted_ephemeral'
    BRANCH_DERIVED = 'branch_derived'
    BARE_EPHEMERAL = 'bare_ephemeral'


@dataclass
class EnvironmentResolution:
    env_name: str
    env_config_name: str
    is_ephemeral: bool
    match: EnvironmentMatch


@dataclass
class ResolveOptions:
    """Options for resolving a configuration for one target."""
    env: str
    region: Optional[str] = None
    component: Optional[str] = None
    # Only meaningful with component: hoist its fields to the root
    hoist: bool = True
    output: OutputFormat = 'json'
    delimiter: str = '.'
    ephemeral_branch_prefix: str = ''
    disable_ephemeral_branch_check: bool = False
    branch_name: Optional[str] = None


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


@dataclass
class ComponentValidity:
    valid: bool
    reason: Optional[str] = None
    has_config: Optional[bool] = None
    target: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            'valid': self.valid,
            'reason': self.reason,
            'hasConfig': self.has_config,
            'target': self.target,
        })


@dataclass
class RegionValidity(ComponentValidity):
    region: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {'region': self.region, **super().to_dict()}


@dataclass
class EnvLevelAvailability:
    """Availability of one component within one environment."""
    available: bool
    env_level: ComponentValidity
    regions: Optional[List[RegionValidity]] = None
    region_agnostic: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            'available': self.available,
            'envLevel': self.env_level.to_dict(),
            'regions': [r.to_dict() for r in self.regions] if self.regions is not None else None,
            'regionAgnostic': self.region_agnostic,
        })


@dataclass
class EnvironmentAvailability(EnvLevelAvailability):
    environment: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {'environment': self.environment, **super().to_dict()}


@dataclass
class ComponentAvailability(EnvLevelAvailability):
    component: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {'component': self.component, **super().to_dict()}


@dataclass
class ComponentAvailabilityReport:
    """Where a single component resolves without nulls."""
    component: str
    environments: List[EnvironmentAvailability]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'component': self.component,
            'environments': [e.to_dict() for e in self.environments],
        }


@dataclass
class EnvironmentComponents:
    environment: str
    valid: bool
    components: List[ComponentAvailability]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'environment': self.environment,
            'valid': self.valid,
            'components': [c.to_dict() for c in self.components],
        }


@dataclass
class AvailabilityReport:
    """Availability of every component across every environment."""
    environments: List[EnvironmentComponents]

    def to_dict(self) -> Dict[str, Any]:
        return {'environments': [e.to_dict() for e in self.environments]}
