"""
Resolve a deployment configuration document for one environment/region target.

Values are layered defaults -> environment -> region. Mapping-valued keys are
components; every other key is global metadata. ``None`` anywhere marks a
required value that a more specific layer must supply.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from .availability import is_region_agnostic
from .domain import (
    COMPONENT_FLAG_KEYS,
    REGIONS_KEY,
    DeploymentDocument,
    EnvironmentResolution,
    ResolveOptions,
)
from .environment import EnvironmentResolver
from .errors import (
    ComponentNotFoundError,
    EnvironmentNotFoundError,
    InvalidRegionError,
    NoValidComponentsError,
    RegionRequiredError,
    RequiredFieldMissingError,
)
from .flatten import flatten
from .merge import deep_merge, find_null_path
from .regions import is_known_region, to_full_name, to_short_code

logger = logging.getLogger(__name__)


def is_component(value: Any) -> bool:
    return isinstance(value, Mapping)


def _as_mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _strip_flags(component: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in component.items() if k not in COMPONENT_FLAG_KEYS}


class DeploymentConfigResolver:
    """Resolves configuration for targets of a single deployment document."""

    def __init__(self, document: Union[DeploymentDocument, Mapping[str, Any]]):
        self.document = DeploymentDocument.parse(document)

    # ========== Public API ==========

    def resolve(self, options: ResolveOptions) -> Dict[str, Any]:
        """
        Resolve the merged configuration for a target.

        Args:
            options: Target environment/region, component filter, ephemeral
                settings and output format.

        Returns:
            Nested mapping (or flattened mapping when options.output is
            'flatten') with env_name, env_config_name, region, region_short
            and is_ephemeral injected.

        Raises:
            EnvironmentNotFoundError, InvalidEphemeralBranchFormatError,
            EphemeralNameMismatchError, InvalidRegionError, RegionRequiredError,
            ComponentNotFoundError, NoValidComponentsError,
            RequiredFieldMissingError
        """
        # Step 1: Environment (direct or ephemeral)
        env = self.resolve_environment(options)
        env_config_name = env.env_config_name
        if env_config_name not in self.document.environments:
            raise EnvironmentNotFoundError(env_config_name)

        # Step 2: Region normalization
        region = options.region or None
        if region and not is_known_region(region):
            raise InvalidRegionError(region)
        full_region = to_full_name(region) if region else None
        short_region = to_short_code(full_region) if full_region else None

        if full_region and full_region not in self.document.regions_of(env_config_name):
            logger.debug(
                f"resolve: region '{full_region}' not declared for '{env_config_name}', "
                f"using environment-level values"
            )

        # Step 3: Components and global metadata
        component_names = self.list_components(env_config_name, full_region)
        global_merged = self.merge_global(env_config_name, full_region)

        if options.component:
            components = self._select_component(options, env_config_name, full_region, component_names)
        else:
            components = self._collect_valid_components(env_config_name, full_region, component_names)

        if options.component and options.hoist:
            result: Dict[str, Any] = {**global_merged, **components[options.component]}
        else:
            result = {**global_merged, **components}

        # Step 4: Inject target metadata
        result['env_name'] = env.env_name
        result['env_config_name'] = env_config_name
        result['region'] = full_region or ''
        result['region_short'] = short_region or ''
        result['is_ephemeral'] = env.is_ephemeral

        # Step 5: No required field may remain unset
        null_path = find_null_path(result)
        if null_path is not None:
            raise RequiredFieldMissingError(null_path)

        if options.output == 'flatten':
            delimiter = '.' if options.delimiter is None else options.delimiter
            return flatten(result, '', delimiter)
        return result

    def resolve_environment(self, options: ResolveOptions) -> EnvironmentResolution:
        resolver = EnvironmentResolver(
            self.document.environments.keys(),
            ephemeral_branch_prefix=options.ephemeral_branch_prefix,
            disable_ephemeral_branch_check=options.disable_ephemeral_branch_check,
            branch_name=options.branch_name,
        )
        return resolver.resolve(options.env)

    def list_components(self, env_name: str, region: Optional[str] = None) -> List[str]:
        """List component names visible for an environment (and region), in first-seen order."""
        names: Dict[str, None] = {}
        env_config = {k: v for k, v in self.document.environment(env_name).items() if k != REGIONS_KEY}
        for level in (self.document.defaults, env_config, self.document.region(env_name, region)):
            for key, value in level.items():
                if is_component(value):
                    names.setdefault(key, None)
        return list(names)

    def merge_component(self, env_name: str, region: Optional[str], name: str) -> Dict[str, Any]:
        """Merge a component across defaults -> environment -> region (flags included)."""
        return deep_merge(
            _as_mapping(self.document.defaults.get(name)),
            _as_mapping(self.document.environment(env_name).get(name)),
            _as_mapping(self.document.region(env_name, region).get(name)),
        )

    def merge_global(self, env_name: str, region: Optional[str]) -> Dict[str, Any]:
        """Merge non-component (global metadata) keys across all three levels."""
        levels = (
            self.document.defaults,
            self.document.environment(env_name),
            self.document.region(env_name, region),
        )
        return deep_merge(*(
            {k: v for k, v in level.items() if not is_component(v)}
            for level in levels
        ))

    def is_region_agnostic(self, env_name: str, name: str) -> bool:
        """Region-agnostic flag, merged from defaults and environment level only."""
        return is_region_agnostic(self.document, env_name, name)

    def requires_region(self, env_name: str, region: Optional[str]) -> bool:
        return bool(self.document.regions_of(env_name)) and not region

    # ========== Component selection ==========

    def _select_component(
        self,
        options: ResolveOptions,
        env_name: str,
        region: Optional[str],
        component_names: List[str],
    ) -> Dict[str, Dict[str, Any]]:
        name = options.component
        if name not in component_names:
            raise ComponentNotFoundError(name)

        if self.requires_region(env_name, region) and not self.is_region_agnostic(env_name, name):
            raise RegionRequiredError(env_name, list(self.document.regions_of(env_name)), component=name)

        selected = _strip_flags(self.merge_component(env_name, region, name))
        if options.hoist:
            # Nulls surface from the final scan with paths relative to the root
            return {name: selected}

        null_path = find_null_path(selected)
        if null_path is not None:
            raise RequiredFieldMissingError(null_path, component=name)

        others = [n for n in component_names if n != name]
        components = self._valid_components(env_name, region, others)[0]
        components[name] = selected
        return {n: components[n] for n in component_names if n in components}

    def _collect_valid_components(
        self,
        env_name: str,
        region: Optional[str],
        component_names: List[str],
    ) -> Dict[str, Dict[str, Any]]:
        components, missing_region, incomplete = self._valid_components(env_name, region, component_names)
        if component_names and not components:
            raise NoValidComponentsError(
                env_name,
                list(self.document.regions_of(env_name)),
                missing_region=missing_region,
                incomplete=incomplete,
            )
        return components

    def _valid_components(self, env_name: str, region: Optional[str], component_names: List[str]):
        """Merge components, dropping those that need a region or still hold nulls."""
        components: Dict[str, Dict[str, Any]] = {}
        missing_region: List[str] = []
        incomplete: List[str] = []
        region_required = self.requires_region(env_name, region)

        for name in component_names:
            if region_required and not self.is_region_agnostic(env_name, name):
                logger.debug(f"resolve: skipping '{name}', a region is required")
                missing_region.append(name)
                continue

            merged = self.merge_component(env_name, region, name)
            null_path = find_null_path(merged)
            if null_path is not None:
                logger.debug(f"resolve: skipping '{name}', null value at '{null_path}'")
                incomplete.append(name)
                continue

            components[name] = _strip_flags(merged)

        return components, missing_region, incomplete


def resolve_config(
    document: Union[DeploymentDocument, Mapping[str, Any]],
    options: Optional[ResolveOptions] = None,
    **kwargs: Any,
) -> Dict[str, Any]:
    """
    Convenience function to resolve a configuration.

    Args:
        document: Parsed deployment document (raw mapping or model).
        options: ResolveOptions; alternatively pass its fields as keyword arguments.

    Returns:
        Resolved (nested or flattened) configuration.
    """
    opts = options or ResolveOptions(**kwargs)
    return DeploymentConfigResolver(document).resolve(opts)
