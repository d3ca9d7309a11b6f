"""
Environment resolution, including ephemeral (per-branch) environments.

The requested environment is run through an ordered list of stages. Each
stage either returns a resolution, raises, or passes (returns None) to the
next stage:

1. direct match        - declared environment other than 'ephemeral'
2. ephemeral disabled  - no prefix configured, unknown environment -> not found
3. trusted ephemeral   - branch check disabled, trust the requested name
4. branch derived      - derive the environment name from the branch name
5. bare ephemeral      - 'ephemeral' requested without a usable branch
6. not found
"""
import logging
import re
from typing import Callable, Collection, List, Optional

from .domain import EPHEMERAL_ENV, EnvironmentMatch, EnvironmentResolution
from .errors import (
    EnvironmentNotFoundError,
    EphemeralNameMismatchError,
    InvalidEphemeralBranchFormatError,
)

logger = logging.getLogger(__name__)

BRANCH_NAME_CHARSET = '[a-z0-9_-]+'


class EnvironmentResolver:
    """Determines the effective environment names for a requested environment."""

    def __init__(
        self,
        declared_envs: Collection[str],
        ephemeral_branch_prefix: Optional[str] = None,
        disable_ephemeral_branch_check: bool = False,
        branch_name: Optional[str] = None,
    ):
        self.declared_envs = declared_envs
        self.prefix = ephemeral_branch_prefix or ''
        self.disable_branch_check = disable_ephemeral_branch_check
        self.branch_name = branch_name or None

    @property
    def ephemeral_enabled(self) -> bool:
        return bool(self.prefix.strip())

    def resolve(self, requested_env: str) -> EnvironmentResolution:
        stages: List[Callable[[str], Optional[EnvironmentResolution]]] = [
            self._direct_match,
            self._ephemeral_disabled,
            self._trusted_ephemeral,
            self._branch_derived,
            self._bare_ephemeral,
        ]
        for stage in stages:
            resolution = stage(requested_env)
            if resolution is not None:
                logger.debug(
                    f"resolve: '{requested_env}' -> {resolution.match.value} "
                    f"(env_name={resolution.env_name}, env_config_name={resolution.env_config_name})"
                )
                return resolution

        raise EnvironmentNotFoundError(requested_env)

    # ========== Stages ==========

    def _direct_match(self, requested_env: str) -> Optional[EnvironmentResolution]:
        if requested_env != EPHEMERAL_ENV and requested_env in self.declared_envs:
            return EnvironmentResolution(
                env_name=requested_env,
                env_config_name=requested_env,
                is_ephemeral=False,
                match=EnvironmentMatch.DIRECT_MATCH,
            )
        return None

    def _ephemeral_disabled(self, requested_env: str) -> Optional[EnvironmentResolution]:
        if not self.ephemeral_enabled and requested_env != EPHEMERAL_ENV:
            raise EnvironmentNotFoundError(requested_env)
        return None

    def _trusted_ephemeral(self, requested_env: str) -> Optional[EnvironmentResolution]:
        if self.ephemeral_enabled and self.disable_branch_check:
            return EnvironmentResolution(
                env_name=requested_env,
                env_config_name=EPHEMERAL_ENV,
                is_ephemeral=True,
                match=EnvironmentMatch.TRUSTED_EPHEMERAL,
            )
        return None

    def _branch_derived(self, requested_env: str) -> Optional[EnvironmentResolution]:
        if not (self.ephemeral_enabled and self.branch_name):
            return None

        branch_name = self.branch_name
        pattern = re.compile(f"{re.escape(self.prefix)}{BRANCH_NAME_CHARSET}")
        if not pattern.fullmatch(branch_name):
            raise InvalidEphemeralBranchFormatError(self.prefix, branch_name)

        branch_env_name = branch_name[len(self.prefix):]
        if requested_env not in (EPHEMERAL_ENV, branch_env_name, branch_name):
            raise EphemeralNameMismatchError(requested_env, branch_name)

        return EnvironmentResolution(
            env_name=branch_env_name,
            env_config_name=EPHEMERAL_ENV,
            is_ephemeral=True,
            match=EnvironmentMatch.BRANCH_DERIVED,
        )

    def _bare_ephemeral(self, requested_env: str) -> Optional[EnvironmentResolution]:
        if requested_env == EPHEMERAL_ENV:
            return EnvironmentResolution(
                env_name=EPHEMERAL_ENV,
                env_config_name=EPHEMERAL_ENV,
                is_ephemeral=True,
                match=EnvironmentMatch.BARE_EPHEMERAL,
            )
        return None


def resolve_environment(
    requested_env: str,
    declared_envs: Collection[str],
    ephemeral_branch_prefix: Optional[str] = None,
    disable_ephemeral_branch_check: bool = False,
    branch_name: Optional[str] = None,
) -> EnvironmentResolution:
    """
    Convenience function to resolve an environment request.

    Raises:
        EnvironmentNotFoundError: No direct or ephemeral match.
        InvalidEphemeralBranchFormatError: Branch does not match '<prefix><name>'.
        EphemeralNameMismatchError: Requested name conflicts with the branch.
    """
    resolver = EnvironmentResolver(
        declared_envs,
        ephemeral_branch_prefix=ephemeral_branch_prefix,
        disable_ephemeral_branch_check=disable_ephemeral_branch_check,
        branch_name=branch_name,
    )
    return resolver.resolve(requested_env)
