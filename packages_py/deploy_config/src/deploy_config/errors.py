"""Exceptions raised while resolving deployment configuration."""

from typing import List, Optional


class DeployConfigError(Exception):
    """Base exception for deployment configuration resolution errors."""
    pass


class InvalidDocumentError(DeployConfigError):
    """Raised when the parsed document does not have the expected shape."""
    pass


class EnvironmentNotFoundError(DeployConfigError):
    def __init__(self, env: str):
        super().__init__(f"Environment '{env}' not found in config file")
        self.env = env


class InvalidEphemeralBranchFormatError(DeployConfigError):
    def __init__(self, prefix: str, branch_name: str):
        msg = (
            f"Ephemeral environment branches must follow the format '{prefix}<name>' "
            f"where <name> contains only lowercase letters, numbers, hyphens, and underscores. "
            f"Current branch: {branch_name}"
        )
        super().__init__(msg)
        self.prefix = prefix
        self.branch_name = branch_name


class EphemeralNameMismatchError(DeployConfigError):
    def __init__(self, env: str, branch_name: str):
        super().__init__(
            f"Ephemeral environment name '{env}' does not match the branch name '{branch_name}'"
        )
        self.env = env
        self.branch_name = branch_name


class InvalidRegionError(DeployConfigError):
    def __init__(self, region: str):
        super().__init__(f"Region '{region}' is not a valid region code or name")
        self.region = region


class RegionRequiredError(DeployConfigError):
    def __init__(self, env: str, regions: List[str], component: Optional[str] = None):
        detail = f"Component '{component}' is not region-agnostic, so you" if component else "You"
        msg = (
            f"Environment '{env}' has regions defined. {detail} must specify a region. "
            f"Available regions: {', '.join(regions)}"
        )
        super().__init__(msg)
        self.env = env
        self.regions = regions
        self.component = component


class ComponentNotFoundError(DeployConfigError):
    def __init__(self, component: str):
        super().__init__(
            f"Component '{component}' not found or is not a valid component in the merged configuration"
        )
        self.component = component


class NoValidComponentsError(DeployConfigError):
    """Raised when every discovered component was excluded from the output.

    ``missing_region`` lists components dropped because the environment declares
    regions and none was given; ``incomplete`` lists components still holding nulls.
    """

    def __init__(
        self,
        env: str,
        regions: List[str],
        missing_region: List[str],
        incomplete: List[str],
    ):
        if missing_region:
            msg = (
                f"No valid components found for target. Environment '{env}' has regions defined. "
                f"You must specify a region. Available regions: {', '.join(regions)}"
            )
            if incomplete:
                msg += f". Components with null values: {', '.join(incomplete)}"
        else:
            msg = "No valid components found for target. All components contain null values."
        super().__init__(msg)
        self.env = env
        self.regions = regions
        self.missing_region = missing_region
        self.incomplete = incomplete


class RequiredFieldMissingError(DeployConfigError):
    def __init__(self, path: str, component: Optional[str] = None):
        if component:
            msg = (
                f"Component '{component}' has incomplete configuration (contains null values) "
                f"at path: {path}"
            )
        else:
            msg = (
                f"Configuration contains null value at path: {path}. "
                f"All required fields must have concrete values defined in the environment configuration."
            )
        super().__init__(msg)
        self.path = path
        self.component = component
