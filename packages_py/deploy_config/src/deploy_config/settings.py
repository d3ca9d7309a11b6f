"""
CLI settings resolved from explicit arguments, then environment variables,
then defaults.
"""
import os
from typing import Any, List, Optional, Union

EPHEMERAL_BRANCH_PREFIX_ENV = ['UDC_EPHEMERAL_BRANCH_PREFIX']
DISABLE_EPHEMERAL_BRANCH_CHECK_ENV = ['UDC_DISABLE_EPHEMERAL_BRANCH_CHECK']
BRANCH_NAME_ENV = ['UDC_BRANCH_NAME', 'GITHUB_REF_NAME', 'CI_COMMIT_REF_NAME']
LOG_LEVEL_ENV = ['UDC_LOG_LEVEL']


def resolve_setting(arg: Any, env_keys: Union[str, List[str]], default: Any = None) -> Any:
    """
    Resolve a value in priority order:
    1. Direct argument (if not None)
    2. Environment variables (first one set wins)
    3. Default value
    """
    # 1. Argument
    if arg is not None:
        return arg

    # 2. Env Vars
    if isinstance(env_keys, str):
        env_keys = [env_keys]

    for key in env_keys:
        if key:
            val = os.getenv(key)
            if val is not None:
                return val

    # 3. Default
    return default


def resolve_bool(arg: Any, env_keys: Union[str, List[str]], default: bool = False) -> bool:
    """Resolve boolean value with string conversion support."""
    val = resolve_setting(arg, env_keys, default)

    if isinstance(val, bool):
        return val
    if isinstance(val, str):
        return val.strip().lower() in ("true", "1", "yes", "on")

    return bool(val)


def resolve_ephemeral_branch_prefix(arg: Optional[str] = None) -> str:
    return resolve_setting(arg, EPHEMERAL_BRANCH_PREFIX_ENV, '')


def resolve_disable_ephemeral_branch_check(arg: Optional[bool] = None) -> bool:
    return resolve_bool(arg, DISABLE_EPHEMERAL_BRANCH_CHECK_ENV, False)


def resolve_branch_name(arg: Optional[str] = None) -> Optional[str]:
    return resolve_setting(arg, BRANCH_NAME_ENV, None) or None


def resolve_log_level(debug: bool = False) -> str:
    if debug:
        return 'DEBUG'
    return str(resolve_setting(None, LOG_LEVEL_ENV, 'WARNING')).upper()
