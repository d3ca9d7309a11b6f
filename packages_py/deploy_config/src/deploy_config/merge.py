"""
Layered deep merge and required-field (null) scanning.
"""
import copy
from typing import Any, Dict, Mapping, Optional

from deepmerge import Merger

# dict + dict merges recursively; everything else (lists, scalars, None,
# mismatched types) is replaced wholesale by the later layer.
_layer_merger = Merger(
    [(dict, ["merge"])],
    ["override"],
    ["override"],
)


def deep_merge(*layers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge layers left to right; later layers win.

    Arrays are replaced, never concatenated. A later ``None`` replaces an
    earlier concrete value and vice versa. Missing layers are skipped.
    Inputs are never mutated.
    """
    result: Dict[str, Any] = {}
    for layer in layers:
        if not isinstance(layer, Mapping):
            continue
        # deepmerge merges in place and shares references with the source
        _layer_merger.merge(result, copy.deepcopy(dict(layer)))
    return result


def find_null_path(obj: Mapping[str, Any], path: Optional[str] = None) -> Optional[str]:
    """Return the dot path of the first None value, or None if there is none.

    Walks depth-first in key insertion order. Lists are treated as leaves.
    """
    for key, value in obj.items():
        current_path = f"{path}.{key}" if path is not None else key
        if value is None:
            return current_path
        if isinstance(value, Mapping):
            nested = find_null_path(value, current_path)
            if nested is not None:
                return nested
    return None
