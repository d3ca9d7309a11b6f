from typing import Any, Dict, Mapping


def flatten(obj: Mapping[str, Any], prefix: str = '', delimiter: str = '.') -> Dict[str, Any]:
    """Flatten nested mappings into a single level, joining keys with delimiter.

    Example:
        >>> flatten({'network': {'vpc_cidr': '10.0.0.0/21'}, 'region': 'us-west-2'})
        {'network.vpc_cidr': '10.0.0.0/21', 'region': 'us-west-2'}
    """
    result: Dict[str, Any] = {}
    for key, value in obj.items():
        full_key = f"{prefix}{delimiter}{key}" if prefix else key
        if isinstance(value, Mapping):
            result.update(flatten(value, full_key, delimiter))
        else:
            result[full_key] = value
    return result
