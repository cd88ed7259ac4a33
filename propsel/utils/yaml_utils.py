"""Utilities for handling YAML parsing quirks."""

from typing import Any, Dict, Mapping


def normalize_yaml_dict_keys(data: Mapping[Any, Any]) -> Dict[str, Any]:
    """Normalize dictionary keys from YAML parsing to consistent string keys.

    YAML 1.1 boolean keys (e.g., true, false, yes, no, on, off) are loaded as
    Python True/False. They become "True"/"False"; every other key is passed
    through `str`.

    Args:
        data: Dictionary that may contain boolean or other non-string keys.

    Returns:
        Dictionary with all keys converted to strings.

    Examples:
        >>> normalize_yaml_dict_keys({True: "v1", 8080: "v2", "normal": "v3"})
        {'True': 'v1', '8080': 'v2', 'normal': 'v3'}
    """
    return {str(key): value for key, value in data.items()}


def stringify_property_values(data: Mapping[str, Any]) -> Dict[str, str]:
    """Convert scalar YAML values to the string form properties are stored in.

    Booleans become "true"/"false" and null becomes an empty string, the way a
    properties file would spell them.

    Raises:
        ValueError: If a value is a mapping or a list.
    """
    result: Dict[str, str] = {}
    for key, value in data.items():
        if isinstance(value, (dict, list)):
            raise ValueError(
                f"Property '{key}' must be a scalar, got {type(value).__name__}"
            )
        if isinstance(value, bool):
            result[key] = "true" if value else "false"
        elif value is None:
            result[key] = ""
        else:
            result[key] = str(value)
    return result
