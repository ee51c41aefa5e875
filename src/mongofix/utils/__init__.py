"""Utility module for mongofix

Definitions/declaractions in this module should be independent of other modules,
to the maximum extent possible.
"""

import importlib.metadata as importlib_metadata


def get_version() -> str:
    return importlib_metadata.version("mongofix")


def deep_merge(dict1: dict, dict2: dict) -> dict:
    """Return `dict1` updated recursively with the values of `dict2`"""
    result = dict1.copy()
    for key, value in dict2.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
