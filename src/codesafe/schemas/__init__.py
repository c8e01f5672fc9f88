"""Pydantic configuration schemas for codesafe.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing overrides (forgiving, minimal)
"""

from codesafe.schemas.resolve import resolve_config
from codesafe.schemas.internal import InternalConfig
from codesafe.schemas.param import ParamConfig
from codesafe.schemas.user import UserConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
]
