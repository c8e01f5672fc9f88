"""Configuration resolution and merging logic.

resolve_config() is the single entrypoint: it merges ParamConfig and
UserConfig in precedence order and returns a validated InternalConfig.

Precedence (highest to lowest):
1. UserConfig (caller overrides)
2. ParamConfig (expert defaults)
"""

from typing import Optional, Union

from codesafe.schemas.internal import InternalConfig
from codesafe.schemas.param import ParamConfig
from codesafe.schemas.user import UserConfig


def deep_merge(base: dict, *overrides: dict) -> dict:
    """Deep merge multiple dictionaries.

    Later dictionaries override earlier ones. Nested dictionaries are
    merged recursively; other values are replaced.

    Parameters
    ----------
    base : dict
        Base dictionary (lowest priority)
    *overrides : dict
        Override dictionaries (higher priority, left to right)

    Returns
    -------
    dict
        Merged dictionary

    Examples
    --------
    >>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}})
    {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result = base.copy()

    for override in overrides:
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            else:
                result[key] = value

    return result


def resolve_config(
    param_cfg: Optional[Union[dict, ParamConfig]] = None,
    user_cfg: Optional[Union[dict, UserConfig]] = None,
) -> InternalConfig:
    """Resolve the runtime configuration from expert defaults and user overrides.

    Parameters
    ----------
    param_cfg : dict or ParamConfig, optional
        Expert configuration. None means ``ParamConfig()``.
    user_cfg : dict or UserConfig, optional
        User overrides. None or empty means no overrides.

    Returns
    -------
    InternalConfig
        Fully validated, immutable runtime configuration

    Raises
    ------
    ValidationError
        If any config fails Pydantic validation

    Examples
    --------
    >>> config = resolve_config(None, {"TRUTHY": "yes,ja"})
    >>> sorted(config.parse.truthy_tokens)
    ['ja', 'yes']
    """
    if param_cfg is None:
        param = ParamConfig()
    elif not isinstance(param_cfg, ParamConfig):
        param = ParamConfig.model_validate(param_cfg)
    else:
        param = param_cfg

    if user_cfg is None or (isinstance(user_cfg, dict) and not user_cfg):
        user = UserConfig()
    elif not isinstance(user_cfg, UserConfig):
        user = UserConfig.model_validate(user_cfg)
    else:
        user = user_cfg

    merged = deep_merge(param.model_dump(), user.to_internal_overrides())

    # Re-validate overridden tokens through ParamConfig for normalization
    normalized = ParamConfig.model_validate(merged)

    return InternalConfig.model_validate(normalized.model_dump())
