"""Active runtime configuration for codesafe.

Holds the InternalConfig every component reads. It starts as the resolved
expert defaults; applications may call configure() once at startup to
apply overrides.

    from codesafe.config import configure
    configure({"TRUTHY": "yes,ja", "ABSORBED_LEVEL": "info"})
"""

import logging
import threading
from typing import Optional, Union

from codesafe.schemas import InternalConfig, ParamConfig, UserConfig, resolve_config

__all__ = ['get_config', 'configure']

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_active: InternalConfig = resolve_config(ParamConfig(), None)


def get_config() -> InternalConfig:
    """Return the active configuration."""
    return _active


def configure(
    user_cfg: Optional[Union[dict, UserConfig]] = None,
    param_cfg: Optional[Union[dict, ParamConfig]] = None,
) -> InternalConfig:
    """Resolve and activate a new configuration.

    Parameters
    ----------
    user_cfg : dict or UserConfig, optional
        User overrides.
    param_cfg : dict or ParamConfig, optional
        Replacement expert defaults.

    Returns
    -------
    InternalConfig
        The configuration now active.
    """
    global _active
    resolved = resolve_config(param_cfg, user_cfg)
    with _lock:
        _active = resolved
    logger.debug(f"codesafe configuration updated: {resolved}")
    return resolved
