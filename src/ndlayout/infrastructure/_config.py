"""
Runtime configuration for ndlayout.

Configuration is read once from environment variables and held in an
immutable `NDLayoutConfig`. Tests and embedding applications can replace it
with `set_config(...)` and restore the environment-derived defaults with
`reset_config()`.

Environment variables
---------------------
NDLAYOUT_ORDER
    Default element ordering for new arrays, "c" (default) or "f".
NDLAYOUT_EPS
    Absolute tolerance used by array equality. Defaults to 1e-5.
NDLAYOUT_DTYPE
    Element type of freshly allocated buffers, "float64" (default) or
    "float32".
NDLAYOUT_DEBUG
    Any value other than "", "0", "false", "no", "off" enables debug logging
    to the console.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

import numpy as np

from ..domain._ordering import Ordering

_FALSY = ("", "0", "false", "no", "off")
_DTYPES = {"float64": np.float64, "double": np.float64, "float32": np.float32, "float": np.float32}


@dataclass(frozen=True)
class NDLayoutConfig:
    """
    Immutable library settings.

    Attributes
    ----------
    default_order : Ordering
        Ordering used when an array is created without an explicit one.
    eps_threshold : float
        Absolute tolerance for element comparison in `NDArray.__eq__`.
    dtype : type
        numpy scalar type of buffers allocated by the default factory.
    debug : bool
        Whether debug logging is attached to a console handler.
    """

    default_order: Ordering = Ordering.C
    eps_threshold: float = 1e-5
    dtype: type = np.float64
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "NDLayoutConfig":
        """
        Build a configuration from environment variables.

        Parameters
        ----------
        environ : Optional[Mapping[str, str]], optional
            Mapping to read from. Defaults to `os.environ`.

        Returns
        -------
        NDLayoutConfig
            The parsed configuration.

        Raises
        ------
        ValueError
            If a variable holds an unsupported value.
        """
        env = os.environ if environ is None else environ

        order = Ordering.parse(env.get("NDLAYOUT_ORDER", "c") or "c")

        raw_eps = env.get("NDLAYOUT_EPS", "")
        try:
            eps = float(raw_eps) if raw_eps else cls.eps_threshold
        except ValueError as e:
            raise ValueError(f"NDLAYOUT_EPS must be a float, got {raw_eps!r}") from e
        if eps < 0:
            raise ValueError(f"NDLAYOUT_EPS must be non-negative, got {eps}")

        raw_dtype = (env.get("NDLAYOUT_DTYPE", "float64") or "float64").lower()
        if raw_dtype not in _DTYPES:
            raise ValueError(
                f"NDLAYOUT_DTYPE must be one of {sorted(_DTYPES)}, got {raw_dtype!r}"
            )

        debug = env.get("NDLAYOUT_DEBUG", "0").strip().lower() not in _FALSY

        return cls(
            default_order=order,
            eps_threshold=eps,
            dtype=_DTYPES[raw_dtype],
            debug=debug,
        )

    def with_overrides(self, **changes) -> "NDLayoutConfig":
        """Return a copy with the given fields replaced."""
        if "default_order" in changes:
            changes["default_order"] = Ordering.parse(changes["default_order"])
        return replace(self, **changes)


_config: Optional[NDLayoutConfig] = None


def get_config() -> NDLayoutConfig:
    """Return the active configuration, loading it from the environment once."""
    global _config
    if _config is None:
        _config = NDLayoutConfig.from_env()
    return _config


def set_config(config: NDLayoutConfig) -> None:
    """Replace the active configuration."""
    global _config
    _config = config


def reset_config() -> None:
    """Discard the active configuration so the next access re-reads the environment."""
    global _config
    _config = None
