"""
Loader configuration.

Defaults reproduce the reference CLF loading behavior; every option is an
opt-in deviation from it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LoaderConfig:
    """
    Options for :func:`clflut.load_clf`.

    Attributes:
        reject_degenerate_range: Fail validation of a Range whose input
            bounds are equal instead of letting scale() return inf/NaN
        ignore_namespaces: Match element names by local name, so documents
            declaring ``xmlns="urn:AMPAS:CLF:v3.0"`` load unchanged
    """

    reject_degenerate_range: bool = False
    ignore_namespaces: bool = True

    def __post_init__(self):
        """Validate configuration parameters."""
        for name in ("reject_degenerate_range", "ignore_namespaces"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise TypeError(f"{name} must be bool, got {type(value).__name__}")


DEFAULT_CONFIG = LoaderConfig()
