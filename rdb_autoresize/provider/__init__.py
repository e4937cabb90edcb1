"""Managed database provider adapters."""

import importlib
from typing import Any, Dict, Optional

from .base import DatabaseProvider
from .dummy import SimulatedProvider
from .models import (
    ELIGIBLE_STATUSES,
    RESIZABLE_VOLUME_TYPES,
    InstanceDescriptor,
    InstanceStatus,
    MetricPoint,
    MetricSeries,
    Volume,
    VolumeType,
)

# Registered provider names and the classes they resolve to
PROVIDER_TYPES = {
    "dummy": ".dummy.SimulatedProvider",
}


def _resolve_class(name: str) -> type:
    if name in PROVIDER_TYPES:
        module_path = PROVIDER_TYPES[name]
        module_name, class_name = module_path.rsplit(".", 1)
        module = importlib.import_module(module_name, package=__name__)
    elif ":" in name:
        module_name, class_name = name.split(":", 1)
        module = importlib.import_module(module_name)
    else:
        raise ValueError(f"Unsupported provider: {name}")

    provider_class = getattr(module, class_name, None)
    if provider_class is None:
        raise ValueError(f"Provider class {class_name} not found in {module.__name__}")
    if not (isinstance(provider_class, type) and issubclass(provider_class, DatabaseProvider)):
        raise ValueError(f"{name} is not a DatabaseProvider")
    return provider_class


def load_provider(name: str, options: Optional[Dict[str, Any]] = None) -> DatabaseProvider:
    """Instantiate a provider by registered name or ``module:Class`` path.

    Args:
        name: Registered provider name (e.g. ``dummy``) or dotted path.
        options: Keyword arguments passed to the provider constructor.

    Raises:
        ValueError: If the provider cannot be resolved or constructed.
        ImportError: If the provider module cannot be imported.
    """
    provider_class = _resolve_class(name)
    try:
        return provider_class(**(options or {}))
    except TypeError as e:
        raise ValueError(f"Invalid options for provider {name}: {e}") from e


__all__ = [
    "DatabaseProvider",
    "SimulatedProvider",
    "InstanceDescriptor",
    "InstanceStatus",
    "MetricPoint",
    "MetricSeries",
    "Volume",
    "VolumeType",
    "ELIGIBLE_STATUSES",
    "RESIZABLE_VOLUME_TYPES",
    "PROVIDER_TYPES",
    "load_provider",
]
