"""
Acquisition Factory

Registry of acquisition strategies. A strategy is picked once at startup
and injected into the scanner.
"""

from typing import Any, Dict, List, Type

from .base import AcquisitionStrategy


# Registry of available strategies
_ACQUISITIONS: Dict[str, Type[AcquisitionStrategy]] = {}


def register_acquisition(cls: Type[AcquisitionStrategy]) -> Type[AcquisitionStrategy]:
    """
    Decorator to register an acquisition strategy class.

    Args:
        cls: AcquisitionStrategy subclass

    Returns:
        The same class
    """
    if not issubclass(cls, AcquisitionStrategy):
        raise TypeError(f"{cls} must be a subclass of AcquisitionStrategy")
    _ACQUISITIONS[cls.name] = cls
    return cls


def create_acquisition(name: str = "local", **config: Any) -> AcquisitionStrategy:
    """
    Create an acquisition strategy by name.

    Args:
        name: Strategy identifier. Available types:
            - "local" (default): files and URLs plus everything in memory
            - "memory": registered elements and raw pixel data only
        **config: Strategy-specific options (e.g. timeout for "local")

    Returns:
        AcquisitionStrategy instance

    Raises:
        ValueError: If name is not recognized
    """
    if name not in _ACQUISITIONS:
        available = ", ".join(_ACQUISITIONS.keys())
        raise ValueError(f"Unknown acquisition: {name}. Available: {available}")
    return _ACQUISITIONS[name](**config)


def available_acquisitions() -> List[str]:
    """List registered acquisition strategy names."""
    return list(_ACQUISITIONS.keys())
