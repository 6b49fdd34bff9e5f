"""
Binarizer Factory Module - Registry and factory for binarizer instantiation.
"""

from typing import Dict, List, Type, Any

from .base import Binarizer


# Global registry of binarizers
_BINARIZERS: Dict[str, Type[Binarizer]] = {}


def register_binarizer(cls: Type[Binarizer]) -> Type[Binarizer]:
    """
    Decorator to register a binarizer class.

    Usage:
        @register_binarizer
        class MyBinarizer(Binarizer):
            name = "mine"
            ...

    Args:
        cls: Binarizer class to register

    Returns:
        The same class (for decorator chaining)
    """
    if not issubclass(cls, Binarizer):
        raise TypeError(f"{cls} must be a subclass of Binarizer")
    _BINARIZERS[cls.name] = cls
    return cls


def create_binarizer(name: str, **kwargs: Any) -> Binarizer:
    """
    Create a binarizer instance by name.

    Args:
        name: Binarizer name ("simple" or "adaptive")
        **kwargs: Additional arguments passed to the constructor

    Returns:
        Binarizer instance

    Raises:
        ValueError: If binarizer name not found
    """
    if name not in _BINARIZERS:
        available = ", ".join(_BINARIZERS.keys())
        raise ValueError(f"Unknown binarizer: {name}. Available: {available}")
    return _BINARIZERS[name](**kwargs)


def get_binarizer_names() -> List[str]:
    """List registered binarizer names."""
    return list(_BINARIZERS.keys())


def get_binarizer_info() -> List[Dict[str, str]]:
    """
    Get name and description for all registered binarizers.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    return [
        {"name": cls.name, "description": cls.description}
        for cls in _BINARIZERS.values()
    ]
