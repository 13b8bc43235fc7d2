"Collision-free name registry package."

from importlib import metadata

from .models import MAX_SUFFIX, NameExhaustedError, NameRegistryError
from .registry import NameRegistry, SynchronizedNameRegistry

__all__ = [
    "MAX_SUFFIX",
    "NameExhaustedError",
    "NameRegistry",
    "NameRegistryError",
    "SynchronizedNameRegistry",
    "__version__",
]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return metadata.version("name-registry")
        except metadata.PackageNotFoundError:  # pragma: no cover - during editable dev installs
            return "0.0.0"
    raise AttributeError(name)
