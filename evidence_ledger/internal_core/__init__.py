from .config import RegistryConfig, load_config
from .errors import AlreadyExistsError, NotFoundError, RegistryError, UnauthorizedError
from .registry import EvidenceRegistry

__all__ = [
    "RegistryConfig",
    "load_config",
    "EvidenceRegistry",
    "RegistryError",
    "AlreadyExistsError",
    "NotFoundError",
    "UnauthorizedError",
]
