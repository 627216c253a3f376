from .config import Parameters
from .exceptions import ConfigurationError, SpawnError, TimeThisError

__version__ = "0.1.0"

__all__ = ["Parameters", "ConfigurationError", "SpawnError", "TimeThisError"]
