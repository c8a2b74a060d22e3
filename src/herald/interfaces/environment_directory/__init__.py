"""HERALD Environment Directory Interface Package"""

from .environment_directory import EnvironmentDirectory
from .errors import (
    EnvironmentAlreadyExistsError,
    EnvironmentDirectoryError,
    InvalidEnvironmentError,
)

__all__ = [
    "EnvironmentAlreadyExistsError",
    "EnvironmentDirectory",
    "EnvironmentDirectoryError",
    "InvalidEnvironmentError",
]
