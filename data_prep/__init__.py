"""
Data preparation — loading JSON configurations and validating them.
"""

from .loader import parse_config, load_config
from .validators import ValidationResult, validate_config

__all__ = [
    "parse_config",
    "load_config",
    "ValidationResult",
    "validate_config",
]
