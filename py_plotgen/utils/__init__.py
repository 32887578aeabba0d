"""
Shared utilities: seeding and logging setup.
"""

from .random import GenerationContext, random_seed
from .logging import configure_logging

__all__ = ['GenerationContext', 'random_seed', 'configure_logging']
