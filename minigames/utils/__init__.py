"""Utility modules for the mini arcade project."""

from .logger import get_logger, setup_logging, LogLevel
from .rng import GameRandom

__all__ = ['get_logger', 'setup_logging', 'LogLevel', 'GameRandom']
