"""Roar - 2D survival arena: tap the shadows, roar when the meter is full"""

from .session import GameSession, SessionPhase, SessionState
from .collisions import InputOutcome
from .roar_env import RoarEnv, run_random_episode

__all__ = ['GameSession', 'SessionPhase', 'SessionState', 'InputOutcome', 'RoarEnv', 'run_random_episode']
