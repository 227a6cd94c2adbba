"""Gymnasium environment for baduk."""

from .gym_env import GoEnv

__all__ = ["GoEnv"]
