"""Configuration for gitlane"""

from gitlane.config.settings import Settings

__all__ = ["Settings"]
