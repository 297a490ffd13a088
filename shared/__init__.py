"""
Keysmith Shared Module
======================

Configuration, logging, console and data-model infrastructure shared by
the Keysmith packages.
"""

from shared.config import KeysmithConfig, get_config

__all__ = ["KeysmithConfig", "get_config"]
