"""
Passguard Shared Module
=======================

Configuration management, structured logging, console presentation and
numeric helpers shared across the Passguard packages.
"""

from shared.config import PassguardConfig, get_config

__all__ = ["PassguardConfig", "get_config"]
