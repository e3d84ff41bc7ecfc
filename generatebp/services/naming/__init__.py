"""Soong module naming."""

from .service import PLATFORM_MODULE_NAMES, NamingStrategy

__all__ = ["PLATFORM_MODULE_NAMES", "NamingStrategy"]
