"""
Adapters bridging the canonical request model to older conversion routines.
"""

from .legacy import AdaptedPlugin, AdaptedRequest, LegacyRequest, adapt

__all__ = ["AdaptedPlugin", "AdaptedRequest", "LegacyRequest", "adapt"]
