from .curl import PhpCurlPlugin
from .guzzle import GuzzlePlugin

__all__ = ["GuzzlePlugin", "PhpCurlPlugin"]
