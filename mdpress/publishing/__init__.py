from .publisher import Publisher, discover_sources

__all__ = ["Publisher", "discover_sources"]
