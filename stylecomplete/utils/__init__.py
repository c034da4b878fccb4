from .cache import CacheError, CacheManager

__all__ = ["CacheError", "CacheManager"]
