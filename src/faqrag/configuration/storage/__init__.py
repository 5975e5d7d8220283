"""Storage configurations for faqrag."""

from faqrag.configuration.storage.local import LocalStorage

__all__ = ["LocalStorage"]
