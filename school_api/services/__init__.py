"""
Services Layer

Business logic between the API routers and the record stores.
"""

__all__ = []
