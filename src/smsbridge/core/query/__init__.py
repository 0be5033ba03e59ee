from .builder import MAX_LIMIT, MIN_LIMIT, Box, MessageFilter, Predicate, QuerySpec, build_query, clamp_limit

__all__ = [
    "MIN_LIMIT",
    "MAX_LIMIT",
    "Box",
    "MessageFilter",
    "Predicate",
    "QuerySpec",
    "build_query",
    "clamp_limit",
]
