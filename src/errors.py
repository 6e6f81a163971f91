class RoutingError(Exception):
    """Base exception for route calculation failures."""


class InvalidQueryError(RoutingError, ValueError):
    """Raised when a query coordinate is malformed or outside graph coverage."""


class GraphInconsistencyError(RoutingError):
    """Raised when the road graph references data it does not hold."""
