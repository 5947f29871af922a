"""Request-scoped dependencies."""
