class DegenerateGeometryError(ValueError):
    """Raised when inputs leave the pattern or projection undefined."""
