"""A thread pool with core and seasonal workers, and sample programs using it."""

__version__ = "0.1.0"
__all__ = ["pool", "samples"]