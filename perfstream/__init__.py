"""Read perf parser stream values, prepare parser runs and build perf record command lines."""

__version__ = "0.1.0"
__all__ = ["datastream", "parserjob", "recording"]