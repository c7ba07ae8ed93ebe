"""A fast, minimal build and test tool for Java projects."""

__version__ = "0.1.0"
__all__ = ["__version__"]