"""searchscope: resolve the paths a workspace text search should scan."""

__version__ = "0.1.0"
