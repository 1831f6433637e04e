# searchscope/config/__init__.py
"""
Search option defaults and TOML configuration loading for searchscope.
"""
from .settings import SearchOptions, OutputFormat

__all__ = ["SearchOptions", "OutputFormat"]
