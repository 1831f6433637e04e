# searchscope/core/resolution/__init__.py
"""
Turns include patterns that name a single file or folder into search paths.

Patterns like './src/**' or '/abs/dir/**' are resolved against the workspace
roots and checked on disk; every other pattern is left for the search engine.
"""
from .glob_paths import strip_glob_suffix, resolve_include_folder_from_glob
from .pattern_map import PatternPathMap
from .resolver import (
    ResolvedSearchScope,
    resolve_pattern_to_paths_map,
    resolve_search_scope,
    resolve_search_paths_from_includes,
)

__all__ = [
    "PatternPathMap",
    "ResolvedSearchScope",
    "resolve_include_folder_from_glob",
    "resolve_pattern_to_paths_map",
    "resolve_search_paths_from_includes",
    "resolve_search_scope",
    "strip_glob_suffix",
]
