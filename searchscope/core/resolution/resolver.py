# searchscope/core/resolution/resolver.py
from dataclasses import dataclass
from typing import List, Optional, Sequence
import structlog

from searchscope.config.settings import SearchOptions
from searchscope.core.resolution.glob_paths import resolve_include_folder_from_glob
from searchscope.core.resolution.pattern_map import PatternPathMap

log = structlog.get_logger(__name__)

@dataclass(frozen=True)
class ResolvedSearchScope:
    # paths to hand to the search engine, plus the include patterns it still has to match.
    search_paths: List[str]
    remaining_includes: Optional[List[str]]
    resolved: PatternPathMap

    @property
    def narrowed(self) -> bool:
        # true when include patterns replaced the workspace roots.
        return len(self.resolved) > 0

def resolve_pattern_to_paths_map(patterns: Sequence[str], search_paths: Sequence[str]) -> PatternPathMap:
    """
    Resolves each pattern against every search path. Patterns that do not map to
    an existing path under any root are left out of the result.
    """
    pattern_to_paths = PatternPathMap()

    for pattern in patterns:
        for root in search_paths:
            found_path = resolve_include_folder_from_glob(root, pattern)
            if found_path:
                pattern_to_paths.append_unique(pattern, found_path)

    return pattern_to_paths

def resolve_search_scope(root_paths: Sequence[str], include: Optional[Sequence[str]]) -> ResolvedSearchScope:
    """
    Works out which paths a search should scan.

    By default these are the workspace root paths. Include patterns that reduce to
    an existing file or folder (e.g. './src/**' or '/abs/dir/**') replace the roots
    and are dropped from the remaining include patterns. Patterns that do not
    resolve stay in `remaining_includes` for the search engine to treat as globs.

    Neither argument is modified.
    """
    if not include:
        remaining = None if include is None else list(include)
        return ResolvedSearchScope(list(root_paths), remaining, PatternPathMap())

    includes_as_paths = resolve_pattern_to_paths_map(include, root_paths)
    remaining_includes = [pattern for pattern in include if pattern not in includes_as_paths]

    if len(includes_as_paths) > 0:
        search_paths = includes_as_paths.flattened_paths()
        log.info(
            "search_paths_resolved_from_includes",
            resolved_patterns=includes_as_paths.patterns(),
            path_count=len(search_paths),
        )
    else:
        search_paths = list(root_paths)
        log.debug("no_include_pattern_resolved_using_roots", root_count=len(root_paths))

    return ResolvedSearchScope(search_paths, remaining_includes, includes_as_paths)

def resolve_search_paths_from_includes(root_paths: List[str], opts: Optional[SearchOptions]) -> List[str]:
    """
    Returns the paths to search for `opts`: either the workspace roots or the
    validated paths derived from `opts.include`.

    Any include pattern that was turned into a search path is removed from
    `opts.include`, which is replaced by a new list.
    """
    if opts is None or not opts.include:
        return root_paths

    scope = resolve_search_scope(root_paths, opts.include)
    opts.include = scope.remaining_includes
    return scope.search_paths if scope.narrowed else root_paths
