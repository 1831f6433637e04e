# searchscope/core/resolution/pattern_map.py
from typing import Dict, Iterator, List, Tuple

from searchscope.util import push_if_not_included


class PatternPathMap:
    """
    Ordered multimap from an include pattern to the paths it resolved to.

    Patterns keep the order in which they were first added. Paths are unique
    per pattern but may repeat across patterns.
    """

    def __init__(self):
        self._paths_by_pattern: Dict[str, List[str]] = {}

    def append_unique(self, pattern: str, path: str) -> None:
        existing = self._paths_by_pattern.get(pattern)
        self._paths_by_pattern[pattern] = push_if_not_included(existing, path)

    def patterns(self) -> List[str]:
        return list(self._paths_by_pattern)

    def paths_for(self, pattern: str) -> List[str]:
        return list(self._paths_by_pattern.get(pattern, []))

    def flattened_paths(self) -> List[str]:
        # concatenation in pattern order, no dedup across patterns.
        return [path for paths in self._paths_by_pattern.values() for path in paths]

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        for pattern, paths in self._paths_by_pattern.items():
            yield pattern, list(paths)

    def to_dict(self) -> Dict[str, List[str]]:
        return {pattern: list(paths) for pattern, paths in self._paths_by_pattern.items()}

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._paths_by_pattern

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths_by_pattern)

    def __len__(self) -> int:
        return len(self._paths_by_pattern)

    def __repr__(self) -> str:
        return f"PatternPathMap({self._paths_by_pattern!r})"
