from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
import structlog

log = structlog.get_logger(__name__)

DEFAULT_MAX_FILE_SIZE = "20M"

class OutputFormat(Enum):
    # defines how resolved scopes and argument vectors are printed.
    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_string(cls, s: Optional[str]) -> "OutputFormat":
        if not s:
            return cls.TEXT
        try:
            return cls(s.lower())
        except ValueError:
            log.warning("invalid_output_format_string", input_string=s)
            return cls.TEXT

DEFAULT_OUTPUT_FORMAT = OutputFormat.TEXT

@dataclass
class SearchOptions:
    # options for a single workspace search. `include` is consumed by the
    # path resolver; patterns it turns into search paths are removed from it.
    include: Optional[List[str]] = None
    exclude: Optional[List[str]] = None
    match_case: bool = False
    match_whole_word: bool = False
    use_regexp: bool = False
    include_ignored: bool = False
    follow_symlinks: bool = False
    max_file_size: Optional[str] = None
    max_results: Optional[int] = None
    output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT
