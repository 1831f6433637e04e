# searchscope/core/ripgrep_args.py
"""
Builds the ripgrep command line for a resolved search scope.

Include patterns that the resolver could not turn into search paths are passed
on as `--glob` arguments, together with the exclude patterns.
"""
import re
from typing import List, Optional, Sequence
import structlog

from searchscope.config.settings import SearchOptions, DEFAULT_MAX_FILE_SIZE

log = structlog.get_logger(__name__)

RIPGREP_EXECUTABLE = "rg"

def glob_args_for_pattern(pattern: str, exclude: bool = False) -> List[str]:
    # './x' is anchored at the search path; bare names match at any depth.
    glob = pattern.strip().replace("\\", "/")
    if not glob:
        # an empty glob would match, or exclude, every file.
        return []
    if glob.startswith("./"):
        glob = "/" + glob[2:]
    elif not glob.startswith("/") and not glob.startswith("**/"):
        glob = f"**/{glob}"

    globs = [glob]
    if not glob.endswith("*"):
        # let a folder name match everything below it.
        globs.append(f"{glob.rstrip('/')}/**")

    prefix = "!" if exclude else ""
    return [f"--glob={prefix}{g}" for g in globs]

def build_search_expression(search_term: str, opts: SearchOptions) -> str:
    if opts.match_whole_word:
        term = search_term if opts.use_regexp else re.escape(search_term)
        return rf"\b{term}\b"
    return search_term

def build_ripgrep_args(
    search_term: str,
    search_paths: Sequence[str],
    opts: Optional[SearchOptions] = None,
) -> List[str]:
    """
    Returns the full argument vector, executable first, for searching
    `search_paths` for `search_term` with the given options.
    """
    opts = opts or SearchOptions()
    args: List[str] = [RIPGREP_EXECUTABLE, "--hidden", "--json"]

    args.append("--case-sensitive" if opts.match_case else "--ignore-case")
    if opts.include_ignored:
        args.append("--no-ignore")
    if opts.follow_symlinks:
        args.append("--follow")

    max_file_size = (opts.max_file_size or "").strip() or DEFAULT_MAX_FILE_SIZE
    args.append(f"--max-filesize={max_file_size}")
    if opts.max_results:
        args.append(f"--max-count={opts.max_results}")

    for pattern in opts.include or []:
        for glob_arg in glob_args_for_pattern(pattern):
            if glob_arg not in args:
                args.append(glob_arg)
    for pattern in opts.exclude or []:
        for glob_arg in glob_args_for_pattern(pattern, exclude=True):
            if glob_arg not in args:
                args.append(glob_arg)

    if not (opts.use_regexp or opts.match_whole_word):
        args.append("--fixed-strings")

    args.extend(["-e", build_search_expression(search_term, opts), "--"])
    args.extend(search_paths)

    log.debug("ripgrep_args_built", arg_count=len(args), search_path_count=len(search_paths))
    return args
