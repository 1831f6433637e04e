# searchscope/cli/options.py
"""
Reusable groups of Click options shared by the searchscope commands.
Uses click_option_group for better help message formatting.
"""
import click
from click_option_group import optgroup

from searchscope.config.settings import OutputFormat, DEFAULT_MAX_FILE_SIZE, DEFAULT_OUTPUT_FORMAT

# maps cli parameter names to SearchOptions attributes.
CLI_PARAM_TO_OPTIONS_ATTR_MAP = {
    "include": "include",
    "exclude": "exclude",
    "match_case": "match_case",
    "match_whole_word": "match_whole_word",
    "use_regexp": "use_regexp",
    "include_ignored": "include_ignored",
    "follow_symlinks": "follow_symlinks",
    "max_file_size": "max_file_size",
    "max_results": "max_results",
    "output_format_str": "output_format",
}

def search_options(cmd):
    """Applies the search scope and matching options to a Click command."""
    decorators = [
        optgroup.group("Scope Options", help="Narrow down which paths are searched."),
        optgroup.option("-i", "--include", "include", multiple=True, help="Include glob pattern. './dir/**' or '/abs/dir/**' become search paths when they exist."),
        optgroup.option("-x", "--exclude", "exclude", multiple=True, help="Exclude glob pattern, passed to the search engine."),
        optgroup.option("--include-ignored", "include_ignored", is_flag=True, default=False, help="Also search files ignored by .gitignore."),
        optgroup.option("-L", "--follow-symlinks", "follow_symlinks", is_flag=True, default=False, help="Follow symbolic links."),
        optgroup.option("--max-filesize", "max_file_size", default=None, metavar="SIZE", help=f"Skip files larger than SIZE. Default: {DEFAULT_MAX_FILE_SIZE}."),
        optgroup.group("Matching Options", help="How the search term is matched."),
        optgroup.option("--match-case", "match_case", is_flag=True, default=False, help="Case sensitive search."),
        optgroup.option("-w", "--whole-word", "match_whole_word", is_flag=True, default=False, help="Only match whole words."),
        optgroup.option("-r", "--regexp", "use_regexp", is_flag=True, default=False, help="Treat the search term as a regular expression."),
        optgroup.option("-m", "--max-results", "max_results", type=click.IntRange(min=1), default=None, help="Stop after this many matches per file."),
        optgroup.group("Output Options", help="Control what is printed."),
        optgroup.option("-F", "--format", "output_format_str", type=click.Choice([f.value for f in OutputFormat]), default=None, help=f"Output format. Default: {DEFAULT_OUTPUT_FORMAT.value}."),
        optgroup.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True), default=None, help="Write the output to this file."),
        optgroup.option("--summary/--no-summary", "show_summary", default=False, help="Print a table of resolved patterns on stderr."),
        optgroup.option("--save", "save_profile_name", type=str, metavar="PROFILE_NAME", default=None, help="Save options to a profile in the project's .searchscope.toml. Exits after saving."),
    ]
    for decorator in reversed(decorators):
        cmd = decorator(cmd)
    return cmd
