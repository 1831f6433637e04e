# searchscope/cli/interface.py
import sys
import json
import shlex
from pathlib import Path
from typing import List, Dict, Any, Tuple

import click
from click_option_group import optgroup
import structlog

from searchscope import __version__ as app_version
from searchscope.config.settings import SearchOptions, OutputFormat
from searchscope.config.loader import load_and_merge_configs, build_search_options, save_config_to_profile
from searchscope.logging_setup import configure_logging
from searchscope.cli.options import search_options, CLI_PARAM_TO_OPTIONS_ATTR_MAP
from searchscope.cli.console_output import print_scope_summary
from searchscope.core.output import write_to_stdout, write_to_file
from searchscope.core.resolution import ResolvedSearchScope, resolve_search_scope, resolve_search_paths_from_includes
from searchscope.core.ripgrep_args import build_ripgrep_args
from searchscope.exceptions import SearchScopeError

log = structlog.get_logger(__name__)

def _absolute_root_paths(root_paths: Tuple[Path, ...]) -> List[str]:
    return [str(p.expanduser().resolve()) for p in root_paths]

def _cli_overrides(ctx: click.Context, cli_params: Dict[str, Any]) -> Dict[str, Any]:
    # only options actually given on the command line override config files.
    overrides: Dict[str, Any] = {}
    for param_name, attr_name in CLI_PARAM_TO_OPTIONS_ATTR_MAP.items():
        if ctx.get_parameter_source(param_name) != click.core.ParameterSource.COMMANDLINE:
            continue
        value = cli_params[param_name]
        if isinstance(value, tuple):
            value = list(value)
        overrides[attr_name] = value
    return overrides

def _effective_options(ctx: click.Context, cli_params: Dict[str, Any]) -> SearchOptions:
    app_state = ctx.find_object(dict) or {}
    return build_search_options(
        app_state.get("raw_config", {}),
        app_state.get("profile_name"),
        _cli_overrides(ctx, cli_params),
    )

def _save_profile_and_exit(ctx: click.Context, options: SearchOptions, profile_name: str):
    if save_config_to_profile(options, profile_name):
        click.echo(f"Info: Profile '{profile_name}' saved.", err=True)
    else:
        click.echo(f"Info: No non-default options to save for profile '{profile_name}'.", err=True)
    ctx.exit(0)

def _emit(output_text: str, output_file: str):
    if output_file:
        write_to_file(Path(output_file), output_text)
        click.echo(f"Info: Output written to: {output_file}", err=True)
    else:
        write_to_stdout(output_text)

def _scope_to_json(scope: ResolvedSearchScope) -> Dict[str, Any]:
    return {
        "search_paths": scope.search_paths,
        "remaining_includes": scope.remaining_includes,
        "resolved": scope.resolved.to_dict(),
    }

def _fail(e: SearchScopeError):
    log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
    click.secho(f"Error: {e}", fg="red", err=True)
    sys.exit(1)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@optgroup.group("Application Behavior", help="Configuration profiles and logging.")
@optgroup.option("--config-profile", "active_config_profile_name", default=None, help="Load a profile from config file(s).")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--force-json-logs", "force_json_logs_cli", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="searchscope", prog_name="searchscope", help="Show version and exit.")
@click.pass_context
def main_cli_group(ctx: click.Context, active_config_profile_name: str, verbosity_level: int, force_json_logs_cli: bool):
    """searchscope: work out which paths a workspace search should scan,
    turning include patterns like './src/**' into concrete search paths."""

    log_level = "warning"
    if verbosity_level == 1: log_level = "info"
    elif verbosity_level >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=force_json_logs_cli)

    ctx.ensure_object(dict)
    ctx.obj["raw_config"] = load_and_merge_configs()
    ctx.obj["profile_name"] = active_config_profile_name
    log.debug("cli_group_invoked", profile=active_config_profile_name)


@main_cli_group.command("resolve")
@click.argument("root_paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@search_options
@click.pass_context
def resolve_command(ctx: click.Context, root_paths: Tuple[Path, ...], **cli_params: Any):
    """Print the paths to search under ROOT_PATHS."""
    try:
        options = _effective_options(ctx, cli_params)
        if cli_params.get("save_profile_name"):
            _save_profile_and_exit(ctx, options, cli_params["save_profile_name"])

        roots = _absolute_root_paths(root_paths)
        scope = resolve_search_scope(roots, options.include)

        if options.output_format == OutputFormat.JSON:
            output_text = json.dumps(_scope_to_json(scope), indent=2) + "\n"
        else:
            output_text = "".join(f"{p}\n" for p in scope.search_paths)
        _emit(output_text, cli_params.get("output_file"))

        if cli_params.get("show_summary"):
            print_scope_summary(scope, roots)
    except SearchScopeError as e:
        _fail(e)


@main_cli_group.command("rg-args")
@click.argument("search_term")
@click.argument("root_paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@search_options
@click.pass_context
def rg_args_command(ctx: click.Context, search_term: str, root_paths: Tuple[Path, ...], **cli_params: Any):
    """Print the ripgrep command searching ROOT_PATHS for SEARCH_TERM."""
    try:
        options = _effective_options(ctx, cli_params)
        if cli_params.get("save_profile_name"):
            _save_profile_and_exit(ctx, options, cli_params["save_profile_name"])

        roots = _absolute_root_paths(root_paths)
        requested_includes = list(options.include or [])
        search_paths = resolve_search_paths_from_includes(roots, options)
        args = build_ripgrep_args(search_term, search_paths, options)

        if options.output_format == OutputFormat.JSON:
            output_text = json.dumps(args) + "\n"
        else:
            output_text = shlex.join(args) + "\n"
        _emit(output_text, cli_params.get("output_file"))

        if cli_params.get("show_summary"):
            print_scope_summary(resolve_search_scope(roots, requested_includes), roots)
    except SearchScopeError as e:
        _fail(e)
