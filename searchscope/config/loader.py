# searchscope/config/loader.py
"""
Handles loading, merging, and saving of search options from/to TOML files.
"""
import toml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import asdict, fields as dataclass_fields, MISSING
from enum import Enum
import structlog

from searchscope.exceptions import ConfigError

from .settings import SearchOptions, OutputFormat

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".searchscope.toml", "searchscope.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "searchscope"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

CONFIG_KEY_TO_OPTIONS_ATTR_MAP: Dict[str, str] = {
    "include": "include",
    "exclude": "exclude",
    "match_case": "match_case",
    "match_whole_word": "match_whole_word",
    "use_regexp": "use_regexp",
    "include_ignored": "include_ignored",
    "follow_symlinks": "follow_symlinks",
    "max_file_size": "max_file_size",
    "max_results": "max_results",
    "output_format": "output_format",
}

LIST_ATTRS = ("include", "exclude")

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file():
        return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        log.error("config_file_load_error", path=str(file_path), error=str(e))
        return {}
    return data.get("tool", {}).get("searchscope", {}) if file_path.name == "pyproject.toml" else data

def load_and_merge_configs(project_dir: Optional[Path] = None) -> Dict[str, Any]:
    # user-global settings first, then the first project file found overrides them.
    project_dir = project_dir or Path.cwd()
    merged_toml_data: Dict[str, Any] = {}
    if USER_CONFIG_FILE.is_file():
        log.info("loading_user_global_config", path=str(USER_CONFIG_FILE))
        merged_toml_data.update(_load_toml_file_data(USER_CONFIG_FILE))

    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = project_dir / filename
        if not candidate.is_file():
            continue
        project_settings = _load_toml_file_data(candidate)
        if not project_settings:
            continue
        log.info("loading_project_local_config", path=str(candidate))
        user_profiles = merged_toml_data.get("profiles", {})
        project_profiles = project_settings.pop("profiles", {})
        # an absent or empty profiles table leaves the user's profiles as they are.
        if project_profiles and isinstance(project_profiles, dict):
            if isinstance(user_profiles, dict):
                user_profiles.update(project_profiles)
                merged_toml_data["profiles"] = user_profiles
            else:
                merged_toml_data["profiles"] = project_profiles
        merged_toml_data.update(project_settings)
        break

    if not merged_toml_data:
        log.debug("no_configuration_files_loaded")
    return merged_toml_data

def _coerce_option_value(attr_name: str, value: Any) -> Any:
    # toml hands back plain strings and lists; turn them into option types.
    if attr_name == "output_format" and isinstance(value, str):
        return OutputFormat.from_string(value)
    if attr_name in LIST_ATTRS:
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple)):
            return [str(v) for v in value]
        raise ConfigError(f"'{attr_name}' must be a string or a list of strings, got {type(value).__name__}")
    if attr_name == "max_results" and value is not None:
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"'max_results' must be an integer, got {value!r}")
    return value

def build_search_options(
    raw_config: Dict[str, Any],
    profile_name: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> SearchOptions:
    """
    Layers dataclass defaults, top-level config keys, the named profile and
    explicit overrides (e.g. from the command line) into one SearchOptions.
    """
    effective_options: Dict[str, Any] = {}

    for toml_key, attr_name in CONFIG_KEY_TO_OPTIONS_ATTR_MAP.items():
        if toml_key in raw_config:
            effective_options[attr_name] = raw_config[toml_key]

    if profile_name:
        profile_values = raw_config.get("profiles", {}).get(profile_name, {})
        if profile_values:
            log.info("applying_profile_settings", profile=profile_name)
            for toml_key, attr_name in CONFIG_KEY_TO_OPTIONS_ATTR_MAP.items():
                if toml_key in profile_values:
                    effective_options[attr_name] = profile_values[toml_key]
        else:
            log.warning("profile_not_found_in_config_files", profile_name=profile_name)

    for attr_name, value in (overrides or {}).items():
        effective_options[attr_name] = value

    valid_fields = {f.name for f in dataclass_fields(SearchOptions) if f.init}
    final_kwargs = {
        k: _coerce_option_value(k, v) for k, v in effective_options.items() if k in valid_fields
    }
    return SearchOptions(**final_kwargs)

def save_config_to_profile(options_to_save: SearchOptions, profile_name: str, project_dir: Optional[Path] = None) -> bool:
    project_dir = project_dir or Path.cwd()
    target_toml_path = project_dir / ".searchscope.toml"
    if not target_toml_path.exists():
        alt_path = project_dir / "searchscope.toml"
        if alt_path.exists():
            target_toml_path = alt_path
    log.info("attempting_to_save_profile", profile=profile_name, path=str(target_toml_path))

    profile_data: Dict[str, Any] = {}
    options_dict = asdict(options_to_save)

    for attr_name, value in options_dict.items():
        toml_key = next((k for k, v in CONFIG_KEY_TO_OPTIONS_ATTR_MAP.items() if v == attr_name), None)
        if not toml_key:
            continue

        field_def = next(f for f in dataclass_fields(SearchOptions) if f.name == attr_name)
        default_val = field_def.default_factory() if field_def.default_factory is not MISSING else field_def.default
        if value == default_val or value is None:
            continue

        profile_data[toml_key] = value.value if isinstance(value, Enum) else value

    if not profile_data:
        log.info("no_options_to_save_for_profile", profile=profile_name)
        return False

    existing_data: Dict[str, Any] = {}
    if target_toml_path.exists():
        try:
            existing_data = toml.load(target_toml_path)
        except toml.TomlDecodeError as e:
            raise ConfigError(f"Could not read existing TOML {target_toml_path} to save profile: {e}")

    if profile_name.upper() == "DEFAULT":
        profiles_bak = existing_data.pop("profiles", None)
        existing_data.update(profile_data)
        if profiles_bak is not None:
            existing_data["profiles"] = profiles_bak
    else:
        existing_data.setdefault("profiles", {})[profile_name] = profile_data

    try:
        with target_toml_path.open("w", encoding="utf-8") as f:
            toml.dump(existing_data, f)
    except OSError as e:
        raise ConfigError(f"Error writing profile '{profile_name}' to {target_toml_path}: {e}")
    log.info("profile_saved_successfully", profile=profile_name, path=str(target_toml_path))
    return True
