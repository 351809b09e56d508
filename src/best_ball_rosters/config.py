from __future__ import annotations

from dataclasses import dataclass

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

_DEFAULTS: dict[str, object] = {
    "data": {
        "rosters": "data/rosters.json",
        "adp": "data/adp.csv",
        "draftables": "data/draftables.json",
        "contest_draft_group_id": "",
        "timeout_seconds": 30.0,
    },
    "stacks": {
        "min_size": 2,
        "max_size": 20,
    },
    "search": {
        "limit": 20,
        "min_query_length": 2,
    },
}


@dataclass(frozen=True)
class DataSettings:
    """Where the three datasets live.

    Attributes:
        rosters: Path or URL of the roster export JSON.
        adp: Path or URL of the ADP CSV.
        draftables: Path or URL of the draftables JSON.
        contest_draft_group_id: Only rosters from this draft group are kept; None keeps all.
        timeout_seconds: HTTP timeout for URL locations.
    """

    rosters: str
    adp: str
    draftables: str
    contest_draft_group_id: int | None
    timeout_seconds: float


@dataclass(frozen=True)
class AnalysisSettings:
    stack_min_size: int
    stack_max_size: int
    search_limit: int
    search_min_query_length: int


def create_config(
    yaml_path: str = "config.yaml",
    env_prefix: str = "BEST_BALL",
    defaults: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file; a missing file is ignored.
        env_prefix: Prefix for environment variables, e.g. ``BEST_BALL__DATA__ADP``.
        defaults: Default configuration values.
    """
    if defaults is None:
        defaults = _DEFAULTS

    return ConfigurationSet(
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    )


def _optional_int(value: object) -> int | None:
    text = str(value).strip() if value is not None else ""
    return int(text) if text else None


def load_data_settings(cfg: ConfigurationSet | None = None) -> DataSettings:
    if cfg is None:
        cfg = create_config()
    return DataSettings(
        rosters=str(cfg["data.rosters"]),
        adp=str(cfg["data.adp"]),
        draftables=str(cfg["data.draftables"]),
        contest_draft_group_id=_optional_int(cfg["data.contest_draft_group_id"]),
        timeout_seconds=float(str(cfg["data.timeout_seconds"])),
    )


def load_analysis_settings(cfg: ConfigurationSet | None = None) -> AnalysisSettings:
    if cfg is None:
        cfg = create_config()
    return AnalysisSettings(
        stack_min_size=int(str(cfg["stacks.min_size"])),
        stack_max_size=int(str(cfg["stacks.max_size"])),
        search_limit=int(str(cfg["search.limit"])),
        search_min_query_length=int(str(cfg["search.min_query_length"])),
    )
