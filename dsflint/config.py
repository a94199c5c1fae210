# dsflint/config.py
from dataclasses import dataclass
from pathlib import Path
from typing import TypedDict

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from dsflint.common.constants import (
    DEFAULT_CONFIG_FILE_NAME,
    DEFAULT_FAIL_ON_WARN,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SEED_TERMINOLOGY,
    ENV_API_VERSION,
    ENV_FAIL_ON_WARN,
    ENV_LOG_LEVEL,
    ENV_REPORT_DIR,
    ENV_SEED_TERMINOLOGY,
    LOG_LEVELS,
    get_env_bool,
    get_env_str,
    get_project_root_override,
)
from dsflint.common.exceptions import ConfigurationError
from dsflint.models.enums import ApiVersion


class LintConfigDict(TypedDict, total=False):
    """TypedDict for lint configuration dictionary"""
    project_root: str | None
    api_version: str | None
    report_dir: str | None
    fail_on_warn: bool
    seed_terminology: bool
    log_level: str


def _parse_api_version(value: str | None) -> ApiVersion | None:
    if value is None or value.lower() in ("", "auto", ApiVersion.UNKNOWN.value):
        return None
    try:
        return ApiVersion(value.lower())
    except ValueError as e:
        raise ConfigurationError(f"Invalid api_version: {value}", config_key="api_version") from e


def _optional_path(value: str | Path | None) -> Path | None:
    if value is None or not str(value).strip():
        return None
    return Path(value).expanduser().resolve()


@dataclass(frozen=True)
class LintConfig:
    """Configuration for a dsflint run"""

    # Project
    project_root: Path | None = None
    api_version: ApiVersion | None = None  # None: detect from the project

    # Outcome and output
    report_dir: Path | None = None
    fail_on_warn: bool = DEFAULT_FAIL_ON_WARN

    # Run behaviour
    seed_terminology: bool = DEFAULT_SEED_TERMINOLOGY
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        """Validate configuration after initialization"""
        self._validate_config()

    @classmethod
    def from_env(cls) -> 'LintConfig':
        """Create configuration from ``DSFLINT_*`` environment variables"""
        return cls(
            project_root=_optional_path(get_project_root_override()),
            api_version=_parse_api_version(get_env_str(ENV_API_VERSION, None)),
            report_dir=_optional_path(get_env_str(ENV_REPORT_DIR, None)),
            fail_on_warn=get_env_bool(ENV_FAIL_ON_WARN, DEFAULT_FAIL_ON_WARN),
            seed_terminology=get_env_bool(ENV_SEED_TERMINOLOGY, DEFAULT_SEED_TERMINOLOGY),
            log_level=(get_env_str(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
        )

    @classmethod
    def from_dict(cls, config_dict: LintConfigDict) -> 'LintConfig':
        """Create configuration from typed dictionary"""
        log_level = config_dict.get('log_level', DEFAULT_LOG_LEVEL)
        if not isinstance(log_level, str):
            raise ConfigurationError(f"Invalid log_level: {log_level}", config_key="log_level")

        return cls(
            project_root=_optional_path(config_dict.get('project_root')),
            api_version=_parse_api_version(config_dict.get('api_version')),
            report_dir=_optional_path(config_dict.get('report_dir')),
            fail_on_warn=bool(config_dict.get('fail_on_warn', DEFAULT_FAIL_ON_WARN)),
            seed_terminology=bool(config_dict.get('seed_terminology', DEFAULT_SEED_TERMINOLOGY)),
            log_level=log_level.upper(),
        )

    @classmethod
    def from_file(cls, path: Path) -> 'LintConfig':
        """
        Load configuration from a YAML file.

        Relative ``project_root`` and ``report_dir`` values are taken relative
        to the file's directory.

        Raises:
            ConfigurationError: If the file cannot be read or holds invalid values
        """
        yaml = YAML(typ="safe")
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.load(f) or {}
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
        except YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        unknown = set(data) - set(LintConfigDict.__annotations__)
        if unknown:
            raise ConfigurationError(
                f"Unknown config keys in {path}: {', '.join(sorted(unknown))}",
                context={"keys": sorted(unknown)},
            )

        for key in ('project_root', 'report_dir'):
            value = data.get(key)
            if value and not Path(value).expanduser().is_absolute():
                data[key] = str(path.parent / value)
        return cls.from_dict(data)

    @classmethod
    def discover(cls, project_root: Path) -> 'LintConfig':
        """Use ``dsflint.yaml`` from the project root if present, else the environment"""
        candidate = project_root / DEFAULT_CONFIG_FILE_NAME
        if candidate.is_file():
            return cls.from_file(candidate)
        return cls.from_env()

    def _validate_config(self) -> None:
        """Validate configuration values"""
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log_level: {self.log_level} (expected one of {', '.join(LOG_LEVELS)})",
                config_key="log_level",
            )
        if self.api_version == ApiVersion.UNKNOWN:
            raise ConfigurationError("api_version must be v1, v2 or unset", config_key="api_version")
        if self.report_dir is not None and self.report_dir.exists() and not self.report_dir.is_dir():
            raise ConfigurationError(f"report_dir is not a directory: {self.report_dir}", config_key="report_dir")

    def with_overrides(self, **changes) -> 'LintConfig':
        """Copy of this configuration with the given non-None fields replaced"""
        values = self.to_fields()
        values.update({key: value for key, value in changes.items() if value is not None})
        return LintConfig(**values)

    def to_fields(self) -> dict:
        return {
            'project_root': self.project_root,
            'api_version': self.api_version,
            'report_dir': self.report_dir,
            'fail_on_warn': self.fail_on_warn,
            'seed_terminology': self.seed_terminology,
            'log_level': self.log_level,
        }

    def to_dict(self) -> LintConfigDict:
        """Convert configuration to typed dictionary"""
        return LintConfigDict(
            project_root=str(self.project_root) if self.project_root else None,
            api_version=self.api_version.value if self.api_version else None,
            report_dir=str(self.report_dir) if self.report_dir else None,
            fail_on_warn=self.fail_on_warn,
            seed_terminology=self.seed_terminology,
            log_level=self.log_level,
        )

    def __str__(self) -> str:
        api = self.api_version.value if self.api_version else "auto"
        return f"LintConfig(project_root='{self.project_root}', api_version={api})"
