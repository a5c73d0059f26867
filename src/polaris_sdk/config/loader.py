"""Polaris SDK configuration loader."""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from polaris_sdk.errors import create_error
from polaris_sdk.log import get_logger, parse_log_level
from polaris_sdk.types import ValidationIssue, ValidationResult

from .models import LogConfig, RedactionConfig, SDKConfig

CONFIG_PATH_ENV = "POLARIS_SDK_CONFIG"

logger = get_logger("config")


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        PolarisError: If required var not set
    """
    # Pattern: ${VAR}, ${VAR:-default}, ${VAR:?error}
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        if operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg)
        raise create_error(
            "CONFIG_INVALID",
            detail=f"Required environment variable {var_name} not set",
        )

    return re.sub(pattern, replacer, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    """Recursively resolve env vars in data structure."""
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return resolve_env_vars(data)
    else:
        return data


class ConfigLoader:
    """Load and validate SDK configuration."""

    VALID_KEYS = {"log", "redaction", "service_account_file"}

    def __init__(self) -> None:
        self._config: SDKConfig | None = None
        self._config_path: Path | None = None

    @property
    def config(self) -> SDKConfig | None:
        """Last loaded configuration."""
        return self._config

    @property
    def config_path(self) -> Path | None:
        """File the last configuration was loaded from."""
        return self._config_path

    def load(self, path: str | Path | None = None, use_defaults: bool = True) -> SDKConfig:
        """Load configuration from file.

        Resolution order if path not specified:
        1. POLARIS_SDK_CONFIG environment variable
        2. ./polaris-sdk.yaml
        3. ~/.rubrik/polaris-sdk.yaml
        4. If use_defaults=True and no file found, use default configuration

        Args:
            path: Optional path to config file
            use_defaults: If True, use default config when no file found

        Returns:
            Loaded SDKConfig instance

        Raises:
            PolarisError: If file not found (when use_defaults=False) or invalid
        """
        if path is None:
            path = self._resolve_config_path()

        config_path = Path(path).expanduser()

        if not config_path.exists():
            if use_defaults:
                logger.info("No config file found, using default configuration")
                return self.load_defaults()
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file not found: {config_path}",
            )

        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file must hold a mapping: {config_path}",
            )

        data = _resolve_env_vars_recursive(data)

        return self.load_from_dict(data, config_path)

    def load_defaults(self) -> SDKConfig:
        """Load default configuration without a file."""
        return self.load_from_dict({})

    def load_from_dict(self, data: dict[str, Any], config_path: Path | None = None) -> SDKConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            config_path: Optional path to config file (for tracking)

        Returns:
            Loaded SDKConfig instance

        Raises:
            PolarisError: If configuration is invalid
        """
        validation = self.validate(data)
        if not validation.valid:
            error_messages = [f"- {issue.path}: {issue.message}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
            )
        for issue in validation.warnings:
            logger.warning(issue.message, path=issue.path)

        config = self._dict_to_config(data)

        self._config = config
        self._config_path = config_path

        logger.debug("Configuration loaded", path=str(config_path) if config_path else None)

        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Args:
            data: Configuration dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        for key in data:
            if key not in self.VALID_KEYS:
                warnings.append(
                    ValidationIssue(
                        path=key,
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )

        if "log" in data:
            log = data["log"]
            if not isinstance(log, dict):
                errors.append(ValidationIssue(path="log", message="log must be an object"))
            elif "level" in log:
                if not isinstance(log["level"], str):
                    errors.append(
                        ValidationIssue(path="log.level", message="log.level must be a string")
                    )
                elif log["level"].strip().lower() not in (
                    "trace", "debug", "info", "warn", "warning", "error", "fatal",
                ):
                    errors.append(
                        ValidationIssue(
                            path="log.level",
                            message=f"Unknown log level: {log['level']}",
                        )
                    )

        if "redaction" in data:
            redaction = data["redaction"]
            if not isinstance(redaction, dict):
                errors.append(
                    ValidationIssue(path="redaction", message="redaction must be an object")
                )
            else:
                debug_mode = redaction.get("debug_mode", False)
                if not isinstance(debug_mode, bool):
                    errors.append(
                        ValidationIssue(
                            path="redaction.debug_mode",
                            message="redaction.debug_mode must be a boolean",
                        )
                    )
                text = redaction.get("text", "")
                if not isinstance(text, str):
                    errors.append(
                        ValidationIssue(
                            path="redaction.text",
                            message="redaction.text must be a string",
                        )
                    )

        if "service_account_file" in data and not isinstance(data["service_account_file"], str):
            errors.append(
                ValidationIssue(
                    path="service_account_file",
                    message="service_account_file must be a string",
                )
            )

        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)

    def _dict_to_config(self, data: dict[str, Any]) -> SDKConfig:
        config = SDKConfig()

        log = data.get("log") or {}
        if "level" in log:
            config.log = LogConfig(level=parse_log_level(log["level"]).name.lower())

        redaction = data.get("redaction") or {}
        config.redaction = RedactionConfig(
            debug_mode=redaction.get("debug_mode", config.redaction.debug_mode),
            text=redaction.get("text", config.redaction.text),
        )

        if "service_account_file" in data:
            config.service_account_file = data["service_account_file"]

        return config

    def _resolve_config_path(self) -> Path:
        if env_path := os.environ.get(CONFIG_PATH_ENV):
            return Path(env_path)

        for candidate in (Path("polaris-sdk.yaml"), Path.home() / ".rubrik" / "polaris-sdk.yaml"):
            if candidate.exists():
                return candidate

        return Path("polaris-sdk.yaml")
