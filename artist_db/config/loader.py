"""
Schema-driven configuration loader.

This module provides a ConfigLoader that uses the configuration schema
to automatically load, validate, and merge configuration from multiple sources.
"""

import logging
import os
import typing
from argparse import ArgumentParser, Namespace
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .schema import ConfigSchema


logger = logging.getLogger(__name__)

DOTENV_FILE = ".env.local"


def _schema_extra(field_info) -> Dict[str, Any]:
    return field_info.json_schema_extra or {}


def _clean(value: Any) -> Any:
    """Strip strings; an explicit empty string clears the value."""
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    return value


class ConfigLoader:
    """Loads and validates configuration using a schema-driven approach."""

    @staticmethod
    def load(
        schema: type = ConfigSchema,
        cli_args: Optional[Namespace] = None,
        cli_overrides: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> ConfigSchema:
        """
        Load configuration from all sources with precedence handling.

        Loading order (lowest to highest priority):
        1. Schema defaults
        2. .env.local file (if it exists)
        3. OS environment variables
        4. CLI arguments
        5. Direct overrides keyed by environment variable name

        Args:
            schema: The configuration schema class to use
            cli_args: Parsed CLI arguments (if available)
            cli_overrides: Overrides keyed by environment variable name
            environ: Environment to read instead of os.environ (skips .env.local)

        Returns:
            Validated configuration instance

        Raises:
            ValueError: If configuration validation fails
        """
        config_dict: Dict[str, Any] = {}

        if environ is None:
            _load_from_dotenv_file()
            environ = os.environ

        for field_name, field_info in schema.model_fields.items():
            env_var = _schema_extra(field_info).get("env_var")
            if env_var:
                env_value = environ.get(env_var)
                if env_value is not None and env_value.strip():
                    # Empty strings fall back to the default
                    config_dict[field_name] = env_value.strip()

        if cli_args:
            for field_name, field_info in schema.model_fields.items():
                cli_arg = _schema_extra(field_info).get("cli_arg")
                if cli_arg and hasattr(cli_args, cli_arg):
                    cli_value = getattr(cli_args, cli_arg)
                    # store_true flags default to False, which must not override the env
                    if cli_value is not None and cli_value is not False:
                        config_dict[field_name] = _clean(cli_value)

        if cli_overrides:
            for field_name, field_info in schema.model_fields.items():
                env_var = _schema_extra(field_info).get("env_var")
                if env_var in cli_overrides and cli_overrides[env_var] is not None:
                    config_dict[field_name] = _clean(cli_overrides[env_var])

        # Cleared values fall back to the schema default
        config_dict = {k: v for k, v in config_dict.items() if v is not None}

        try:
            config = schema(**config_dict)
            logger.debug("Configuration loaded and validated successfully")
            return config
        except ValidationError as e:
            # Convert Pydantic validation errors to more user-friendly messages
            errors = []
            for error in e.errors():
                field = error["loc"][0]
                msg = error["msg"]
                field_info = schema.model_fields.get(field)
                env_var = _schema_extra(field_info).get("env_var") if field_info else str(field).upper()
                errors.append(f"{env_var}: {msg}")

            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {err}" for err in errors)
            raise ValueError(error_msg) from e

    @staticmethod
    def add_schema_arguments(parser: ArgumentParser, schema: type = ConfigSchema) -> ArgumentParser:
        """
        Add one option per schema field that declares a cli_arg.

        Args:
            parser: Parser to extend
            schema: The configuration schema class

        Returns:
            The same parser
        """
        for field_name, field_info in schema.model_fields.items():
            extra = _schema_extra(field_info)
            cli_arg = extra.get("cli_arg")
            if not cli_arg:
                continue

            arg_name = f"--{cli_arg.replace('_', '-')}"

            kwargs: Dict[str, Any] = {
                "help": field_info.description or f"Override {extra.get('env_var', field_name.upper())} env var",
                "default": None,  # Don't set schema defaults here - let the loader handle it
            }

            field_type = field_info.annotation

            # Unwrap Optional[X]
            if typing.get_origin(field_type) is typing.Union:
                non_none_args = [arg for arg in typing.get_args(field_type) if arg is not type(None)]
                if len(non_none_args) == 1:
                    field_type = non_none_args[0]

            if field_type == int:
                kwargs["type"] = int
            elif field_type == float:
                kwargs["type"] = float
            elif field_type == bool:
                choices = extra.get("cli_choices")
                if choices:
                    kwargs["choices"] = choices
                else:
                    kwargs["action"] = "store_true"
                    kwargs["default"] = False

            parser.add_argument(arg_name, **kwargs)

        return parser


def _load_from_dotenv_file() -> None:
    """Load values from .env.local without overriding the OS environment."""
    if os.path.exists(DOTENV_FILE):
        load_dotenv(DOTENV_FILE, override=False)
        logger.debug(f"Loaded configuration from {DOTENV_FILE} file")
    else:
        logger.debug(f"{DOTENV_FILE} file not found, skipping")
