"""
Run configuration loaded from config.json.

The document selects an authentication mode and carries the credentials
for it:

    {
        "authType": "page",
        "basicAuth": {"username": "...", "password": "..."},
        "pageAuth": {
            "loginUrl": "https://example.com/login",
            "usernameField": "#username",
            "passwordField": "#password",
            "submitField": "button[type=submit]",
            "username": "...",
            "password": "..."
        }
    }

The loaded RunConfig is frozen and handed explicitly to every component
that needs it.
"""
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from lighthouse_batch.constants import CONFIG_FILE
from lighthouse_batch.exceptions import ConfigError

logger = logging.getLogger(__name__)


class AuthType(str, Enum):
    """Supported authentication modes."""

    NONE = "none"
    BASIC = "basic"
    DIGEST = "digest"
    PAGE = "page"


class BasicAuthConfig(BaseModel):
    """Credentials for HTTP Basic authentication."""

    model_config = ConfigDict(frozen=True)

    username: str = ""
    password: str = ""


class PageAuthConfig(BaseModel):
    """Login form location, selectors and credentials for page login."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    login_url: str = Field(alias="loginUrl", description="URL of the login form")
    username_field: str = Field(alias="usernameField", description="CSS selector of the username input")
    password_field: str = Field(alias="passwordField", description="CSS selector of the password input")
    submit_field: str = Field(alias="submitField", description="CSS selector of the submit control")
    username: str = ""
    password: str = ""


class RunConfig(BaseModel):
    """
    Immutable configuration for one batch run.

    Only the credential group matching auth_type is required; the other
    groups may be absent.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    auth_type: AuthType = Field(default=AuthType.NONE, alias="authType")
    basic_auth: Optional[BasicAuthConfig] = Field(default=None, alias="basicAuth")
    page_auth: Optional[PageAuthConfig] = Field(default=None, alias="pageAuth")

    @model_validator(mode="after")
    def _check_auth_group(self) -> "RunConfig":
        if self.auth_type is AuthType.BASIC and self.basic_auth is None:
            raise ValueError("authType 'basic' requires a 'basicAuth' section")
        if self.auth_type is AuthType.PAGE and self.page_auth is None:
            raise ValueError("authType 'page' requires a 'pageAuth' section")
        return self


def load_config(path: Union[str, Path] = CONFIG_FILE) -> RunConfig:
    """Load and validate the run configuration.

    Args:
        path: Path to the JSON configuration document

    Returns:
        RunConfig for the run

    Raises:
        ConfigError: If the file is missing, is not valid JSON, or does not
            describe a valid configuration
    """
    config_path = Path(path)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {config_path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read configuration {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration {config_path} must be a JSON object")

    try:
        config = RunConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration {config_path}: {e}") from e

    logger.debug(f"Loaded configuration from {config_path} (authType={config.auth_type.value})")
    return config
