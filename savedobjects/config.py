"""
Settings are read from environment variables (prefixed with SAVEDOBJECTS_),
falling back to a .env file. Set SAVEDOBJECTS_ENV_FILE to use another file than ./.env
"""

import functools
from pathlib import Path
from typing import Annotated, Any, Callable

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "savedobjects_"

# Names of the flags the mapping builder asks for
PERMISSION_FLAG = "permissions"
WORKSPACE_FLAG = "workspaces"

FeatureFlags = Callable[[str], bool]


class Settings(BaseSettings):
    env_file: Annotated[Path, Field(description="Optional .env file with settings")] = Path(".env")

    elastic_host: Annotated[
        str | None,
        Field(description="Elasticsearch url (default: localhost:9200, https if a password is set)"),
    ] = None
    elastic_password: Annotated[str | None, Field(description="Password of the elastic user, if security is on")] = None
    elastic_verify_ssl: Annotated[
        bool | None,
        Field(description="Verify certificates (default: only for hosts other than localhost)"),
    ] = None

    index: Annotated[
        str,
        Field(
            description="Index that stores the saved objects",
        ),
    ] = ".kibana"

    permission_enabled: Annotated[
        bool,
        Field(description="Add the permissions field to the saved objects mapping"),
    ] = False

    workspace_enabled: Annotated[
        bool,
        Field(description="Add the workspaces field to the saved objects mapping"),
    ] = False

    @model_validator(mode="after")
    def default_connection(self: Any) -> "Settings":
        scheme = "https" if self.elastic_password else "http"
        self.elastic_host = self.elastic_host or f"{scheme}://localhost:9200"
        if self.elastic_verify_ssl is None:
            self.elastic_verify_ssl = not self.elastic_host.split("://")[-1].startswith("localhost")
        return self

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX)


@functools.lru_cache()
def get_settings() -> Settings:
    # the .env file only fills in what is not set in the environment
    load_dotenv(Settings().env_file, override=False)
    return Settings()


def feature_flags(settings: Settings | None = None) -> FeatureFlags:
    """
    Return the read-only flag lookup used by the mapping builder.
    Unknown flags are always off.
    """
    if settings is None:
        settings = get_settings()
    flags = {
        PERMISSION_FLAG: settings.permission_enabled,
        WORKSPACE_FLAG: settings.workspace_enabled,
    }

    def has_flag(name: str) -> bool:
        return bool(flags.get(name, False))

    return has_flag


if __name__ == "__main__":
    # Echo the settings
    for k, v in get_settings().model_dump().items():
        print(f"{ENV_PREFIX.upper()}{k.upper()}={v}")
