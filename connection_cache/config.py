from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings


class ConfigurationError(RuntimeError):
    """Raised at import time when required settings are missing or invalid."""


# Error types that mean the variable was absent or blank
_UNSET_ERRORS = {"missing", "string_too_short"}


class Settings(BaseSettings):
    MONGO_URI: str = Field(min_length=1)  # Required, e.g. "mongodb://localhost:27017"
    DATABASE_NAME: str = "app"
    APP_NAME: str = "connection-cache"  # Reported to the server as the driver appname

    model_config = {"env_file": ".env", "str_strip_whitespace": True}


def _describe(err: dict) -> str:
    field = ".".join(str(part) for part in err["loc"])
    if err["type"] in _UNSET_ERRORS:
        return f"{field} environment variable is not set or is empty"
    return f"{field}: {err['msg']}"


def load_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as exc:
        problems = "; ".join(_describe(err) for err in exc.errors())
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc


# Fail fast: importing anything that needs settings aborts boot when MONGO_URI is unset
settings = load_settings()
