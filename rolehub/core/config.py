from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = Field(alias="DATABASE_URL")

    # Role naming policy
    role_name_max_length: int = Field(default=100, alias="ROLE_NAME_MAX_LENGTH")
    reserved_role_names: str = Field(default="SYSTEM,ROOT", alias="RESERVED_ROLE_NAMES")
    protected_role_names: str = Field(default="ADMIN", alias="PROTECTED_ROLE_NAMES")
    reserved_role_prefixes: str = Field(
        default="SYSTEM_,SYS_,INTERNAL_", alias="RESERVED_ROLE_PREFIXES"
    )

    # Background notifications
    notification_max_workers: int = Field(default=4, alias="NOTIFICATION_MAX_WORKERS")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator(
        "reserved_role_names",
        "protected_role_names",
        "reserved_role_prefixes",
        mode="before",
    )
    @classmethod
    def none_to_empty_str(cls, v: str | None) -> str:
        """Treat an unset list as an empty one."""
        if v is None:
            return ""
        return v

    @field_validator("role_name_max_length", "notification_max_workers")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def empty_str_to_default_level(cls, v: str | None) -> str:
        """Convert empty strings to the default level and upper-case the rest."""
        if not v:
            return "INFO"
        return v.upper()

    @staticmethod
    def split_csv(value: str) -> tuple[str, ...]:
        """Split a comma-separated setting into its non-empty, stripped items."""
        return tuple(item.strip() for item in value.split(",") if item.strip())

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
