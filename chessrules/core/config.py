"""Centralized engine configuration.

All settings are read from environment variables (prefix CHESSRULES_) or a .env.chessrules file.
Everything has a default, so the engine works without any configuration at all.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chessrules.core.shared_types import NON_PROMOTION_ROLES, Role


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHESSRULES_",
        env_file=".env.chessrules",
        env_file_encoding="utf-8",
    )

    # Role a pawn turns into on the last rank, for both colors, until changed per game.
    default_promotion_role: Role = Role.QUEEN

    # False: a pawn may push forward onto an enemy unit (and take it), as older versions of the engine allowed.
    pawn_push_requires_empty: bool = True

    @field_validator("default_promotion_role")
    @classmethod
    def validate_promotion_role(cls, value: Role) -> Role:
        if value in NON_PROMOTION_ROLES:
            raise ValueError(f"A pawn cannot be promoted to a {value}.")
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
