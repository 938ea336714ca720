import logging

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Check engine
    max_check_depth: int = Field(
        gt=0, default=256, description="Maximum nesting of a single check"
    )

    # Schema builder
    allow_relationship_redefinition: bool = Field(
        default=False,
        description="Replace a relationship defined twice instead of failing",
    )

    model_config = SettingsConfigDict(env_prefix='zanzi_')


@lru_cache()
def get_settings():
    return Settings()
