from functools import lru_cache
from typing import Union

from pydantic import field_validator
from pydantic_settings import BaseSettings

from ..models.recipe import ParserOptions
from ..services.quantity import parse_quantity


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    default_ingredient_amount: Union[int, float, str] = "some"
    default_cookware_amount: Union[int, float, str] = 1
    include_step_number: bool = False
    max_source_length: int = 500_000
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_prefix": "",
        "extra": "ignore",
    }

    @field_validator("default_ingredient_amount", "default_cookware_amount", mode="before")
    @classmethod
    def _normalize_amount(cls, value):
        # Environment values arrive as text; "2" should become 2
        if isinstance(value, str):
            parsed = parse_quantity(value)
            return value if parsed is None else parsed
        return value

    def parser_options(self) -> ParserOptions:
        return ParserOptions(
            default_ingredient_amount=self.default_ingredient_amount,
            default_cookware_amount=self.default_cookware_amount,
            include_step_number=self.include_step_number,
        )


@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()
