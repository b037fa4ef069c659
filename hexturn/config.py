from __future__ import annotations

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hexturn.engine.models import OperatorId


class PuzzleSettings(BaseSettings):
    # Board shape
    target_cell_count: int = 75
    padding_in_tile_units: float = 0.5
    candidate_h_min: int = 3
    candidate_h_max: int = 35
    candidate_w_min: int = 1
    candidate_w_max: int = 50

    # Layout
    viewport_margin_px: float = 24.0

    # Play
    scramble_moves: int = 40
    enabled_operators: list[OperatorId] = Field(default_factory=lambda: list(OperatorId))
    random_seed: int | None = None

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="HEXTURN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @field_validator("target_cell_count")
    @classmethod
    def check_cell_count(cls, v: int) -> int:
        if v < 1:
            raise ValueError("target_cell_count must be positive")
        return v

    @field_validator("padding_in_tile_units", "viewport_margin_px")
    @classmethod
    def check_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("must not be negative")
        return v

    @field_validator("scramble_moves")
    @classmethod
    def check_scramble_moves(cls, v: int) -> int:
        if v < 0:
            raise ValueError("scramble_moves must not be negative")
        return v

    @field_validator("enabled_operators")
    @classmethod
    def check_enabled_operators(cls, v: list[OperatorId]) -> list[OperatorId]:
        if not v:
            raise ValueError("at least one operator must be enabled")
        return list(dict.fromkeys(v))

    @model_validator(mode="after")
    def check_candidate_ranges(self) -> PuzzleSettings:
        if self.candidate_h_min % 2 == 0 or self.candidate_h_max % 2 == 0:
            raise ValueError("candidate height range bounds must be odd")
        if self.candidate_h_min > self.candidate_h_max:
            raise ValueError("candidate_h_min is greater than candidate_h_max")
        if self.candidate_w_min < 1 or self.candidate_w_min > self.candidate_w_max:
            raise ValueError("candidate width range must be positive and ordered")
        return self
