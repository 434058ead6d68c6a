"""Pydantic models for wave-config documents."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TimingSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    base: float = Field(1.0, ge=0)
    variance: float = Field(0.5, ge=0)
    minimum: float = Field(0.2, ge=0)


class EnemyKindSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    firing: bool = False
    max_hp: int = Field(100, gt=0)
    score: int = Field(50, ge=0)


class WaveSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = ""
    enemies: list[str]
    path: str
    move_speed: float = 5.0
    timing: TimingSchema = Field(default_factory=TimingSchema)


class WavePlanSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    time_between_waves: float = Field(0.0, ge=0)
    loop: bool = False
    paths: dict[str, list[tuple[float, float]]]
    enemies: dict[str, EnemyKindSchema] = Field(default_factory=dict)
    waves: list[WaveSchema]
