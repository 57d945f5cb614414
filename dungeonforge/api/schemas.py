"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# Keep previews cheap enough to build on a request thread.
MAX_SIDE = 200


# --- Level ---

class CreatureSchema(BaseModel):
    x: int
    y: int
    monster: str
    glyph: str
    hp: int
    horde: int


class DungeonResponse(BaseModel):
    """Grids are RLE-encoded row-major: ``[value, count, value, count, ...]``."""

    width: int
    height: int
    seed: str
    types: list[int]
    terrain: list[int]
    flags: list[int]
    glyphs: list[str]
    creatures: list[CreatureSchema]


class ColorSchema(BaseModel):
    r: int
    g: int
    b: int
    alpha: float = 1.0
    dancing: bool = False


class CellColorSchema(BaseModel):
    fg: ColorSchema
    bg: ColorSchema


class ColorResponse(BaseModel):
    """Row-major per-cell colours; ``light`` is None where no light reaches."""

    width: int
    height: int
    colors: list[CellColorSchema]
    lit_colors: list[CellColorSchema]
    light: list[ColorSchema | None]


# --- Field of view ---

class FovRequest(BaseModel):
    width: int = Field(79, ge=1, le=MAX_SIDE)
    height: int = Field(29, ge=1, le=MAX_SIDE)
    seed: str = "1"
    x: int = Field(ge=0)
    y: int = Field(ge=0)
    radius: float | None = Field(None, gt=0)


class FovResponse(BaseModel):
    origin: tuple[int, int]
    cells: list[tuple[int, int]]


# --- Catalog ---

class CellKindSchema(BaseModel):
    id: int
    name: str
    glyph: str
    priority: int
    flags: int
    glows: bool


class MonsterSchema(BaseModel):
    name: str
    glyph: str
    max_hp: int
    defense: int
    accuracy: int
    damage: list[int]
    regen: int
    move_speed: int
    attack_speed: int
    blood: str


class HordeSchema(BaseModel):
    leader: str
    members: list[str] = []
    frequency: int
    min_level: int
    max_level: int
    spawns_in: str | None = None


class CatalogResponse(BaseModel):
    cells: list[CellKindSchema]
    monsters: list[MonsterSchema]
    hordes: list[HordeSchema]
