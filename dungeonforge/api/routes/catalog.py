"""GET /api/v1/catalog: static cell-kind, monster and horde definitions."""

from __future__ import annotations

from fastapi import APIRouter

from dungeonforge.api.schemas import CatalogResponse, CellKindSchema, HordeSchema, MonsterSchema
from dungeonforge.core.cells import CELLS
from dungeonforge.core.monsters import HORDE_CATALOG, MONSTER_CATALOG

router = APIRouter()


@router.get("/catalog", response_model=CatalogResponse)
def get_catalog() -> CatalogResponse:
    return CatalogResponse(
        cells=[
            CellKindSchema(
                id=int(kind.cell_type), name=kind.name, glyph=kind.glyph,
                priority=kind.priority, flags=int(kind.flags), glows=kind.glow is not None,
            )
            for kind in CELLS.values()
        ],
        monsters=[
            MonsterSchema(
                name=m.name, glyph=m.glyph, max_hp=m.max_hp, defense=m.defense,
                accuracy=m.accuracy, damage=list(m.damage), regen=m.regen,
                move_speed=m.move_speed, attack_speed=m.attack_speed, blood=m.blood,
            )
            for m in MONSTER_CATALOG.values()
        ],
        hordes=[
            HordeSchema(
                leader=MONSTER_CATALOG[h.leader].name,
                members=[MONSTER_CATALOG[m].name for m in h.members],
                frequency=h.frequency,
                min_level=h.min_level,
                max_level=h.max_level,
                spawns_in=h.spawns_in.name.lower() if h.spawns_in is not None else None,
            )
            for h in HORDE_CATALOG
        ],
    )
