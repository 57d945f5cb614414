"""Grid queries shared with game code: field of view and path distance."""

from dungeonforge.ai.fov import compute_fov, visible_cells
from dungeonforge.ai.pathfinding import Pathfinder, path_distance

__all__ = ["Pathfinder", "compute_fov", "path_distance", "visible_cells"]
