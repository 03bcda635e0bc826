# src/citylines/levels/loader.py
# Hand-authored level files (data/levels/level-N.json) and JSON export of
# generated levels. Both use the format in level.py.

import json
import logging
import os
import re
from typing import List, Optional

from ..engine.connectivity import build_connection_graph, find_path
from ..errors import LevelFormatError
from ..level import GeneratedLevel

logger = logging.getLogger(__name__)

LEVELS_DIR = os.path.join("data", "levels")
_LEVEL_NAME = re.compile(r"^level-(\d+)\.json$")


def level_path(number: int, levels_dir: str = LEVELS_DIR) -> str:
    return os.path.join(levels_dir, f"level-{number}.json")


def list_level_files(levels_dir: str = LEVELS_DIR) -> List[str]:
    """level-N.json files in numeric order."""
    if not os.path.isdir(levels_dir):
        return []
    found = []
    for name in os.listdir(levels_dir):
        m = _LEVEL_NAME.match(name)
        if m:
            found.append((int(m.group(1)), os.path.join(levels_dir, name)))
    return [p for _, p in sorted(found)]


def derive_solution_paths(level: GeneratedLevel) -> None:
    """Fill in destination->goal paths from the solved layout."""
    graph = build_connection_graph(level.to_grid(solved=True).as_matrix())
    paths = []
    for dest in level.destinations:
        result = find_path(dest.position, level.goal.position, graph)
        if not result.exists:
            raise LevelFormatError(
                f"destination at {dest.position} cannot reach the turnpike when solved"
            )
        paths.append(result.path)
    level.solution_paths = paths


def load_level_file(path: str) -> GeneratedLevel:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise LevelFormatError(f"{path}: not valid JSON ({e})") from e

    level = GeneratedLevel.from_dict(data)
    if not level.solution_paths:
        derive_solution_paths(level)
    logger.info(
        "loaded %s: %dx%d grid, %d tiles",
        path, level.grid_size.rows, level.grid_size.cols, sum(1 for _ in level.tiles()),
    )
    return level


def load_level(number: int, levels_dir: str = LEVELS_DIR) -> GeneratedLevel:
    path = level_path(number, levels_dir)
    if not os.path.exists(path):
        available = len(list_level_files(levels_dir))
        raise FileNotFoundError(
            f"level {number} does not exist; available levels: 1-{available}"
        )
    return load_level_file(path)


def save_level_file(
    level: GeneratedLevel,
    path: str,
    name: str = "Generated Level",
    difficulty: Optional[str] = None,
) -> str:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    data = level.to_dict(name=name, difficulty=difficulty or "")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return path
