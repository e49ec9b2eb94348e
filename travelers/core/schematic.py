"""Schematic (tile adjacency ruleset) for Travelers.

A schematic file is a JSON object with one record per tile-type id plus a
designated fallback id:

    {
        "not_found": 0,
        "0": {"name": "grass", "sheet": "terrain_1", "weight": 4,
              "0": [0, 1], "1": [0, 1], "2": [0, 1], "3": [0, 1]},
        ...
    }

Direction keys "0".."3" are the allow-lists for North, East, South, West:
the tile ids permitted immediately in that direction of the tile.

Everything that generation indexes is validated here, at load time, so the
solver and stitcher never see an id that isn't a key of the schematic.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .types import Direction, TileTypeId

logger = logging.getLogger(__name__)

MAX_TILE_ID = 255
FALLBACK_KEY = "not_found"


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------


class SchematicError(Exception):
    """Base exception for schematic (configuration) errors."""

    pass


class SchematicFormatError(SchematicError):
    """Schematic bytes are malformed or internally inconsistent."""

    def __init__(self, message: str, tile_id: str | int | None = None):
        super().__init__(message)
        self.tile_id = tile_id


class UnknownTileError(SchematicError):
    """Lookup of a tile id that the schematic does not define."""

    def __init__(self, tile_id: TileTypeId):
        super().__init__(f"Unknown tile type id: {tile_id}")
        self.tile_id = tile_id


# -----------------------------------------------------------------------------
# Models
# -----------------------------------------------------------------------------


class TileType(BaseModel):
    """A tile type with its directional adjacency allow-lists.

    Attributes:
        id: Schematic identifier (0-255)
        name: Human-readable name (e.g., "grass")
        sheet: Sprite sheet name for the rendering host (display metadata only)
        weight: Required in every record. Selection is uniform and does
                not read it.
        north/east/south/west: Tile ids allowed immediately in that direction
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: TileTypeId = Field(ge=0, le=MAX_TILE_ID)
    name: str
    sheet: str = ""
    weight: int = Field(ge=0)
    north: frozenset[TileTypeId] = Field(alias="0")
    east: frozenset[TileTypeId] = Field(alias="1")
    south: frozenset[TileTypeId] = Field(alias="2")
    west: frozenset[TileTypeId] = Field(alias="3")

    def allowed(self, direction: Direction) -> frozenset[TileTypeId]:
        """Get all tile ids allowed in the given direction of this tile."""
        if direction is Direction.NORTH:
            return self.north
        if direction is Direction.EAST:
            return self.east
        if direction is Direction.SOUTH:
            return self.south
        return self.west

    def allows(self, direction: Direction, other: TileTypeId) -> bool:
        """Check whether `other` may sit in `direction` of this tile."""
        return other in self.allowed(direction)


class Schematic(BaseModel):
    """Parsed tile-adjacency ruleset.

    Maps tile-type id to TileType and names one fallback id used for cells
    that cannot be resolved. The model itself requires the fallback to be
    a defined tile; `load_schematic()` also validates the allow-lists.
    """

    model_config = ConfigDict(frozen=True)

    tiles: dict[TileTypeId, TileType]
    not_found: TileTypeId

    @model_validator(mode="after")
    def check_fallback_defined(self) -> Schematic:
        if self.not_found not in self.tiles:
            raise ValueError(f"Fallback id {self.not_found} is not a defined tile type")
        return self

    def lookup(self, tile_id: TileTypeId) -> TileType:
        """Get the TileType for an id.

        Raises:
            UnknownTileError: If the id is not in the schematic
        """
        try:
            return self.tiles[tile_id]
        except KeyError:
            raise UnknownTileError(tile_id) from None

    def fallback_id(self) -> TileTypeId:
        """The id used for contradicted or unresolved cells."""
        return self.not_found

    @property
    def tile_ids(self) -> frozenset[TileTypeId]:
        """All tile ids defined by the schematic."""
        return frozenset(self.tiles)

    def allowed(self, tile_id: TileTypeId, direction: Direction) -> frozenset[TileTypeId]:
        """Ids allowed in `direction` of the tile `tile_id`."""
        return self.lookup(tile_id).allowed(direction)

    def compatible(self, tile_id: TileTypeId, direction: Direction, other: TileTypeId) -> bool:
        """Adjacency predicate: `other` sits in `direction` of `tile_id`.

        Both sides must agree: `tile_id` allows `other` in `direction` and
        `other` allows `tile_id` in the opposite direction.
        """
        return (
            self.lookup(tile_id).allows(direction, other)
            and self.lookup(other).allows(direction.opposite, tile_id)
        )

    def asymmetries(self) -> list[tuple[TileTypeId, Direction, TileTypeId]]:
        """Rules that are only declared from one side.

        Returns (a, direction, b) for each case where `a` allows `b` in
        `direction` but `b` does not allow `a` in the opposite direction.
        """
        found: list[tuple[TileTypeId, Direction, TileTypeId]] = []
        for tile_id in sorted(self.tiles):
            tile = self.tiles[tile_id]
            for direction in Direction:
                for other in sorted(tile.allowed(direction)):
                    if not self.tiles[other].allows(direction.opposite, tile_id):
                        found.append((tile_id, direction, other))
        return found


# -----------------------------------------------------------------------------
# Loading
# -----------------------------------------------------------------------------


def _parse_tile_id(key: str) -> TileTypeId:
    """Parse a record key into a tile id."""
    try:
        tile_id = int(key)
    except ValueError:
        raise SchematicFormatError(f"Tile key {key!r} is not an integer id", tile_id=key) from None
    if not 0 <= tile_id <= MAX_TILE_ID:
        raise SchematicFormatError(f"Tile id {tile_id} outside 0..{MAX_TILE_ID}", tile_id=tile_id)
    return tile_id


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """json object hook: repeated keys are an error, not last-one-wins."""
    obj: dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise SchematicFormatError(f"Duplicate key {key!r} in schematic", tile_id=key)
        obj[key] = value
    return obj


def _parse_tile(tile_id: TileTypeId, record: Any) -> TileType:
    """Validate one tile record."""
    if not isinstance(record, dict):
        raise SchematicFormatError(f"Tile {tile_id} record must be an object", tile_id=tile_id)
    try:
        return TileType.model_validate({**record, "id": tile_id})
    except ValidationError as e:
        raise SchematicFormatError(f"Tile {tile_id} is invalid: {e}", tile_id=tile_id) from e


def load_schematic(raw: bytes | str) -> Schematic:
    """Parse and validate a schematic.

    Args:
        raw: JSON document as bytes or text

    Returns:
        Validated Schematic

    Raises:
        SchematicFormatError: If the document is not well-formed, the
            fallback id is missing or undefined, or an allow-list names
            an id the schematic does not define
    """
    try:
        data = json.loads(raw, object_pairs_hook=_reject_duplicate_keys)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SchematicFormatError(f"Schematic is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SchematicFormatError("Schematic must be a JSON object")
    if FALLBACK_KEY not in data:
        raise SchematicFormatError(f"Schematic has no {FALLBACK_KEY!r} fallback id")

    fallback = data.pop(FALLBACK_KEY)
    if isinstance(fallback, bool) or not isinstance(fallback, int):
        raise SchematicFormatError(f"{FALLBACK_KEY!r} must be an integer id")

    tiles: dict[TileTypeId, TileType] = {}
    for key, record in data.items():
        tile_id = _parse_tile_id(key)
        if tile_id in tiles:
            raise SchematicFormatError(f"Duplicate tile id {tile_id}", tile_id=tile_id)
        tiles[tile_id] = _parse_tile(tile_id, record)

    if not tiles:
        raise SchematicFormatError("Schematic defines no tile types")
    if fallback not in tiles:
        raise SchematicFormatError(
            f"Fallback id {fallback} is not a defined tile type", tile_id=fallback
        )

    # Reject dangling references so generation never indexes an unknown id
    for tile in tiles.values():
        for direction in Direction:
            unknown = tile.allowed(direction) - tiles.keys()
            if unknown:
                raise SchematicFormatError(
                    f"Tile {tile.id} allows unknown ids {sorted(unknown)} to the {direction.name.lower()}",
                    tile_id=tile.id,
                )

    schematic = Schematic(tiles=tiles, not_found=fallback)

    asymmetries = schematic.asymmetries()
    if asymmetries:
        logger.warning(
            f"Schematic has {len(asymmetries)} one-sided adjacency rules "
            f"(first: {asymmetries[0][0]} -{asymmetries[0][1].name}-> {asymmetries[0][2]})"
        )
    logger.info(f"Loaded schematic: {len(tiles)} tile types, fallback={fallback}")
    return schematic


def load_schematic_file(path: Path | str) -> Schematic:
    """Read and parse a schematic file.

    Raises:
        SchematicFormatError: If the file is malformed
        SchematicError: If the file cannot be read
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise SchematicError(f"Cannot read schematic {path}: {e}") from e
    return load_schematic(raw)


def default_schematic_path() -> Path:
    """Path of the schematic bundled with the package."""
    return Path(__file__).resolve().parent.parent / "assets" / "schematic.json"
