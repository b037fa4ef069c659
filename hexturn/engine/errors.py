from __future__ import annotations


class PuzzleEngineError(Exception):
    """Base class for puzzle engine errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidGridShapeError(PuzzleEngineError):
    """Grid dimensions cannot produce a valid board (height must be odd)."""

    def __init__(self, width: int, height: int, message: str | None = None):
        self.width = width
        self.height = height
        super().__init__(message or f"Invalid grid shape {width}x{height}: height must be odd")


class MissingTileAtCellError(PuzzleEngineError):
    """A move referenced a cell that holds no tile; state is out of sync."""

    def __init__(self, cell_key: str):
        self.cell_key = cell_key
        super().__init__(f"Missing tile in cell {cell_key}")


class UnknownOperatorIdError(PuzzleEngineError):
    """Operator id (or anchor id within an operator) is not in the catalog."""

    def __init__(self, operator_id: str, message: str | None = None):
        self.operator_id = operator_id
        super().__init__(message or f"Unknown operator id: {operator_id}")


class UnresolvableGridShapeError(PuzzleEngineError):
    """The bounded grid-shape search had no candidates."""
    pass


class DegenerateVertexAnchorError(PuzzleEngineError):
    """Corner matching found no shared vertex for a cell triple."""

    def __init__(self, cells: list[str]):
        self.cells = cells
        super().__init__(f"Failed to derive vertex anchor position for {'|'.join(cells)}")


class SessionLockedError(PuzzleEngineError):
    """A move was requested while the session is locked by its caller."""
    pass
