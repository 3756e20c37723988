"""Value objects for the cutting-plan domain.

All classes are frozen dataclasses so that a planning call can share them
freely without copying. Dimensions are centimeters throughout.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from framecut.domain.errors import InvalidStockError


class StockKind(str, Enum):
    """Topology of a stock material.

    Attributes:
        BAR: Linear material (moulding profiles) consumed by length.
        SHEET: Planar material (glass, backing, passe-partout) consumed by area.
    """

    BAR = "bar"
    SHEET = "sheet"


class OversizedPolicy(str, Enum):
    """What to do with pieces that fit the stock in no orientation.

    Attributes:
        COLLECT: Return them in ``CuttingPlanResult.unplaced``.
        RAISE: Fail the call with ``OversizedPieceError``.
    """

    COLLECT = "collect"
    RAISE = "raise"


@dataclass(frozen=True)
class CutPiece:
    """One unit of material demand.

    Attributes:
        id: Identifier, unique within a single planning call.
        width: Piece width (bar pieces: cut length) in cm.
        height: Piece height in cm; zero for bar pieces.
        label: Free-text tag tracing the piece back to its order line.
    """

    id: str
    width: float
    height: float = 0.0
    label: str = ""

    def __post_init__(self) -> None:
        if not (math.isfinite(self.width) and self.width > 0):
            raise ValueError("Cut piece width must be positive and finite")
        if not (math.isfinite(self.height) and self.height >= 0):
            raise ValueError("Cut piece height must be non-negative and finite")

    @property
    def area(self) -> float:
        """Area in square cm (zero for bar pieces)."""
        return self.width * self.height

    @property
    def max_dimension(self) -> float:
        """Largest side, used to order sheet pieces."""
        return max(self.width, self.height)


@dataclass(frozen=True)
class StockDescriptor:
    """One unit of stock material as resolved from the catalog.

    For bars ``width`` holds the bar length and ``height`` is ignored.

    Attributes:
        kind: Bar or sheet topology.
        width: Bar length, or sheet width, in cm.
        height: Sheet height in cm.
        name: Catalog product name, for printed plans.
        code: Catalog product code, for printed plans.
    """

    kind: StockKind
    width: float
    height: float = 0.0
    name: str = ""
    code: str = ""

    def __post_init__(self) -> None:
        if self.kind == StockKind.BAR:
            if not (math.isfinite(self.width) and self.width > 0):
                raise InvalidStockError("Bar length must be positive")
        else:
            if not (math.isfinite(self.width) and self.width > 0):
                raise InvalidStockError("Sheet width must be positive")
            if not (math.isfinite(self.height) and self.height > 0):
                raise InvalidStockError("Sheet height must be positive")

    @classmethod
    def bar(cls, length: float, name: str = "", code: str = "") -> StockDescriptor:
        return cls(StockKind.BAR, length, 0.0, name, code)

    @classmethod
    def sheet(
        cls, width: float, height: float, name: str = "", code: str = ""
    ) -> StockDescriptor:
        return cls(StockKind.SHEET, width, height, name, code)

    @property
    def length(self) -> float:
        """Bar length in cm (alias of width)."""
        return self.width

    @property
    def unit_area(self) -> float:
        """Capacity of one unit: length for bars, area for sheets."""
        if self.kind == StockKind.BAR:
            return self.width
        return self.width * self.height

    @property
    def description(self) -> str:
        """Human-readable size, e.g. ``Bar 300 cm`` or ``Sheet 100 x 80 cm``."""
        if self.kind == StockKind.BAR:
            text = f"Bar {self.width:g} cm"
        else:
            text = f"Sheet {self.width:g} x {self.height:g} cm"
        if self.name and self.code:
            return f"{self.name} ({self.code}) - {text}"
        if self.name or self.code:
            return f"{self.name or self.code} - {text}"
        return text


@dataclass(frozen=True)
class FreeRectangle:
    """An unallocated axis-aligned region of a sheet."""

    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    def fits(self, width: float, height: float, tolerance: float = 0.0) -> bool:
        """Whether a ``width`` x ``height`` piece fits without rotation."""
        return width <= self.width + tolerance and height <= self.height + tolerance

    def short_side_slack(self, width: float, height: float) -> float:
        """Smaller of the two leftover sides after placing a piece (BSSF score)."""
        return min(self.width - width, self.height - height)
