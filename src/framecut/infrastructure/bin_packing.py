"""Cutting-plan data models and packing algorithms for frame-shop stock.

This module provides the two packers used to plan cuts from stock material:

- ``FirstFitDecreasingBarPacker`` for linear material (moulding bars).
- ``GuillotineSheetPacker`` for planar material (glass, backing,
  passe-partout), using guillotine splits and the Best-Short-Side-Fit
  heuristic.

Both return a ``CuttingPlanResult`` built by ``build_plan_result``. Result
dataclasses are frozen; the packers keep their working state in private
mutable bins that never escape a single ``pack`` call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from framecut.domain.errors import InvalidPieceError, InvalidStockError, OversizedPieceError
from framecut.domain.value_objects import (
    CutPiece,
    FreeRectangle,
    OversizedPolicy,
    StockDescriptor,
    StockKind,
)

logger = logging.getLogger(__name__)

# Tolerance for capacity comparisons on centimeter floats.
EPSILON = 1e-9


@dataclass(frozen=True)
class CuttingPlanConfig:
    """Options shared by both packers.

    Attributes:
        allow_rotation: Whether sheet pieces may be turned 90 degrees.
        oversized_policy: Collect pieces larger than the stock, or fail.
    """

    allow_rotation: bool = True
    oversized_policy: OversizedPolicy = OversizedPolicy.COLLECT


@dataclass(frozen=True)
class PlacedPiece:
    """A cut piece placed at a specific position in a stock unit.

    Bar placements always have ``y == 0`` and ``rotated is False``.

    Attributes:
        piece: The cut piece being placed.
        x: Offset from the left edge of the stock unit in cm.
        y: Offset from the top edge of the stock unit in cm.
        rotated: True if the piece is turned 90 degrees from its input form.
    """

    piece: CutPiece
    x: float
    y: float = 0.0
    rotated: bool = False

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @property
    def placed_width(self) -> float:
        """Width of piece as placed (accounts for rotation)."""
        return self.piece.height if self.rotated else self.piece.width

    @property
    def placed_height(self) -> float:
        """Height of piece as placed (accounts for rotation)."""
        return self.piece.width if self.rotated else self.piece.height

    @property
    def right_edge(self) -> float:
        return self.x + self.placed_width

    @property
    def top_edge(self) -> float:
        """Far edge along the y axis (``y + placed_height``)."""
        return self.y + self.placed_height

    @property
    def area(self) -> float:
        return self.placed_width * self.placed_height

    def overlaps(self, other: PlacedPiece) -> bool:
        """Whether the two placed rectangles share interior area."""
        return (
            self.x < other.right_edge - EPSILON
            and other.x < self.right_edge - EPSILON
            and self.y < other.top_edge - EPSILON
            and other.y < self.top_edge - EPSILON
        )


@dataclass(frozen=True)
class Layout:
    """Placements for one stock unit.

    Attributes:
        stock_unit_index: One-based index for display and printing.
        placed_pieces: Pieces cut from this unit, in placement order.
        waste: Leftover length (bars) or area (sheets) of this unit.
        stock: The stock unit the pieces are cut from.
    """

    stock_unit_index: int
    placed_pieces: tuple[PlacedPiece, ...]
    waste: float
    stock: StockDescriptor

    def __post_init__(self) -> None:
        if self.stock_unit_index < 1:
            raise ValueError("Stock unit index must be at least 1")

    @property
    def used_area(self) -> float:
        """Length (bars) or area (sheets) consumed by placed pieces."""
        return self.stock.unit_area - self.waste

    @property
    def waste_percentage(self) -> float:
        unit = self.stock.unit_area
        if unit == 0:
            return 0.0
        return self.waste / unit * 100

    @property
    def piece_count(self) -> int:
        return len(self.placed_pieces)


@dataclass(frozen=True)
class CuttingPlanResult:
    """Complete output of a planning call.

    For bar stock, the ``*_area`` fields hold lengths in cm so that both
    topologies share one contract.

    Attributes:
        stock: Stock unit the plan was computed for.
        stock_units_used: Number of bars or sheets consumed.
        total_pieces_area: Length or area of all placed pieces.
        total_stock_area: ``stock_units_used`` times the unit capacity.
        total_waste: ``total_stock_area - total_pieces_area``.
        waste_percentage: ``total_waste / total_stock_area * 100``, or 0.
        layouts: One layout per stock unit, in the order they were opened.
        unplaced: Pieces that fit the stock in no orientation.
    """

    stock: StockDescriptor
    stock_units_used: int
    total_pieces_area: float
    total_stock_area: float
    total_waste: float
    waste_percentage: float
    layouts: tuple[Layout, ...]
    unplaced: tuple[CutPiece, ...] = ()

    def __post_init__(self) -> None:
        if self.stock_units_used != len(self.layouts):
            raise ValueError("Stock unit count must match the number of layouts")

    @property
    def utilization_percentage(self) -> float:
        """Share of consumed stock covered by pieces (0 when nothing used)."""
        if self.stock_units_used == 0:
            return 0.0
        return 100.0 - self.waste_percentage

    @property
    def total_pieces_placed(self) -> int:
        return sum(layout.piece_count for layout in self.layouts)

    @property
    def has_unplaced(self) -> bool:
        return bool(self.unplaced)

    def placed_pieces(self) -> Iterator[PlacedPiece]:
        """Iterate over every placement across all layouts."""
        for layout in self.layouts:
            yield from layout.placed_pieces


def build_plan_result(
    stock: StockDescriptor,
    bins: Sequence[tuple[Sequence[PlacedPiece], float]],
    unplaced: Sequence[CutPiece] = (),
) -> CuttingPlanResult:
    """Aggregate per-bin placements and waste into a ``CuttingPlanResult``.

    Args:
        stock: The stock unit every bin was cut from.
        bins: ``(placements, waste)`` pairs in bin creation order.
        unplaced: Pieces the packer could not place.

    Returns:
        The result with totals computed across all bins.
    """
    layouts = tuple(
        Layout(
            stock_unit_index=index,
            placed_pieces=tuple(placements),
            waste=waste,
            stock=stock,
        )
        for index, (placements, waste) in enumerate(bins, start=1)
    )

    stock_units_used = len(layouts)
    total_stock_area = stock_units_used * stock.unit_area
    total_waste = sum(layout.waste for layout in layouts)
    total_pieces_area = total_stock_area - total_waste
    waste_percentage = (
        total_waste / total_stock_area * 100 if total_stock_area > 0 else 0.0
    )

    return CuttingPlanResult(
        stock=stock,
        stock_units_used=stock_units_used,
        total_pieces_area=total_pieces_area,
        total_stock_area=total_stock_area,
        total_waste=total_waste,
        waste_percentage=waste_percentage,
        layouts=layouts,
        unplaced=tuple(unplaced),
    )


def _check_unique_ids(pieces: Sequence[CutPiece]) -> None:
    seen: set[str] = set()
    for piece in pieces:
        if piece.id in seen:
            raise InvalidPieceError(f"Duplicate piece id '{piece.id}'")
        seen.add(piece.id)


def _finish(
    stock: StockDescriptor,
    bins: Sequence[tuple[Sequence[PlacedPiece], float]],
    unplaced: list[CutPiece],
    policy: OversizedPolicy,
) -> CuttingPlanResult:
    if unplaced and policy == OversizedPolicy.RAISE:
        raise OversizedPieceError(tuple(unplaced))

    result = build_plan_result(stock, bins, unplaced)
    logger.info(
        "%s: %d pieces on %d unit(s), %.1f%% waste, %d unplaced",
        stock.description,
        result.total_pieces_placed,
        result.stock_units_used,
        result.waste_percentage,
        len(result.unplaced),
    )
    return result


@dataclass
class _Bar:
    """Working state for one bar during packing."""

    remaining: float
    placements: list[PlacedPiece] = field(default_factory=list)


class FirstFitDecreasingBarPacker:
    """Packs linear cuts into fixed-length bars with First-Fit Decreasing.

    Pieces are sorted by length, longest first, and each goes into the
    first open bar with enough remaining length. A new bar is opened only
    when no open bar fits. Pieces longer than the bar are never placed.

    Attributes:
        config: Packing options (only ``oversized_policy`` applies to bars).
    """

    def __init__(self, config: CuttingPlanConfig | None = None) -> None:
        self.config = config or CuttingPlanConfig()

    def pack(self, stock: StockDescriptor, pieces: Sequence[CutPiece]) -> CuttingPlanResult:
        """Pack pieces into bars of ``stock.length``.

        Args:
            stock: Bar stock descriptor.
            pieces: Cut pieces; ``width`` is the cut length.

        Returns:
            CuttingPlanResult with one layout per bar.

        Raises:
            InvalidStockError: If ``stock`` is not bar stock.
            InvalidPieceError: If two pieces share an id.
            OversizedPieceError: If a piece is longer than the bar and the
                policy is ``RAISE``.
        """
        if stock.kind != StockKind.BAR:
            raise InvalidStockError("Bar packer requires bar stock")
        _check_unique_ids(pieces)

        bar_length = stock.length
        ordered = sorted(pieces, key=lambda p: p.width, reverse=True)
        bars: list[_Bar] = []
        unplaced: list[CutPiece] = []

        logger.debug("Packing %d pieces into %g cm bars", len(ordered), bar_length)

        for piece in ordered:
            if piece.width > bar_length + EPSILON:
                logger.warning(
                    "Piece '%s' (%s) is longer than the %g cm bar",
                    piece.id,
                    piece.label,
                    bar_length,
                )
                unplaced.append(piece)
                continue

            target = next(
                (bar for bar in bars if piece.width <= bar.remaining + EPSILON),
                None,
            )
            if target is None:
                target = _Bar(remaining=bar_length)
                bars.append(target)

            x = bar_length - target.remaining
            target.placements.append(PlacedPiece(piece=piece, x=x))
            target.remaining = max(target.remaining - piece.width, 0.0)

        for index, bar in enumerate(bars, start=1):
            logger.debug(
                "Bar %d: %d cuts, %.2f cm left", index, len(bar.placements), bar.remaining
            )

        return _finish(
            stock,
            [(bar.placements, bar.remaining) for bar in bars],
            unplaced,
            self.config.oversized_policy,
        )


@dataclass
class _Sheet:
    """Working state for one sheet during packing."""

    free_rectangles: list[FreeRectangle]
    placements: list[PlacedPiece] = field(default_factory=list)


@dataclass(frozen=True)
class _Candidate:
    """A scored placement option, selected before any state changes."""

    sheet_index: int
    rect_index: int
    rotated: bool
    score: float


class GuillotineSheetPacker:
    """Packs rectangles into fixed-size sheets with guillotine splits.

    For each piece (largest side first) every free rectangle of every open
    sheet is scored with Best-Short-Side-Fit: the smaller leftover side
    after placement. The lowest score wins; ties keep the first candidate
    found. The chosen rectangle is replaced by at most two remainders from a
    single straight cut: a full-height strip to the right and a strip below
    the piece as wide as the piece. Free rectangles are never merged.

    A piece is recorded as rotated only when its input orientation does not
    fit the chosen rectangle but the turned one does. This departs from plain
    BSSF, which would score both orientations and may turn a piece that
    already fits upright.

    Attributes:
        config: Packing options.
    """

    def __init__(self, config: CuttingPlanConfig | None = None) -> None:
        self.config = config or CuttingPlanConfig()

    def pack(self, stock: StockDescriptor, pieces: Sequence[CutPiece]) -> CuttingPlanResult:
        """Pack pieces onto sheets of ``stock.width`` x ``stock.height``.

        Args:
            stock: Sheet stock descriptor.
            pieces: Cut pieces with positive width and height.

        Returns:
            CuttingPlanResult with one layout per sheet.

        Raises:
            InvalidStockError: If ``stock`` is not sheet stock.
            InvalidPieceError: If a piece has no height or two share an id.
            OversizedPieceError: If a piece fits no orientation of the sheet
                and the policy is ``RAISE``.
        """
        if stock.kind != StockKind.SHEET:
            raise InvalidStockError("Sheet packer requires sheet stock")
        _check_unique_ids(pieces)
        for piece in pieces:
            if piece.height <= 0:
                raise InvalidPieceError(
                    f"Sheet piece '{piece.id}' must have a positive height"
                )

        blank = FreeRectangle(0.0, 0.0, stock.width, stock.height)
        ordered = sorted(pieces, key=lambda p: p.max_dimension, reverse=True)
        sheets: list[_Sheet] = []
        unplaced: list[CutPiece] = []

        logger.debug(
            "Packing %d pieces onto %gx%g cm sheets",
            len(ordered),
            stock.width,
            stock.height,
        )

        for piece in ordered:
            if not self._orientations(blank, piece):
                logger.warning(
                    "Piece '%s' (%s, %gx%g) does not fit the %gx%g cm sheet",
                    piece.id,
                    piece.label,
                    piece.width,
                    piece.height,
                    stock.width,
                    stock.height,
                )
                unplaced.append(piece)
                continue

            candidate = self._find_best(sheets, piece, range(len(sheets)))
            if candidate is None:
                sheets.append(_Sheet(free_rectangles=[blank]))
                candidate = self._find_best(sheets, piece, [len(sheets) - 1])
                if candidate is None:
                    raise RuntimeError(f"Piece '{piece.id}' does not fit an empty sheet")

            self._apply(sheets[candidate.sheet_index], candidate, piece)

        bins: list[tuple[list[PlacedPiece], float]] = []
        for index, sheet in enumerate(sheets, start=1):
            used = sum(p.area for p in sheet.placements)
            waste = stock.unit_area - used
            logger.debug(
                "Sheet %d: %d pieces, %d free rectangles, %.1f%% waste",
                index,
                len(sheet.placements),
                len(sheet.free_rectangles),
                waste / stock.unit_area * 100,
            )
            bins.append((sheet.placements, waste))

        return _finish(stock, bins, unplaced, self.config.oversized_policy)

    def _orientations(self, rect: FreeRectangle, piece: CutPiece) -> list[bool]:
        """Orientations (``rotated`` flags) in which a piece may use ``rect``.

        The turned orientation is offered only when the input one does not
        fit, rotation is enabled, and turning changes the footprint.
        """
        if rect.fits(piece.width, piece.height, EPSILON):
            return [False]
        if (
            self.config.allow_rotation
            and piece.width != piece.height
            and rect.fits(piece.height, piece.width, EPSILON)
        ):
            return [True]
        return []

    def _find_best(
        self,
        sheets: Sequence[_Sheet],
        piece: CutPiece,
        sheet_indices: Sequence[int] | range,
    ) -> _Candidate | None:
        """Select the lowest-scoring placement without changing any state."""
        best: _Candidate | None = None
        for sheet_index in sheet_indices:
            for rect_index, rect in enumerate(sheets[sheet_index].free_rectangles):
                for rotated in self._orientations(rect, piece):
                    width, height = _footprint(piece, rotated)
                    score = rect.short_side_slack(width, height)
                    if best is None or score < best.score:
                        best = _Candidate(sheet_index, rect_index, rotated, score)
        return best

    def _apply(self, sheet: _Sheet, candidate: _Candidate, piece: CutPiece) -> None:
        """Place a piece in the chosen rectangle and split the remainder."""
        rect = sheet.free_rectangles.pop(candidate.rect_index)
        placement = PlacedPiece(piece=piece, x=rect.x, y=rect.y, rotated=candidate.rotated)
        sheet.placements.append(placement)
        sheet.free_rectangles.extend(
            guillotine_split(rect, placement.placed_width, placement.placed_height)
        )

        if candidate.rotated:
            logger.debug(
                "Piece '%s' placed rotated at (%s, %s) as %sx%s",
                piece.id,
                rect.x,
                rect.y,
                placement.placed_width,
                placement.placed_height,
            )


def _footprint(piece: CutPiece, rotated: bool) -> tuple[float, float]:
    if rotated:
        return piece.height, piece.width
    return piece.width, piece.height


def guillotine_split(
    rect: FreeRectangle, placed_width: float, placed_height: float
) -> list[FreeRectangle]:
    """Split a used free rectangle into its guillotine remainders.

    The right remainder keeps the full height of ``rect``; the bottom
    remainder is only as wide as the placed piece, so the two never
    overlap.

    Args:
        rect: The free rectangle the piece was placed in (at its origin).
        placed_width: Width of the piece as placed.
        placed_height: Height of the piece as placed.

    Returns:
        Zero, one, or two free rectangles, right remainder first.
    """
    remainders: list[FreeRectangle] = []
    if rect.width - placed_width > EPSILON:
        remainders.append(
            FreeRectangle(
                x=rect.x + placed_width,
                y=rect.y,
                width=rect.width - placed_width,
                height=rect.height,
            )
        )
    if rect.height - placed_height > EPSILON:
        remainders.append(
            FreeRectangle(
                x=rect.x,
                y=rect.y + placed_height,
                width=placed_width,
                height=rect.height - placed_height,
            )
        )
    return remainders


def pack_bars(
    bar_length: float,
    pieces: Sequence[CutPiece],
    *,
    oversized_policy: OversizedPolicy = OversizedPolicy.COLLECT,
) -> CuttingPlanResult:
    """Plan linear cuts from bars of ``bar_length`` cm (First-Fit Decreasing).

    Raises:
        InvalidStockError: If ``bar_length`` is not positive.
    """
    stock = StockDescriptor.bar(bar_length)
    config = CuttingPlanConfig(oversized_policy=oversized_policy)
    return FirstFitDecreasingBarPacker(config).pack(stock, pieces)


def pack_sheets(
    sheet_width: float,
    sheet_height: float,
    pieces: Sequence[CutPiece],
    *,
    allow_rotation: bool = True,
    oversized_policy: OversizedPolicy = OversizedPolicy.COLLECT,
) -> CuttingPlanResult:
    """Plan rectangular cuts from ``sheet_width`` x ``sheet_height`` cm sheets.

    Raises:
        InvalidStockError: If either sheet dimension is not positive.
    """
    stock = StockDescriptor.sheet(sheet_width, sheet_height)
    config = CuttingPlanConfig(
        allow_rotation=allow_rotation, oversized_policy=oversized_policy
    )
    return GuillotineSheetPacker(config).pack(stock, pieces)


class CuttingPlanService:
    """Selects the packer by stock topology and runs it.

    Bars (moulding) go through First-Fit Decreasing; sheets (glass, backing,
    passe-partout) go through the guillotine packer. The service holds no
    state between calls.

    Attributes:
        config: Packing options passed to both packers.
    """

    def __init__(self, config: CuttingPlanConfig | None = None) -> None:
        self.config = config or CuttingPlanConfig()
        self.bar_packer = FirstFitDecreasingBarPacker(self.config)
        self.sheet_packer = GuillotineSheetPacker(self.config)

    def plan(self, stock: StockDescriptor, pieces: Sequence[CutPiece]) -> CuttingPlanResult:
        """Compute a cutting plan for ``pieces`` from ``stock``."""
        if stock.kind == StockKind.BAR:
            return self.bar_packer.pack(stock, pieces)
        return self.sheet_packer.pack(stock, pieces)
