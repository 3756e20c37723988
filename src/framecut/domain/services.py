"""Piece list preparation shared by the CLI, the API and the formatters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from framecut.domain.value_objects import CutPiece, StockKind


@dataclass(frozen=True)
class PieceRow:
    """A cut-list line: identical pieces with a shared label.

    Attributes:
        width: Piece width (bar pieces: cut length) in cm.
        height: Piece height in cm; zero for bar pieces.
        quantity: Number of identical pieces.
        label: Order reference or free text.
    """

    width: float
    height: float
    quantity: int = 1
    label: str = ""

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("Quantity must be at least 1")

    @property
    def area(self) -> float:
        """Total area for all pieces of this row in square cm."""
        return self.width * self.height * self.quantity


def default_label(width: float, height: float) -> str:
    """Label used when an order line carries none, e.g. ``L:60 A:40``."""
    return f"L:{width:g} A:{height:g}"


def expand_piece_rows(
    rows: Iterable[PieceRow],
    kind: StockKind = StockKind.SHEET,
) -> list[CutPiece]:
    """Expand cut-list rows into individual pieces.

    A row with quantity N becomes N pieces with ids ``"{row}-{i}"``, where
    ``row`` is the one-based row number and ``i`` counts from zero. For bar
    stock the height is dropped, since bars are cut by length only.

    Args:
        rows: Cut-list rows in display order.
        kind: Topology of the stock the pieces will be cut from.

    Returns:
        One ``CutPiece`` per physical piece, in row order.
    """
    pieces: list[CutPiece] = []
    for row_number, row in enumerate(rows, start=1):
        height = 0.0 if kind == StockKind.BAR else row.height
        label = row.label or default_label(row.width, height)
        for i in range(row.quantity):
            pieces.append(
                CutPiece(
                    id=f"{row_number}-{i}",
                    width=row.width,
                    height=height,
                    label=label,
                )
            )
    return pieces


def summarize_pieces(pieces: Sequence[CutPiece]) -> list[PieceRow]:
    """Group pieces of identical size back into cut-list rows.

    Sizes are compared at two decimals. Each row keeps the label of the
    first piece seen with that size; rows keep first-seen order.
    """
    groups: dict[tuple[float, float], list[CutPiece]] = {}
    for piece in pieces:
        key = (round(piece.width, 2), round(piece.height, 2))
        groups.setdefault(key, []).append(piece)

    return [
        PieceRow(
            width=group[0].width,
            height=group[0].height,
            quantity=len(group),
            label=group[0].label,
        )
        for group in groups.values()
    ]
