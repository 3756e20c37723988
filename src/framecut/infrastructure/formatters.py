"""Output formatters and exporters for cutting plans."""

from __future__ import annotations

import json
from typing import Any, Sequence

from framecut.domain import CutPiece, StockKind, summarize_pieces
from framecut.infrastructure.bin_packing import CuttingPlanResult, Layout, PlacedPiece

# Square centimeters per square meter.
CM2_PER_M2 = 10_000


class CutListFormatter:
    """Formats a piece list as a grouped cut list.

    Pieces of identical size are collapsed into one line with a quantity.
    """

    def __init__(self, kind: StockKind = StockKind.SHEET) -> None:
        """Initialize formatter.

        Args:
            kind: Stock topology; bar cut lists omit the height column.
        """
        self._kind = kind

    def format(self, pieces: Sequence[CutPiece]) -> str:
        """Format pieces as a table."""
        if not pieces:
            return "No pieces in cut list."

        rows = summarize_pieces(pieces)

        if self._kind == StockKind.BAR:
            lines = [
                "CUT LIST",
                "=" * 50,
                f"{'Label':<24} {'Length':<10} {'Qty':<6}",
                "-" * 50,
            ]
            for row in rows:
                lines.append(f"{row.label:<24} {row.width:<10.2f} {row.quantity:<6}")
            total = sum(row.width * row.quantity for row in rows)
            lines.append("-" * 50)
            lines.append(f"{'TOTAL':<24} {total:<10.2f} {len(pieces):<6}")
            return "\n".join(lines)

        lines = [
            "CUT LIST",
            "=" * 70,
            f"{'Label':<24} {'Width':<10} {'Height':<10} {'Qty':<6} {'Area (cm2)'}",
            "-" * 70,
        ]
        for row in rows:
            lines.append(
                f"{row.label:<24} {row.width:<10.2f} {row.height:<10.2f} "
                f"{row.quantity:<6} {row.area:.1f}"
            )
        total_area = sum(row.area for row in rows)
        lines.append("-" * 70)
        lines.append(f"{'TOTAL':<24} {'':<10} {'':<10} {len(pieces):<6} {total_area:.1f}")
        lines.append(f"{'':>52} ({total_area / CM2_PER_M2:.3f} m2)")
        return "\n".join(lines)


class CuttingSheetFormatter:
    """Formats a cutting plan as a printable text sheet.

    The sheet lists the stock material, a utilization summary, every stock
    unit with its cuts in placement order, and any pieces that could not be
    placed.
    """

    def format(self, result: CuttingPlanResult) -> str:
        """Format the full cutting plan."""
        stock = result.stock
        unit_name = "Bar" if stock.kind == StockKind.BAR else "Sheet"

        lines = [
            "CUTTING PLAN",
            "=" * 70,
            f"Material: {stock.description}",
            "",
            f"Stock units used: {result.stock_units_used}",
            f"Utilization:      {result.utilization_percentage:.1f}%",
            f"Waste:            {result.waste_percentage:.1f}%",
            f"Total leftover:   {self._format_leftover(result)}",
        ]

        for layout in result.layouts:
            lines.append("")
            lines.append(
                f"{unit_name} #{layout.stock_unit_index} - "
                f"{layout.piece_count} piece(s), {layout.waste_percentage:.1f}% waste"
            )
            lines.append("-" * 70)
            for placement in layout.placed_pieces:
                lines.append(self._format_placement(placement, stock.kind))
            lines.append(f"  Leftover: {self._format_layout_leftover(layout)}")

        if result.unplaced:
            lines.append("")
            lines.append(f"UNPLACED ({len(result.unplaced)}) - larger than the stock")
            lines.append("-" * 70)
            for piece in result.unplaced:
                lines.append(f"  {piece.label:<24} {self._format_size(piece, stock.kind)}")

        return "\n".join(lines)

    def _format_placement(self, placement: PlacedPiece, kind: StockKind) -> str:
        piece = placement.piece
        size = self._format_size(piece, kind)
        if kind == StockKind.BAR:
            return f"  {piece.label:<24} {size:<18} @ {placement.x:.1f}"
        rotated = " (R)" if placement.rotated else ""
        return (
            f"  {piece.label:<24} {size:<18} @ ({placement.x:.1f}, {placement.y:.1f})"
            f"{rotated}"
        )

    def _format_size(self, piece: CutPiece, kind: StockKind) -> str:
        if kind == StockKind.BAR:
            return f"{piece.width:.1f} cm"
        return f"{piece.width:.1f} x {piece.height:.1f} cm"

    def _format_leftover(self, result: CuttingPlanResult) -> str:
        if result.stock.kind == StockKind.BAR:
            return f"{result.total_waste:.2f} cm"
        return f"{result.total_waste / CM2_PER_M2:.3f} m2"

    def _format_layout_leftover(self, layout: Layout) -> str:
        if layout.stock.kind == StockKind.BAR:
            return f"{layout.waste:.2f} cm"
        return f"{layout.waste / CM2_PER_M2:.3f} m2"


class JsonExporter:
    """Exports cutting plans as JSON."""

    def export(self, result: CuttingPlanResult) -> str:
        """Export a cutting plan as a JSON string."""
        return json.dumps(self.to_dict(result), indent=2)

    def to_dict(self, result: CuttingPlanResult) -> dict[str, Any]:
        """Convert a cutting plan to plain JSON-compatible data."""
        stock = result.stock
        return {
            "stock": {
                "kind": stock.kind.value,
                "width": stock.width,
                "height": stock.height,
                "name": stock.name,
                "code": stock.code,
            },
            "stock_units_used": result.stock_units_used,
            "total_pieces_area": result.total_pieces_area,
            "total_stock_area": result.total_stock_area,
            "total_waste": result.total_waste,
            "waste_percentage": result.waste_percentage,
            "layouts": [self._format_layout(layout) for layout in result.layouts],
            "unplaced": [self._format_piece(piece) for piece in result.unplaced],
        }

    def _format_layout(self, layout: Layout) -> dict[str, Any]:
        return {
            "stock_unit_index": layout.stock_unit_index,
            "waste": layout.waste,
            "placed_pieces": [
                {
                    "piece": self._format_piece(p.piece),
                    "x": p.x,
                    "y": p.y,
                    "rotated": p.rotated,
                }
                for p in layout.placed_pieces
            ],
        }

    def _format_piece(self, piece: CutPiece) -> dict[str, Any]:
        return {
            "id": piece.id,
            "width": piece.width,
            "height": piece.height,
            "label": piece.label,
        }
