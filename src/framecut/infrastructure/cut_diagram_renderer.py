"""Cut diagram rendering for cutting-plan visualization.

This module renders each stock unit of a cutting plan as a proportionally
scaled SVG diagram showing piece placements, labels, dimensions, rotation
indicators and leftover material.
"""

from __future__ import annotations

from xml.sax.saxutils import escape

from framecut.domain import StockKind
from framecut.infrastructure.bin_packing import CuttingPlanResult, Layout, PlacedPiece


class CutDiagramRenderer:
    """Renders cut diagrams in SVG format.

    Sheets are drawn to scale. Bars are drawn as a strip of fixed height
    since only their length matters.

    Attributes:
        scale: Pixels per centimeter (default 4).
        bar_height: Pixel height of a bar strip.
        piece_fill: Fill color for placed pieces.
        piece_stroke: Stroke color for piece outlines.
        waste_fill: Fill color for leftover material.
        text_color: Color for labels and dimensions.
        show_dimensions: Whether to show piece dimensions.
        show_labels: Whether to show piece labels.
    """

    def __init__(
        self,
        scale: float = 4.0,
        bar_height: float = 40.0,
        piece_fill: str = "#C7D2FE",  # Indigo 200
        piece_stroke: str = "#6366F1",  # Indigo 500
        waste_fill: str = "#E5E7EB",  # Gray 200
        text_color: str = "#1E1B4B",
        show_dimensions: bool = True,
        show_labels: bool = True,
    ) -> None:
        if scale <= 0:
            raise ValueError("Scale must be positive")
        self.scale = scale
        self.bar_height = bar_height
        self.piece_fill = piece_fill
        self.piece_stroke = piece_stroke
        self.waste_fill = waste_fill
        self.text_color = text_color
        self.show_dimensions = show_dimensions
        self.show_labels = show_labels

    def render_svg(self, layout: Layout, total_units: int = 1) -> str:
        """Generate an SVG cut diagram for a single stock unit.

        Args:
            layout: Layout with placed pieces.
            total_units: Total number of stock units (for header display).

        Returns:
            SVG document as a string.
        """
        stock = layout.stock
        header_height = 30
        body_w = stock.width * self.scale
        if stock.kind == StockKind.BAR:
            body_h = self.bar_height
        else:
            body_h = stock.height * self.scale

        svg_width = body_w
        svg_height = body_h + header_height

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            "",
            "  <!-- Background -->",
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
            "",
            self._render_header(layout, total_units, svg_width, header_height),
            "",
            "  <!-- Stock outline (leftover shows through) -->",
            f'  <rect x="0" y="{header_height}" width="{body_w}" height="{body_h}" '
            f'fill="{self.waste_fill}" stroke="#000000" stroke-width="2"/>',
            "",
            "  <!-- Placed pieces -->",
        ]

        for placement in layout.placed_pieces:
            parts.append(self._render_piece(placement, stock.kind, header_height, body_h))

        parts.append("")
        parts.append("</svg>")
        return "\n".join(parts)

    def render_all_svg(self, result: CuttingPlanResult) -> list[str]:
        """Generate SVG cut diagrams for every stock unit of a plan."""
        total = result.stock_units_used
        return [self.render_svg(layout, total) for layout in result.layouts]

    def _render_header(
        self,
        layout: Layout,
        total_units: int,
        svg_width: float,
        header_height: float,
    ) -> str:
        unit_name = "Bar" if layout.stock.kind == StockKind.BAR else "Sheet"
        header_text = escape(
            f"{unit_name} {layout.stock_unit_index} of {total_units} - "
            f"{layout.stock.description} - {layout.waste_percentage:.1f}% waste"
        )
        return (
            f"  <!-- Header -->\n"
            f'  <rect x="0" y="0" width="{svg_width}" height="{header_height}" '
            f'fill="#E0E0E0"/>\n'
            f'  <text x="10" y="{header_height - 8}" '
            f'font-family="Arial, sans-serif" font-size="14" '
            f'fill="{self.text_color}">{header_text}</text>'
        )

    def _render_piece(
        self,
        placement: PlacedPiece,
        kind: StockKind,
        header_height: float,
        body_h: float,
    ) -> str:
        x = placement.x * self.scale
        w = placement.placed_width * self.scale
        if kind == StockKind.BAR:
            y = float(header_height)
            h = body_h
        else:
            y = header_height + placement.y * self.scale
            h = placement.placed_height * self.scale

        piece = placement.piece
        if kind == StockKind.BAR:
            dims = f"{piece.width:.1f}"
        else:
            dims = f"{piece.width:.1f}x{piece.height:.1f}"
        if placement.rotated:
            dims += " (R)"

        rect = (
            f'<rect x="{x}" y="{y}" width="{w}" height="{h}" '
            f'fill="{self.piece_fill}" stroke="{self.piece_stroke}"/>'
        )

        font_size = min(12, min(w, h) / 4)
        if font_size < 6 or not (self.show_labels or self.show_dimensions):
            return f"  {rect}"

        text_x = x + w / 2
        text_y = y + h / 2
        svg_parts = ["  <g>", f"    {rect}"]

        if self.show_labels:
            svg_parts.append(
                f'    <text x="{text_x}" y="{text_y - font_size / 2}" '
                f'text-anchor="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size}" fill="{self.text_color}">'
                f"{escape(piece.label)}</text>"
            )

        if self.show_dimensions:
            dims_y = text_y + font_size / 2 + 2 if self.show_labels else text_y
            svg_parts.append(
                f'    <text x="{text_x}" y="{dims_y}" '
                f'text-anchor="middle" font-family="monospace" '
                f'font-size="{font_size * 0.8}" fill="{self.text_color}">{dims}</text>'
            )

        svg_parts.append("  </g>")
        return "\n".join(svg_parts)
