"""Tests for cut list, cutting sheet and JSON output."""

from __future__ import annotations

import json

import pytest

from framecut.domain import CutPiece, StockKind
from framecut.infrastructure import (
    CutListFormatter,
    CuttingPlanResult,
    CuttingSheetFormatter,
    JsonExporter,
    pack_bars,
    pack_sheets,
)


@pytest.fixture
def bar_result() -> CuttingPlanResult:
    pieces = [
        CutPiece(id="1-0", width=200.0, label="Top"),
        CutPiece(id="2-0", width=150.0, label="Side"),
        CutPiece(id="3-0", width=100.0, label="Bottom"),
        CutPiece(id="4-0", width=50.0, label="Spacer"),
    ]
    return pack_bars(300.0, pieces)


@pytest.fixture
def sheet_pieces() -> list[CutPiece]:
    return [
        CutPiece(id="1-0", width=60.0, height=60.0, label="Glass"),
        CutPiece(id="1-1", width=60.0, height=60.0, label="Glass"),
        CutPiece(id="2-0", width=40.0, height=80.0, label="Backing"),
        CutPiece(id="3-0", width=150.0, height=150.0, label="Oversize"),
    ]


@pytest.fixture
def sheet_result(sheet_pieces: list[CutPiece]) -> CuttingPlanResult:
    return pack_sheets(100.0, 100.0, sheet_pieces)


class TestCutListFormatter:
    """Tests for CutListFormatter."""

    def test_empty(self) -> None:
        assert CutListFormatter().format([]) == "No pieces in cut list."

    def test_sheet_rows_are_grouped(self, sheet_pieces: list[CutPiece]) -> None:
        output = CutListFormatter(StockKind.SHEET).format(sheet_pieces)

        lines = output.splitlines()
        assert lines[0] == "CUT LIST"
        glass = next(line for line in lines if line.startswith("Glass"))
        assert "60.00" in glass
        assert "7200.0" in glass
        assert "TOTAL" in output

    def test_sheet_total_in_square_meters(self) -> None:
        pieces = [CutPiece(id="1-0", width=100.0, height=100.0, label="Glass")]

        output = CutListFormatter(StockKind.SHEET).format(pieces)

        assert "(1.000 m2)" in output

    def test_bar_cut_list_has_length_column(self) -> None:
        pieces = [
            CutPiece(id="1-0", width=120.0, label="Side"),
            CutPiece(id="1-1", width=120.0, label="Side"),
        ]

        output = CutListFormatter(StockKind.BAR).format(pieces)

        assert "Length" in output
        assert "Height" not in output
        assert "240.00" in output


class TestCuttingSheetFormatter:
    """Tests for CuttingSheetFormatter."""

    def test_bar_plan(self, bar_result: CuttingPlanResult) -> None:
        output = CuttingSheetFormatter().format(bar_result)

        assert output.startswith("CUTTING PLAN")
        assert "Material: Bar 300 cm" in output
        assert "Stock units used: 2" in output
        assert "Waste:            16.7%" in output
        assert "Total leftover:   100.00 cm" in output
        assert "Bar #1 - 2 piece(s), 0.0% waste" in output
        assert "Bar #2 - 2 piece(s), 33.3% waste" in output
        assert "@ 200.0" in output
        assert "UNPLACED" not in output

    def test_sheet_plan_shows_positions(
        self, sheet_result: CuttingPlanResult
    ) -> None:
        output = CuttingSheetFormatter().format(sheet_result)

        assert "Material: Sheet 100 x 100 cm" in output
        assert "Sheet #1" in output
        assert "@ (0.0, 0.0)" in output
        assert "m2" in output

    def test_lists_unplaced_pieces(self, sheet_result: CuttingPlanResult) -> None:
        output = CuttingSheetFormatter().format(sheet_result)

        assert "UNPLACED (1) - larger than the stock" in output
        assert "Oversize" in output
        assert "150.0 x 150.0 cm" in output

    def test_rotated_marker(self) -> None:
        result = pack_sheets(
            100.0, 50.0, [CutPiece(id="1-0", width=40.0, height=80.0, label="Mat")]
        )

        output = CuttingSheetFormatter().format(result)

        assert "(R)" in output


class TestJsonExporter:
    """Tests for JsonExporter."""

    def test_export_is_valid_json(self, bar_result: CuttingPlanResult) -> None:
        data = json.loads(JsonExporter().export(bar_result))

        assert data["stock"]["kind"] == "bar"
        assert data["stock"]["width"] == 300.0
        assert data["stock_units_used"] == 2
        assert data["total_waste"] == pytest.approx(100.0)
        assert len(data["layouts"]) == 2
        assert data["unplaced"] == []

    def test_layout_placements(self, bar_result: CuttingPlanResult) -> None:
        data = JsonExporter().to_dict(bar_result)

        first = data["layouts"][0]
        assert first["stock_unit_index"] == 1
        assert first["placed_pieces"][0] == {
            "piece": {"id": "1-0", "width": 200.0, "height": 0.0, "label": "Top"},
            "x": 0.0,
            "y": 0.0,
            "rotated": False,
        }

    def test_unplaced_pieces(self, sheet_result: CuttingPlanResult) -> None:
        data = JsonExporter().to_dict(sheet_result)

        assert [p["id"] for p in data["unplaced"]] == ["3-0"]
