"""Tests for cutting-plan models and the bar and sheet packers.

Tests cover:
- Result model validation and derived values
- First-Fit Decreasing bar packing
- Guillotine sheet packing with Best-Short-Side-Fit scoring
- Rotation rules and guillotine splits
- Oversized pieces under both policies
- CuttingPlanService dispatch
"""

from __future__ import annotations

import pytest

from framecut.domain import (
    CutPiece,
    FreeRectangle,
    InvalidPieceError,
    InvalidStockError,
    OversizedPieceError,
    OversizedPolicy,
    StockDescriptor,
)
from framecut.infrastructure.bin_packing import (
    CuttingPlanConfig,
    CuttingPlanResult,
    CuttingPlanService,
    FirstFitDecreasingBarPacker,
    GuillotineSheetPacker,
    Layout,
    PlacedPiece,
    build_plan_result,
    guillotine_split,
    pack_bars,
    pack_sheets,
)


def bar_pieces(*lengths: float) -> list[CutPiece]:
    return [CutPiece(id=f"p{i}", width=length) for i, length in enumerate(lengths)]


def sheet_pieces(*sizes: tuple[float, float]) -> list[CutPiece]:
    return [CutPiece(id=f"p{i}", width=w, height=h) for i, (w, h) in enumerate(sizes)]


# =============================================================================
# Result model
# =============================================================================


class TestPlacedPiece:
    """Tests for PlacedPiece."""

    def test_rotated_swaps_footprint(self) -> None:
        piece = CutPiece(id="a", width=40.0, height=80.0)
        placed = PlacedPiece(piece=piece, x=10.0, y=5.0, rotated=True)

        assert placed.placed_width == 80.0
        assert placed.placed_height == 40.0
        assert placed.right_edge == 90.0
        assert placed.top_edge == 45.0

    def test_rejects_negative_position(self) -> None:
        piece = CutPiece(id="a", width=40.0, height=80.0)
        with pytest.raises(ValueError, match="non-negative"):
            PlacedPiece(piece=piece, x=-1.0)

    def test_overlap_detection(self) -> None:
        piece = CutPiece(id="a", width=50.0, height=50.0)
        first = PlacedPiece(piece=piece, x=0.0, y=0.0)
        touching = PlacedPiece(piece=piece, x=50.0, y=0.0)
        crossing = PlacedPiece(piece=piece, x=25.0, y=25.0)

        assert not first.overlaps(touching)
        assert first.overlaps(crossing)
        assert crossing.overlaps(first)


class TestLayoutAndResult:
    """Tests for Layout, CuttingPlanResult and build_plan_result."""

    def test_layout_index_is_one_based(self) -> None:
        with pytest.raises(ValueError, match="at least 1"):
            Layout(
                stock_unit_index=0,
                placed_pieces=(),
                waste=0.0,
                stock=StockDescriptor.bar(100.0),
            )

    def test_result_requires_matching_layout_count(self) -> None:
        with pytest.raises(ValueError, match="must match"):
            CuttingPlanResult(
                stock=StockDescriptor.bar(100.0),
                stock_units_used=1,
                total_pieces_area=0.0,
                total_stock_area=100.0,
                total_waste=100.0,
                waste_percentage=100.0,
                layouts=(),
            )

    def test_build_plan_result_totals(self) -> None:
        stock = StockDescriptor.bar(300.0)
        a, b, c = bar_pieces(200.0, 100.0, 150.0)
        bins = [
            ([PlacedPiece(a, 0.0), PlacedPiece(b, 200.0)], 0.0),
            ([PlacedPiece(c, 0.0)], 150.0),
        ]

        result = build_plan_result(stock, bins)

        assert result.stock_units_used == 2
        assert result.total_stock_area == 600.0
        assert result.total_waste == 150.0
        assert result.total_pieces_area == 450.0
        assert result.waste_percentage == pytest.approx(25.0)
        assert result.utilization_percentage == pytest.approx(75.0)
        assert [layout.stock_unit_index for layout in result.layouts] == [1, 2]
        assert result.layouts[1].used_area == 150.0
        assert result.total_pieces_placed == 3

    def test_empty_result_has_zero_percentages(self) -> None:
        result = build_plan_result(StockDescriptor.sheet(100.0, 100.0), [])

        assert result.stock_units_used == 0
        assert result.waste_percentage == 0.0
        assert result.utilization_percentage == 0.0
        assert not result.has_unplaced


# =============================================================================
# Bar packing
# =============================================================================


class TestFirstFitDecreasingBarPacker:
    """Tests for First-Fit Decreasing bar packing."""

    def test_reference_scenario(self) -> None:
        """300 cm bars, cuts 200/150/100/50: two bars, 100 cm left over."""
        result = pack_bars(300.0, bar_pieces(200.0, 150.0, 100.0, 50.0))

        assert result.stock_units_used == 2
        assert result.total_waste == pytest.approx(100.0)
        assert result.total_pieces_area == pytest.approx(500.0)
        assert result.waste_percentage == pytest.approx(100.0 / 6.0)

        first, second = result.layouts
        assert [(p.piece.width, p.x) for p in first.placed_pieces] == [
            (200.0, 0.0),
            (100.0, 200.0),
        ]
        assert first.waste == 0.0
        assert [(p.piece.width, p.x) for p in second.placed_pieces] == [
            (150.0, 0.0),
            (50.0, 150.0),
        ]
        assert second.waste == pytest.approx(100.0)

    def test_takes_first_bar_with_room_not_tightest(self) -> None:
        """The 2 cm cut goes to bar 1 (40 left), not bar 3 where it fits exactly."""
        result = pack_bars(100.0, bar_pieces(60.0, 58.0, 57.0, 42.0, 41.0, 2.0))

        widths = [[p.piece.width for p in layout.placed_pieces] for layout in result.layouts]
        assert widths == [[60.0, 2.0], [58.0, 42.0], [57.0, 41.0]]
        assert [layout.waste for layout in result.layouts] == pytest.approx(
            [38.0, 0.0, 2.0]
        )

    def test_placements_are_bar_shaped(self) -> None:
        result = pack_bars(300.0, bar_pieces(120.0, 80.0))

        for placement in result.placed_pieces():
            assert placement.y == 0.0
            assert placement.rotated is False

    def test_exact_fit_leaves_no_waste(self) -> None:
        result = pack_bars(300.0, bar_pieces(100.0, 100.0, 100.0))

        assert result.stock_units_used == 1
        assert result.total_waste == 0.0
        assert result.utilization_percentage == pytest.approx(100.0)

    def test_float_accumulation_does_not_open_extra_bar(self) -> None:
        result = pack_bars(1.0, bar_pieces(*[0.1] * 10))

        assert result.stock_units_used == 1

    def test_equal_lengths_keep_input_order(self) -> None:
        result = pack_bars(100.0, bar_pieces(50.0, 50.0, 50.0))

        ids = [[p.piece.id for p in layout.placed_pieces] for layout in result.layouts]
        assert ids == [["p0", "p1"], ["p2"]]

    def test_longer_than_bar_is_collected(self) -> None:
        result = pack_bars(100.0, bar_pieces(150.0, 50.0))

        assert [p.id for p in result.unplaced] == ["p0"]
        assert result.stock_units_used == 1
        assert result.total_waste == pytest.approx(50.0)

    def test_only_oversized_opens_no_bar(self) -> None:
        result = pack_bars(100.0, bar_pieces(150.0))

        assert result.stock_units_used == 0
        assert result.layouts == ()
        assert result.has_unplaced

    def test_longer_than_bar_raises_under_raise_policy(self) -> None:
        with pytest.raises(OversizedPieceError) as exc_info:
            pack_bars(
                100.0,
                bar_pieces(150.0, 50.0, 120.0),
                oversized_policy=OversizedPolicy.RAISE,
            )

        assert {p.id for p in exc_info.value.pieces} == {"p0", "p2"}

    def test_empty_piece_list(self) -> None:
        result = pack_bars(300.0, [])

        assert result.stock_units_used == 0
        assert result.waste_percentage == 0.0

    def test_rejects_sheet_stock(self) -> None:
        packer = FirstFitDecreasingBarPacker()
        with pytest.raises(InvalidStockError, match="bar stock"):
            packer.pack(StockDescriptor.sheet(100.0, 100.0), bar_pieces(10.0))

    def test_rejects_duplicate_ids(self) -> None:
        pieces = [CutPiece(id="x", width=10.0), CutPiece(id="x", width=20.0)]
        with pytest.raises(InvalidPieceError, match="Duplicate piece id 'x'"):
            pack_bars(100.0, pieces)

    def test_invalid_bar_length(self) -> None:
        with pytest.raises(InvalidStockError):
            pack_bars(0.0, bar_pieces(10.0))


# =============================================================================
# Sheet packing
# =============================================================================


class TestGuillotineSplit:
    """Tests for guillotine_split."""

    def test_right_remainder_is_full_height_and_bottom_is_piece_width(self) -> None:
        rect = FreeRectangle(0.0, 0.0, 100.0, 100.0)

        right, bottom = guillotine_split(rect, 60.0, 30.0)

        assert right == FreeRectangle(60.0, 0.0, 40.0, 100.0)
        assert bottom == FreeRectangle(0.0, 30.0, 60.0, 70.0)

    def test_offset_rectangle(self) -> None:
        rect = FreeRectangle(40.0, 60.0, 60.0, 40.0)

        assert guillotine_split(rect, 20.0, 40.0) == [
            FreeRectangle(60.0, 60.0, 40.0, 40.0)
        ]

    def test_exact_fit_has_no_remainders(self) -> None:
        rect = FreeRectangle(0.0, 0.0, 50.0, 50.0)

        assert guillotine_split(rect, 50.0, 50.0) == []

    def test_exact_width_leaves_only_bottom(self) -> None:
        rect = FreeRectangle(0.0, 0.0, 50.0, 80.0)

        assert guillotine_split(rect, 50.0, 30.0) == [
            FreeRectangle(0.0, 30.0, 50.0, 50.0)
        ]


class TestGuillotineSheetPacker:
    """Tests for guillotine sheet packing."""

    def test_reference_scenario(self) -> None:
        """100x100 sheets, two 60x60 pieces: two sheets, 64% waste."""
        result = pack_sheets(100.0, 100.0, sheet_pieces((60.0, 60.0), (60.0, 60.0)))

        assert result.stock_units_used == 2
        assert result.total_pieces_area == pytest.approx(7200.0)
        assert result.total_waste == pytest.approx(12800.0)
        assert result.waste_percentage == pytest.approx(64.0)
        for layout in result.layouts:
            (placement,) = layout.placed_pieces
            assert (placement.x, placement.y) == (0.0, 0.0)
            assert layout.waste == pytest.approx(6400.0)

    def test_oversized_piece_opens_no_sheet(self) -> None:
        result = pack_sheets(50.0, 50.0, sheet_pieces((60.0, 60.0)))

        assert result.stock_units_used == 0
        assert [p.id for p in result.unplaced] == ["p0"]
        assert result.waste_percentage == 0.0

    def test_oversized_piece_raises_under_raise_policy(self) -> None:
        with pytest.raises(OversizedPieceError) as exc_info:
            pack_sheets(
                50.0,
                50.0,
                sheet_pieces((60.0, 60.0), (10.0, 10.0)),
                oversized_policy=OversizedPolicy.RAISE,
            )

        assert [p.id for p in exc_info.value.pieces] == ["p0"]

    def test_fills_sheet_exactly(self) -> None:
        pieces = sheet_pieces((60.0, 60.0), (40.0, 100.0), (60.0, 40.0))

        result = pack_sheets(100.0, 100.0, pieces)

        assert result.stock_units_used == 1
        assert result.total_waste == pytest.approx(0.0)
        positions = {
            p.piece.id: (p.x, p.y, p.rotated) for p in result.layouts[0].placed_pieces
        }
        assert positions == {
            "p1": (0.0, 0.0, False),
            "p0": (40.0, 0.0, False),
            "p2": (40.0, 60.0, False),
        }

    def test_rotates_only_when_needed(self) -> None:
        result = pack_sheets(100.0, 50.0, sheet_pieces((40.0, 80.0)))

        (placement,) = result.layouts[0].placed_pieces
        assert placement.rotated is True
        assert (placement.placed_width, placement.placed_height) == (80.0, 40.0)

    def test_keeps_input_orientation_when_it_fits(self) -> None:
        """A turned piece would score better here, but the input form fits."""
        result = pack_sheets(100.0, 60.0, sheet_pieces((58.0, 40.0)))

        (placement,) = result.layouts[0].placed_pieces
        assert placement.rotated is False

    def test_rotation_disabled(self) -> None:
        result = pack_sheets(
            100.0, 50.0, sheet_pieces((40.0, 80.0)), allow_rotation=False
        )

        assert result.stock_units_used == 0
        assert [p.id for p in result.unplaced] == ["p0"]

    def test_square_pieces_are_never_rotated(self) -> None:
        result = pack_sheets(100.0, 100.0, sheet_pieces(*[(30.0, 30.0)] * 9))

        assert result.stock_units_used == 1
        assert not any(p.rotated for p in result.placed_pieces())

    def test_best_short_side_fit_chooses_tightest_rectangle(self) -> None:
        # Free list after the 60x50 piece: right 40x100 (slack 10),
        # bottom 60x50 (slack 2). The bottom one wins.
        result = pack_sheets(100.0, 100.0, sheet_pieces((60.0, 50.0), (30.0, 48.0)))

        assert result.stock_units_used == 1
        small = next(p for p in result.placed_pieces() if p.piece.id == "p1")
        assert (small.x, small.y) == (0.0, 50.0)

    def test_fills_remaining_strip_before_opening_sheet(self) -> None:
        result = pack_sheets(100.0, 100.0, sheet_pieces((70.0, 100.0), (30.0, 30.0)))

        assert result.stock_units_used == 1
        small = next(p for p in result.placed_pieces() if p.piece.id == "p1")
        assert (small.x, small.y) == (70.0, 0.0)

    def test_reuses_earlier_sheet(self) -> None:
        # Two large pieces need two sheets; the small one fits the first.
        pieces = sheet_pieces((80.0, 80.0), (80.0, 80.0), (15.0, 15.0))

        result = pack_sheets(100.0, 100.0, pieces)

        assert result.stock_units_used == 2
        assert result.layouts[0].piece_count == 2
        assert result.layouts[1].piece_count == 1

    def test_rejects_zero_height(self) -> None:
        pieces = [CutPiece(id="a", width=10.0)]
        with pytest.raises(InvalidPieceError, match="positive height"):
            pack_sheets(100.0, 100.0, pieces)

    def test_rejects_bar_stock(self) -> None:
        packer = GuillotineSheetPacker()
        with pytest.raises(InvalidStockError, match="sheet stock"):
            packer.pack(StockDescriptor.bar(100.0), sheet_pieces((10.0, 10.0)))

    def test_empty_piece_list(self) -> None:
        result = pack_sheets(100.0, 100.0, [])

        assert result.stock_units_used == 0
        assert result.layouts == ()


# =============================================================================
# Service
# =============================================================================


class TestCuttingPlanService:
    """Tests for CuttingPlanService dispatch."""

    def test_dispatches_bar_stock(self) -> None:
        service = CuttingPlanService()

        result = service.plan(StockDescriptor.bar(300.0), bar_pieces(200.0, 150.0))

        assert result.stock.kind.value == "bar"
        assert result.stock_units_used == 2

    def test_dispatches_sheet_stock(self) -> None:
        service = CuttingPlanService()

        result = service.plan(
            StockDescriptor.sheet(100.0, 100.0), sheet_pieces((50.0, 50.0))
        )

        assert result.stock.kind.value == "sheet"
        assert result.stock_units_used == 1

    def test_config_reaches_both_packers(self) -> None:
        config = CuttingPlanConfig(
            allow_rotation=False, oversized_policy=OversizedPolicy.RAISE
        )
        service = CuttingPlanService(config)

        assert service.bar_packer.config is config
        assert service.sheet_packer.config is config

    def test_service_is_stateless_between_calls(self) -> None:
        service = CuttingPlanService()
        stock = StockDescriptor.bar(300.0)
        pieces = bar_pieces(200.0, 150.0, 100.0, 50.0)

        first = service.plan(stock, pieces)
        second = service.plan(stock, pieces)

        assert first == second
