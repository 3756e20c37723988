"""Randomized checks of properties every cutting plan must hold.

Each case is generated from a fixed seed so failures are reproducible.
"""

from __future__ import annotations

import math
import random

import pytest

from framecut.domain import CutPiece
from framecut.infrastructure.bin_packing import (
    EPSILON,
    CuttingPlanResult,
    pack_bars,
    pack_sheets,
)

SEEDS = range(40)


def random_bar_pieces(rng: random.Random, bar_length: float) -> list[CutPiece]:
    count = rng.randint(0, 30)
    return [
        CutPiece(id=f"b{i}", width=round(rng.uniform(5.0, bar_length * 1.1), 1))
        for i in range(count)
    ]


def random_sheet_pieces(
    rng: random.Random, sheet_width: float, sheet_height: float
) -> list[CutPiece]:
    count = rng.randint(0, 25)
    return [
        CutPiece(
            id=f"s{i}",
            width=round(rng.uniform(5.0, sheet_width * 1.05), 1),
            height=round(rng.uniform(5.0, sheet_height * 1.05), 1),
        )
        for i in range(count)
    ]


def assert_conserves_pieces(result: CuttingPlanResult, pieces: list[CutPiece]) -> None:
    placed_ids = [p.piece.id for p in result.placed_pieces()]
    unplaced_ids = [p.id for p in result.unplaced]
    assert sorted(placed_ids + unplaced_ids) == sorted(p.id for p in pieces)


def assert_totals_consistent(result: CuttingPlanResult) -> None:
    placed_area = sum(
        p.piece.width if result.stock.kind.value == "bar" else p.area
        for p in result.placed_pieces()
    )
    assert result.total_pieces_area == pytest.approx(placed_area)
    assert result.total_stock_area == pytest.approx(
        result.stock_units_used * result.stock.unit_area
    )
    assert result.total_waste == pytest.approx(
        result.total_stock_area - result.total_pieces_area
    )
    assert result.stock_units_used == len(result.layouts)
    for layout in result.layouts:
        assert layout.waste >= -1e-6
        assert layout.piece_count > 0


@pytest.mark.slow
@pytest.mark.parametrize("seed", SEEDS)
def test_bar_plans_respect_capacity(seed: int) -> None:
    rng = random.Random(seed)
    bar_length = rng.choice([240.0, 300.0, 330.0])
    pieces = random_bar_pieces(rng, bar_length)

    result = pack_bars(bar_length, pieces)

    assert_conserves_pieces(result, pieces)
    assert_totals_consistent(result)
    for layout in result.layouts:
        used = sum(p.piece.width for p in layout.placed_pieces)
        assert used <= bar_length + 1e-6
        cursor = 0.0
        for placement in layout.placed_pieces:
            assert placement.x == pytest.approx(cursor)
            cursor += placement.piece.width
    for piece in result.unplaced:
        assert piece.width > bar_length

    placed_length = sum(p.piece.width for p in result.placed_pieces())
    assert result.stock_units_used >= math.ceil(placed_length / bar_length - 1e-6)


@pytest.mark.slow
@pytest.mark.parametrize("seed", SEEDS)
def test_bar_plans_ignore_input_order(seed: int) -> None:
    rng = random.Random(seed)
    pieces = random_bar_pieces(rng, 300.0)
    shuffled = pieces[:]
    rng.shuffle(shuffled)

    first = pack_bars(300.0, pieces)
    reordered = pack_bars(300.0, shuffled)

    assert reordered.stock_units_used == first.stock_units_used
    assert reordered.total_waste == pytest.approx(first.total_waste)


@pytest.mark.slow
@pytest.mark.parametrize("seed", SEEDS)
def test_sheet_plans_are_geometrically_valid(seed: int) -> None:
    rng = random.Random(seed)
    sheet_width = rng.choice([100.0, 120.0, 160.0])
    sheet_height = rng.choice([80.0, 100.0, 200.0])
    allow_rotation = rng.random() < 0.7
    pieces = random_sheet_pieces(rng, sheet_width, sheet_height)

    result = pack_sheets(
        sheet_width, sheet_height, pieces, allow_rotation=allow_rotation
    )

    assert_conserves_pieces(result, pieces)
    assert_totals_consistent(result)
    for layout in result.layouts:
        placements = layout.placed_pieces
        for placement in placements:
            assert placement.x >= 0 and placement.y >= 0
            assert placement.right_edge <= sheet_width + EPSILON
            assert placement.top_edge <= sheet_height + EPSILON
            if placement.rotated:
                piece = placement.piece
                assert allow_rotation
                assert piece.width != piece.height
        for i, first in enumerate(placements):
            for second in placements[i + 1 :]:
                assert not first.overlaps(second)

    for piece in result.unplaced:
        fits_upright = piece.width <= sheet_width and piece.height <= sheet_height
        fits_turned = piece.height <= sheet_width and piece.width <= sheet_height
        assert not fits_upright
        assert not (allow_rotation and fits_turned)
