"""Infrastructure layer - packers, renderers and formatters."""

from .bin_packing import (
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
from .cut_diagram_renderer import CutDiagramRenderer
from .formatters import CutListFormatter, CuttingSheetFormatter, JsonExporter

__all__ = [
    # Packing
    "CuttingPlanConfig",
    "CuttingPlanResult",
    "CuttingPlanService",
    "FirstFitDecreasingBarPacker",
    "GuillotineSheetPacker",
    "Layout",
    "PlacedPiece",
    "build_plan_result",
    "guillotine_split",
    "pack_bars",
    "pack_sheets",
    # Cut diagram rendering
    "CutDiagramRenderer",
    # Formatters
    "CutListFormatter",
    "CuttingSheetFormatter",
    "JsonExporter",
]
