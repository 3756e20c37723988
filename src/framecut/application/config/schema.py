"""Pydantic configuration schema models for cutting jobs.

A cutting job names one stock material and the cut-list rows to plan from
it. The schema uses Pydantic v2 for validation and serialization.

The StockKind and OversizedPolicy enums are reused from the domain layer to
keep the JSON values and the engine in step.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from framecut.domain.value_objects import OversizedPolicy, StockKind

# Supported schema versions for job files
# Version 1.0: Stock, pieces and planning options
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class StockConfig(BaseModel):
    """Stock material configuration.

    Bars are described by ``length``; sheets by ``width`` and ``height``.
    All dimensions are centimeters.

    Attributes:
        kind: "bar" for linear material, "sheet" for planar material
        length: Bar length in cm (bars only)
        width: Sheet width in cm (sheets only)
        height: Sheet height in cm (sheets only)
        name: Catalog product name shown on printed plans
        code: Catalog product code shown on printed plans
    """

    model_config = ConfigDict(extra="forbid")

    kind: StockKind
    length: float | None = Field(default=None, gt=0, description="Bar length in cm")
    width: float | None = Field(default=None, gt=0, description="Sheet width in cm")
    height: float | None = Field(default=None, gt=0, description="Sheet height in cm")
    name: str = Field(default="", max_length=120)
    code: str = Field(default="", max_length=40)

    @model_validator(mode="after")
    def check_dimensions_for_kind(self) -> "StockConfig":
        """Require exactly the dimensions that apply to the stock kind."""
        if self.kind == StockKind.BAR:
            if self.length is None:
                raise ValueError("Bar stock requires 'length'")
            if self.width is not None or self.height is not None:
                raise ValueError("Bar stock takes 'length', not 'width'/'height'")
        else:
            if self.width is None or self.height is None:
                raise ValueError("Sheet stock requires 'width' and 'height'")
            if self.length is not None:
                raise ValueError("Sheet stock takes 'width'/'height', not 'length'")
        return self


class PieceRowConfig(BaseModel):
    """One cut-list row.

    Attributes:
        width: Piece width in cm (for bars, the cut length)
        height: Piece height in cm (ignored for bars)
        quantity: Number of identical pieces
        label: Order reference; defaults to the piece size
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(..., gt=0)
    height: float = Field(default=0.0, ge=0)
    quantity: int = Field(default=1, ge=1, le=10_000)
    label: str = Field(default="", max_length=120)


class PlanOptionsConfig(BaseModel):
    """Planning options.

    Attributes:
        allow_rotation: Whether sheet pieces may be turned 90 degrees
        on_oversized: "collect" returns oversized pieces as unplaced,
            "raise" fails the plan
    """

    model_config = ConfigDict(extra="forbid")

    allow_rotation: bool = True
    on_oversized: OversizedPolicy = OversizedPolicy.COLLECT


class CuttingJobConfiguration(BaseModel):
    """Root configuration model for a cutting job file.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        stock: Stock material to cut from
        pieces: Cut-list rows
        options: Planning options

    Example:
        >>> config = CuttingJobConfiguration(
        ...     schema_version="1.0",
        ...     stock=StockConfig(kind="bar", length=300),
        ...     pieces=[PieceRowConfig(width=120, quantity=2, label="#1042")],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    stock: StockConfig
    pieces: list[PieceRowConfig] = Field(default_factory=list)
    options: PlanOptionsConfig = Field(default_factory=PlanOptionsConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions within a supported major version are accepted
        for forward compatibility.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
