"""Job configuration schema, loading and validation.

Public API:
    - CuttingJobConfiguration: Root job model
    - StockConfig, PieceRowConfig, PlanOptionsConfig: Job sections
    - load_config / load_config_from_dict: Load and validate a job
    - ConfigError: Exception for configuration errors
    - validate_config / ValidationResult: Whole-job advisories
    - config_to_stock, config_to_pieces, config_to_piece_rows,
      config_to_plan_config: Convert a job to domain objects

Example:
    >>> from pathlib import Path
    >>> from framecut.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("order-1042.json"))
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from framecut.application.config.adapter import (
    config_to_piece_rows,
    config_to_pieces,
    config_to_plan_config,
    config_to_stock,
)
from framecut.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from framecut.application.config.schema import (
    SUPPORTED_VERSIONS,
    CuttingJobConfiguration,
    PieceRowConfig,
    PlanOptionsConfig,
    StockConfig,
)
from framecut.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    # Schema
    "SUPPORTED_VERSIONS",
    "CuttingJobConfiguration",
    "PieceRowConfig",
    "PlanOptionsConfig",
    "StockConfig",
    # Loading
    "ConfigError",
    "load_config",
    "load_config_from_dict",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate_config",
    # Adapters
    "config_to_piece_rows",
    "config_to_pieces",
    "config_to_plan_config",
    "config_to_stock",
]
