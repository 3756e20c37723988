"""Application commands (use cases) for cutting plans."""

from __future__ import annotations

import logging

from framecut.application.config import (
    CuttingJobConfiguration,
    config_to_pieces,
    config_to_plan_config,
    config_to_stock,
)
from framecut.infrastructure.bin_packing import CuttingPlanService

from .dtos import PlanOutput

logger = logging.getLogger(__name__)


class PlanCuttingCommand:
    """Command to compute a cutting plan for a job configuration.

    Resolves the stock, expands the cut-list rows into pieces and runs the
    packer matching the stock topology.
    """

    def execute(self, config: CuttingJobConfiguration) -> PlanOutput:
        """Execute the planning command.

        Args:
            config: A validated job configuration.

        Returns:
            PlanOutput with the stock, the expanded pieces and the plan.

        Raises:
            InvalidPieceError: If a sheet row has no height.
            OversizedPieceError: If the job asks to fail on oversized pieces
                and at least one does not fit.
        """
        stock = config_to_stock(config)
        pieces = config_to_pieces(config)
        service = CuttingPlanService(config_to_plan_config(config))

        logger.debug(
            "Planning %d pieces from %d rows on %s",
            len(pieces),
            len(config.pieces),
            stock.description,
        )
        result = service.plan(stock, pieces)
        return PlanOutput(stock=stock, pieces=tuple(pieces), result=result)
