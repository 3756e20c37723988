"""Cutting-plan endpoints."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from framecut.application.config import load_config_from_dict
from framecut.infrastructure import CuttingSheetFormatter, JsonExporter
from framecut.web.dependencies import PlanCommandDep
from framecut.web.schemas.requests import PlanRequest
from framecut.web.schemas.responses import CuttingPlanResponse

router = APIRouter(prefix="/plan", tags=["plan"])


@router.post("", response_model=CuttingPlanResponse)
async def create_plan(
    request: PlanRequest,
    command: PlanCommandDep,
) -> CuttingPlanResponse:
    """Compute a cutting plan for a job configuration.

    Pieces larger than the stock come back in ``unplaced`` unless the job
    sets ``options.on_oversized`` to ``raise``, in which case the request
    fails with a 422 listing them.

    Args:
        request: Request containing the job configuration.
        command: Injected PlanCuttingCommand.

    Returns:
        The cutting plan with per-unit layouts and totals.
    """
    config = load_config_from_dict(request.config)
    output = command.execute(config)
    data = JsonExporter().to_dict(output.result)
    return CuttingPlanResponse(
        **data,
        utilization_percentage=output.result.utilization_percentage,
    )


@router.post("/sheet", response_class=PlainTextResponse)
async def create_cutting_sheet(
    request: PlanRequest,
    command: PlanCommandDep,
) -> str:
    """Compute a cutting plan and return it as a printable text sheet."""
    config = load_config_from_dict(request.config)
    output = command.execute(config)
    return CuttingSheetFormatter().format(output.result)
