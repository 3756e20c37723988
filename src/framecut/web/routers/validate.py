"""Job validation endpoints."""

from fastapi import APIRouter

from framecut.application.config import load_config_from_dict, validate_config
from framecut.web.schemas.requests import PlanRequest
from framecut.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_job(request: PlanRequest) -> ValidationResultSchema:
    """Validate a job configuration without planning it.

    Schema failures are reported by the ``ConfigError`` handler; this
    endpoint returns the whole-job advisories.
    """
    config = load_config_from_dict(request.config)
    result = validate_config(config)
    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[
            {"message": w.message, "path": w.path, "suggestion": w.suggestion}
            for w in result.warnings
        ],
    )
