from fastapi import APIRouter, HTTPException

from schemas import (
    DayOut, DistributeRequest, DistributionOut, FacilityConfigSchema, to_config,
)
from supervision.models import FacilityConfig
from supervision.solver import AttemptsExhausted, distribute
from supervision.write_schedule import distribution_table

router = APIRouter()


@router.get("/config", response_model=FacilityConfigSchema)
def default_config():
    return FacilityConfigSchema.model_validate(FacilityConfig())


@router.post("/", response_model=DistributionOut)
def create_distribution(req: DistributeRequest):
    """Distribute the confirmed candidate list over rooms and days."""
    cfg = to_config(req.config)
    try:
        result = distribute(req.candidates, cfg, random_seed=req.seed)
    except AttemptsExhausted as e:
        raise HTTPException(422, {"message": str(e), "conflicts": e.messages})
    except ValueError as e:
        raise HTTPException(400, str(e))

    return DistributionOut(
        days=[DayOut(**d.to_dict()) for d in result.distribution],
        attempts=result.attempts,
        seed=result.seed,
        table=distribution_table(result.distribution, req.candidates),
    )
