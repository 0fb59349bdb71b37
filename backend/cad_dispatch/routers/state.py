"""API route for the dispatch board snapshot."""

from typing import Annotated

from fastapi import APIRouter, Depends

from cad_dispatch.dependencies import get_engine
from cad_dispatch.schemas.state import ApiResponse
from cad_dispatch.services.engine import DispatchEngine

router = APIRouter(prefix="/state", tags=["state"])


@router.get("", response_model=ApiResponse)
async def get_state(
    engine: Annotated[DispatchEngine, Depends(get_engine)],
) -> ApiResponse:
    """
    Current incidents and officers.

    Incidents carry the assigned officer's id as officerID (omitted while
    unassigned). error is reserved and always null.
    """
    return ApiResponse(data=engine.snapshot(), error=None)
