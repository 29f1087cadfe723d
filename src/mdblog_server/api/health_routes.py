from typing import Annotated

from fastapi import APIRouter, Depends

from .dependencies import get_content_index
from .models import HealthResponse
from ..content import ContentIndex

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health(
    content_index: Annotated[ContentIndex, Depends(get_content_index)],
) -> HealthResponse:
    if not content_index.store.is_ready:
        return HealthResponse(status="loading", posts=0, generation=0)

    snapshot = content_index.snapshot()
    return HealthResponse(
        status="ok",
        posts=len(snapshot),
        generation=snapshot.generation,
        loaded_at=snapshot.loaded_at,
    )
