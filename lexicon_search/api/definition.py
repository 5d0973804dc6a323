"""Definition lookup API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Path

from ..core.engine import SearchEngine
from ..models.entry import FullDefinition
from ..store.base import StoreError
from .dependencies import get_engine

router = APIRouter(prefix="/api/v1", tags=["definition"])


@router.get(
    "/definition/{word_id}",
    response_model=FullDefinition,
    summary="Get a full definition",
    description="Get all meanings, pronunciations, etymology and translations of an entry"
)
async def get_definition(
    word_id: int = Path(..., ge=1, description="Entry id from a search result"),
    engine: SearchEngine = Depends(get_engine)
) -> FullDefinition:
    """Get the complete dictionary entry for a search result id."""
    try:
        definition = engine.get_definition(word_id)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=f"Lexicon store unavailable: {e}")
    
    if definition is None:
        raise HTTPException(status_code=404, detail=f"No entry found with id {word_id}")
    
    return definition
