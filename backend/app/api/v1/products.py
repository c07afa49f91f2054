"""Product matching endpoint."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db
from app.matching_engine.products import resolve_product
from app.schemas.matching import EntityResponse, ProductMatchResponse
from app.services.catalog_service import load_products

router = APIRouter()


@router.get("/match", response_model=ProductMatchResponse)
async def match_product(
    name: str | None = Query(None, description="Free-text product or service name"),
    db: AsyncSession = Depends(get_db),
) -> ProductMatchResponse:
    """Resolve a product name to the catalog: exact, then substring, then token overlap.

    A blank name is rejected with 400 by the MatchInputError handler.
    """
    result = resolve_product(name, await load_products(db))
    return ProductMatchResponse(
        query=(name or "").strip(),
        match=EntityResponse(**result.matched_entity.to_dict()) if result.matched_entity else None,
        strategy=result.strategy.value,
        score=result.score,
    )
