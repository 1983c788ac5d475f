"""Search API endpoints."""

from fastapi import APIRouter, status

from flowstate_api.api.deps import ResolverDep
from flowstate_api.schemas.search import SearchRequest, SearchResponse

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", status_code=status.HTTP_200_OK)
async def search(body: SearchRequest, resolver: ResolverDep) -> SearchResponse:
    """Resolve a query across the search provider tiers.

    Responds 502 only if every tier failed; an empty result is a 200.
    """
    results = await resolver.resolve(body.query, body.max_results)
    return SearchResponse(results=results)
