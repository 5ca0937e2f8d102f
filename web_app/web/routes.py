"""Redirect route for short links."""

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from shortener.common.validators import is_valid_short_code

router = APIRouter()


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the long URL."""
    is_valid, error = is_valid_short_code(short_code)
    if not is_valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)

    service = request.app.state.service
    long_url = await service.resolve(short_code)

    # Temporary redirect: mappings can be deleted, so clients must not cache it
    return RedirectResponse(url=long_url, status_code=status.HTTP_302_FOUND)
