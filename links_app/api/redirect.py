from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from links_app.dependencies import get_link_service
from links_app.services.link_service import LinkService

router = APIRouter(tags=["redirect"])


@router.get("/{code}", response_class=RedirectResponse, status_code=status.HTTP_302_FOUND)
def redirect_to_target(
    code: str,
    link_service: LinkService = Depends(get_link_service)
):
    """
    Redirect to the link's target URL.
    
    The click is counted by the same statement that looks up the target,
    and committed before the redirect is returned.
    
    This router must be included last: every API path would otherwise
    match ``/{code}``.
    """
    target_url = link_service.resolve_redirect(code)
    return RedirectResponse(url=target_url, status_code=status.HTTP_302_FOUND)
