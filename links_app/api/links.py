from typing import List

from fastapi import APIRouter, Depends, status

from links_app.dependencies import get_link_service
from links_app.schemas.link import ErrorResponse, LinkCreate, LinkDeleted, LinkResponse
from links_app.services.link_service import LinkService

router = APIRouter(prefix="/api/links", tags=["links"])


@router.post(
    "",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
@router.post("/", response_model=LinkResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_link(
    link_data: LinkCreate,
    link_service: LinkService = Depends(get_link_service)
):
    """Create a short link, with a random code unless custom_code is given"""
    return link_service.create(link_data.target_url, link_data.custom_code)


@router.get("", response_model=List[LinkResponse])
@router.get("/", response_model=List[LinkResponse], include_in_schema=False)
def list_links(link_service: LinkService = Depends(get_link_service)):
    """List all links, newest first"""
    return link_service.list_links()


@router.get("/{code}", response_model=LinkResponse, responses={404: {"model": ErrorResponse}})
def get_link(
    code: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Get one link with its click statistics"""
    return link_service.get(code)


@router.delete("/{code}", response_model=LinkDeleted, responses={404: {"model": ErrorResponse}})
def delete_link(
    code: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Delete a link"""
    return LinkDeleted(code=link_service.delete(code))
