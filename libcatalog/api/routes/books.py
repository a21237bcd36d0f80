"""
Book API Routes

CRUD operations for the book catalog. Handlers only shape transport
outcomes; catalog errors raised by the service are turned into status
codes by the registered exception handlers.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from loguru import logger

from libcatalog.api.dependencies import get_book_service
from libcatalog.api.schemas import ErrorResponse
from libcatalog.schemas import BookRequest, BookResponse
from libcatalog.services.book_service import CatalogService


router = APIRouter(prefix="/books", tags=["books"])


BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid book ID or body"}}
NOT_FOUND = {404: {"model": ErrorResponse, "description": "Book not found"}}
SERVER_ERROR = {500: {"model": ErrorResponse, "description": "Storage failure"}}


# =============================================================================
# Collection
# =============================================================================

@router.get(
    "",
    response_model=list[BookResponse],
    responses={**SERVER_ERROR},
)
async def list_books(
    service: CatalogService = Depends(get_book_service),
):
    """List every book in the catalog."""
    logger.info("Listing books")
    return await service.get_all_books()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses={**BAD_REQUEST, **SERVER_ERROR},
)
async def create_book(
    book: BookRequest,
    request: Request,
    service: CatalogService = Depends(get_book_service),
):
    """
    Create a new book.

    Responds with an empty body; the Location header names the new book.
    """
    logger.info(f"Creating book: {book.title} by {book.author}")

    created = await service.create_book(book)

    location = request.app.url_path_for("get_book", book_id=str(created.id))
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": str(location)},
    )


# =============================================================================
# Single book
# =============================================================================

@router.get(
    "/{book_id}",
    response_model=BookResponse,
    responses={**BAD_REQUEST, **NOT_FOUND, **SERVER_ERROR},
)
async def get_book(
    book_id: UUID,
    service: CatalogService = Depends(get_book_service),
):
    """Get a book by ID."""
    logger.info(f"Fetching book: {book_id}")
    return await service.get_book_by_id(book_id)


@router.put(
    "/{book_id}",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    responses={**BAD_REQUEST, **NOT_FOUND, **SERVER_ERROR},
)
async def update_book(
    book_id: UUID,
    book: BookRequest,
    service: CatalogService = Depends(get_book_service),
):
    """
    Replace a book.

    This is a full replace: optional fields missing from the body are reset
    to their defaults rather than kept.
    """
    logger.info(f"Updating book: {book_id}")

    await service.update_book(book_id, book)
    return Response(status_code=status.HTTP_200_OK)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**BAD_REQUEST, **NOT_FOUND, **SERVER_ERROR},
)
async def delete_book(
    book_id: UUID,
    service: CatalogService = Depends(get_book_service),
):
    """Delete a book permanently."""
    logger.info(f"Deleting book: {book_id}")

    await service.delete_book(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
