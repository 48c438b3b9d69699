"""
Bookshelf Backend — Book Route Handlers
=========================================

What:  The /books resource: list, get, create, update, delete.
How:   Each route declares its pipeline stages as dependencies
       (see routes/deps.py) and hands the validated values to BookService.
       Routes stay thin: status codes and response models only.

    GET    /books?page=&limit=   200 Book[]
    GET    /books/{id}           200 Book      | 400 | 404
    POST   /books                201 Book      | 400 | 500
    PUT    /books/{id}           200 Book      | 400 | 500
    DELETE /books/{id}           204 (empty)   | 400 | 500
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from bookshelf.routes.deps import (
    create_book_payload,
    get_book_service,
    page_params,
    update_book_payload,
    valid_book_id,
)
from bookshelf.schemas.book import (
    BookCreate,
    BookResponse,
    BookUpdate,
    ErrorResponse,
    PageParams,
    ValidationErrorResponse,
)
from bookshelf.services.book_service import BookService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["Books"])

_BAD_REQUEST = {"description": "Invalid id, page or limit", "model": ErrorResponse}
_SERVER_ERROR = {"description": "Store failure", "model": ErrorResponse}


@router.get(
    "",
    response_model=List[BookResponse],
    responses={400: _BAD_REQUEST, 500: _SERVER_ERROR},
    summary="List books with page/limit pagination",
)
async def list_books(
    params: PageParams = Depends(page_params),
    service: BookService = Depends(get_book_service),
) -> List[BookResponse]:
    """Returns `[]` when the store is empty or the page is past the end."""
    return await service.list_books(params)


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    responses={
        400: _BAD_REQUEST,
        404: {"description": "Book not found", "model": ErrorResponse},
        500: _SERVER_ERROR,
    },
    summary="Get a single book by id",
)
async def get_book(
    book_id: int = Depends(valid_book_id),
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    return await service.get_book(book_id)


@router.post(
    "",
    status_code=201,
    response_model=BookResponse,
    responses={
        400: {"description": "Body failed validation", "model": ValidationErrorResponse},
        500: _SERVER_ERROR,
    },
    summary="Create a book",
)
async def create_book(
    data: BookCreate = Depends(create_book_payload),
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    """
    All six fields are required. publishedDate accepts a date
    ("2023-11-21") or a full ISO 8601 timestamp and is stored in UTC.
    """
    logger.info("Creating book: isbn=%s", data.isbn)
    return await service.create_book(data)


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    responses={
        400: {"description": "Invalid id or body", "model": ValidationErrorResponse},
        500: _SERVER_ERROR,
    },
    summary="Update some fields of a book",
)
async def update_book(
    book_id: int = Depends(valid_book_id),
    changes: BookUpdate = Depends(update_book_payload),
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    """Fields left out of the body (or sent as null) keep their stored value."""
    return await service.update_book(book_id, changes)


@router.delete(
    "/{book_id}",
    status_code=204,
    response_class=Response,
    responses={400: _BAD_REQUEST, 500: _SERVER_ERROR},
    summary="Delete a book",
)
async def delete_book(
    book_id: int = Depends(valid_book_id),
    service: BookService = Depends(get_book_service),
) -> Response:
    await service.delete_book(book_id)
    return Response(status_code=204)
