"""
ShopDesk Backend: Product Route Handlers
========================================

What:  Catalog endpoints: listing, lookup, image bytes, create, update, delete.
How:   Extract path/query/body values, delegate to ProductService, return JSON
       (or raw bytes for the image endpoint).

Request Flow for writes:
    1. Client sends multipart/form-data (with an optional file part), JSON
       or urlencoded fields
    2. get_upload parses the body into fields + optional image bytes
    3. ProductService coerces the fields and writes the row
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from shopdesk.database import get_db_session
from shopdesk.schemas.common import ErrorResponse, MessageResponse
from shopdesk.schemas.product import (
    InventoryItem,
    ProductCreatedResponse,
    ProductResponse,
)
from shopdesk.services.product_service import product_service
from shopdesk.services.upload_service import ParsedUpload, get_upload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])

# Served for every stored image, whatever format was uploaded
IMAGE_MEDIA_TYPE = "image/jpeg"


@router.get(
    "/products",
    response_model=List[ProductResponse],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List products, optionally by category",
)
async def list_products(
    category: Optional[str] = Query(
        default=None,
        description="Exact, case-sensitive category to filter on. Omit for all products.",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductResponse]:
    return await product_service.list_products(db=db, category=category)


@router.get(
    "/getInventory",
    response_model=List[InventoryItem],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List all products with image URLs",
)
async def get_inventory(db: AsyncSession = Depends(get_db_session)) -> List[InventoryItem]:
    return await product_service.list_inventory(db=db)


@router.get(
    "/product/{product_id}",
    response_model=ProductResponse,
    responses={
        404: {"description": "Product not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Get a single product",
)
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.get_product(db=db, product_id=product_id)


@router.get(
    "/image/{product_id}",
    response_class=Response,
    responses={
        200: {"content": {IMAGE_MEDIA_TYPE: {}}, "description": "Raw image bytes"},
        404: {"description": "Product or image not found", "model": ErrorResponse},
    },
    summary="Get a product's image bytes",
)
async def get_image(
    product_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    image = await product_service.get_image(db=db, product_id=product_id)
    return Response(content=image, media_type=IMAGE_MEDIA_TYPE)


@router.post(
    "/addProduct",
    response_model=ProductCreatedResponse,
    responses={
        400: {"description": "Invalid field value", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Create a product (multipart with optional image, or JSON)",
)
async def add_product(
    upload: ParsedUpload = Depends(get_upload),
    db: AsyncSession = Depends(get_db_session),
) -> ProductCreatedResponse:
    payload = product_service.parse_payload(upload.fields)
    return await product_service.create_product(db=db, payload=payload, image=upload.file)


@router.put(
    "/updateProduct/{product_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid field value", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Replace a product's fields; image only if a new one is uploaded",
)
async def update_product(
    product_id: int,
    upload: ParsedUpload = Depends(get_upload),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    payload = product_service.parse_payload(upload.fields)
    await product_service.update_product(
        db=db, product_id=product_id, payload=payload, image=upload.file
    )
    return MessageResponse(message="Updated!")


@router.delete(
    "/deleteProduct/{product_id}",
    response_model=MessageResponse,
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="Delete a product (succeeds even if it does not exist)",
)
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await product_service.delete_product(db=db, product_id=product_id)
    return MessageResponse(message="Deleted!")
