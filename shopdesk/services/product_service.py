"""
ShopDesk Backend: Product Service
=================================

What:  Catalog operations behind the product routes.
How:   Each method issues one statement through the request's AsyncSession
       and builds the response model.
Who:   Called by shopdesk.routes.products.

Error Handling Strategy:
    - Missing row → NotFoundError (404)
    - Payload that cannot be coerced → ValidationError (400)
    - Any SQLAlchemyError → DatabaseError (500) carrying the driver message
"""

import base64
import logging
from typing import List, Optional

import pydantic
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shopdesk.database import describe_error
from shopdesk.exceptions import DatabaseError, NotFoundError, ValidationError
from shopdesk.models.product import Product
from shopdesk.schemas.product import (
    CreatedProduct,
    InventoryItem,
    ProductCreatedResponse,
    ProductPayload,
    ProductResponse,
)

logger = logging.getLogger(__name__)


def encode_image(image: Optional[bytes]) -> Optional[str]:
    """Base64 text of the stored bytes, or None when there is no image."""
    if image is None:
        return None
    return base64.b64encode(image).decode("ascii")


def _to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        price=product.price,
        stock=product.stock,
        unit=product.unit,
        category=product.category,
        image=encode_image(product.image),
    )


class ProductService:
    """
    Business logic layer for the catalog.

    Responsibilities:
        - list_products(): all products or one category, images inlined
        - list_inventory(): all products, images linked by URL
        - get_product() / get_image(): single-row reads with 404 handling
        - create_product() / update_product() / delete_product(): writes
    """

    @staticmethod
    def parse_payload(fields: dict) -> ProductPayload:
        """Coerce raw request fields into typed product values."""
        try:
            return ProductPayload.model_validate(fields)
        except pydantic.ValidationError as e:
            first = e.errors()[0]
            field_name = ".".join(str(part) for part in first["loc"])
            raise ValidationError(
                message=f"Invalid value for '{field_name}': {first['msg']}",
                field=field_name,
            )

    async def list_products(
        self, db: AsyncSession, category: Optional[str] = None
    ) -> List[ProductResponse]:
        """
        List products, optionally restricted to one category.

        An empty category string means "no filter". Matching is exact and
        case-sensitive.
        """
        query = select(Product).order_by(Product.id)
        if category:
            query = query.where(Product.category == category)

        try:
            result = await db.execute(query)
            products = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing products: %s", describe_error(e))
            raise DatabaseError(message=describe_error(e), context={"category": category})

        return [_to_response(product) for product in products]

    async def list_inventory(self, db: AsyncSession) -> List[InventoryItem]:
        """
        List all products with an image URL in place of the bytes.

        Only an IS NOT NULL flag is selected for the image column, so blobs
        never leave the database for this query.
        """
        query = select(
            Product.id,
            Product.name,
            Product.price,
            Product.stock,
            Product.unit,
            Product.category,
            Product.image.is_not(None).label("has_image"),
        ).order_by(Product.id)

        try:
            result = await db.execute(query)
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error("Database error listing inventory: %s", describe_error(e))
            raise DatabaseError(message=describe_error(e))

        return [
            InventoryItem(
                id=row.id,
                name=row.name,
                price=row.price,
                stock=row.stock,
                unit=row.unit,
                category=row.category,
                image=f"/image/{row.id}" if row.has_image else None,
            )
            for row in rows
        ]

    async def get_product(self, db: AsyncSession, product_id: int) -> ProductResponse:
        try:
            result = await db.execute(select(Product).where(Product.id == product_id))
            product = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching product %s: %s", product_id, describe_error(e))
            raise DatabaseError(message=describe_error(e), context={"product_id": product_id})

        if product is None:
            raise NotFoundError(resource="product", resource_id=str(product_id))
        return _to_response(product)

    async def get_image(self, db: AsyncSession, product_id: int) -> bytes:
        """Return the stored image bytes; 404 when the row or the image is missing."""
        try:
            result = await db.execute(select(Product.image).where(Product.id == product_id))
            image = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching image %s: %s", product_id, describe_error(e))
            raise DatabaseError(message=describe_error(e), context={"product_id": product_id})

        if image is None:
            raise NotFoundError(resource="image", resource_id=str(product_id))
        return bytes(image)

    async def create_product(
        self,
        db: AsyncSession,
        payload: ProductPayload,
        image: Optional[bytes] = None,
    ) -> ProductCreatedResponse:
        product = Product(**payload.model_dump(), image=image)
        try:
            db.add(product)
            await db.flush()  # Assigns the id
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating product: %s", describe_error(e))
            raise DatabaseError(message=describe_error(e))

        logger.info(
            "Product %s created (category=%s, image=%s)",
            product.id,
            product.category,
            "yes" if image is not None else "no",
        )
        return ProductCreatedResponse(
            message="Product added!",
            product=CreatedProduct(**payload.model_dump(), id=product.id, image_url=product.image_url),
        )

    async def update_product(
        self,
        db: AsyncSession,
        product_id: int,
        payload: ProductPayload,
        image: Optional[bytes] = None,
    ) -> None:
        """
        Replace every scalar field; replace the image only when one was uploaded.

        Matching no row is not an error.
        """
        values = payload.model_dump()
        if image is not None:
            values["image"] = image

        try:
            result = await db.execute(
                update(Product).where(Product.id == product_id).values(**values)
            )
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating product %s: %s", product_id, describe_error(e))
            raise DatabaseError(message=describe_error(e), context={"product_id": product_id})

        logger.info(
            "Product %s updated (rows=%d, image replaced=%s)",
            product_id,
            result.rowcount,
            image is not None,
        )

    async def delete_product(self, db: AsyncSession, product_id: int) -> None:
        """Delete a product. Deleting an id that does not exist still succeeds."""
        try:
            result = await db.execute(delete(Product).where(Product.id == product_id))
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting product %s: %s", product_id, describe_error(e))
            raise DatabaseError(message=describe_error(e), context={"product_id": product_id})

        logger.info("Product %s deleted (rows=%d)", product_id, result.rowcount)


# Stateless; one instance serves every request
product_service = ProductService()
