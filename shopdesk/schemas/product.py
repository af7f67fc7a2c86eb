"""
ShopDesk Backend: Product Request/Response Schemas
==================================================

What:  Pydantic models for the product endpoints.
Why:   Request fields arrive as form strings or JSON values; the payload model
       coerces them to the column types before they reach the store.

Image representation differs per endpoint:
    - GET /products, GET /product/{id}: base64 text of the stored bytes
    - GET /getInventory:               URL of the image endpoint
    - POST /addProduct:                URL under the `imageUrl` key
"""

from typing import Optional

from pydantic import BaseModel, Field

from shopdesk.schemas.common import FormPayload, Number

# SQLite INTEGER is a signed 64-bit value
SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ProductPayload(FormPayload):
    """
    Fields accepted by POST /addProduct and PUT /updateProduct/{id}.

    Every field is optional: a field that is not sent is stored as null.
    """
    name: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = Field(default=None, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)
    unit: Optional[str] = None
    category: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProductResponse(BaseModel):
    """Full product record with the image inlined as base64 (or null)."""
    id: int = Field(description="Product identifier")
    name: Optional[str] = None
    price: Optional[Number] = None
    stock: Optional[int] = None
    unit: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = Field(default=None, description="Base64-encoded image bytes")


class InventoryItem(BaseModel):
    """Product record that links to the image instead of inlining it."""
    id: int
    name: Optional[str] = None
    price: Optional[Number] = None
    stock: Optional[int] = None
    unit: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = Field(default=None, description="URL of the image endpoint")


class CreatedProduct(BaseModel):
    id: int
    name: Optional[str] = None
    price: Optional[Number] = None
    stock: Optional[int] = None
    unit: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = Field(
        default=None,
        alias="imageUrl",
        description="URL of the stored image, null when none was uploaded",
    )

    model_config = {"populate_by_name": True}


class ProductCreatedResponse(BaseModel):
    message: str = Field(default="Product added!")
    product: CreatedProduct
