"""Pydantic request/response schemas for the storefront API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Order Request Schemas ---


class OrderItemRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)


class CreateOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "0b6a2c1e-5d0f-4c39-9a5e-2f7f1c3e8d41",
                    "customer_name": "Jane Doe",
                    "customer_email": "jane@example.com",
                    "shipping_address": "12 Market Street, Springfield",
                    "items": [
                        {"product_id": "3f1c9a8e-2b7d-4e60-8c1a-9d5e7b2f4a10", "quantity": 2},
                    ],
                }
            ]
        }
    }

    user_id: str = Field(..., min_length=1)
    customer_name: str = Field(..., min_length=1, max_length=100)
    customer_email: str = Field(..., min_length=3, max_length=254)
    shipping_address: str = Field(..., min_length=1)
    items: list[OrderItemRequest] = Field(..., min_length=1)


class UpdateOrderStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "SHIPPED"}]}}

    status: str


# --- User Request Schemas ---


class RegisterUserRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Jane Doe", "email": "jane@example.com"}]}}

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)


class UpdateUserRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, max_length=254)


# --- Product Request Schemas ---


class AddProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Espresso Cup",
                    "description": "Double-walled glass cup, 80ml.",
                    "category": "Kitchen",
                    "price": 12.5,
                    "stock_quantity": 40,
                    "image_url": "https://example.com/images/espresso-cup.jpg",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=100)
    price: float = Field(..., ge=0)
    stock_quantity: int = Field(0, ge=0)
    image_url: str | None = Field(None, max_length=1000)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    category: str | None = Field(None, min_length=1, max_length=100)
    price: float | None = Field(None, ge=0)
    image_url: str | None = Field(None, max_length=1000)


class RestockProductRequest(BaseModel):
    quantity: int = Field(..., ge=1)


# --- Response Schemas ---


class OrderItemResponse(BaseModel):
    item_id: str
    product_id: str
    product_name: str
    quantity: int
    price_at_purchase: float


class OrderResponse(BaseModel):
    order_id: str
    user_id: str
    customer_name: str
    customer_email: str
    shipping_address: str
    status: str
    items: list[OrderItemResponse]
    total_amount: float
    created_at: str | None = None
    updated_at: str | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]


class UserIdResponse(BaseModel):
    user_id: str


class UserResponse(BaseModel):
    user_id: str
    name: str
    email: str
    registered_at: str | None = None


class UserListResponse(BaseModel):
    users: list[UserResponse]


class ProductIdResponse(BaseModel):
    product_id: str


class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str
    category: str
    price: float
    stock_quantity: int
    image_url: str | None = None
    created_at: str | None = None


class ProductListResponse(BaseModel):
    products: list[ProductResponse]


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: dict = {}
