"""FastAPI routes for the storefront.

Thin adapters: order endpoints call the lifecycle engine, user and catalogue
endpoints translate requests into domain commands. No business logic here.
"""

from fastapi import APIRouter, Response
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddProductRequest,
    CreateOrderRequest,
    ErrorResponse,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    ProductIdResponse,
    ProductListResponse,
    ProductResponse,
    RegisterUserRequest,
    RestockProductRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
    UpdateUserRequest,
    UserIdResponse,
    UserListResponse,
    UserResponse,
)
from storefront.catalogue.management import AddProduct, RemoveProduct, RestockProduct, UpdateProductDetails
from storefront.catalogue.product import Product
from storefront.customer.profile import RemoveUser, UpdateUserProfile
from storefront.customer.registration import RegisterUser
from storefront.customer.user import User
from storefront.order.lifecycle import OrderLifecycle

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Business rule violation"},
    404: {"model": ErrorResponse, "description": "Not found"},
    409: {"model": ErrorResponse, "description": "Concurrent modification"},
}

order_router = APIRouter(prefix="/api/orders", tags=["orders"], responses=_ERROR_RESPONSES)
user_router = APIRouter(prefix="/api/users", tags=["users"], responses=_ERROR_RESPONSES)
product_router = APIRouter(prefix="/api/products", tags=["products"], responses=_ERROR_RESPONSES)

lifecycle = OrderLifecycle()


def _iso(value) -> str | None:
    return value.isoformat() if value else None


def _order_response(order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        user_id=str(order.user_id),
        customer_name=order.customer.name,
        customer_email=order.customer.email,
        shipping_address=order.customer.shipping_address,
        status=order.status,
        items=[
            OrderItemResponse(
                item_id=str(item.id),
                product_id=str(item.product_id),
                product_name=item.product_name,
                quantity=item.quantity,
                price_at_purchase=item.price_at_purchase,
            )
            for item in order.items
        ],
        total_amount=order.total_amount,
        created_at=_iso(order.created_at),
        updated_at=_iso(order.updated_at),
    )


def _user_response(user) -> UserResponse:
    return UserResponse(
        user_id=str(user.id),
        name=user.name,
        email=user.email.address,
        registered_at=_iso(user.registered_at),
    )


def _product_response(product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        description=product.description,
        category=product.category,
        price=product.price,
        stock_quantity=product.stock_quantity,
        image_url=product.image_url,
        created_at=_iso(product.created_at),
    )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest) -> OrderResponse:
    order = lifecycle.create_order(
        user_id=body.user_id,
        customer_name=body.customer_name,
        customer_email=body.customer_email,
        shipping_address=body.shipping_address,
        items=[(item.product_id, item.quantity) for item in body.items],
    )
    return _order_response(order)


@order_router.get("", response_model=OrderListResponse)
async def list_orders(user_id: str | None = None) -> OrderListResponse:
    return OrderListResponse(orders=[_order_response(o) for o in lifecycle.list_orders(user_id=user_id)])


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _order_response(lifecycle.get_order(order_id))


@order_router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    return _order_response(lifecycle.update_status(order_id, body.status))


@order_router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str) -> OrderResponse:
    return _order_response(lifecycle.cancel_order(order_id))


@order_router.delete("/{order_id}", status_code=204)
async def delete_order(order_id: str) -> Response:
    lifecycle.delete_order(order_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
@user_router.post("", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    command = RegisterUser(name=body.name, email=body.email)
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@user_router.get("", response_model=UserListResponse)
async def list_users() -> UserListResponse:
    users = current_domain.repository_for(User).list_all()
    return UserListResponse(users=[_user_response(u) for u in users])


@user_router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str) -> UserResponse:
    return _user_response(current_domain.repository_for(User).resolve(user_id))


@user_router.put("/{user_id}", response_model=UserResponse)
async def update_user(user_id: str, body: UpdateUserRequest) -> UserResponse:
    command = UpdateUserProfile(user_id=user_id, name=body.name, email=body.email)
    current_domain.process(command, asynchronous=False)
    return _user_response(current_domain.repository_for(User).resolve(user_id))


@user_router.delete("/{user_id}", status_code=204)
async def remove_user(user_id: str) -> Response:
    current_domain.process(RemoveUser(user_id=user_id), asynchronous=False)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        description=body.description,
        category=body.category,
        price=body.price,
        stock_quantity=body.stock_quantity,
        image_url=body.image_url,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("", response_model=ProductListResponse)
async def search_products(
    category: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
) -> ProductListResponse:
    products = current_domain.repository_for(Product).search(
        category=category,
        min_price=min_price,
        max_price=max_price,
    )
    return ProductListResponse(products=[_product_response(p) for p in products])


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return _product_response(current_domain.repository_for(Product).get_product(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> ProductResponse:
    command = UpdateProductDetails(
        product_id=product_id,
        name=body.name,
        description=body.description,
        category=body.category,
        price=body.price,
        image_url=body.image_url,
    )
    current_domain.process(command, asynchronous=False)
    return _product_response(current_domain.repository_for(Product).get_product(product_id))


@product_router.post("/{product_id}/restock", response_model=ProductResponse)
async def restock_product(product_id: str, body: RestockProductRequest) -> ProductResponse:
    command = RestockProduct(product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _product_response(current_domain.repository_for(Product).get_product(product_id))


@product_router.delete("/{product_id}", status_code=204)
async def remove_product(product_id: str) -> Response:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return Response(status_code=204)
