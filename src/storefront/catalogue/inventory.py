"""Inventory store: product records and their stock counters."""

from protean.exceptions import ObjectNotFoundError

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.shared.errors import ProductNotFound
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.repository(part_of=Product)
class InventoryStore:
    """Repository for `Product` that owns every stock mutation.

    Each write goes through `add`, which persists into the enclosing unit of
    work. Protean guards the write with the aggregate's `_version`, so of two
    reservations that read the same stock only the first to commit succeeds;
    the other fails with `ExpectedVersionError` and none of its changes apply.
    """

    def get_product(self, product_id) -> Product:
        if not product_id:
            raise ProductNotFound(product_id)
        try:
            return self.get(str(product_id))
        except ObjectNotFoundError as exc:
            raise ProductNotFound(product_id) from exc

    def try_reserve(self, product_id, quantity: int) -> Product:
        """Decrement stock by `quantity` if at least that much is available.

        Raises `ProductNotFound` or `InsufficientStock`; stock is left as it
        was in both cases.
        """
        product = self.get_product(product_id)
        product.reserve(quantity)
        self.add(product)

        logger.debug(
            "stock_reserved",
            product_id=str(product.id),
            quantity=quantity,
            remaining=product.stock_quantity,
        )
        return product

    def release(self, product_id, quantity: int) -> Product:
        product = self.get_product(product_id)
        product.release(quantity)
        self.add(product)

        logger.debug(
            "stock_released",
            product_id=str(product.id),
            quantity=quantity,
            remaining=product.stock_quantity,
        )
        return product

    def restock(self, product_id, quantity: int) -> Product:
        product = self.get_product(product_id)
        product.restock(quantity)
        self.add(product)
        return product

    def search(self, category=None, min_price=None, max_price=None) -> list[Product]:
        """Catalogue listing, oldest first.

        `category` matches as a case-insensitive substring; price bounds are
        inclusive.
        """
        products = self._dao.query.limit(None).all().items

        if category:
            wanted = category.strip().lower()
            products = [p for p in products if wanted in (p.category or "").lower()]
        if min_price is not None:
            products = [p for p in products if p.price >= min_price]
        if max_price is not None:
            products = [p for p in products if p.price <= max_price]

        return sorted(products, key=lambda p: p.created_at)
