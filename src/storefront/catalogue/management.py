"""Catalogue management commands and handlers."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of=Product)
class AddProduct:
    name: String(required=True, max_length=255)
    description: Text(required=True)
    category: String(required=True, max_length=100)
    price: Float(required=True, min_value=0.0)
    stock_quantity: Integer(default=0, min_value=0)
    image_url: String(max_length=1000)


@storefront.command(part_of=Product)
class UpdateProductDetails:
    """Change a product's descriptive fields or price. Stock is not editable here."""

    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    category: String(max_length=100)
    price: Float(min_value=0.0)
    image_url: String(max_length=1000)


@storefront.command(part_of=Product)
class RestockProduct:
    product_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)


@storefront.command(part_of=Product)
class RemoveProduct:
    """Delete a product from the catalogue.

    Orders that reference it keep their product id and price snapshot.
    """

    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageCatalogueHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            name=command.name,
            description=command.description,
            category=command.category,
            price=command.price,
            stock_quantity=command.stock_quantity or 0,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("product_added", product_id=str(product.id), stock=product.stock_quantity)
        return str(product.id)

    @handle(UpdateProductDetails)
    def update_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)

        # Only the fields present on the command are changed
        changes = {
            field_name: getattr(command, field_name)
            for field_name in ("name", "description", "category", "price", "image_url")
            if getattr(command, field_name) is not None
        }
        product.update_details(**changes)
        repo.add(product)

    @handle(RestockProduct)
    def restock(self, command):
        product = current_domain.repository_for(Product).restock(command.product_id, command.quantity)
        logger.info(
            "product_restocked",
            product_id=str(product.id),
            quantity=command.quantity,
            stock=product.stock_quantity,
        )

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)
        repo._dao.delete(product)

        logger.info("product_removed", product_id=str(product.id))
