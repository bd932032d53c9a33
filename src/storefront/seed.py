"""Sample catalogue, a demo user and a demo cart for local development."""

from datetime import UTC, datetime, timedelta

from protean.utils.globals import current_domain

from storefront.cart.cart import Cart, CartItem
from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.identity.user import User
from storefront.ordering.order import Order, OrderItem
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCT_TYPES = ["processor", "graphics card", "ram", "drive"]

SAMPLE_PRODUCTS = [
    {
        "code": "CPU-R7-7800X3D",
        "name": "AMD Ryzen 7 7800X3D",
        "type": "processor",
        "description": "8 cores, 16 threads, 96MB L3 cache",
        "price": 1899.99,
        "amount": 12,
    },
    {
        "code": "CPU-I5-14600K",
        "name": "Intel Core i5-14600K",
        "type": "processor",
        "description": "14 cores, 20 threads, up to 5.3 GHz",
        "price": 1349.00,
        "amount": 20,
    },
    {
        "code": "GPU-NV4070SUPR",
        "name": "NVIDIA GeForce RTX 4070 SUPER",
        "type": "graphics card",
        "description": "12GB GDDR6X",
        "price": 2899.00,
        "amount": 7,
    },
    {
        "code": "GPU-RX7800XT",
        "name": "AMD Radeon RX 7800 XT",
        "type": "graphics card",
        "description": "16GB GDDR6",
        "price": 2399.00,
        "amount": 5,
    },
    {
        "code": "RAM-CORS32D5",
        "name": "Corsair Vengeance 32GB DDR5",
        "type": "ram",
        "description": "2x16GB, 6000MHz, CL30",
        "price": 489.90,
        "amount": 40,
    },
    {
        "code": "SSD-SAM990P2T",
        "name": "Samsung 990 PRO 2TB",
        "type": "drive",
        "description": "NVMe PCIe 4.0 M.2",
        "price": 799.00,
        "amount": 25,
    },
]

DEMO_USER_EMAIL = "user@example.com"


def clear_store():
    """Delete every record, children first."""
    for element_cls in (OrderItem, Order, CartItem, Cart, User, Product, Category):
        repo = current_domain.repository_for(element_cls)
        for record in repo._dao.query.all().items:
            repo._dao.delete(record)


def seed():
    """Replace the store's contents with the sample data set.

    Returns:
        The demo user's id.
    """
    clear_store()

    category_repo = current_domain.repository_for(Category)
    categories = {}
    for name in PRODUCT_TYPES:
        category = Category(name=name)
        category_repo.add(category)
        categories[name] = category
    logger.info("seed_categories_created", count=len(categories))

    product_repo = current_domain.repository_for(Product)
    products = {}
    for data in SAMPLE_PRODUCTS:
        product = Product.create(category_id=str(categories[data["type"]].id), **data)
        product_repo.add(product)
        products[product.code] = product
    logger.info("seed_products_created", count=len(products))

    user = User.register(email=DEMO_USER_EMAIL, name="Demo User")
    cart = Cart.create(user_id=user.user_id)
    user.open_cart(cart.id)
    current_domain.repository_for(User).add(user)

    gpu = cart.add_item(product_id=str(products["GPU-NV4070SUPR"].id), quantity=1)
    cart.add_item(product_id=str(products["RAM-CORS32D5"].id), quantity=2)
    # Backdated so the demo cart lists the memory first.
    gpu.added_at = datetime.now(UTC) - timedelta(hours=1)
    current_domain.repository_for(Cart).add(cart)
    logger.info("seed_demo_cart_created", user_id=user.user_id, items=len(cart.items))

    return user.user_id
