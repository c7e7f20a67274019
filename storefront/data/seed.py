# storefront/data/seed.py
from decimal import Decimal

from storefront.data.models import Address, Cart, Category, Product, User, cart_id_for
from storefront.repos.auth_store import DEFAULT_CREDENTIALS
from storefront.repos.memory_store import MemoryStore
from storefront.utils.ids import utcnow
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ALICE_ID = DEFAULT_CREDENTIALS["alice@example.com"].user.id
BOB_ID = DEFAULT_CREDENTIALS["bob@example.com"].user.id


def seed(store: MemoryStore):
    # not forcing: only seed if empty
    if store.get_categories() or store.get_products() or store.get_users():
        return

    now = utcnow()

    for cid, name, parent in (
        ("1", "Electronics", None),
        ("2", "Laptops", "1"),
        ("3", "Smartphones", "1"),
        ("4", "Clothing", None),
    ):
        store.create_category(Category(id=cid, name=name, parent_id=parent, created_at=now, updated_at=now))

    for pid, name, description, price, stock, category_id, image in (
        ("1", 'MacBook Pro 16"', "Apple MacBook Pro with M3 chip", "2499.99", 10, "2", "macbook"),
        ("2", "iPhone 15 Pro", "Latest iPhone with titanium design", "999.99", 25, "3", "iphone"),
        ("3", "T-Shirt", "Comfortable cotton t-shirt", "29.99", 100, "4", "tshirt"),
    ):
        store.create_product(
            Product(
                id=pid,
                name=name,
                description=description,
                price=Decimal(price),
                stock=stock,
                category_id=category_id,
                image_urls=[f"https://example.com/{image}.jpg"],
                created_at=now,
                updated_at=now,
            )
        )

    users = (
        (ALICE_ID, "alice@example.com", "Alice Johnson",
         Address(street="123 Test St", city="Test City", state="TC", postal_code="12345", country="USA")),
        (BOB_ID, "bob@example.com", "Bob Smith",
         Address(street="456 Demo Ave", city="Demo City", state="DC", postal_code="67890", country="USA")),
    )
    for uid, email, name, address in users:
        store.create_user(User(id=uid, email=email, name=name, address=address, created_at=now, updated_at=now))
        store.update_cart(uid, Cart(id=cart_id_for(uid), user_id=uid, items=[], created_at=now, updated_at=now))

    logger.info("Seeded sample catalogue and users")
