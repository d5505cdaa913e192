"""
Seed data for development and demo mode.
Creates the demo accounts and the starter menu. Idempotent: only inserts
records that don't exist yet.
"""

from shared.config.constants import Category, Roles
from shared.config.logging import get_logger
from shared.security.password import hash_password
from shared.utils.schemas import Product, UserAccount

from cafeteria_api.repositories.base import PersistencePort

logger = get_logger(__name__)

# Shared password of every demo account (stored only as a bcrypt hash)
DEMO_PASSWORD = "demo123"

# Starting stock for seeded products
DEFAULT_SEED_STOCK = 50

DEMO_USERS: list[dict] = [
    {
        "id": "1",
        "email": "usuario@ciclobasico.com",
        "role": Roles.CICLO_BASICO,
        "name": "Estudiante Ciclo Básico",
    },
    {
        "id": "2",
        "email": "usuario@ciclosuperior.com",
        "role": Roles.CICLO_SUPERIOR,
        "name": "Estudiante Ciclo Superior",
    },
    {
        "id": "3",
        "email": "usuario@kiosquero.com",
        "role": Roles.KIOSQUERO,
        "name": "Encargado del Kiosco",
    },
    {
        "id": "4",
        "email": "usuario@admin.com",
        "role": Roles.ADMIN,
        "name": "Administrador",
    },
]

_PEXELS = "https://images.pexels.com/photos/{}?auto=compress&cs=tinysrgb&w=400"

DEMO_PRODUCTS: list[Product] = [
    Product(
        id="1",
        name="Ensalada Mixta",
        category=Category.ENSALADAS,
        price=850,
        description="Lechuga, tomate, zanahoria, cebolla. Personalizable con tus ingredientes favoritos.",
        image_url=_PEXELS.format("1213710/pexels-photo-1213710.jpeg"),
        is_customizable=True,
        ingredients=["lechuga", "tomate", "zanahoria", "cebolla", "pepino", "apio", "remolacha"],
        stock_quantity=DEFAULT_SEED_STOCK,
    ),
    Product(
        id="2",
        name="Ensalada Caesar",
        category=Category.ENSALADAS,
        price=950,
        description="Lechuga romana, crutones, queso parmesano, aderezo caesar.",
        image_url=_PEXELS.format("2097090/pexels-photo-2097090.jpeg"),
        is_customizable=True,
        ingredients=["lechuga romana", "crutones", "queso parmesano", "pollo"],
        stock_quantity=DEFAULT_SEED_STOCK,
    ),
    Product(
        id="3",
        name="Tostado de Jamón y Queso",
        category=Category.TOSTADOS,
        price=650,
        description="Pan tostado con jamón cocido y queso derretido.",
        image_url=_PEXELS.format("1647163/pexels-photo-1647163.jpeg"),
        stock_quantity=DEFAULT_SEED_STOCK,
    ),
    Product(
        id="4",
        name="Tostado Completo",
        category=Category.TOSTADOS,
        price=750,
        description="Jamón, queso, tomate, lechuga y mayonesa.",
        image_url=_PEXELS.format("1647163/pexels-photo-1647163.jpeg"),
        stock_quantity=DEFAULT_SEED_STOCK,
    ),
    Product(
        id="5",
        name="Sándwich de Milanesa",
        category=Category.SANDWICHES,
        price=1200,
        description="Milanesa de pollo, lechuga, tomate y mayonesa en pan árabe.",
        image_url=_PEXELS.format("1647163/pexels-photo-1647163.jpeg"),
        stock_quantity=DEFAULT_SEED_STOCK,
    ),
    Product(
        id="6",
        name="Agua Mineral",
        category=Category.BEBIDAS,
        price=300,
        description="Agua mineral sin gas 500ml.",
        image_url=_PEXELS.format("327090/pexels-photo-327090.jpeg"),
        stock_quantity=DEFAULT_SEED_STOCK,
    ),
    Product(
        id="7",
        name="Gaseosa Cola",
        category=Category.BEBIDAS,
        price=400,
        description="Gaseosa cola 500ml.",
        image_url=_PEXELS.format("50593/coca-cola-cold-drink-soft-drink-coke-50593.jpeg"),
        stock_quantity=DEFAULT_SEED_STOCK,
    ),
    Product(
        id="8",
        name="Jugo Natural de Naranja",
        category=Category.BEBIDAS,
        price=500,
        description="Jugo de naranja exprimido fresco.",
        image_url=_PEXELS.format("96974/pexels-photo-96974.jpeg"),
        stock_quantity=DEFAULT_SEED_STOCK,
    ),
]


def seed_users(persistence: PersistencePort) -> int:
    """Create missing demo accounts. Returns how many were created."""
    created = 0
    for data in DEMO_USERS:
        if persistence.find_user_by_email(data["email"]) is not None:
            continue
        persistence.save_user(UserAccount(**data, password_hash=hash_password(DEMO_PASSWORD)))
        created += 1
    return created


def seed_products(persistence: PersistencePort) -> int:
    """Create missing demo products. Returns how many were created."""
    created = 0
    for product in DEMO_PRODUCTS:
        if persistence.get_product(product.id) is not None:
            continue
        persistence.save_product(product.model_copy(deep=True))
        created += 1
    return created


def seed(persistence: PersistencePort) -> None:
    """Seed demo accounts and products into one store."""
    users = seed_users(persistence)
    products = seed_products(persistence)
    if users or products:
        logger.info("Demo data seeded", backend=persistence.name, users=users, products=products)
    else:
        logger.info("Demo data already present, skipping", backend=persistence.name)
