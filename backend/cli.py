"""
Kiosco Escolar CLI.

Terminal client over the same services as the REST API. The signed-in user
and the cart live in a JSON profile file (see CLI_PROFILE_PATH); catalog and
orders go through the configured persistence (remote database when
DATABASE_URL is set, local store otherwise).
"""

import sys
from pathlib import Path
from typing import Optional

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import typer
from rich.console import Console
from rich.table import Table

from shared.config.constants import KIOSK_ROLES, PaymentMethod, StoreSlots, pickup_times_for
from shared.config.settings import settings
from shared.infrastructure.db import get_engine
from shared.infrastructure.session_store import JsonFileSessionStore
from shared.security.password import verify_password
from shared.utils.exceptions import AppException
from shared.utils.schemas import Customization, Order, User

from cafeteria_api.core.dependencies import build_persistence, get_session_store
from cafeteria_api.models import Base
from cafeteria_api.repositories import FallbackStore
from cafeteria_api.seed import seed as seed_store
from cafeteria_api.services.domain import Cart, OrderService, ProductService

app = typer.Typer(
    name="kiosco",
    help="Kiosco Escolar CLI",
    add_completion=False,
)
cart_app = typer.Typer(help="Manage the cart of the signed-in student.")
kiosk_app = typer.Typer(help="Kiosk dashboard operations.")
app.add_typer(cart_app, name="cart")
app.add_typer(kiosk_app, name="kiosk")

console = Console()

STATUS_STYLES = {
    "pendiente": "yellow",
    "en_preparacion": "blue",
    "listo": "green",
    "entregado": "dim",
    "cancelado": "red",
}


# =============================================================================
# Helpers
# =============================================================================


def _profile() -> JsonFileSessionStore:
    return JsonFileSessionStore(settings.cli_profile_path)


def _persistence() -> FallbackStore:
    return build_persistence(get_session_store())


def _signed_in() -> User:
    data = _profile().get(StoreSlots.CURRENT_USER)
    if not data:
        console.print("[red]No hay sesión iniciada. Use: kiosco login <email>[/red]")
        raise typer.Exit(1)
    return User.model_validate(data)


def _cart() -> Cart:
    return Cart(_profile()).load()


def _fail(exc: AppException) -> None:
    console.print(f"[red]✗ {exc.detail}[/red]")
    raise typer.Exit(1)


def _customization(ingredients: list[str], condiments: list[str]) -> Optional[Customization]:
    if not ingredients and not condiments:
        return None
    return Customization(ingredients=ingredients, condiments=condiments)


def _print_cart(cart: Cart) -> None:
    if cart.is_empty:
        console.print("[yellow]El carrito está vacío[/yellow]")
        return

    table = Table(title="Carrito")
    table.add_column("Producto", style="cyan")
    table.add_column("Personalización")
    table.add_column("Cant.", justify="right")
    table.add_column("Subtotal", justify="right", style="green")

    for item in cart.items:
        custom = ""
        if item.customizations:
            custom = ", ".join(item.customizations.ingredients + item.customizations.condiments)
        table.add_row(item.product.name, custom, str(item.quantity), f"${item.subtotal}")

    console.print(table)
    console.print(f"Total: [bold]${cart.total_amount()}[/bold] ({cart.total_item_count()} ítems)")


def _print_orders(orders: list[Order], title: str) -> None:
    if not orders:
        console.print("[yellow]No hay pedidos[/yellow]")
        return

    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Retiro")
    table.add_column("Estado")
    table.add_column("Ítems", justify="right")
    table.add_column("Total", justify="right", style="green")

    for order in orders:
        style = STATUS_STYLES.get(order.status.value, "white")
        table.add_row(
            order.id,
            order.scheduled_time,
            f"[{style}]{order.status.value}[/{style}]",
            str(order.item_count),
            f"${order.total_amount}",
        )

    console.print(table)


# =============================================================================
# Session Commands
# =============================================================================


@app.command()
def login(
    email: str = typer.Argument(..., help="Account email"),
    password: str = typer.Option(..., prompt=True, hide_input=True),
):
    """Sign in with a demo account."""
    account = _persistence().find_user_by_email(email)
    if account is None or not account.is_active or not verify_password(password, account.password_hash):
        console.print("[red]✗ Email o contraseña incorrectos[/red]")
        raise typer.Exit(1)

    user = User(id=account.id, email=account.email, role=account.role, name=account.name)
    profile = _profile()
    profile.set(StoreSlots.CURRENT_USER, user.model_dump(mode="json"))
    profile.delete(StoreSlots.CART)
    console.print(f"[green]✓ Bienvenido, {user.name} ({user.role.value})[/green]")


@app.command()
def logout():
    """Sign out and discard the cart."""
    profile = _profile()
    profile.delete(StoreSlots.CURRENT_USER)
    profile.delete(StoreSlots.CART)
    console.print("[green]✓ Sesión cerrada[/green]")


@app.command()
def whoami():
    """Show the signed-in user."""
    user = _signed_in()
    table = Table(title="Usuario")
    table.add_column("Campo", style="cyan")
    table.add_column("Valor", style="green")
    table.add_row("ID", user.id)
    table.add_row("Nombre", user.name)
    table.add_row("Email", user.email)
    table.add_row("Rol", user.role.value)
    table.add_row("Retiros", ", ".join(pickup_times_for(user.role)))
    console.print(table)


# =============================================================================
# Catalog
# =============================================================================


@app.command()
def menu():
    """List the products visible to the signed-in user."""
    user = _signed_in()
    products = ProductService(_persistence()).list_for_role(user.role)

    table = Table(title="Menú")
    table.add_column("ID", style="cyan")
    table.add_column("Producto")
    table.add_column("Categoría")
    table.add_column("Precio", justify="right", style="green")
    table.add_column("Stock", justify="right")

    for product in products:
        stock = str(product.stock_quantity)
        if product.is_low_stock:
            stock = f"[red]{stock}[/red]"
        table.add_row(product.id, product.name, product.category.value, f"${product.price}", stock)

    console.print(table)


# =============================================================================
# Cart Commands
# =============================================================================


@cart_app.command("show")
def cart_show():
    """Show the cart."""
    _signed_in()
    _print_cart(_cart())


@cart_app.command("add")
def cart_add(
    product_id: str = typer.Argument(..., help="Product ID"),
    quantity: int = typer.Option(1, "--quantity", "-q", min=1),
    ingredient: list[str] = typer.Option([], "--ingredient", "-i", help="Selected ingredient"),
    condiment: list[str] = typer.Option([], "--condiment", "-c", help="Selected condiment"),
):
    """Add a product to the cart."""
    user = _signed_in()
    try:
        product = ProductService(_persistence()).get_for_role(product_id, user.role)
        cart = _cart()
        cart.add(product, quantity, _customization(ingredient, condiment))
    except AppException as e:
        _fail(e)
    _print_cart(cart)


@cart_app.command("remove")
def cart_remove(
    product_id: str = typer.Argument(..., help="Product ID"),
    ingredient: list[str] = typer.Option([], "--ingredient", "-i"),
    condiment: list[str] = typer.Option([], "--condiment", "-c"),
    all_variants: bool = typer.Option(False, "--all", "-a", help="Remove every variant of the product"),
):
    """Remove a line (or every variant of a product) from the cart."""
    _signed_in()
    cart = _cart()
    if all_variants:
        removed = cart.remove_product(product_id)
    else:
        removed = int(cart.remove(product_id, _customization(ingredient, condiment)))

    if not removed:
        console.print("[yellow]El producto no está en el carrito[/yellow]")
    _print_cart(cart)


@cart_app.command("clear")
def cart_clear():
    """Empty the cart."""
    _signed_in()
    _cart().clear()
    console.print("[green]✓ Carrito vacío[/green]")


@app.command()
def checkout(
    pickup: str = typer.Option(..., "--pickup", "-p", help="Break slot, e.g. 11:55"),
    payment: str = typer.Option("efectivo", "--payment", help="efectivo | tarjeta | mercadopago"),
    notes: Optional[str] = typer.Option(None, "--notes"),
):
    """Place an order with the cart contents."""
    user = _signed_in()
    try:
        method = PaymentMethod(payment)
    except ValueError:
        console.print(f"[red]✗ Medio de pago inválido: {payment}[/red]")
        raise typer.Exit(1)

    try:
        order = OrderService(_persistence()).create(_cart(), pickup, method, user, notes)
    except AppException as e:
        _fail(e)

    console.print(f"[green]✓ Pedido {order.id} confirmado. Retiro: {order.scheduled_time}[/green]")


@app.command()
def orders():
    """List the signed-in student's orders."""
    user = _signed_in()
    _print_orders(OrderService(_persistence()).list_for_user(user.id), "Mis pedidos")


# =============================================================================
# Kiosk Commands
# =============================================================================


def _staff() -> User:
    user = _signed_in()
    if user.role not in KIOSK_ROLES:
        console.print("[red]✗ Solo el personal del kiosco puede usar este comando[/red]")
        raise typer.Exit(1)
    return user


@kiosk_app.command("orders")
def kiosk_orders(
    pickup: Optional[str] = typer.Option(None, "--pickup", "-p", help="Filter by break slot"),
):
    """Show the order queue."""
    _staff()
    service = OrderService(_persistence())
    _print_orders(service.list_all(scheduled_time=pickup), "Pedidos")
    console.print(f"Activos: {service.active_count()}")


@kiosk_app.command("advance")
def kiosk_advance(order_id: str = typer.Argument(..., help="Order ID")):
    """Move an order to its next status."""
    user = _staff()
    try:
        order = OrderService(_persistence()).advance(order_id, user)
    except AppException as e:
        _fail(e)
    console.print(f"[green]✓ {order.id} → {order.status.value}[/green]")


@kiosk_app.command("cancel")
def kiosk_cancel(order_id: str = typer.Argument(..., help="Order ID")):
    """Cancel an order."""
    user = _staff()
    try:
        order = OrderService(_persistence()).cancel(order_id, user)
    except AppException as e:
        _fail(e)
    console.print(f"[green]✓ {order.id} → {order.status.value}[/green]")


# =============================================================================
# Data Commands
# =============================================================================


@app.command()
def seed():
    """Seed demo accounts and products into the configured stores."""
    persistence = _persistence()
    engine = get_engine()
    if engine is not None:
        Base.metadata.create_all(bind=engine)
    if persistence.primary is not None:
        seed_store(persistence.primary)
    seed_store(persistence.secondary)
    console.print("[green]✓ Datos de demostración cargados[/green]")


if __name__ == "__main__":
    app()
