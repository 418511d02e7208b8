"""Customer and token management commands."""

import typer
from rich.console import Console
from rich.table import Table

from src.customer_api.core.services import DbSessionService, JwtGeneratorService
from src.customer_api.core.storage import OrmCustomerStorage

console = Console()

customers_app = typer.Typer(help="Inspect customers and issue tokens")


@customers_app.command("list")
def list_customers() -> None:
    """List all customers stored in the database."""
    database_service = DbSessionService()
    with database_service.session_scope() as session:
        customers = OrmCustomerStorage(session).select_all()

    if not customers:
        console.print("[yellow]No customers found[/yellow]")
        return

    table = Table(title="Customers")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Email", style="blue")
    table.add_column("Age", style="magenta")

    for customer in customers:
        table.add_row(str(customer.id), customer.name, customer.email, str(customer.age))

    console.print(table)
    console.print(f"\n[green]Found {len(customers)} customers[/green]")


@customers_app.command("issue-token")
def issue_token(
    email: str = typer.Argument(..., help="Token subject (customer email)"),
    scopes: list[str] | None = typer.Option(
        None, "--scope", "-s", help="Scope to include; may be repeated"
    ),
) -> None:
    """Print a signed token for EMAIL using the configured secret."""
    token = JwtGeneratorService().issue(email, *(scopes or []))
    typer.echo(token)
