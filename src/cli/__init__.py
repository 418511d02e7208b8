"""Main CLI application module."""

import typer

from .customer_commands import customers_app
from .server_commands import init_db_command, serve

# Create the main CLI application
app = typer.Typer(
    help="Customer API command line tools",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("serve")(serve)
app.command("init-db")(init_db_command)

# Register command groups
app.add_typer(customers_app, name="customers")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
