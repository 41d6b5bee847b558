"""Quire CLI application using Typer.

Operational commands: serving the API, schema setup, housekeeping,
secret generation and bootstrapping the first administrator.
"""

import asyncio
import secrets

import typer
import uvicorn
from rich.console import Console

from quire.application.services import UserAdministrationService
from quire.domain.shared.time import utc_now
from quire.infrastructure.persistence.sqlalchemy import (
    AuditRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from quire.presentation.api.dependencies import (
    create_tables,
    get_engine,
    get_session_maker,
)
from quire_auth import (
    JWTService,
    PasswordHashingService,
    TokenService,
    WeakPasswordError,
)
from quire_auth.persistence.sqlalchemy import (
    RefreshTokenRepositorySQLAlchemy,
    UserCredentialRepositorySQLAlchemy,
)
from quire_config.settings import get_settings

app = typer.Typer(
    name="quire",
    help="Quire - community magazine platform CLI",
    no_args_is_help=True,
)
console = Console()

db_app = typer.Typer(name="db", help="Database utilities", no_args_is_help=True)
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
users_app = typer.Typer(name="users", help="User administration", no_args_is_help=True)
app.add_typer(db_app)
app.add_typer(secrets_app)
app.add_typer(users_app)


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int | None = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "quire.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


@db_app.command("init")
def init_db() -> None:
    """Create missing tables (idempotent)."""

    async def _run() -> None:
        try:
            await create_tables()
        finally:
            await get_engine().dispose()

    asyncio.run(_run())
    console.print("[green]Database schema is up to date.[/green]")


@db_app.command("prune-tokens")
def prune_tokens() -> None:
    """Delete refresh-token ledger rows whose expiry has passed."""

    async def _run() -> int:
        try:
            async with get_session_maker()() as session:
                deleted = await RefreshTokenRepositorySQLAlchemy(
                    session,
                ).delete_expired(before=utc_now())
                await session.commit()
                return deleted
        finally:
            await get_engine().dispose()

    deleted = asyncio.run(_run())
    console.print(f"Removed [bold]{deleted}[/bold] expired refresh token(s).")


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Quire configuration.

    Generates the required secrets:
    - JWT_SECRET_KEY: Secret for signing session tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Quire Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n",
    )

    # 64 bytes of entropy for HS256
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]",
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n",
    )


def _resolve_admin_password() -> str:
    """BOOTSTRAP_ADMIN_PASSWORD if set, otherwise a hidden, confirmed prompt."""
    configured = get_settings().bootstrap_admin_password
    if configured is not None and configured.get_secret_value():
        return configured.get_secret_value()
    return typer.prompt(
        "Admin password (12+ characters)",
        hide_input=True,
        confirmation_prompt=True,
    )


@users_app.command("create-admin")
def create_admin(
    email: str = typer.Option(..., prompt=True, help="Admin email address"),
    display_name: str = typer.Option(
        "Administrator",
        help="Name shown in the UI",
    ),
) -> None:
    """Create the administrator account, or promote an existing user.

    No default password exists; a weak or sample password is refused.
    """
    password = _resolve_admin_password()
    settings = get_settings()

    async def _run() -> bool:
        try:
            async with get_session_maker()() as session:
                service = UserAdministrationService(
                    user_repository=UserRepositorySQLAlchemy(session),
                    credential_repository=UserCredentialRepositorySQLAlchemy(session),
                    password_service=PasswordHashingService(
                        rounds=settings.password_hash_rounds,
                    ),
                    token_service=TokenService(
                        jwt_service=JWTService(
                            secret_key=settings.jwt_secret_key.get_secret_value(),
                        ),
                        refresh_token_repository=RefreshTokenRepositorySQLAlchemy(
                            session,
                        ),
                    ),
                    audit_repository=AuditRepositorySQLAlchemy(session),
                )
                _, created = await service.bootstrap_admin(
                    email=email,
                    display_name=display_name,
                    password=password,
                )
                await session.commit()
                return created
        finally:
            await get_engine().dispose()

    try:
        created = asyncio.run(_run())
    except WeakPasswordError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(code=1) from e

    action = "Created" if created else "Promoted"
    console.print(f"[green]{action} administrator account {email}.[/green]")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
