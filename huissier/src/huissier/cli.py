"""
Huissier CLI.

Usage:
    huissier serve [--host HOST] [--port PORT]
    huissier init-db
    huissier grant WALLET [--role ROLE] [--name NAME] [--notes NOTES]
    huissier login --keypair PATH [--action ACTION] [--yes]
    huissier headers --keypair PATH [--json]
    huissier logout
"""

import asyncio
import json
import sys

import click

from huissier.config.rpc import RpcClientConfig
from huissier.config.settings import get_settings
from huissier.domain.exceptions import HuissierException
from huissier.domain.value_objects.role import Role
from huissier.infrastructure.monitoring import setup_logging

ROLE_CHOICES = [role.value for role in Role.assignable()]


def _build_session_manager(settings):
    """Wire a client session manager from settings."""
    from huissier.application.client.session_manager import ClientSessionManager
    from huissier.application.use_cases.build_challenge import ChallengeBuilder
    from huissier.infrastructure.auth.http_authorization_client import (
        HttpAuthorizationClient,
    )
    from huissier.infrastructure.auth.solana_signature_verifier import (
        SolanaSignatureVerifier,
    )
    from huissier.infrastructure.session.file_session_store import (
        FileSessionStore,
    )

    lookup = HttpAuthorizationClient(
        base_url=settings.API_BASE_URL,
        timeout=settings.HTTP_TIMEOUT,
        origin=settings.CLIENT_ORIGIN,
    )
    manager = ClientSessionManager(
        session_store=FileSessionStore(settings.SESSION_FILE),
        authorization_lookup=lookup,
        signature_verifier=SolanaSignatureVerifier(),
        challenge_builder=ChallengeBuilder(title=settings.APP_TITLE),
        rpc_config=RpcClientConfig.from_settings(settings),
        session_max_age_ms=settings.session_max_age_ms,
    )
    return manager, lookup


def _load_signer(keypair: str, confirm=None):
    from huissier.infrastructure.auth.keypair_wallet_signer import (
        KeypairWalletSigner,
    )

    try:
        return KeypairWalletSigner.from_file(keypair, confirm=confirm)
    except (OSError, ValueError) as e:
        click.echo(f"Cannot load keypair: {e}", err=True)
        sys.exit(1)


def _confirm_signature(message: str) -> bool:
    click.echo("Wallet signature requested:\n")
    click.echo(message)
    click.echo("")
    return click.confirm("Sign this message?", default=True)


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL")
def cli(log_level):
    """Huissier - Wallet authentication and authorization."""
    settings = get_settings()
    setup_logging(level=log_level or settings.LOG_LEVEL, json_logs=False)


@cli.command()
@click.option("--host", default=None, help="Bind address")
@click.option("--port", default=None, type=int, help="Bind port")
def serve(host, port):
    """Start API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "huissier.main:create_app",
        factory=True,
        host=host or settings.API_HOST,
        port=port or settings.API_PORT,
        reload=settings.API_RELOAD,
    )


@cli.command("init-db")
def init_db():
    """Create database tables."""
    from huissier.infrastructure.persistence.database import Database
    from huissier.infrastructure.persistence.models import Base

    settings = get_settings()

    async def _run():
        database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
        await database.connect()
        try:
            await database.create_tables(Base.metadata)
        finally:
            await database.disconnect()

    asyncio.run(_run())
    click.echo("Database tables created")


@cli.command()
@click.argument("wallet")
@click.option(
    "--role",
    type=click.Choice(ROLE_CHOICES),
    default=Role.ADMIN.value,
    show_default=True,
    help="Role to grant",
)
@click.option("--name", default=None, help="Display name")
@click.option("--notes", default=None, help="Free-form notes")
def grant(wallet, role, name, notes):
    """Authorize WALLET directly in the database."""
    from huissier.application.use_cases.add_authorized_wallet import (
        AddAuthorizedWallet,
        AddAuthorizedWalletCommand,
    )
    from huissier.infrastructure.persistence.database import Database
    from huissier.infrastructure.persistence.metadata_store import (
        SqlMetadataStore,
    )

    settings = get_settings()

    async def _run():
        database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
        await database.connect()
        try:
            async with database.session() as session:
                use_case = AddAuthorizedWallet(
                    SqlMetadataStore(
                        session, row_level_security=not database.is_sqlite
                    )
                )
                return await use_case.execute(
                    AddAuthorizedWalletCommand(
                        wallet_address=wallet,
                        role=role,
                        name=name,
                        notes=notes,
                        added_by="cli",
                    )
                )
        finally:
            await database.disconnect()

    try:
        record = asyncio.run(_run())
    except HuissierException as e:
        click.echo(f"{e.code}: {e.message}", err=True)
        sys.exit(1)

    click.echo(f"Granted {record.role} to {record.wallet_address}")


@cli.command()
@click.option("--keypair", "-k", required=True, help="Solana keypair JSON file")
@click.option("--action", default="login", show_default=True, help="Challenge action")
@click.option("--yes", "-y", is_flag=True, help="Sign without confirmation")
def login(keypair, action, yes):
    """Sign in with a keypair file and store the session."""
    settings = get_settings()
    signer = _load_signer(keypair, confirm=None if yes else _confirm_signature)
    manager, lookup = _build_session_manager(settings)

    async def _run():
        try:
            state = await manager.connect(signer)
            if state.is_authenticated:
                return state, True
            if not state.is_authorized:
                return state, False
            ok = await manager.authenticate(action)
            return manager.state, ok
        finally:
            await lookup.close()

    click.echo(
        f"Wallet {signer.wallet_address} on {manager.rpc_config.display_name}"
    )
    state, ok = asyncio.run(_run())

    if not ok:
        click.echo(f"Login failed: {state.error or 'not authorized'}", err=True)
        sys.exit(1)

    label = f" ({state.name})" if state.name else ""
    click.echo(f"Signed in as {state.role}{label}")


@cli.command()
@click.option("--keypair", "-k", required=True, help="Solana keypair JSON file")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON object")
def headers(keypair, as_json):
    """Print authentication headers of the stored session."""
    settings = get_settings()
    signer = _load_signer(keypair)
    manager, lookup = _build_session_manager(settings)

    async def _run():
        try:
            await manager.connect(signer)
        finally:
            await lookup.close()
        return manager.get_auth_headers()

    auth_headers = asyncio.run(_run())
    if not auth_headers:
        click.echo("No valid session, run 'huissier login' first", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(auth_headers, indent=2))
    else:
        for name, value in auth_headers.items():
            click.echo(f"{name}: {value}")


@cli.command()
def logout():
    """Delete the stored session."""
    manager, _ = _build_session_manager(get_settings())
    manager.logout()
    click.echo("Logged out")


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
