"""CLI entry point for the email-first sign-in router."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from signin_router.config import WizardConfig

app = typer.Typer(
    name="signin-router",
    help="Email-first sign-in router: resolve providers for an email and sign in.",
    no_args_is_help=True,
)
console = Console()


def _ensure_db_dir(db_path: Path) -> None:
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _config(ctx: typer.Context) -> WizardConfig:
    return ctx.obj or WizardConfig.default()


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, help="Path to a wizard YAML config"),
    db: Path | None = typer.Option(None, envvar="SIGNIN_ROUTER_DB", help="Path to SQLite database"),
    api_key: str | None = typer.Option(
        None, envvar="SIGNIN_ROUTER_API_KEY", help="API key for the HTTP backend"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    cfg = WizardConfig.from_yaml(config) if config else WizardConfig.default()
    if db is not None:
        cfg.backend.db_path = db
    if api_key is not None:
        cfg.backend.api_key = api_key
    ctx.obj = cfg


@asynccontextmanager
async def _open_backend(cfg: WizardConfig) -> AsyncIterator:
    from signin_router.backend.http import HttpIdentityBackend
    from signin_router.backend.local import LocalIdentityBackend
    from signin_router.storage.sqlite import StorageEngine

    if cfg.backend.kind == "http":
        if not cfg.backend.api_key:
            console.print("[red]--api-key (or SIGNIN_ROUTER_API_KEY) is required for http[/red]")
            raise typer.Exit(1)
        yield HttpIdentityBackend(
            cfg.backend.api_key,
            base_url=cfg.backend.base_url,
            timeout=cfg.backend.timeout,
        )
        return

    _ensure_db_dir(cfg.backend.db_path)
    storage = StorageEngine(cfg.backend.db_path)
    await storage.initialize()
    try:
        yield LocalIdentityBackend(storage)
    finally:
        await storage.close()


async def _prompt_token(provider_id: str, email: str) -> str:
    return typer.prompt(f"Token from {provider_id} for {email} (empty to cancel)", default="")


@app.command()
def init(ctx: typer.Context) -> None:
    """Create the local account database."""
    from signin_router.storage.sqlite import StorageEngine

    db = _config(ctx).backend.db_path
    _ensure_db_dir(db)

    async def _init() -> None:
        engine = StorageEngine(db)
        await engine.initialize()
        await engine.close()

    asyncio.run(_init())
    console.print(f"[green]Initialized account database at {db}[/green]")


@app.command()
def link(
    ctx: typer.Context,
    email: str = typer.Argument(help="Account email"),
    provider_id: str = typer.Argument(help="Provider id to link, e.g. google.com or password"),
    provider_uid: str | None = typer.Option(None, help="Provider-side subject (defaults to email)"),
) -> None:
    """Link a provider to a local account, creating the account if needed."""
    import uuid

    from signin_router.storage.sqlite import StorageEngine
    from signin_router.validation import is_valid_email

    if not is_valid_email(email):
        console.print(f"[red]Invalid email: {email}[/red]")
        raise typer.Exit(1)

    db = _config(ctx).backend.db_path
    _ensure_db_dir(db)

    async def _link() -> None:
        storage = StorageEngine(db)
        await storage.initialize()
        try:
            row = await storage.get_account_by_email(email)
            if row:
                account_id = row["id"]
            else:
                account_id = uuid.uuid4().hex
                await storage.create_account(account_id=account_id, email=email)
            await storage.link_provider(
                account_id=account_id,
                provider_id=provider_id,
                provider_uid=provider_uid or email,
            )
            linked = await storage.list_linked_providers(email)
        finally:
            await storage.close()
        console.print(f"[green]{email}: {', '.join(linked)}[/green]")

    asyncio.run(_link())


@app.command()
def accounts(ctx: typer.Context) -> None:
    """List local accounts and their linked providers."""
    from signin_router.storage.sqlite import StorageEngine

    db = _config(ctx).backend.db_path

    async def _accounts() -> None:
        storage = StorageEngine(db)
        await storage.initialize()
        try:
            rows = await storage.list_accounts()
            if not rows:
                console.print("[dim]No accounts found.[/dim]")
                return
            for row in rows:
                linked = await storage.list_linked_providers(row["email"])
                console.print(f"  {row['email']}: {', '.join(linked) or '[dim]none[/dim]'}")
        finally:
            await storage.close()

    asyncio.run(_accounts())


@app.command()
def resolve(
    ctx: typer.Context,
    email: str = typer.Argument(help="Email address to route"),
) -> None:
    """Print the routing decision for an email."""
    from signin_router.config import build_providers
    from signin_router.errors import SignInError
    from signin_router.router import ProviderRouter

    cfg = _config(ctx)

    async def _resolve() -> None:
        async with _open_backend(cfg) as backend:
            providers = build_providers(cfg, _prompt_token)
            decision = await ProviderRouter(backend).route(email, providers)
        console.print(f"[bold]{decision.kind}[/bold]")
        if decision.provider is not None:
            console.print(f"  provider: {decision.provider.provider_id}")
        if decision.resolved_ids:
            console.print(f"  linked: {', '.join(decision.resolved_ids)}")

    try:
        asyncio.run(_resolve())
    except SignInError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1) from exc


@app.command()
def signin(
    ctx: typer.Context,
    email: str | None = typer.Option(None, help="Email address (prompted when omitted)"),
) -> None:
    """Run the email sign-in step interactively."""
    from signin_router.config import build_providers
    from signin_router.models.outcome import Outcome
    from signin_router.wizard.console import ConsoleResultSink
    from signin_router.wizard.email_entry import EmailEntryStep
    from signin_router.wizard.host import AuthWizard

    cfg = _config(ctx)
    results: list[Outcome] = []

    def _on_result(user, error) -> None:
        results.append(Outcome(user=user, error=error))

    async def _signin() -> None:
        async with _open_backend(cfg) as backend:
            wizard = AuthWizard(backend, build_providers(cfg, _prompt_token), _on_result)
            sink = ConsoleResultSink(console)
            step = EmailEntryStep(wizard, sink)
            text = email
            while True:
                if text is None:
                    text = typer.prompt("Email")
                decision = await step.submit(text)
                if wizard.finished or sink.dismissed or sink.pushed_step is not None:
                    break
                if decision is None:
                    break
                text = None
            step.close()

    asyncio.run(_signin())
    if results and not results[-1].ok:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
