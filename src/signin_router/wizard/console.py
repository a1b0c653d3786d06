"""Terminal implementation of the navigation sink, used by the CLI."""

from __future__ import annotations

import logging

import typer
from rich.console import Console

from signin_router import messages
from signin_router.navigation import (
    DeliverFinalOutcome,
    DismissWizard,
    Intent,
    PushStep,
    ResultSink,
    ShowProviderConfirmation,
    ShowUnsupportedAlert,
    ShowValidationAlert,
    StepId,
)

logger = logging.getLogger(__name__)


class ConsoleResultSink(ResultSink):
    """Renders intents as console output and prompts."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self.dismissed = False
        self.pushed_step: PushStep | None = None

    async def handle(self, intent: Intent) -> None:
        if isinstance(intent, ShowValidationAlert):
            self.console.print(f"[red]{intent.message}[/red]")
        elif isinstance(intent, ShowUnsupportedAlert):
            self.console.print(f"[yellow]{intent.message}[/yellow]")
        elif isinstance(intent, ShowProviderConfirmation):
            name = intent.provider.display_name
            self.console.print(f"\n[bold]{messages.EXISTING_ACCOUNT_TITLE}[/bold]")
            self.console.print(
                messages.EXISTING_ACCOUNT_BODY.format(email=intent.email, provider=name)
            )
            if typer.confirm(f"Sign in with {name}?", default=True):
                await intent.on_proceed()
            else:
                await intent.on_cancel()
        elif isinstance(intent, PushStep):
            self.pushed_step = intent
            label = "sign in" if intent.step == StepId.PASSWORD_SIGN_IN else "sign up"
            source = "custom" if intent.override is not None else "default"
            self.console.print(
                f"[cyan]Continue to password {label} for {intent.email} ({source} step)[/cyan]"
            )
        elif isinstance(intent, DismissWizard):
            self.dismissed = True
            self.console.print("[dim]Sign-in closed.[/dim]")
        elif isinstance(intent, DeliverFinalOutcome):
            outcome = intent.outcome
            if outcome.ok:
                user = outcome.user
                self.console.print(
                    f"[green]Signed in as {user.email} ({user.provider_id}, uid {user.uid})[/green]"
                )
            else:
                self.console.print(f"[red]Sign-in failed: {outcome.error}[/red]")
        else:
            logger.warning("Unhandled intent %r", intent)
