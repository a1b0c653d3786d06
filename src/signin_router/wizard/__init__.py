"""Sign-in wizard: the host and its email entry step."""

from signin_router.wizard.email_entry import EmailEntryStep
from signin_router.wizard.host import AuthWizard, StepFactory, WizardResultCallback

__all__ = [
    "AuthWizard",
    "EmailEntryStep",
    "StepFactory",
    "WizardResultCallback",
]
