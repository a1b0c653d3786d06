"""Default English text for user-facing alerts."""

INVALID_EMAIL = "That email address isn't correct."
CANNOT_AUTHENTICATE = "You can't sign in with this email address using the methods available."
EXISTING_ACCOUNT_TITLE = "You already have an account"
EXISTING_ACCOUNT_BODY = "You've already used {email}. Sign in with {provider} to continue."
