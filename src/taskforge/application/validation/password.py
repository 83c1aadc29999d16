"""Password complexity rules."""

from taskforge.application.validation.rules import RuleChain

COMMON_PASSWORDS = (
    "password", "123456", "123456789", "qwerty", "abc123", "monkey",
    "letmein", "dragon", "111111", "baseball", "iloveyou", "trustno1",
    "1234567", "sunshine", "master", "123123", "welcome", "shadow",
    "ashley", "football", "jesus", "michael", "ninja", "mustang",
    "password1", "password123", "admin", "root", "user", "test",
    "guest", "123", "1234", "12345", "pass", "passw0rd", "p@ssw0rd",
)


def not_common(password: str | None) -> bool:
    """False if the password contains a well-known password, case-insensitively."""
    if not password:
        return True
    lowered = password.lower()
    return not any(common in lowered for common in COMMON_PASSWORDS)


def password_complexity(chain: RuleChain, required: bool = True) -> RuleChain:
    """Attach the password policy to ``chain``.

    With ``required=False`` a missing password passes; a given one must still comply.
    """
    if required:
        chain.not_empty("Password is required")
    return (
        chain.min_length(8, "Password must be at least 8 characters long")
        .max_length(128, "Password must not exceed 128 characters")
        .matches(r"[A-Z]", "Password must contain at least one uppercase letter")
        .matches(r"[a-z]", "Password must contain at least one lowercase letter")
        .matches(r"[0-9]", "Password must contain at least one number")
        .matches(r"[^a-zA-Z0-9]", "Password must contain at least one special character")
        .must(not_common, "Password is too common, please choose a stronger password")
    )
