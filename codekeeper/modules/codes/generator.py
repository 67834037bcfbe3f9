import random

CODE_MIN = 100000
CODE_MAX = 999999


def generate_code() -> str:
    """
    Generate a 6-digit access code.

    Uses the non-cryptographic ``random`` module on purpose. Codes are
    short-lived, low-value pairing secrets; switching to ``secrets`` changes
    the security model and should not happen silently.

    Returns:
        Numeric string drawn uniformly from [100000, 999999]
    """
    return str(random.randint(CODE_MIN, CODE_MAX))
