"""Domain normalization helpers."""


def normalize_description(description: str | None) -> str:
    """Normalize free-text descriptions.

    Args:
        description: Raw description from a caller.

    Returns:
        str: Trimmed description, empty when missing.
    """
    if not description:
        return ""
    return description.strip()


def normalize_login(login: str | None) -> str | None:
    """Normalize login values.

    Args:
        login: Raw login entered by a user.

    Returns:
        str | None: Trimmed login, None when blank.
    """
    if not login:
        return None
    cleaned = login.strip()
    return cleaned or None


__all__ = ["normalize_description", "normalize_login"]
