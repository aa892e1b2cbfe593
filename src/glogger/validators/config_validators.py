LEVEL_ALIASES = {"warning": "warn"}


def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase if it's not None.
    """
    if value is None:
        return None
    return value.strip().lower()


def normalize_level_name(value: str | None) -> str | None:
    """
    Lowercase a severity name and fold stdlib spellings onto ours ("WARNING" -> "warn").
    """
    value = to_lowercase(value)
    if value is None:
        return None
    return LEVEL_ALIASES.get(value, value)
