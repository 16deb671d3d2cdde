USER_PREFIX = "USER_"


def build_user_reference(reference: str, user_id: str | None = None) -> str:
    """Embed a user id into a merchant reference as ``USER_{id}_{reference}``."""
    if user_id:
        return f"{USER_PREFIX}{user_id}_{reference}"
    return reference


def extract_user_id_from_reference(reference) -> str | None:
    """Return the user id embedded in a ``USER_{id}_...`` reference, if any."""
    if not isinstance(reference, str) or not reference.startswith(USER_PREFIX):
        return None
    parts = reference.split("_")
    if len(parts) >= 2:
        return parts[1]
    return None
