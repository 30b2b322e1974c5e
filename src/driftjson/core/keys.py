from driftjson.models import KeyCodingStyle


def _lower_first(value: str) -> str:
    return value[:1].lower() + value[1:]


def _upper_first(value: str) -> str:
    return value[:1].upper() + value[1:]


def normalize_key(key: str, style: KeyCodingStyle = KeyCodingStyle.CAMEL_CASE) -> str:
    """Convert ``snake_case``, ``kebab-case`` or ``PascalCase`` keys to camelCase.

    ``user_id`` -> ``userId``, ``first-name`` -> ``firstName``,
    ``UserEmail`` -> ``userEmail``. Keys that are already camelCase are returned
    unchanged, so applying the function twice is the same as applying it once.
    """
    if style is KeyCodingStyle.NONE or not key:
        return key

    if "_" in key or "-" in key:
        separator = "_" if "_" in key else "-"
        segments = [segment for segment in key.split(separator) if segment]
        if not segments:
            return key
        # a second separator kind survives the split and is handled on the next pass
        return normalize_key(
            _lower_first(segments[0]) + "".join(_upper_first(s) for s in segments[1:]),
            style,
        )

    return _lower_first(key)
