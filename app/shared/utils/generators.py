"""ID and filename generators (CUID2)."""

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_media_filename(extension: str, prefix: str = "local") -> str:
    """Return a unique, path-safe filename such as ``local-<cuid>.png``.

    Args:
        extension: File extension without the leading dot.
        prefix: Filename prefix identifying the writer.
    """
    ext = extension.lower().lstrip(".") or "jpg"
    return f"{prefix}-{generate_cuid()}.{ext}"
