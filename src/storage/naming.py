import re
import secrets
import time

_EXTENSION_RE = re.compile(r"[A-Za-z0-9]{1,10}")


def generate_asset_name(filename: str) -> str:
    """
    Build a collision-resistant object name for an uploaded file.

    A random token and the upload time in milliseconds replace the original
    name; the original extension is kept so the asset is served with the
    right type. Anything that is not a plain alphanumeric extension of the
    base name is dropped, so the result is always a single path segment.
    """
    token = secrets.token_hex(8)
    timestamp = int(time.time() * 1000)
    basename = re.split(r"[/\\]", filename)[-1]
    _, dot, extension = basename.rpartition(".")
    if dot and _EXTENSION_RE.fullmatch(extension):
        return f"{token}-{timestamp}.{extension.lower()}"
    return f"{token}-{timestamp}"
