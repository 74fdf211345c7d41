"""Resolution of the `url` query parameter into a fetchable target."""

from pydantic import ValidationError

from zipped_proxy.shared.models import ClientError, Target

MISSING_URL_MESSAGE = "Missing url parameter. Example: ?url=https://example.com"
INVALID_URL_MESSAGE = "Invalid URL"
UNSUPPORTED_PROTOCOL_MESSAGE = "Unsupported protocol"

ZIPPED_SCHEME_PREFIX = "zipped://"
ALLOWED_SCHEMES = frozenset({"http", "https"})


def normalize_scheme(raw: str) -> str:
    """Rewrite a leading zipped:// to https://."""
    if raw.startswith(ZIPPED_SCHEME_PREFIX):
        return "https://" + raw[len(ZIPPED_SCHEME_PREFIX):]
    return raw


def resolve_target(raw: str | None) -> Target | ClientError:
    """
    Validate the raw `url` parameter.

    Args:
        raw: Parameter value as received, or None when absent

    Returns:
        The parsed target, or the client error to answer with
    """
    raw = (raw or "").strip()
    if not raw:
        return ClientError(message=MISSING_URL_MESSAGE)

    try:
        target = Target(url=normalize_scheme(raw))
    except ValidationError:
        return ClientError(message=INVALID_URL_MESSAGE)

    if target.url.scheme not in ALLOWED_SCHEMES:
        return ClientError(message=UNSUPPORTED_PROTOCOL_MESSAGE)

    return target
