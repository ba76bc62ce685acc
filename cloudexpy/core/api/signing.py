"""
Request signing.

Cloudinary authenticates uploads with a SHA-1 signature over the sorted
``key=value`` parameter list followed by the API secret.
"""
import time
from typing import Any, Dict, Mapping, Optional, Union

from Crypto.Hash import SHA1

from .config import CloudinaryConfig
from .params import normalize, strip_transport_options, unify, without

# Sent with the request but never part of the signature.
UNSIGNED_KEYS = ('file', 'resource_type')


def current_timestamp() -> str:
    """Current Unix time in whole seconds, as a string."""
    return str(int(time.time()))


def render_value(value: Any) -> str:
    """Render a parameter value the way it is signed and transmitted."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def string_to_sign(params: Mapping) -> str:
    """
    Build the string the signature is computed over.

    Every parameter is rendered as ``key=value``; the list is sorted
    lexicographically and joined with ``&``.
    """
    pairs = [
        f"{key}={render_value(value)}"
        for key, value in params.items()
        if str(key) not in UNSIGNED_KEYS
    ]
    return '&'.join(sorted(pairs))


def signature_for(params: Mapping, secret: str) -> str:
    """Lower-case hex SHA-1 of the string to sign with the secret appended."""
    digest = SHA1.new((string_to_sign(params) + secret).encode('utf-8'))
    return digest.hexdigest().lower()


def sign(
    params: Mapping,
    secret: str,
    api_key: str,
    timestamp: Optional[Union[int, str]] = None
) -> Dict[Any, Any]:
    """
    Sign a parameter set.

    The timestamp is captured once and used both for the signature and
    for the transmitted value.

    Args:
        params: Normalized upload parameters
        secret: API secret (never included in the result)
        api_key: API key added to the result
        timestamp: Fixed timestamp, defaults to the current time

    Returns:
        The original parameters plus ``timestamp``, ``signature`` and
        ``api_key``. ``file`` and ``resource_type`` are kept in the result
        but excluded from the signature.
    """
    timestamp = current_timestamp() if timestamp is None else str(timestamp)

    signed_input = dict(params)
    signed_input['timestamp'] = timestamp
    signature = signature_for(signed_input, secret)

    result = dict(params)
    result.update({
        'timestamp': timestamp,
        'signature': signature,
        'api_key': api_key,
    })
    return result


class Signer:
    """Signs parameter sets with the credentials of a CloudinaryConfig."""

    def __init__(self, config: CloudinaryConfig):
        self._config = config

    def sign(self, params: Mapping, timestamp: Optional[Union[int, str]] = None) -> Dict[Any, Any]:
        return sign(params, self._config.secret, self._config.api_key, timestamp)

    def signed_fields(self, opts: Mapping, timestamp: Optional[Union[int, str]] = None) -> Dict[str, str]:
        """
        Form fields sent alongside an uploaded file.

        Drops transport-only options and ``resource_type`` (it only
        selects the URL), normalizes, signs, and renders every key and
        value as a string.
        """
        _, api_opts = strip_transport_options(opts)
        params = normalize(without(api_opts, 'resource_type'))
        return form_fields(self.sign(params, timestamp))


def form_fields(params: Mapping) -> Dict[str, str]:
    """String keys and rendered string values, ready for a request body."""
    return {key: render_value(value) for key, value in unify(params).items()}
