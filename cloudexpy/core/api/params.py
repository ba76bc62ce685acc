"""
Upload parameter preparation.

Canonicalizes caller options into the flat string form Cloudinary
expects. Must run before signing: the signature covers normalized values.
"""
from typing import Any, Dict, Mapping, Tuple

# Consumed by the transport only; never signed or posted.
TRANSPORT_KEYS = ('request_options',)


def _join_context(context: Mapping) -> str:
    return '|'.join(f"{key}={value}" for key, value in context.items())


def normalize(opts: Mapping) -> Dict[Any, Any]:
    """
    Normalize upload options.

    - ``tags`` given as a list or tuple becomes a comma-joined string.
    - ``context`` given as a mapping becomes ``key=value`` pairs joined
      with ``|``, in the mapping's iteration order.

    Already normalized values pass through untouched, so the function is
    idempotent.

    Example:
        >>> normalize({'tags': ['a', 'b'], 'context': {'alt': 'x'}})
        {'tags': 'a,b', 'context': 'alt=x'}
    """
    result = dict(opts)

    for key, value in opts.items():
        name = str(key)
        if name == 'tags' and isinstance(value, (list, tuple)):
            result[key] = ','.join(str(tag) for tag in value)
        elif name == 'context' and isinstance(value, Mapping):
            result[key] = _join_context(value)

    return result


def unify(opts: Mapping) -> Dict[str, Any]:
    """Unify a mixed-key mapping into string keys ({1: 'a'} -> {'1': 'a'})."""
    return {str(key): value for key, value in opts.items()}


def strip_transport_options(opts: Mapping) -> Tuple[Dict[str, Any], Dict[Any, Any]]:
    """
    Split transport-only options from API parameters.

    Returns:
        Tuple of (request_options, remaining options)
    """
    remaining = dict(opts)
    request_options: Dict[str, Any] = {}
    for key in list(remaining):
        if str(key) in TRANSPORT_KEYS:
            request_options = dict(remaining.pop(key) or {})
    return request_options, remaining


def option(opts: Mapping, name: str, default: Any = None) -> Any:
    """Look up an option whose key may be a str or any other type rendering to ``name``."""
    for key, value in opts.items():
        if str(key) == name:
            return value
    return default


def without(opts: Mapping, *names: str) -> Dict[Any, Any]:
    """Copy of ``opts`` without the keys rendering to any of ``names``."""
    return {key: value for key, value in opts.items() if str(key) not in names}
