import base64
from pathlib import Path
from typing import Union


def upload_id_for(path: Union[str, Path]) -> str:
    """Derives the X-Unique-Upload-Id for a file path.

    URL-safe Base64 of the path without padding, so the id never contains
    ``+``, ``/`` or ``=``. This differs from the padded standard Base64 some
    other Cloudinary clients send; the server treats the id as opaque. The
    encoding is reversible, so distinct paths never share an id and the same
    path always maps to the same one.
    """
    encoded = base64.urlsafe_b64encode(str(path).encode('utf-8')).decode()
    return encoded.rstrip('=')


def is_remote(value: str) -> bool:
    """Returns True for values Cloudinary fetches itself (http, https, s3)."""
    return value.startswith(('http://', 'https://', 's3://'))
