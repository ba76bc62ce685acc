"""Cloudinary API plumbing: configuration, signing, parameters, transport."""
from .config import CloudinaryConfig, ProxyConfig, SSLConfig, TimeoutConfig
from .params import normalize, unify, strip_transport_options
from .signing import Signer, sign, signature_for, string_to_sign, form_fields
from .transport import AiohttpTransport, TransportResponse

__all__ = [
    # Configuration
    'CloudinaryConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',

    # Parameters and signing
    'normalize',
    'unify',
    'strip_transport_options',
    'Signer',
    'sign',
    'signature_for',
    'string_to_sign',
    'form_fields',

    # Transport
    'AiohttpTransport',
    'TransportResponse',
]
