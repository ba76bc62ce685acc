"""
Single-shot upload.

Sends a whole local file as one multipart request, or asks Cloudinary to
fetch a remote URL with a form-encoded request.
"""
from typing import Any, Dict, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

import aiohttp

from .models import LocalFile, RemoteUrl, UploadedImage, UploadedVideo, parse_target
from .protocols import FileReaderProtocol, TransportProtocol
from .services import AsyncFileReader, FileValidator, ResponseTranslator
from ..api import CloudinaryConfig, Signer, form_fields, normalize, strip_transport_options
from ..api.params import option
from ..events import EventEmitter, UPLOAD
from ..logging import get_logger, redact

logger = get_logger('cloudexpy.upload')

CLOUDINARY_HEADERS = {
    'Content-Type': 'application/x-www-form-urlencoded',
    'Accept': 'application/json',
}


class UploadFacade:
    """
    Simplified interface for single-request uploads.

    Example:
        >>> uploader = UploadFacade(config, transport)
        >>> image = await uploader.upload("photo.jpg", {'tags': ['a', 'b']})
        >>> print(image.secure_url)
    """

    def __init__(
        self,
        config: CloudinaryConfig,
        transport: TransportProtocol,
        events: Optional[EventEmitter] = None,
        file_reader: Optional[FileReaderProtocol] = None
    ):
        """
        Initialize upload facade.

        Args:
            config: Client configuration
            transport: HTTP transport
            events: Observer hooks (a private emitter when omitted)
            file_reader: File reader implementation
        """
        self._config = config
        self._transport = transport
        self._events = events or EventEmitter()
        self._file_reader = file_reader or AsyncFileReader()
        self._validator = FileValidator()
        self._signer = Signer(config)

    async def upload(
        self,
        target: Union[str, LocalFile, RemoteUrl],
        opts: Optional[Mapping[str, Any]] = None
    ) -> Union[UploadedImage, UploadedVideo]:
        """
        Upload a local file or a remote URL.

        Args:
            target: Path, URL (http, https, s3) or an UploadTarget
            opts: Upload options; ``resource_type`` selects the endpoint,
                ``request_options`` configures the transport

        Returns:
            UploadedVideo when Cloudinary reports a video, else UploadedImage

        Raises:
            InvalidInputError: If target is not a str, Path or UploadTarget
            UploadFileNotFoundError: If a local file does not exist (no
                request is sent)
            TransportError: If the request could not be completed
            DecodeError: If the response is not JSON
            ApiError: If the response carries ``error.message``
        """
        target = parse_target(target)
        request_options, api_opts = strip_transport_options(opts or {})
        url = self._config.upload_url(option(api_opts, 'resource_type', 'image'))

        if isinstance(target, LocalFile):
            body, headers = await self._file_body(target, api_opts)
        else:
            body, headers = self._url_body(target, api_opts)

        with self._events.span(UPLOAD, source=target.source):
            logger.info(f"Uploading {target.source} to {url}")
            response = await self._transport.post(url, body, headers, request_options)
            result = ResponseTranslator.handle(response, target.source)
            logger.info(f"Uploaded {target.source} as {result.public_id}")
            return result

    async def _file_body(
        self,
        target: LocalFile,
        opts: Mapping[str, Any]
    ) -> Tuple[Any, Dict[str, str]]:
        """Multipart body: the file plus every signed option except resource_type."""
        path, file_size = self._validator.validate(target.path)
        data = await self._file_reader.read_file(path)
        logger.debug(f"Read {path.name} ({file_size} bytes)")

        form = aiohttp.FormData()
        form.add_field('file', data, filename=path.name,
                       content_type='application/octet-stream')
        for name, value in self._signer.signed_fields(opts).items():
            form.add_field(name, value)

        return form, {'Accept': 'application/json'}

    def _url_body(
        self,
        target: RemoteUrl,
        opts: Mapping[str, Any]
    ) -> Tuple[str, Dict[str, str]]:
        """Form-encoded body of the full signed map with ``file`` set to the URL."""
        params = normalize({**opts, 'file': target.url})
        signed = self._signer.sign(params)
        logger.debug(f"Signed URL upload params: {redact(signed)}")
        return urlencode(form_fields(signed)), dict(CLOUDINARY_HEADERS)
