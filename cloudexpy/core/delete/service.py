"""
Deletion service.

Deletes resources by public id or by prefix through the Admin API.
Requests are authenticated with basic auth only (no signature) and the
raw response is handed back untranslated.
"""
from typing import Any, Mapping, Optional
from urllib.parse import quote

from ..api import CloudinaryConfig, strip_transport_options
from ..api.params import option
from ..exceptions import InvalidInputError
from ..logging import get_logger
from ..upload.models import DeletedImage
from ..upload.protocols import TransportProtocol

logger = get_logger('cloudexpy.delete')

DELETE_HEADERS = {
    'Content-Type': 'application/x-www-form-urlencoded',
    'Accept': 'application/json',
}


class DeletionService:
    """Builds and sends delete requests."""

    def __init__(self, config: CloudinaryConfig, transport: TransportProtocol):
        self._config = config
        self._transport = transport

    def delete_url(self, public_id: str, opts: Mapping[str, Any]) -> str:
        """``{base}{cloud}/resources/{resource_type}/{type}?public_ids[]={id}``"""
        base = self._resources_url(opts)
        return f"{base}?public_ids[]={quote(public_id, safe='/')}"

    def delete_prefix_url(self, prefix: str, opts: Mapping[str, Any]) -> str:
        """``{base}{cloud}/resources/{resource_type}/{type}?prefix={prefix}``"""
        base = self._resources_url(opts)
        return f"{base}?prefix={quote(prefix, safe='/')}"

    def _resources_url(self, opts: Mapping[str, Any]) -> str:
        return self._config.resources_url(
            option(opts, 'resource_type', 'image'),
            option(opts, 'type', 'upload')
        )

    async def delete(self, public_id: str, opts: Optional[Mapping[str, Any]] = None) -> DeletedImage:
        """
        Delete one resource by public id.

        Any HTTP answer counts as done: Cloudinary reports unknown ids as
        ``not_found`` inside a normal response.

        Raises:
            InvalidInputError: If public_id is not a str
            TransportError: If the request could not be completed
        """
        if not isinstance(public_id, str):
            raise InvalidInputError(
                f"delete only accepts a valid public id, received: {public_id!r}"
            )

        request_options, api_opts = strip_transport_options(opts or {})
        url = self.delete_url(public_id, api_opts)
        logger.info(f"Deleting {public_id}")
        response = await self._transport.delete(url, dict(DELETE_HEADERS), request_options)
        logger.debug(f"Delete {public_id} answered {response.status}")
        return DeletedImage(public_id=public_id, response=response)

    async def delete_prefix(self, prefix: str, opts: Optional[Mapping[str, Any]] = None) -> str:
        """
        Delete every resource whose public id starts with ``prefix``.

        Returns:
            The prefix

        Raises:
            InvalidInputError: If prefix is not a str
            TransportError: If the request could not be completed
        """
        if not isinstance(prefix, str):
            raise InvalidInputError(
                f"delete_prefix only accepts a valid prefix, received: {prefix!r}"
            )

        request_options, api_opts = strip_transport_options(opts or {})
        url = self.delete_prefix_url(prefix, api_opts)
        logger.info(f"Deleting resources with prefix {prefix}")
        response = await self._transport.delete(url, dict(DELETE_HEADERS), request_options)
        logger.debug(f"Delete prefix {prefix} answered {response.status}")
        return prefix
