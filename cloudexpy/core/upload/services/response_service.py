"""
Response translation.

Turns a raw upload response into UploadedImage / UploadedVideo, or
raises the matching error.
"""
import json
from typing import Any, Dict, Optional, Union

from ..models import UploadedImage, UploadedVideo
from ...exceptions import ApiError, DecodeError

GENERIC_ERROR = "Error uploading file"


class ResponseTranslator:
    """Handles upload responses."""

    @staticmethod
    def decode(body: Union[bytes, str], source: Optional[str] = None) -> Dict[str, Any]:
        """
        Parse a JSON object from a response body.

        Raises:
            DecodeError: If the body is not a JSON object
        """
        raw = body if isinstance(body, bytes) else body.encode('utf-8')
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise DecodeError(f"Invalid JSON response: {e}", body=raw, source=source) from e

        if not isinstance(payload, dict):
            raise DecodeError("Expected a JSON object response", body=raw, source=source)
        return payload

    @staticmethod
    def error_message(payload: Any) -> Optional[str]:
        """Return ``error.message`` if the payload carries one."""
        if isinstance(payload, dict):
            error = payload.get('error')
            if isinstance(error, dict) and 'message' in error:
                return str(error['message'])
        return None

    @classmethod
    def translate(
        cls,
        payload: Dict[str, Any],
        source: Optional[str] = None,
        status: Optional[int] = None
    ) -> Union[UploadedImage, UploadedVideo]:
        """
        Convert a decoded response into a typed record.

        ``resource_type == "video"`` selects UploadedVideo; anything else,
        including no resource_type at all, selects UploadedImage.

        Raises:
            ApiError: If the payload contains ``error.message``
        """
        message = cls.error_message(payload)
        if message is not None:
            raise ApiError(message, status=status, response=payload, source=source)

        if payload.get('resource_type') == 'video':
            return UploadedVideo.from_response(payload, source)
        return UploadedImage.from_response(payload, source)

    @classmethod
    def handle(cls, response: Any, source: Optional[str] = None) -> Union[UploadedImage, UploadedVideo]:
        """Decode and translate a transport response in one step."""
        payload = cls.decode(response.body, source)
        return cls.translate(payload, source, status=response.status)
