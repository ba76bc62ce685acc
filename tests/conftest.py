"""Pytest fixtures for cloudexpy tests."""
import asyncio
import errno
import json
from dataclasses import dataclass
from email import policy
from email.parser import BytesParser
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles
import aiohttp
import pytest

from cloudexpy.core.api import CloudinaryConfig, TransportResponse


@dataclass
class FormPart:
    """One part of a posted multipart body."""
    name: str
    filename: Optional[str]
    content_type: str
    data: bytes

    def text(self) -> str:
        return self.data.decode('utf-8')


class _BodyCollector:
    """Minimal stream writer collecting serialized bytes."""

    def __init__(self):
        self.chunks: List[bytes] = []

    async def write(self, chunk) -> None:
        self.chunks.append(bytes(chunk))


async def read_form(data: Any) -> Dict[str, FormPart]:
    """
    Serialize a posted multipart body and parse it back into parts.

    Accepts an aiohttp FormData (as posted for single-shot uploads) or the
    multipart payload it produces (as posted for chunks).
    """
    writer = data() if isinstance(data, aiohttp.FormData) else data
    collector = _BodyCollector()
    await writer.write(collector)

    raw = (
        b"Content-Type: " + writer.content_type.encode('ascii') + b"\r\n\r\n"
        + b"".join(collector.chunks)
    )
    message = BytesParser(policy=policy.HTTP).parsebytes(raw)

    parts = {}
    for part in message.iter_parts():
        name = part.get_param('name', header='content-disposition')
        parts[name] = FormPart(
            name=name,
            filename=part.get_filename(),
            content_type=part.get_content_type(),
            data=part.get_payload(decode=True) or b'',
        )
    return parts


@dataclass
class RecordedRequest:
    """A request captured by FakeTransport."""
    method: str
    url: str
    data: Any
    headers: Dict[str, str]
    request_options: Optional[Dict[str, Any]]


class FakeTransport:
    """
    In-memory transport.

    Answers requests from ``responses`` in order (an exception instance
    is raised instead of returned) and falls back to ``default``.
    Tracks how many requests are in flight at once.
    """

    def __init__(self, responses=None, default=None):
        self.responses: List[Any] = list(responses or [])
        self.default = default or json_response({'public_id': 'default'})
        self.requests: List[RecordedRequest] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def post(self, url, data, headers=None, request_options=None):
        return await self._record('POST', url, data, headers, request_options)

    async def delete(self, url, headers=None, request_options=None):
        return await self._record('DELETE', url, None, headers, request_options)

    async def close(self):
        self.closed = True

    async def _record(self, method, url, data, headers, request_options):
        self.requests.append(
            RecordedRequest(method, url, data, dict(headers or {}), request_options)
        )
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            item = self.responses.pop(0) if self.responses else self.default
        finally:
            self.in_flight -= 1
        if isinstance(item, BaseException):
            raise item
        return item


def json_response(payload: Any, status: int = 200) -> TransportResponse:
    """TransportResponse with a JSON body."""
    return TransportResponse(status=status, body=json.dumps(payload).encode())


@pytest.fixture
def config():
    """Configuration with fixed test credentials."""
    return CloudinaryConfig(cloud_name='my_cloud_name', api_key='1234', secret='abcd')


@pytest.fixture
def transport():
    """Fresh fake transport."""
    return FakeTransport()


@pytest.fixture
def respond():
    """Factory for JSON transport responses."""
    return json_response


@pytest.fixture
def image_response():
    """Upload response of an image, trimmed from a real Cloudinary answer."""
    return {
        'public_id': 'i2nruesgu4om3w9mtk1z',
        'version': 1448618543,
        'signature': '77b447746476c82bb4921fdea62a9227c584974b',
        'width': 250,
        'height': 167,
        'format': 'jpg',
        'resource_type': 'image',
        'created_at': '2015-11-27T10:02:23Z',
        'tags': [],
        'bytes': 22659,
        'type': 'upload',
        'etag': 'dbb5764565c1b77ff049d20fcfd1d41d',
        'url': 'http://res.cloudinary.com/my_cloud_name/image/upload/v1448618543/i2nruesgu4om3w9mtk1z.jpg',
        'secure_url': 'https://res.cloudinary.com/my_cloud_name/image/upload/v1448618543/i2nruesgu4om3w9mtk1z.jpg',
        'original_filename': 'test',
        'placeholder': False,
    }


@pytest.fixture
def video_response():
    """Upload response of a video."""
    return {
        'public_id': 'bqzkffnaviwjafajqraf',
        'version': 1535339742,
        'signature': '5b477564193de869ad6cf84e561dd74a091a2211',
        'width': 640,
        'height': 400,
        'format': 'mp4',
        'resource_type': 'video',
        'created_at': '2018-08-27T03:15:42Z',
        'tags': [],
        'bytes': 299396,
        'type': 'upload',
        'etag': 'aaf7d25e2f37927b2be50e20c58304e3',
        'url': 'http://res.cloudinary.com/my_cloud_name/video/upload/v1535339742/bqzkffnaviwjafajqraf.mp4',
        'secure_url': 'https://res.cloudinary.com/my_cloud_name/video/upload/v1535339742/bqzkffnaviwjafajqraf.mp4',
        'original_filename': 'teamwork',
        'audio': {},
        'video': {'codec': 'h264', 'bit_rate': '26340', 'level': 31},
        'bit_rate': 27217,
        'duration': 88.0,
        'frame_rate': 25.0,
        'eager': [],
    }


@pytest.fixture
def sample_file(tmp_path):
    """20-byte file with known content."""
    path = tmp_path / "sample.jpg"
    path.write_bytes(b"0123456789ABCDEFGHIJ")
    return path


@pytest.fixture
def make_transport():
    """Build a fake transport answering with the given responses."""
    return FakeTransport


@pytest.fixture
def form_parts():
    """Parse a recorded multipart body into its parts."""
    return read_form


@pytest.fixture
def unreadable(monkeypatch):
    """
    Make opening chosen files fail with an I/O error.

    Add file names to the returned set; other files open normally.
    """
    names = set()
    real_open = aiofiles.open

    def fake_open(file, *args, **kwargs):
        if Path(file).name in names:
            raise OSError(errno.EIO, "Input/output error", str(file))
        return real_open(file, *args, **kwargs)

    monkeypatch.setattr(aiofiles, 'open', fake_open)
    return names
