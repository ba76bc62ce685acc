"""Tests for CloudexClient."""
import errno

import pytest

from cloudexpy import (
    AiohttpTransport,
    CloudexClient,
    CloudexError,
    CloudinaryConfig,
    ConfigurationError,
    DeletedImage,
    FileReadError,
    InvalidInputError,
    UploadedImage,
    UploadFileNotFoundError,
)

URL = 'https://res.cloudinary.com/demo/image/upload/sample.jpg'


class TestClientSetup:
    """Test suite for client construction and lifecycle."""

    def test_rejects_incomplete_config(self, transport):
        """Test missing credentials fail at construction."""
        with pytest.raises(ConfigurationError):
            CloudexClient(CloudinaryConfig('cloud', '', ''), transport)

    @pytest.mark.asyncio
    async def test_default_transport(self, config):
        """Test aiohttp transport is used when none is given."""
        async with CloudexClient(config) as cloudex:
            assert isinstance(cloudex._transport, AiohttpTransport)

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, config, transport):
        """Test leaving the context closes the transport."""
        async with CloudexClient(config, transport) as cloudex:
            assert cloudex.config is config

        assert transport.closed


class TestClientUpload:
    """Test suite for CloudexClient.upload."""

    @pytest.mark.asyncio
    async def test_single(self, config, transport, sample_file):
        """Test a single path returns its record."""
        cloudex = CloudexClient(config, transport)

        result = await cloudex.upload(sample_file)

        assert isinstance(result, UploadedImage)

    @pytest.mark.asyncio
    async def test_single_failure_raises(self, config, transport):
        """Test a single failing target raises."""
        cloudex = CloudexClient(config, transport)

        with pytest.raises(UploadFileNotFoundError):
            await cloudex.upload("missing.png")

    @pytest.mark.asyncio
    async def test_batch_keeps_positions(self, config, transport, sample_file):
        """Test a failing item leaves the others untouched."""
        cloudex = CloudexClient(config, transport)

        results = await cloudex.upload([str(sample_file), "missing.png", URL])

        assert len(results) == 3
        assert isinstance(results[0], UploadedImage)
        assert results[0].source == str(sample_file)
        assert isinstance(results[1], UploadFileNotFoundError)
        assert str(results[1]) == "File missing.png does not exist."
        assert isinstance(results[2], UploadedImage)
        assert results[2].source == URL
        assert len(transport.requests) == 2

    @pytest.mark.asyncio
    async def test_batch_unreadable_file(self, config, transport, tmp_path, unreadable):
        """Test an I/O error on one file becomes an error in place."""
        broken = tmp_path / "broken.jpg"
        broken.write_bytes(b"data")
        unreadable.add("broken.jpg")
        cloudex = CloudexClient(config, transport)

        results = await cloudex.upload([URL, str(broken), URL + '?v=2'])

        assert isinstance(results[0], UploadedImage)
        assert isinstance(results[1], FileReadError)
        assert isinstance(results[1], CloudexError)
        assert results[1].source == str(broken)
        assert results[1].cause.errno == errno.EIO
        assert isinstance(results[2], UploadedImage)
        assert len(transport.requests) == 2

    @pytest.mark.asyncio
    async def test_batch_runs_concurrently(self, config, transport):
        """Test batch items are in flight together."""
        cloudex = CloudexClient(config, transport)

        await cloudex.upload([URL, URL + '?v=2', URL + '?v=3'])

        assert transport.max_in_flight == 3

    @pytest.mark.asyncio
    async def test_batch_invalid_item(self, config, transport):
        """Test an unsupported item becomes an error in place."""
        cloudex = CloudexClient(config, transport)

        results = await cloudex.upload([URL, 42])

        assert isinstance(results[0], UploadedImage)
        assert isinstance(results[1], InvalidInputError)

    @pytest.mark.asyncio
    async def test_empty_batch(self, config, transport):
        """Test an empty list gives an empty list."""
        assert await CloudexClient(config, transport).upload([]) == []

    @pytest.mark.asyncio
    async def test_directory(self, config, transport, tmp_path):
        """Test a directory uploads its files in name order."""
        folder = tmp_path / "photos"
        folder.mkdir()
        (folder / "b.jpg").write_bytes(b"b")
        (folder / "a.jpg").write_bytes(b"a")
        (folder / "nested").mkdir()
        cloudex = CloudexClient(config, transport)

        results = await cloudex.upload(str(folder))

        assert [r.source for r in results] == [str(folder / "a.jpg"), str(folder / "b.jpg")]
        assert len(transport.requests) == 2

    @pytest.mark.asyncio
    async def test_opts_shared_by_batch(self, config, transport):
        """Test options apply to every item."""
        cloudex = CloudexClient(config, transport)

        await cloudex.upload([URL, URL + '?v=2'], {'resource_type': 'video'})

        assert all(r.url.endswith('/video/upload') for r in transport.requests)


class TestClientUploadLarge:
    """Test suite for CloudexClient.upload_large."""

    @pytest.mark.asyncio
    async def test_upload_large(self, config, transport, sample_file):
        """Test chunked upload through the client."""
        progress = []
        cloudex = CloudexClient(
            config, transport,
            progress_callback=lambda p: progress.append(p.uploaded_chunks)
        )

        result = await cloudex.upload_large(sample_file, chunk_size=10)

        assert isinstance(result, UploadedImage)
        assert len(transport.requests) == 2
        assert progress == [1, 2]

    @pytest.mark.asyncio
    async def test_hooks(self, config, transport, sample_file):
        """Test hooks registered on the client see chunk events."""
        stops = []
        cloudex = CloudexClient(config, transport).on('chunk.stop', stops.append)

        await cloudex.upload_large(sample_file, chunk_size=10)
        cloudex.off('chunk.stop', stops.append)
        await cloudex.upload_large(sample_file, chunk_size=10)

        assert len(stops) == 2


class TestClientDelete:
    """Test suite for CloudexClient.delete."""

    @pytest.mark.asyncio
    async def test_single(self, config, transport):
        """Test deleting one id."""
        result = await CloudexClient(config, transport).delete('sample')

        assert result.public_id == 'sample'

    @pytest.mark.asyncio
    async def test_batch(self, config, transport):
        """Test a list of ids keeps positions, errors included."""
        results = await CloudexClient(config, transport).delete(['a', 5, 'b'])

        assert isinstance(results[0], DeletedImage)
        assert isinstance(results[1], InvalidInputError)
        assert results[2].public_id == 'b'
        assert len(transport.requests) == 2

    @pytest.mark.asyncio
    async def test_delete_prefix(self, config, transport):
        """Test delete by prefix."""
        assert await CloudexClient(config, transport).delete_prefix('tmp/') == 'tmp/'

    @pytest.mark.asyncio
    async def test_delete_prefix_batch(self, config, transport):
        """Test a list of prefixes keeps positions."""
        results = await CloudexClient(config, transport).delete_prefix(['a/', None, 'b/'])

        assert results[0] == 'a/'
        assert isinstance(results[1], InvalidInputError)
        assert results[2] == 'b/'
