"""Tests for the filesystem storage provider."""

import pytest

from timedmeta.exceptions import ResourceNotFoundException, ValidationException


async def test_put_then_get(storage) -> None:
    uri = await storage.put_object("output-bucket", "clip.vtt", b"WEBVTT\n", "text/vtt; charset=UTF-8")

    assert uri.startswith("file://")
    assert uri.endswith("/output-bucket/clip.vtt")
    assert await storage.get_object("output-bucket", "clip.vtt") == b"WEBVTT\n"


async def test_missing_object(storage) -> None:
    with pytest.raises(ResourceNotFoundException) as excinfo:
        await storage.get_object("output-bucket", "missing.json")

    assert excinfo.value.details == {"bucket": "output-bucket", "key": "missing.json"}


async def test_list_objects_with_prefix(storage) -> None:
    for key in ("clip.vtt", "clip.html", "hls/clip.m3u8", "other.vtt"):
        await storage.put_object("output-bucket", key, b"x")

    assert await storage.list_objects("output-bucket", "clip") == ["clip.html", "clip.vtt"]
    assert await storage.list_objects("output-bucket") == ["clip.html", "clip.vtt", "hls/clip.m3u8", "other.vtt"]
    assert await storage.list_objects("empty-bucket") == []


async def test_keys_cannot_escape_root(storage) -> None:
    with pytest.raises(ValidationException):
        await storage.put_object("output-bucket", "../../etc/passwd", b"x")
