"""Tests for the in-memory ZIP archive sink."""

import io
import zipfile

import pytest

from tar_to_zip.zip.sink import ZipArchiveSink


def open_zip(data):
    """Open ZIP bytes for inspection."""
    return zipfile.ZipFile(io.BytesIO(data))


@pytest.mark.asyncio
async def test_finalize_writes_files_and_folders():
    """Test that queued entries come out as a readable ZIP."""
    sink = ZipArchiveSink()
    sink.add_folder("docs")
    sink.add_file("docs/readme.txt", b"read me")

    with open_zip(await sink.finalize()) as archive:
        assert archive.namelist() == ["docs/", "docs/readme.txt"]
        assert archive.getinfo("docs/").is_dir()
        assert archive.read("docs/readme.txt") == b"read me"
        assert archive.testzip() is None


def test_folder_trailing_slash_not_doubled():
    """Test that tar directory names keep a single trailing slash."""
    sink = ZipArchiveSink()
    sink.add_folder("already/")

    assert sink.paths == ["already/"]


@pytest.mark.asyncio
async def test_file_comment_is_stored():
    """Test per-entry comments used to annotate symlinks."""
    sink = ZipArchiveSink()
    sink.add_file("link", b"target", comment="Symbolic Link")

    with open_zip(await sink.finalize()) as archive:
        assert archive.getinfo("link").comment == b"Symbolic Link"
        assert archive.read("link") == b"target"


@pytest.mark.asyncio
async def test_duplicate_path_keeps_last_content():
    """Test that a later write to the same path replaces the earlier one."""
    sink = ZipArchiveSink()
    sink.add_file("a.txt", b"first")
    sink.add_file("b.txt", b"other")
    sink.add_file("a.txt", b"second")

    assert len(sink) == 2
    with open_zip(await sink.finalize()) as archive:
        assert archive.namelist() == ["a.txt", "b.txt"]
        assert archive.read("a.txt") == b"second"


@pytest.mark.asyncio
async def test_compression_level_applies():
    """Test that higher compression levels actually deflate content."""
    content = b"abcdefgh" * 4096
    stored_sink = ZipArchiveSink()
    stored_sink.add_file("data.bin", content)
    packed_sink = ZipArchiveSink()
    packed_sink.add_file("data.bin", content)

    stored = await stored_sink.finalize(compression_level=0)
    packed = await packed_sink.finalize(compression_level=9)

    assert len(packed) < len(stored)
    with open_zip(packed) as archive:
        assert archive.read("data.bin") == content


@pytest.mark.asyncio
async def test_finalize_reports_progress():
    """Test fractional progress during serialization."""
    sink = ZipArchiveSink()
    for i in range(4):
        sink.add_file(f"f{i}.txt", b"x")
    reported = []

    async def on_progress(percent):
        reported.append(percent)

    await sink.finalize(progress_callback=on_progress)

    assert reported == [25.0, 50.0, 75.0, 100.0]


@pytest.mark.asyncio
async def test_finalize_empty_sink():
    """Test that an empty sink still produces a valid archive."""
    reported = []

    async def on_progress(percent):
        reported.append(percent)

    data = await ZipArchiveSink().finalize(progress_callback=on_progress)

    with open_zip(data) as archive:
        assert archive.namelist() == []
    assert reported == [100.0]
