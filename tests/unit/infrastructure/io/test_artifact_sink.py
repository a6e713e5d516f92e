"""Tests for artifact sinks."""

from pathlib import Path

import pytest

from dataset_mapper.application.models import ExportArtifact, ExportFormat
from dataset_mapper.infrastructure.io.artifact_sink import (
    DirectoryArtifactSink,
    MemoryArtifactSink,
)
from dataset_mapper.infrastructure.io.exceptions import ArtifactDeliveryError, DataWriteError


def _artifact(content: str = "A,B\n1,2\n") -> ExportArtifact:
    return ExportArtifact(
        filename="leads.csv",
        content=content,
        media_type="text/csv",
        export_format=ExportFormat.CSV,
    )


class TestDirectoryArtifactSink:
    def test_writes_exact_bytes(self, tmp_path: Path):
        sink = DirectoryArtifactSink(tmp_path / "exports")
        location = sink.deliver(_artifact('"a\nb",é\n'))
        target = tmp_path / "exports" / "leads.csv"
        assert location == str(target)
        assert target.read_bytes() == '"a\nb",é\n'.encode()

    def test_overwrites_existing_file(self, tmp_path: Path):
        sink = DirectoryArtifactSink(tmp_path)
        sink.deliver(_artifact("old\n"))
        sink.deliver(_artifact("new\n"))
        assert (tmp_path / "leads.csv").read_text(encoding="utf-8") == "new\n"

    def test_failure_is_wrapped(self, tmp_path: Path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x")
        with pytest.raises(ArtifactDeliveryError, match="Failed to write"):
            DirectoryArtifactSink(blocker).deliver(_artifact())

    def test_delivery_error_is_a_write_error(self):
        assert issubclass(ArtifactDeliveryError, DataWriteError)


class TestMemoryArtifactSink:
    def test_collects_artifacts(self):
        sink = MemoryArtifactSink()
        artifact = _artifact()
        assert sink.deliver(artifact) == "memory://leads.csv"
        assert sink.artifacts == [artifact]
        sink.clear()
        assert sink.artifacts == []
