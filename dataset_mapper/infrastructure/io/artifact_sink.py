from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from .exceptions import ArtifactDeliveryError

if TYPE_CHECKING:
    from ...application.models import ExportArtifact


class DirectoryArtifactSink:
    """Writes artifacts into a directory under their suggested filename."""

    def __init__(self, directory: str | Path) -> None:
        super().__init__()
        self.directory = Path(directory)

    def deliver(self, artifact: ExportArtifact) -> str:
        target = self.directory / artifact.filename
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # newline="" keeps the CSV line terminator byte-identical
            with target.open("w", encoding="utf-8", newline="") as handle:
                handle.write(artifact.content)
        except OSError as exc:
            raise ArtifactDeliveryError(f"Failed to write {target}: {exc}") from exc
        return str(target)


class MemoryArtifactSink:
    pass

    def __init__(self) -> None:
        super().__init__()
        self.artifacts: list[ExportArtifact] = []

    def deliver(self, artifact: ExportArtifact) -> str:
        self.artifacts.append(artifact)
        return f"memory://{artifact.filename}"

    def clear(self) -> None:
        self.artifacts.clear()
