"""
Mirror every audio file of the source tree into the output tree as a
normalized WAV, skipping files whose output already exists.
"""
import logging, os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import SoundSyncError, SourceRootMissingError
from .mime import is_audio
from .paths import output_for, partial_for, walk_files

log = logging.getLogger("sync")


@dataclass
class SyncReport:
    normalized: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    ignored: list[Path] = field(default_factory=list)
    failed: dict[Path, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def normalize_one(source: Path, output: Path, normalizer) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    partial = partial_for(output)
    try:
        normalizer.normalize(source, partial)
        os.replace(partial, output)
    except BaseException:
        partial.unlink(missing_ok=True)
        raise


def sync_normalize(source_root, output_root, normalizer, detect_mime) -> SyncReport:
    source_root, output_root = Path(source_root), Path(output_root)
    if not source_root.is_dir():
        raise SourceRootMissingError(f"source directory not found: {source_root}")

    report = SyncReport()

    def unreadable(exc: OSError):
        log.error("Cannot read %s: %s", exc.filename, exc)
        report.failed[Path(exc.filename)] = str(exc)

    for source in walk_files(source_root, onerror=unreadable):
        try:
            mime = detect_mime(source)
            if not is_audio(mime):
                log.debug("Ignoring %s (%s)", source, mime)
                report.ignored.append(source)
                continue

            output = output_for(source_root, output_root, source)
            if output.is_file():
                log.info("Skipping existing file %s", source)
                report.skipped.append(source)
                continue

            log.info("Normalizing file %s", source)
            normalize_one(source, output, normalizer)
            report.normalized.append(source)
        except (SoundSyncError, OSError) as exc:
            log.error("Failed on %s: %s", source, exc)
            report.failed[source] = str(exc)

    log.info("Normalized %d, skipped %d, failed %d",
             len(report.normalized), len(report.skipped), len(report.failed))
    return report
