import logging, os
from dataclasses import dataclass, field
from pathlib import Path

from .paths import source_for, walk_files

log = logging.getLogger("prune")


@dataclass
class PruneReport:
    removed_files: list[Path] = field(default_factory=list)
    removed_dirs: list[Path] = field(default_factory=list)
    failed: dict[Path, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed

    def unreadable(self, exc: OSError) -> None:
        log.error("Cannot read %s: %s", exc.filename, exc)
        self.failed[Path(exc.filename)] = str(exc)


def remove_orphans(output_root: Path, source_root: Path, report: PruneReport) -> None:
    for output in walk_files(output_root, onerror=report.unreadable):
        source = source_for(output_root, source_root, output)
        if source is not None and source.is_file():
            continue
        log.info("Removing file %s", output)
        try:
            output.unlink()
            report.removed_files.append(output)
        except OSError as exc:
            log.error("Cannot remove %s: %s", output, exc)
            report.failed[output] = str(exc)


def remove_empty_dirs(output_root: Path, report: PruneReport) -> None:
    # bottom-up so a parent is checked after its children are gone;
    # output_root itself comes last and nothing above it is visited
    for current, _, _ in os.walk(output_root, topdown=False, onerror=report.unreadable):
        path = Path(current)
        try:
            if any(path.iterdir()):
                continue
            log.info("Removing empty dir %s", path)
            path.rmdir()
            report.removed_dirs.append(path)
        except OSError as exc:
            log.error("Cannot remove %s: %s", path, exc)
            report.failed[path] = str(exc)


def prune(output_root, source_root) -> PruneReport:
    """Delete outputs whose source is gone, then any directory left empty.
    The source tree is only read."""
    output_root, source_root = Path(output_root), Path(source_root)
    report = PruneReport()
    if not output_root.is_dir():
        log.info("Nothing to prune, %s does not exist", output_root)
        return report
    if not source_root.is_dir():
        log.warning("Source directory %s does not exist, every output under %s is an orphan",
                    source_root, output_root)

    remove_orphans(output_root, source_root, report)
    remove_empty_dirs(output_root, report)

    log.info("Removed %d files and %d dirs, failed %d",
             len(report.removed_files), len(report.removed_dirs), len(report.failed))
    return report
