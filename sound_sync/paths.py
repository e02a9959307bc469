"""
Path mapping between the source tree and the output tree.

An output keeps the full source filename and gets ``.wav`` appended to it,
so ``a/b/song.mp3`` maps to ``a/b/song.mp3.wav``. The reverse mapping strips
exactly one trailing ``.wav``.
"""
import os
from pathlib import Path

OUTPUT_SUFFIX = ".wav"


def output_for(source_root: Path, output_root: Path, source: Path) -> Path:
    rel = Path(source).relative_to(source_root)
    return Path(output_root) / rel.parent / (rel.name + OUTPUT_SUFFIX)


def source_for(output_root: Path, source_root: Path, output: Path) -> Path | None:
    """Return the source an output was produced from, or None if the name
    could not have come from output_for (no trailing suffix)."""
    rel = Path(output).relative_to(output_root)
    if not rel.name.endswith(OUTPUT_SUFFIX) or rel.name == OUTPUT_SUFFIX:
        return None
    return Path(source_root) / rel.parent / rel.name[: -len(OUTPUT_SUFFIX)]


def partial_for(output: Path) -> Path:
    # hidden sibling; still ends in .wav so backends pick the right format
    output = Path(output)
    return output.with_name(f".{output.name}.partial{OUTPUT_SUFFIX}")


def walk_files(root: Path, onerror=None) -> list[Path]:
    """Regular files under root ordered by relative path, symlinks skipped.
    Directories that cannot be listed are passed to onerror as OSError."""
    found = []
    for current, _, files in os.walk(root, onerror=onerror):
        for name in files:
            path = Path(current) / name
            if path.is_symlink() or not path.is_file():
                continue
            found.append(path)
    return sorted(found, key=lambda p: p.relative_to(root).parts)
