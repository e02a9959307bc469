import logging, mimetypes, shutil, subprocess
from pathlib import Path
from .errors import MimeDetectionError, ConfigError

log = logging.getLogger("mime")

AUDIO_PREFIX = "audio/"
UNKNOWN = "application/octet-stream"


def is_audio(mime: str) -> bool:
    return mime.startswith(AUDIO_PREFIX)


class FileCommandDetector:
    """Content sniffing through the `file` utility."""

    def __init__(self, binary: str = "file"):
        if shutil.which(binary) is None:
            raise MimeDetectionError(f"'{binary}' not found on PATH")
        self.binary = binary

    def __call__(self, path: Path) -> str:
        cmd = [self.binary, "--brief", "--mime-type", str(path)]
        try:
            out = subprocess.run(cmd, check=True, capture_output=True, text=True)
        except (subprocess.CalledProcessError, OSError) as exc:
            raise MimeDetectionError(f"cannot detect type of {path}: {exc}") from exc
        return out.stdout.strip()


class ExtensionDetector:
    """Guess from the filename only; no file access."""

    def __call__(self, path: Path) -> str:
        mime, _ = mimetypes.guess_type(str(path), strict=False)
        return mime or UNKNOWN


def get_detector(cfg: dict):
    name = cfg.get("detector", "file")
    log.debug("Using MIME detector %s", name)
    if name == "file":
        binary = cfg.get("binary", "file")
        if not isinstance(binary, str) or not binary:
            raise ConfigError(f"mime.binary must be a non-empty string, got {binary!r}")
        return FileCommandDetector(binary)
    if name == "extension":
        return ExtensionDetector()
    raise ConfigError(f"unknown MIME detector '{name}'")
