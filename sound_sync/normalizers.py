"""
Normalization backends.

A backend is anything with ``normalize(src, dst)`` that writes a normalized
WAV file to ``dst`` or raises NormalizationError.
"""
import logging, shlex, shutil, subprocess
from pathlib import Path

import numpy as np
import soundfile as sf

from .errors import NormalizationError, ConfigError

log = logging.getLogger("normalizers")

FFMPEG_NORMALIZE_BIN = "ffmpeg-normalize"
TARGET_RMS = 0.1


class FfmpegNormalizer:
    def __init__(self, binary: str = FFMPEG_NORMALIZE_BIN, args: list[str] | None = None):
        if shutil.which(binary) is None:
            raise NormalizationError(f"'{binary}' not found on PATH")
        self.binary = binary
        self.args = [str(a) for a in (args or [])]

    def command(self, src: Path, dst: Path) -> list[str]:
        return [self.binary, str(src), *self.args, "-o", str(dst), "--force"]

    def normalize(self, src: Path, dst: Path) -> None:
        cmd = self.command(src, dst)
        log.debug("Running %s", " ".join(cmd))
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True)
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip().splitlines()
            msg = detail[-1] if detail else f"exit status {exc.returncode}"
            raise NormalizationError(f"{self.binary} failed on {src}: {msg}") from exc
        except OSError as exc:
            raise NormalizationError(f"{self.binary} failed on {src}: {exc}") from exc


def normalize_rms(audio: np.ndarray, target_rms: float = TARGET_RMS) -> np.ndarray:
    rms = np.sqrt(np.mean(audio**2)) if audio.size else 0.0
    scaled = audio * (target_rms / (rms + 1e-8))
    return np.clip(scaled, -1.0, 1.0)


class RmsNormalizer:
    """Scale to a target RMS in-process, written as 16-bit PCM WAV."""

    def __init__(self, target_rms: float = TARGET_RMS):
        if target_rms <= 0:
            raise ConfigError(f"target_rms must be positive, got {target_rms}")
        self.target_rms = float(target_rms)

    def normalize(self, src: Path, dst: Path) -> None:
        try:
            audio, sr = sf.read(str(src), dtype="float32")
            sf.write(str(dst), normalize_rms(audio, self.target_rms), sr,
                     format="WAV", subtype="PCM_16")
        except (sf.LibsndfileError, OSError, ValueError) as exc:
            raise NormalizationError(f"cannot normalize {src}: {exc}") from exc


def normalizer_args(value) -> list[str]:
    # a single string is split the way a shell would
    if value is None:
        return []
    if isinstance(value, str):
        return shlex.split(value)
    if isinstance(value, (list, tuple)):
        return [str(a) for a in value]
    raise ConfigError(f"normalizer.args must be a list or a string, got {value!r}")


def get_normalizer(cfg: dict):
    backend = cfg.get("backend", FFMPEG_NORMALIZE_BIN)
    log.debug("Using normalizer backend %s", backend)
    if backend == "ffmpeg-normalize":
        binary = cfg.get("binary", FFMPEG_NORMALIZE_BIN)
        if not isinstance(binary, str) or not binary:
            raise ConfigError(f"normalizer.binary must be a non-empty string, got {binary!r}")
        return FfmpegNormalizer(binary, normalizer_args(cfg.get("args")))
    if backend == "rms":
        target = cfg.get("target_rms", TARGET_RMS)
        if isinstance(target, bool) or not isinstance(target, (int, float)):
            raise ConfigError(f"normalizer.target_rms must be a number, got {target!r}")
        return RmsNormalizer(target)
    raise ConfigError(f"unknown normalizer backend '{backend}'")
