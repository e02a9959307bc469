import argparse, logging, sys
from .config import load as load_cfg, paths as path_settings, section
from .errors import SoundSyncError
from .mime import get_detector
from .normalizers import get_normalizer
from .prune import prune
from .sync import sync_normalize

log = logging.getLogger("sound_sync")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sound-sync",
        description="Normalize audio from a source tree into a mirrored WAV tree and prune stale outputs")
    parser.add_argument("command", choices=("normalize", "prune", "sync"),
                        help="normalize new files, prune stale outputs, or both in that order")
    parser.add_argument("--source", help="source tree (default: prenormalized)")
    parser.add_argument("--output", help="output tree (default: sounds)")
    parser.add_argument("--config", help="YAML config file (default: ./sound_sync.yaml if present)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def run(args) -> int:
    cfg     = load_cfg(args.config)
    paths   = path_settings(cfg)
    source  = args.source or paths["source"]
    output  = args.output or paths["output"]

    ok = True
    if args.command in ("normalize", "sync"):
        normalizer = get_normalizer(section(cfg, "normalizer"))
        detector   = get_detector(section(cfg, "mime"))
        ok = sync_normalize(source, output, normalizer, detector).ok and ok
    if args.command in ("prune", "sync"):
        ok = prune(output, source).ok and ok
    return 0 if ok else 1


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        return run(args)
    except SoundSyncError as exc:
        log.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
