"""Command-line entry point.

    fastmatch TEMPLATE [--scene IMAGE] [--method M] [--weak W] [--strict S]
              [--max-level auto|N] [--allow-level-zero] [--color]

Without --scene the configured monitor is captured with mss. Prints
"x,y score=..." and exits 0 on a match, "not found (...)" and exits 1
otherwise; exits 2 when an image cannot be loaded or an option is invalid.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .config.matching import MAX_LEVEL_AUTO
from .core.config import ConfigManager
from .core.logging_setup import get_artifacts_dir, setup_logging
from .vision.errors import MatchError
from .vision.preprocess import load_image
from .vision.search import fast_template_matching

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def _level_arg(value: str) -> int:
    if value.strip().lower() == "auto":
        return MAX_LEVEL_AUTO
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected 'auto' or an integer, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="fastmatch", description="Pyramid template matching")
    ap.add_argument("template", help="Template image path")
    ap.add_argument("--scene", help="Scene image path (default: capture the screen)")
    ap.add_argument("--method", help="Match method, e.g. ccoeff_normed, sqdiff, sqdiff_normed")
    ap.add_argument("--weak", type=float, help="Weak threshold (keep tracking)")
    ap.add_argument("--strict", type=float, help="Strict threshold (accept)")
    ap.add_argument("--max-level", type=_level_arg, help="Start level or 'auto'")
    ap.add_argument("--allow-level-zero", action="store_true", help="Search even when the start level is 0")
    ap.add_argument("--color", action="store_true", help="Match BGR instead of grayscale")
    ap.add_argument("--monitor", type=int, help="mss monitor index for screen capture")
    ap.add_argument("--config", help="Path to config.ini")
    ap.add_argument("--log-level", help="Override log level (DEBUG, INFO, ...)")
    ap.add_argument("--no-log-file", action="store_true", help="Log to the console only")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = ConfigManager(args.config)

    if args.no_log_file:
        logging.basicConfig(level=(args.log_level or cfg.get("log_level", "INFO")).upper())
    else:
        setup_logging(cfg, args.log_level)
    logger = logging.getLogger(__name__)

    try:
        params = cfg.search_params()
        overrides = {}
        if args.method:
            overrides["method"] = args.method
        if args.weak is not None:
            overrides["weak_threshold"] = args.weak
        if args.strict is not None:
            overrides["strict_threshold"] = args.strict
        if args.max_level is not None:
            overrides["max_level"] = args.max_level
        if args.allow_level_zero:
            overrides["allow_level_zero_search"] = True
        params = replace(params, **overrides)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR

    gray = not args.color
    try:
        if args.scene:
            scene = load_image(args.scene, gray=gray)
            template = load_image(args.template, gray=gray)
            res = fast_template_matching(scene, template, params)
        else:
            from .controllers.screen import ScreenMatcher

            monitor = args.monitor if args.monitor is not None else int(cfg.get("monitor", "1"))
            artifacts = get_artifacts_dir(cfg) if logging.getLogger().isEnabledFor(logging.DEBUG) else None
            matcher = ScreenMatcher(params, monitor=monitor, gray=gray, artifacts_dir=artifacts)
            try:
                res = matcher.find(args.template)
            finally:
                matcher.close()
    except MatchError as e:
        logger.error("%s", e)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if res.found:
        print(f"{int(res.point.x)},{int(res.point.y)} score={res.score:.4f}")
        return EXIT_FOUND
    print(f"not found ({res.reason}, score={res.score:.4f})")
    return EXIT_NOT_FOUND


if __name__ == "__main__":
    sys.exit(main())
