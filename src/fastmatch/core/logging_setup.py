"""Logging setup utilities for fastmatch.

Provides a single setup function to configure application-wide logging with:
- Session-based file handler under the per-user config directory
- Console handler (stderr) for quick inspection
- Configurable log level via config.ini (DEFAULT.log_level)
- Automatic retention of the last 3 sessions

Usage:
    from fastmatch.core.logging_setup import setup_logging
    setup_logging(config_manager)

This will create logs/session-YYYYmmdd_HHMMSS/fastmatch.log next to config.ini.
Library code only ever calls logging.getLogger(__name__); handlers are the
application's business and are installed here.
"""
from __future__ import annotations

import logging
import os
import platform
import shutil
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

SESSION_ENV = "FM_LOG_SESSION_DIR"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level_from_str(value: Optional[str]) -> int:
    if not value:
        return logging.INFO
    v = str(value).strip().upper()
    mapping = {
        "CRITICAL": logging.CRITICAL,
        "ERROR": logging.ERROR,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "INFO": logging.INFO,
        "DEBUG": logging.DEBUG,
        "NOTSET": logging.NOTSET,
    }
    return mapping.get(v, logging.INFO)


def get_log_dir(config_manager) -> Path:
    """Return directory path for logs next to the config.ini."""
    base_dir = Path(getattr(config_manager, "config_path")).parent
    log_dir = base_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_artifacts_dir(config_manager, name: str = "artifacts") -> Path:
    """Return directory path for debug artifacts (failed-match frames).

    If a session directory is active (FM_LOG_SESSION_DIR), artifacts are
    stored under it so one session folder holds everything.
    """
    session_env = os.environ.get(SESSION_ENV, "").strip()
    if session_env:
        out_dir = Path(session_env) / name
    else:
        out_dir = Path(getattr(config_manager, "config_path")).parent / name
    out_dir.mkdir(parents=True, exist_ok=True)
    return out_dir


def get_session_dir(config_manager) -> Path:
    """Create and return a new session directory under logs/."""
    base = get_log_dir(config_manager)
    session = base / datetime.now().strftime("session-%Y%m%d_%H%M%S")
    session.mkdir(parents=True, exist_ok=True)
    return session


def prune_old_sessions(log_dir: Path, keep: int = 3) -> None:
    """Keep only the most recent 'keep' session directories inside log_dir."""
    try:
        entries = [p for p in log_dir.iterdir() if p.is_dir() and p.name.startswith("session-")]
        entries.sort(key=lambda p: p.stat().st_mtime, reverse=True)
        for old in entries[keep:]:
            shutil.rmtree(old, ignore_errors=True)
    except OSError:
        pass


def _write_session_info(session_dir: Path, config_manager) -> None:
    """Write session_info.txt with interpreter, library and matching settings."""
    try:
        import cv2
        import numpy as np

        lines = [
            "FASTMATCH SESSION INFORMATION",
            "=" * 40,
            f"Session Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            f"Platform: {platform.platform()}",
            f"Python Version: {sys.version.split()[0]}",
            f"OpenCV: {cv2.__version__}",
            f"NumPy: {np.__version__}",
            f"Config File: {getattr(config_manager, 'config_path', 'Unknown')}",
        ]
        for key in ("log_level", "match_method", "weak_threshold", "strict_threshold", "max_level", "allow_level_zero_search"):
            lines.append(f"{key}: {config_manager.get(key)}")
        (session_dir / "session_info.txt").write_text("\n".join(lines) + "\n", encoding="utf-8")
    except Exception:
        # Don't fail logging setup if session info creation fails
        pass


def setup_logging(config_manager, level: Optional[Union[str, int]] = None, console: bool = True) -> Path:
    """Configure root logger with a session-based file and console handler.

    Returns the created session directory Path.

    - File: logs/session-YYYYmmdd_HHMMSS/fastmatch.log (keep last 3 sessions)
    - Console: WARNING+ (everything when the level is DEBUG)
    - Level: from parameter if provided, else DEFAULT.log_level in config, else INFO
    """
    cfg_level = getattr(config_manager, "get", lambda *_: None)("log_level")
    if isinstance(level, str):
        lvl = _level_from_str(level)
    elif isinstance(level, int):
        lvl = level
    else:
        lvl = _level_from_str(cfg_level)

    logger = logging.getLogger()
    logger.setLevel(lvl)

    # Clear existing handlers to avoid duplicates on re-run
    for h in logger.handlers[:]:
        logger.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    log_dir = get_log_dir(config_manager)
    session_dir = get_session_dir(config_manager)
    os.environ[SESSION_ENV] = str(session_dir)

    file_path = session_dir / "fastmatch.log"
    fh = logging.FileHandler(file_path, encoding="utf-8", delay=True)
    fh.setLevel(lvl)
    fh.setFormatter(fmt)
    logger.addHandler(fh)
    prune_old_sessions(log_dir, keep=3)
    _write_session_info(session_dir, config_manager)

    if console:
        ch = logging.StreamHandler()
        ch.setLevel(max(lvl, logging.WARNING) if lvl > logging.DEBUG else lvl)
        ch.setFormatter(fmt)
        logger.addHandler(ch)

    logger.info("Logging initialized: level=%s, file=%s", logging.getLevelName(lvl), str(file_path))
    return session_dir
