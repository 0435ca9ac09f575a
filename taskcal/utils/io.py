"""
JSON file I/O with atomic replace and cooperative file locking.
"""

import contextlib
import errno
import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional

try:  # fcntl is only available on POSIX platforms
    import fcntl  # type: ignore
except ImportError:  # pragma: no cover - Windows fallback
    fcntl = None  # type: ignore


DEFAULT_LOCK_TIMEOUT = 8.0  # seconds
LOCK_SLEEP_INTERVAL = 0.05  # seconds

logger = logging.getLogger(__name__)


def _lock_file_path(path: Path) -> Path:
    """Return the companion lock file path for the target file."""
    return path.parent / f"{path.name}.lock"


@contextlib.contextmanager
def _file_lock(target_path: Path, exclusive: bool, timeout: float = DEFAULT_LOCK_TIMEOUT) -> Iterator[None]:
    """Acquire a cooperative file lock around the target path.

    Uses POSIX advisory locking via fcntl when available; otherwise acts as a no-op.
    """
    if fcntl is None:
        yield
        return

    lock_path = _lock_file_path(target_path)
    lock_path.parent.mkdir(parents=True, exist_ok=True)

    lock_type = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
    deadline = time.monotonic() + timeout if timeout is not None else None

    with open(lock_path, "a") as lock_file:
        while True:
            try:
                flags = lock_type | fcntl.LOCK_NB if deadline is not None else lock_type
                fcntl.flock(lock_file.fileno(), flags)
                break
            except OSError as exc:  # pragma: no cover - depends on timing
                if exc.errno not in (errno.EACCES, errno.EAGAIN):
                    raise
                if deadline is not None and time.monotonic() >= deadline:
                    raise TimeoutError(f"Timed out waiting for lock on {target_path}") from exc
                time.sleep(LOCK_SLEEP_INTERVAL)

        try:
            yield
        finally:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)


def _read_unlocked(path_obj: Path, default: Dict[str, Any]) -> Dict[str, Any]:
    if not path_obj.exists():
        return default
    with path_obj.open('r', encoding='utf-8') as handle:
        return json.load(handle)


def _replace_unlocked(path_obj: Path, data: Dict[str, Any], indent: int) -> None:
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            dir=str(path_obj.parent),
            prefix='.tmp_',
            suffix='.json',
            delete=False,
            encoding='utf-8'
        ) as tmp_file:
            json.dump(data, tmp_file, indent=indent, ensure_ascii=False)
            tmp_path = Path(tmp_file.name)

        os.replace(str(tmp_path), str(path_obj))
        tmp_path = None
    finally:
        if tmp_path and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                pass


def safe_read_json(file_path: str, default: Optional[Dict] = None, *, lock_timeout: float = DEFAULT_LOCK_TIMEOUT) -> Dict[str, Any]:
    """
    Read JSON from a file under a shared lock.

    Args:
        file_path: Path to JSON file
        default: Value returned when the file is missing or unreadable

    Returns:
        Parsed JSON data or default value
    """
    if default is None:
        default = {}

    path_obj = Path(os.path.expanduser(file_path))
    if not path_obj.exists():
        return default

    try:
        with _file_lock(path_obj, exclusive=False, timeout=lock_timeout):
            return _read_unlocked(path_obj, default)
    except TimeoutError as exc:
        logger.warning(f"Timed out waiting to read {file_path}: {exc}")
        return default
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning(f"Failed to read {file_path}: {exc}")
        return default


def safe_write_json(file_path: str, data: Dict[str, Any], indent: int = 2, *, lock_timeout: float = DEFAULT_LOCK_TIMEOUT) -> bool:
    """
    Write JSON to a file atomically under an exclusive lock.

    Returns:
        True if successful, False otherwise
    """
    path_obj = Path(os.path.expanduser(file_path))
    path_obj.parent.mkdir(parents=True, exist_ok=True)

    try:
        with _file_lock(path_obj, exclusive=True, timeout=lock_timeout):
            _replace_unlocked(path_obj, data, indent)
        return True
    except (TimeoutError, OSError, TypeError, ValueError) as exc:
        logger.error(f"Error writing to {file_path}: {exc}")
        return False


def update_json(file_path: str,
                mutate: Callable[[Dict[str, Any]], Dict[str, Any]],
                default: Optional[Dict] = None,
                indent: int = 2, *,
                lock_timeout: float = DEFAULT_LOCK_TIMEOUT) -> bool:
    """
    Read, modify and rewrite a JSON file while holding one exclusive lock.

    Args:
        file_path: Path to JSON file
        mutate: Callable receiving the current data and returning the new data
        default: Starting data when the file does not exist yet

    Returns:
        True if the new data was written, False otherwise
    """
    path_obj = Path(os.path.expanduser(file_path))
    path_obj.parent.mkdir(parents=True, exist_ok=True)

    try:
        with _file_lock(path_obj, exclusive=True, timeout=lock_timeout):
            current = _read_unlocked(path_obj, dict(default or {}))
            _replace_unlocked(path_obj, mutate(current), indent)
        return True
    except (TimeoutError, OSError, json.JSONDecodeError, TypeError, ValueError) as exc:
        logger.error(f"Error updating {file_path}: {exc}")
        return False
