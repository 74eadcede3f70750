"""Callbacks into the host application that embeds a settings session."""

from __future__ import annotations

import dataclasses
import logging
import threading
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("emuconf.host")


def _noop(*args: Any) -> None:
    return None


def _never_running() -> bool:
    return False


@dataclasses.dataclass
class HostHooks:
    """Notifications fired by ``Settings.save_settings`` plus the emulation query.

    Every hook defaults to a no-op, and ``is_emulation_active`` defaults to
    reporting that nothing is running.
    """

    is_emulation_active: Callable[[], bool] = _never_running
    reload_config: Callable[[], None] = _noop
    reload_wiimote_config: Callable[[], None] = _noop
    reload_logger_config: Callable[[], None] = _noop
    update_adapter_scan: Callable[[], None] = _noop
    start_library_rescan: Callable[[Any], None] = _noop


def run_detached(fn: Callable[..., Any], name: str = "") -> Callable[..., None]:
    """Wrap *fn* so each call runs it on a daemon thread and returns at once.

    Exceptions raised by *fn* are logged at debug level.
    """

    def _target(*args: Any) -> None:
        try:
            fn(*args)
        except Exception:
            logger.debug("Detached hook %s failed", name or fn, exc_info=True)

    def _start(*args: Any) -> None:
        thread = threading.Thread(target=_target, args=args, name=name or None, daemon=True)
        thread.start()

    return _start
