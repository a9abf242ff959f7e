import threading
from dataclasses import replace
from typing import Callable, Iterable, Optional

from state.schema import Parameter

Notifier = Callable[[list[Parameter]], None]


class ParameterStore:
    """
    Thread-safe mirror of the parameters the avatar exposes.

    Written from the listener thread (inbound OSC) and from the caller's
    thread (explicit sets). The lock only covers the dict itself; the host
    notifier is always called with the lock released.

    Two-phase setup: build the store, then `attach()` a notifier once the
    host is ready. Until then updates are applied but not announced.
    """

    def __init__(self):
        self._params: dict[str, Parameter] = {}
        self._lock = threading.Lock()
        self._notifier: Optional[Notifier] = None

    def attach(self, notifier: Optional[Notifier]) -> None:
        self._notifier = notifier

    def list(self) -> list[Parameter]:
        """Point-in-time copy of every known parameter."""
        with self._lock:
            return [replace(p) for p in self._params.values()]

    def get(self, name: str) -> Optional[Parameter]:
        with self._lock:
            param = self._params.get(name)
            return replace(param) if param is not None else None

    def set(self, name: str, value: float) -> None:
        """Update the value of an already-known parameter. Does not notify."""
        with self._lock:
            param = self._params.get(name)
            if param is None:
                raise KeyError(f"Parameter not found: {name}")
            param.value = float(value)

    def upsert(self, parameter: Parameter) -> None:
        self.upsert_all([parameter])

    def upsert_all(self, parameters: Iterable[Parameter]) -> None:
        """
        Create or replace each parameter in order, then notify once
        with the full snapshot (not a delta).
        """
        with self._lock:
            for param in parameters:
                self._params[param.name] = replace(param)
            snapshot = [replace(p) for p in self._params.values()]

        self._notify(snapshot)

    def __len__(self) -> int:
        with self._lock:
            return len(self._params)

    def _notify(self, snapshot) -> None:
        notifier = self._notifier
        if notifier is None:
            return
        try:
            notifier(snapshot)
        except Exception as e:
            print(f"[ParameterStore] Warning: notifier failed: {e}")
