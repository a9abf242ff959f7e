import threading
from dataclasses import replace

from osc.listener import OSCListener
from state.schema import OscConfig


class ConfigManager:
    """
    Owns the OSC endpoint config and keeps the listener in step with it.

    Replacing the config is a single swap under the lock. When any field
    changes while the listener is running, the listener is restarted on
    the new listen address; a bind failure there is raised to the caller.
    """

    def __init__(self, listener: OSCListener, config: OscConfig | None = None):
        self.listener = listener
        self._config = replace(config) if config is not None else OscConfig()
        self._lock = threading.Lock()

    def get_config(self) -> OscConfig:
        with self._lock:
            return replace(self._config)

    def update_config(self, new_config: OscConfig) -> bool:
        """Swap in `new_config`. Returns True if it differed from the current one."""
        with self._lock:
            changed = self._config != new_config
            self._config = replace(new_config)

        if changed:
            print(
                f"[ConfigManager] OSC config → target {new_config.target_host}:{new_config.target_port}, "
                f"listen {new_config.listen_host}:{new_config.listen_port}"
            )
            if self.listener.is_running:
                self.listener.restart(new_config)
        return changed

    def start_listener(self) -> None:
        self.listener.start(self.get_config())

    def stop_listener(self) -> None:
        self.listener.stop()

    def restart_listener(self) -> None:
        self.listener.restart(self.get_config())
