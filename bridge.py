"""
The operation set a front end drives.

Wires the parameter store, OSC listener, config manager, command
registry and speech matcher together. Every method is synchronous and
runs on the caller's thread; only the listener has a background thread.

Any failure that crosses this boundary is a BridgeError whose message
is meant to be shown to a user as-is.
"""

from pathlib import Path
from typing import Optional

from osc.config import ConfigManager
from osc.listener import OSCListener
from osc.sender import send_parameter
from speech.matcher import SpeechMatcher
from speech.registry import CommandRegistry
from state.schema import CommandMapping, OscConfig, Parameter, ParameterType
from state.store import Notifier, ParameterStore


class BridgeError(RuntimeError):
    """Human-readable failure of a bridge operation."""


class ParamBridge:

    def __init__(self, commands_path: str | Path, config: Optional[OscConfig] = None):
        self.store    = ParameterStore()
        self.listener = OSCListener(self.store)
        self.config   = ConfigManager(self.listener, config)
        self.registry = CommandRegistry(commands_path)
        self.matcher  = SpeechMatcher(self.registry, self.store, self.config)

    # ── Lifecycle ───────────────────────────────────────────────────────────

    def attach(self, notifier: Optional[Notifier]) -> None:
        """Register the host callback that receives the full parameter list on every update."""
        self.store.attach(notifier)

    def start(self) -> None:
        """
        Load saved commands and start listening.

        Both steps are attempted even if the first fails; any failures are
        then raised together as one BridgeError.
        """
        errors = []
        try:
            self.registry.load()
        except (OSError, ValueError) as e:
            errors.append(f"Failed to load commands: {e}")

        try:
            self.config.start_listener()
        except (OSError, OverflowError) as e:
            errors.append(f"Failed to start OSC listener: {e}")

        if errors:
            raise BridgeError("; ".join(errors))

    def shutdown(self) -> None:
        self.config.stop_listener()

    # ── Parameters ──────────────────────────────────────────────────────────

    def get_all_parameters(self) -> list[Parameter]:
        return self.store.list()

    def set_parameter_value(self, name: str, value: float, kind_label: str) -> None:
        """Send `value` to the avatar, then update the local mirror."""
        try:
            kind = ParameterType(kind_label)
        except ValueError:
            raise BridgeError("Invalid parameter type") from None

        try:
            send_parameter(name, value, kind, self.config.get_config())
        except (OSError, OverflowError, TypeError, ValueError) as e:
            raise BridgeError(f"Failed to send parameter: {e}") from e

        try:
            self.store.set(name, value)
        except KeyError as e:
            raise BridgeError(f"Failed to update parameter: {e.args[0]}") from e

    # ── OSC config ──────────────────────────────────────────────────────────

    def update_osc_config(self, target_host: str, target_port: int, listen_host: str, listen_port: int) -> None:
        try:
            new_config = OscConfig(
                target_host=target_host,
                target_port=int(target_port),
                listen_host=listen_host,
                listen_port=int(listen_port),
            )
            self.config.update_config(new_config)
        except (OSError, OverflowError, ValueError) as e:
            raise BridgeError(f"Failed to update OSC config: {e}") from e

    def get_osc_config(self) -> OscConfig:
        return self.config.get_config()

    def restart_osc_listener(self) -> None:
        try:
            self.config.restart_listener()
        except (OSError, OverflowError) as e:
            raise BridgeError(f"Failed to start OSC listener: {e}") from e

    # ── Speech commands ─────────────────────────────────────────────────────

    def add_command(self, language: str, command_text: str, parameter_name: str, value: float) -> None:
        try:
            mapping = CommandMapping(command_text, parameter_name, float(value))
        except (TypeError, ValueError):
            raise BridgeError(f"Invalid command value: {value!r}") from None

        try:
            self.registry.upsert(language, mapping)
        except OSError as e:
            raise BridgeError(f"Failed to write commands to disk: {e}") from e

    def remove_command(self, language: str, command_text: str, parameter_name: str) -> bool:
        try:
            return self.registry.remove(language, command_text, parameter_name)
        except OSError as e:
            raise BridgeError(f"Failed to write commands to disk: {e}") from e

    def get_command_mappings(self, language: str) -> list[CommandMapping]:
        return self.registry.list(language)

    def process_speech(self, text: str, language: str) -> list[str]:
        try:
            return self.matcher.process(text, language)
        except (OSError, OverflowError, ValueError) as e:
            raise BridgeError(f"Failed to send parameter: {e}") from e
