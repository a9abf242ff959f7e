from dataclasses import asdict, dataclass
from enum import Enum

from osc.mapping import DEFAULT_LISTEN_HOST, DEFAULT_LISTEN_PORT, DEFAULT_TARGET_HOST, DEFAULT_TARGET_PORT


class ParameterType(str, Enum):
    FLOAT = "Float"
    INT   = "Int"
    BOOL  = "Bool"   # carried as 0.0 / 1.0


@dataclass
class Parameter:
    """One avatar parameter as last seen on the wire (or last set locally)."""

    name: str
    parameter_type: ParameterType = ParameterType.FLOAT
    value: float = 0.0

    def to_dict(self) -> dict:
        return {
            "name":           self.name,
            "parameter_type": self.parameter_type.value,
            "value":          self.value,
        }


@dataclass
class OscConfig:
    """
    Where outbound packets go (target) and where the inbound socket binds (listen).

    Any field differing between two configs counts as a material change.
    """

    target_host: str = DEFAULT_TARGET_HOST
    target_port: int = DEFAULT_TARGET_PORT
    listen_host: str = DEFAULT_LISTEN_HOST
    listen_port: int = DEFAULT_LISTEN_PORT

    @classmethod
    def from_dict(cls, data: dict) -> "OscConfig":
        """Build from the `osc:` section of config.yaml. Missing keys use defaults."""
        defaults = cls()
        return cls(
            target_host=str(data.get("target_host", defaults.target_host)),
            target_port=int(data.get("target_port", defaults.target_port)),
            listen_host=str(data.get("listen_host", defaults.listen_host)),
            listen_port=int(data.get("listen_port", defaults.listen_port)),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CommandMapping:
    """A spoken phrase and the parameter value to send when it is heard."""

    command_text: str
    parameter_name: str
    value: float = 0.0

    @property
    def key(self) -> tuple[str, str]:
        return (self.command_text, self.parameter_name)

    @classmethod
    def from_dict(cls, data: dict) -> "CommandMapping":
        return cls(
            command_text=str(data["command_text"]),
            parameter_name=str(data["parameter_name"]),
            value=float(data["value"]),
        )

    def to_dict(self) -> dict:
        return {
            "command_text":   self.command_text,
            "parameter_name": self.parameter_name,
            "value":          self.value,
        }
