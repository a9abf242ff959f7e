from osc.config import ConfigManager
from osc.sender import send_parameter
from speech.registry import CommandRegistry
from state.schema import CommandMapping, ParameterType
from state.store import ParameterStore


class SpeechMatcher:
    """
    Turns recognized speech into parameter sends.

    Matching is literal: a mapping fires when its command text appears
    anywhere in the recognized text, ignoring case. Every matching mapping
    fires, in registry order.
    """

    def __init__(self, registry: CommandRegistry, store: ParameterStore, config: ConfigManager):
        self.registry = registry
        self.store    = store
        self.config   = config

    def process(self, text: str, language: str) -> list[str]:
        """
        Send every mapping of `language` whose phrase occurs in `text`.

        Returns one "<command> -> <parameter>: <value>" line per send.
        The first send failure is raised and nothing is returned, even if
        earlier mappings were already sent.
        """
        text_lower = text.lower()
        results = []

        for mapping in self.registry.list(language):
            if mapping.command_text.lower() not in text_lower:
                continue

            # Unknown parameters go out as Float until the avatar reports their real type
            known = self.store.get(mapping.parameter_name)
            kind = known.parameter_type if known is not None else ParameterType.FLOAT

            send_parameter(mapping.parameter_name, mapping.value, kind, self.config.get_config())

            if known is not None:
                self.store.set(mapping.parameter_name, mapping.value)

            results.append(format_result(mapping))

        return results


def format_result(mapping: CommandMapping) -> str:
    return f"{mapping.command_text} -> {mapping.parameter_name}: {format_value(mapping.value)}"


def format_value(value: float) -> str:
    """1.0 → "1", 0.5 → "0.5"."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
