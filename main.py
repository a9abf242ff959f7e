"""
voice-puppet — main entry point

Mirrors avatar parameters received over OSC and turns recognized speech
into parameter updates. Each line read from stdin is treated as one
recognized utterance (pipe a speech-to-text engine into it, or type).

Usage:
    python main.py
    python main.py --config path/to/config.yaml --language ja-JP
"""

import argparse
import sys
from pathlib import Path

import yaml

from bridge import BridgeError, ParamBridge
from state.schema import OscConfig, Parameter


def load_config(path: str = "config.yaml") -> dict:
    """Load the YAML config. A missing file means all defaults."""
    config_path = Path(path)
    if not config_path.exists():
        print(f"[main] Warning: {path} not found, using defaults.")
        return {}
    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def print_parameters(parameters: list[Parameter]) -> None:
    """Console stand-in for a UI: show the whole parameter table on every update."""
    print(f"[main] {len(parameters)} parameter(s):")
    for param in sorted(parameters, key=lambda p: p.name):
        print(f"    {param.name:<32} {param.parameter_type.value:<5} {param.value:g}")


def build_bridge(config: dict) -> ParamBridge:
    osc_cfg      = config.get("osc", {})
    commands_cfg = config.get("commands", {})
    debug_cfg    = config.get("debug", {})

    bridge = ParamBridge(
        commands_path=commands_cfg.get("path", "commands.json"),
        config=OscConfig.from_dict(osc_cfg),
    )
    if debug_cfg.get("print_updates", True):
        bridge.attach(print_parameters)
    return bridge


def main():
    parser = argparse.ArgumentParser(description="voice-puppet: speech → OSC avatar parameter bridge")
    parser.add_argument("--config", default="config.yaml", help="Path to config YAML")
    parser.add_argument("--language", default=None, help="Language of the command set (overrides config)")
    args = parser.parse_args()

    config   = load_config(args.config)
    language = args.language or config.get("speech", {}).get("language", "en-US")

    bridge = build_bridge(config)

    try:
        bridge.start()
    except BridgeError as e:
        # Sending still works without the listener; the parameter table just stays empty
        print(f"[main] Error: {e}")

    osc = bridge.get_osc_config()
    print(f"[main] Sending to {osc.target_host}:{osc.target_port}, language {language}")
    print(f"[main] {len(bridge.get_command_mappings(language))} command(s) loaded.")
    print("[main] Type recognized speech, one utterance per line (Ctrl+C / EOF to quit).\n")

    try:
        for line in sys.stdin:
            text = line.strip()
            if not text:
                continue
            try:
                results = bridge.process_speech(text, language)
            except BridgeError as e:
                print(f"[main] Error: {e}")
                continue

            if not results:
                print("[main] No command matched.")
            for result in results:
                print(f"[main] Sent: {result}")

    except KeyboardInterrupt:
        print("\n[main] Interrupted — shutting down.")

    finally:
        bridge.shutdown()
        print("[main] Done.")


if __name__ == "__main__":
    main()
