import json
import threading
from pathlib import Path

from state.schema import CommandMapping


class CommandRegistry:
    """
    Per-language, ordered list of phrase → parameter mappings, persisted
    as one JSON file:

        {"en-US": [{"command_text": "lights on", "parameter_name": "Lights", "value": 1.0}]}

    Within a language, (command_text, parameter_name) is unique: upserting
    an existing pair replaces it in place, keeping its position.

    Every mutation rewrites the whole file. The lock covers the in-memory
    map only; the file is written after it is released, so the last
    completed write wins. A failed write is raised but the in-memory
    change is kept.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._commands: dict[str, list[CommandMapping]] = {}
        self._lock = threading.Lock()

    # ── Queries ─────────────────────────────────────────────────────────────

    # languages() sits above list() so its annotation still sees the builtin
    def languages(self) -> list[str]:
        with self._lock:
            return sorted(self._commands)

    def list(self, language: str) -> list[CommandMapping]:
        """Mappings for `language` in insertion order. Unknown language → []."""
        with self._lock:
            return [CommandMapping(**m.to_dict()) for m in self._commands.get(language, [])]

    # ── Mutations ───────────────────────────────────────────────────────────

    def upsert(self, language: str, mapping: CommandMapping) -> None:
        with self._lock:
            mappings = self._commands.setdefault(language, [])
            for i, existing in enumerate(mappings):
                if existing.key == mapping.key:
                    mappings[i] = CommandMapping(**mapping.to_dict())
                    break
            else:
                mappings.append(CommandMapping(**mapping.to_dict()))

        self.save()

    def remove(self, language: str, command_text: str, parameter_name: str) -> bool:
        """Remove every mapping with this (text, parameter) pair. Returns True if any were removed."""
        key = (command_text, parameter_name)
        with self._lock:
            mappings = self._commands.get(language)
            if not mappings:
                return False
            kept = [m for m in mappings if m.key != key]
            removed = len(kept) < len(mappings)
            self._commands[language] = kept

        if removed:
            self.save()
        return removed

    # ── Persistence ─────────────────────────────────────────────────────────

    def load(self) -> None:
        """
        Replace the in-memory registry with the file contents.

        A missing file means an empty registry. Unreadable JSON or an
        unexpected shape raises ValueError.
        """
        if not self.path.exists():
            with self._lock:
                self._commands = {}
            print(f"[CommandRegistry] No commands file at {self.path}, starting empty.")
            return

        text = self.path.read_text(encoding="utf-8")
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse commands JSON {self.path}: {e}") from e

        loaded = _parse_registry(raw, self.path)
        with self._lock:
            self._commands = loaded

        total = sum(len(v) for v in loaded.values())
        print(f"[CommandRegistry] Loaded {total} command(s) in {len(loaded)} language(s) from {self.path}")

    def save(self) -> None:
        with self._lock:
            snapshot = {
                language: [m.to_dict() for m in mappings]
                for language, mappings in self._commands.items()
            }

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(snapshot, indent=2, ensure_ascii=False), encoding="utf-8")


def _parse_registry(raw, path: Path) -> dict[str, list[CommandMapping]]:
    if not isinstance(raw, dict):
        raise ValueError(f"Commands file {path} must contain a JSON object")

    commands: dict[str, list[CommandMapping]] = {}
    for language, entries in raw.items():
        if not isinstance(entries, list):
            raise ValueError(f"Commands for language '{language}' in {path} must be a list")
        try:
            commands[language] = [CommandMapping.from_dict(entry) for entry in entries]
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid command mapping for language '{language}' in {path}: {e}") from e
    return commands
