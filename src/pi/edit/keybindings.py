"""Key identifiers bound to editor actions, with overrides from the config file."""

from __future__ import annotations

from typing import Literal

from pi.edit.keys import KeyId

EditorAction = Literal[
    # Session
    "quit",
    # Cursor movement
    "cursorUp",
    "cursorDown",
    "cursorLeft",
    "cursorRight",
    "cursorLineStart",
    "cursorLineEnd",
    "pageUp",
    "pageDown",
    # Deletion
    "deleteCharBackward",
    "deleteCharForward",
    # Text input
    "newLine",
    "tab",
    "backTab",
    # Modes
    "insert",
    "capsLock",
]

EditorKeybindingsConfig = dict[EditorAction, KeyId | list[KeyId]]

DEFAULT_EDITOR_KEYBINDINGS: dict[EditorAction, KeyId | list[KeyId]] = {
    "quit": "ctrl+q",
    "cursorUp": "up",
    "cursorDown": "down",
    "cursorLeft": "left",
    "cursorRight": "right",
    "cursorLineStart": "home",
    "cursorLineEnd": "end",
    "pageUp": "pageUp",
    "pageDown": "pageDown",
    "deleteCharBackward": "backspace",
    "deleteCharForward": "delete",
    "newLine": "enter",
    "tab": "tab",
    "backTab": "shift+tab",
    "insert": "insert",
    "capsLock": "capsLock",
}


class EditorKeybindingsManager:
    """Maps editor actions to the keys that trigger them."""

    def __init__(
        self, config: EditorKeybindingsConfig | None = None
    ) -> None:
        self._action_to_keys: dict[EditorAction, list[KeyId]] = {}
        self._key_to_action: dict[KeyId, EditorAction] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: EditorKeybindingsConfig) -> None:
        self._action_to_keys.clear()
        self._key_to_action.clear()

        # Defaults first
        for action, keys in DEFAULT_EDITOR_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # An action named in the config replaces its default keys.
        for action, keys in config.items():
            if action not in DEFAULT_EDITOR_KEYBINDINGS:
                raise ValueError(f"Unknown editor action: {action!r}")
            key_array = keys if isinstance(keys, list) else [keys]
            for key in key_array:
                if not isinstance(key, str):
                    raise ValueError(
                        f"Key for {action!r} must be a string, got {key!r}"
                    )
            self._action_to_keys[action] = list(key_array)

        # Quit wins any key it shares with another action.
        for action, keys in self._action_to_keys.items():
            for key in keys:
                if self._key_to_action.get(key) != "quit":
                    self._key_to_action[key] = action

    def matches(self, key: KeyId, action: EditorAction) -> bool:
        """Check if *key* is bound to *action*."""
        return key in self._action_to_keys.get(action, [])

    def action_for(self, key: KeyId) -> EditorAction | None:
        """Return the action bound to *key*, if any."""
        return self._key_to_action.get(key)

    def get_keys(self, action: EditorAction) -> list[KeyId]:
        """Keys that trigger *action*, in configured order."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: EditorKeybindingsConfig) -> None:
        """Replace the user overrides and rebuild both lookup maps."""
        self._build_maps(config)
