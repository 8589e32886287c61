"""Settings file: ~/pomotray_config.json, merged over DEFAULT_CONFIG."""
from __future__ import annotations
import json
import os
from typing import Any

CONFIG_FILE = os.path.join(os.path.expanduser("~"), "pomotray_config.json")

DEFAULT_CONFIG: dict[str, Any] = {
    "focus_minutes": 25,
    "short_break_minutes": 5,
    "long_break_minutes": 15,
    "long_break_interval": 4,      # Focus sessions per long break; 0 disables long breaks
    "menu_contexts": ["tray", "widget"],
    "sound_enabled": True,
    "custom_sound": "",
    "show_floating_widget": True,
    "widget_position": None,
    "custom_messages": {},
}


def load_config(path: str = CONFIG_FILE, test_mode: bool = False) -> dict[str, Any]:
    """Load config from file, falling back to defaults for missing/invalid values."""
    defaults = json.loads(json.dumps(DEFAULT_CONFIG))
    if os.path.exists(path):
        try:
            with open(path, encoding="utf-8") as f:
                user_cfg = json.load(f)
            if isinstance(user_cfg, dict):
                defaults.update(user_cfg)
        except (json.JSONDecodeError, IOError, OSError) as e:
            print(f"  [!] Config load error: {e}. Using defaults.")

    if test_mode:
        defaults["focus_minutes"] = 1
        defaults["short_break_minutes"] = 1
        defaults["long_break_minutes"] = 1

    # Validate numeric fields
    for key, min_val, default in [
        ("focus_minutes", 1, 25),
        ("short_break_minutes", 1, 5),
        ("long_break_minutes", 1, 15),
        ("long_break_interval", 0, 4),
    ]:
        value = defaults.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < min_val:
            defaults[key] = default
    defaults["long_break_interval"] = int(defaults["long_break_interval"])

    contexts = defaults.get("menu_contexts")
    if not isinstance(contexts, list) or not contexts or \
            not all(isinstance(c, str) for c in contexts):
        defaults["menu_contexts"] = list(DEFAULT_CONFIG["menu_contexts"])
    if not isinstance(defaults.get("custom_messages"), dict):
        defaults["custom_messages"] = {}

    return defaults


def save_config(cfg: dict[str, Any], path: str = CONFIG_FILE) -> None:
    """Save config to file."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(cfg, f, indent=2)
    except (IOError, OSError) as e:
        print(f"  [!] Config save error: {e}")
