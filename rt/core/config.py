import json
from rt.common.logger import get_module_logger
from rt.common.setup import PATHS

log = get_module_logger(__name__)

#region === Helpers and Paths ===

SETTINGS_PATH = PATHS.data / "settings.json"

# Default values for every setting, along with the type each one has to be.
_SETTINGS_DEFAULTS = {
    "app_name": "DDC Timer",
    "eyebrow": "ACM Presents",
    "event_title": "DDC — Drink, Derive & Code",
    "default_minutes": 12,
    "max_minutes": 99,
    "presets": [12, 10, 8, 5, 3],
    "adjust_seconds": 60,
    "sound_enabled": True,
    "label": "Round 1",
    "flash_ms": 600,
    "always_on_top": False,
    "start_fullscreen": False,
}
_POSITIVE_INTS = ("default_minutes", "max_minutes", "adjust_seconds", "flash_ms")

# Helper to return a truly fresh, default settings dict.
def build_default_settings():
    settings = dict(_SETTINGS_DEFAULTS)
    settings["presets"] = list(_SETTINGS_DEFAULTS["presets"])
    return settings

def _is_positive_int(value):
    return isinstance(value, int) and not isinstance(value, bool) and value > 0

# Checks a single loaded value against its default's type. Ints must be positive, presets a list of ints.
def _valid(key, value):
    default = _SETTINGS_DEFAULTS[key]
    if key in _POSITIVE_INTS:
        return _is_positive_int(value)
    if key == "presets":
        return isinstance(value, list) and all(isinstance(p, int) and not isinstance(p, bool) for p in value)
    return isinstance(value, type(default))

# Pulls the numbers into a consistent shape: the default round fits under the ceiling and presets that can't be
# reached are dropped.
def _normalize(settings):
    max_minutes = settings["max_minutes"]
    settings["default_minutes"] = min(settings["default_minutes"], max_minutes)
    settings["presets"] = [p for p in settings["presets"] if 0 < p <= max_minutes]
    return settings

#endregion === Helpers and Paths ===

#region === Saving and Loading Settings ===

# Loads settings from PATHS.data / settings.json, defaulting anything missing or malformed. A missing file gets
# written out with the defaults so there's something to edit.
def load_settings():
    try:
        if not SETTINGS_PATH.exists():
            settings = build_default_settings()
            save_settings(settings)
            log.info(f"No existing settings.json found, wrote defaults to '{SETTINGS_PATH}'.")
            return settings

        with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
            loaded = json.load(f)
        if not isinstance(loaded, dict):
            raise TypeError(f"settings.json holds a {type(loaded).__name__}, not an object")

        settings = build_default_settings()
        defaulted_values = set()
        for key in _SETTINGS_DEFAULTS:
            if key in loaded and _valid(key, loaded[key]):
                settings[key] = loaded[key]
            else:
                defaulted_values.add(key)

        if defaulted_values:
            log.warning(f"Loaded settings from '{SETTINGS_PATH}', but with missing values that were defaulted: {', '.join(sorted(defaulted_values))}")
        else:
            log.info(f"Successfully loaded settings from '{SETTINGS_PATH}'.")
        return _normalize(settings)
    # Fall back to fresh settings in case of error, but warn in log
    except (json.JSONDecodeError, OSError, TypeError):
        log.warning("Ran into an error while trying to load settings.json, falling back to default settings.", exc_info=True)
        return build_default_settings()

def save_settings(settings):
    with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2, ensure_ascii=False)
    log.info(f"Successfully saved settings to '{SETTINGS_PATH}'")

#endregion === Saving and Loading Settings ===
