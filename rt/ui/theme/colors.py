THEMES = {
    "Midnight Slate": {
        "bg": "#020617",
        "card_bg": "#0f172a",
        "card_border": "#1e293b",
        "text": "#f8fafc",
        "subtext": "#94a3b8",
        "accent": "#7dd3fc",
        "ring": "#22d3ee",
        "ring_track": "#0b1220",
        "button_bg": "#1e293b",
        "button_active": "#334155",
        "button_text": "#f8fafc",
        "start_bg": "#10b981",
        "pause_bg": "#f43f5e",
        "fullscreen_bg": "#0284c7",
        "ended_text": "#fda4af",
        "flash_bg": "#7f1d1d",
        "flash_border": "#f43f5e",
        "separator": "#1e293b",
        "border": 1,
    },
}
DEFAULT_THEME = "Midnight Slate"
