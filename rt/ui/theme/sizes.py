# Point sizes and paddings. "digits" is the big MM:SS readout.
SIZES = {
    "Regular": {
        "digits": 96,
        "heading": 22,
        "eyebrow": 10,
        "label": 13,
        "action": 12,
        "hint": 10,
        "ring": 420,
        "ring_width": 12,
        "padding": 12,
        "frame_pad": 24,
    },
}
DEFAULT_SIZE = "Regular"
