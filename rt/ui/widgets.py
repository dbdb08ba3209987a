"""Widget builders for the round timer window.

Each builder returns a (container, widget_dict) tuple.  The container can be
dropped straight into a layout; the widget_dict maps logical names to the
sub-widgets the window updates later.
"""

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QFont, QPainter, QPen
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)
from rt.core.clock import format_time

SHORTCUT_HINT = "Space: Start/Pause • R: Reset • F: Fullscreen • M: Sound"


class ProgressRing(QWidget):
    """Circular sweep of the fraction of the round left, starting at twelve o'clock."""

    def __init__(self, theme, size, parent=None):
        super().__init__(parent)
        self._progress = 1.0
        self._color = QColor(theme["ring"])
        self._track = QColor(theme["ring_track"])
        self._pen_width = size["ring_width"]
        self.setMinimumSize(size["ring"] // 2, size["ring"] // 2)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

    @property
    def progress(self):
        return self._progress

    def set_progress(self, fraction):
        fraction = max(0.0, min(1.0, float(fraction)))
        if fraction != self._progress:
            self._progress = fraction
            self.update()

    def paintEvent(self, event):
        side = min(self.width(), self.height()) - self._pen_width
        rect = QRectF((self.width() - side) / 2, (self.height() - side) / 2, side, side)

        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        pen = QPen(self._track, self._pen_width)
        painter.setPen(pen)
        painter.drawEllipse(rect)

        # Qt angles are in 1/16th of a degree, counter-clockwise from three o'clock
        pen.setColor(self._color)
        pen.setCapStyle(Qt.RoundCap)
        painter.setPen(pen)
        painter.drawArc(rect, 90 * 16, -int(round(self._progress * 360 * 16)))
        painter.end()


def build_header(theme, size, eyebrow, event_title):
    header = QWidget()
    lay = QVBoxLayout(header)
    lay.setContentsMargins(0, 0, 0, 0)
    lay.setSpacing(2)

    eyebrow_lbl = QLabel(eyebrow.upper())
    eyebrow_lbl.setObjectName("eyebrow")
    eyebrow_lbl.setFont(QFont("", size["eyebrow"]))
    eyebrow_lbl.setAlignment(Qt.AlignCenter)
    lay.addWidget(eyebrow_lbl)

    title_lbl = QLabel(event_title)
    heading_font = QFont("", size["heading"])
    heading_font.setBold(True)
    title_lbl.setFont(heading_font)
    title_lbl.setAlignment(Qt.AlignCenter)
    title_lbl.setStyleSheet(f"color: {theme['accent']};")
    lay.addWidget(title_lbl)

    return header, {"eyebrow": eyebrow_lbl, "title": title_lbl}


def build_clock_card(theme, size, snapshot):
    """The timer card: ring, digits, status, label and shortcut hint."""
    card = QWidget()
    card.setObjectName("card")
    card.setAttribute(Qt.WA_StyledBackground, True)
    lay = QVBoxLayout(card)
    lay.setContentsMargins(size["frame_pad"], size["frame_pad"], size["frame_pad"], size["frame_pad"])
    lay.setSpacing(size["padding"])

    # Ring with the readout stacked on top of it
    ring_holder = QWidget()
    grid = QGridLayout(ring_holder)
    grid.setContentsMargins(0, 0, 0, 0)
    ring = ProgressRing(theme, size)
    ring.set_progress(snapshot.progress)
    grid.addWidget(ring, 0, 0)

    readout = QWidget()
    readout.setAttribute(Qt.WA_TranslucentBackground, True)
    readout.setStyleSheet("background: transparent;")
    readout_lay = QVBoxLayout(readout)
    readout_lay.setAlignment(Qt.AlignCenter)

    digits_font = QFont("", size["digits"])
    digits_font.setBold(True)
    digits_font.setStyleHint(QFont.Monospace)
    time_lbl = QLabel(format_time(snapshot.remaining_seconds))
    time_lbl.setFont(digits_font)
    time_lbl.setAlignment(Qt.AlignCenter)
    readout_lay.addWidget(time_lbl)

    status_lbl = QLabel("")
    status_lbl.setObjectName("subtext")
    status_lbl.setFont(QFont("", size["label"]))
    status_lbl.setAlignment(Qt.AlignCenter)
    readout_lay.addWidget(status_lbl)

    round_lbl = QLabel(snapshot.label)
    round_lbl.setObjectName("subtext")
    round_lbl.setFont(QFont("", size["label"]))
    round_lbl.setAlignment(Qt.AlignCenter)
    readout_lay.addWidget(round_lbl)

    grid.addWidget(readout, 0, 0, Qt.AlignCenter)
    lay.addWidget(ring_holder, 1)

    hint_lbl = QLabel(SHORTCUT_HINT)
    hint_lbl.setObjectName("hint")
    hint_lbl.setFont(QFont("", size["hint"]))
    hint_lbl.setAlignment(Qt.AlignCenter)
    lay.addWidget(hint_lbl)

    widget_dict = {
        "ring": ring, "time": time_lbl,
        "status": status_lbl, "round": round_lbl,
        "hint": hint_lbl, "card": card,
    }
    return card, widget_dict


def _button(text, font, on_click, object_name=None, tooltip=None):
    btn = QPushButton(text)
    btn.setFont(font)
    btn.setFocusPolicy(Qt.NoFocus)
    btn.clicked.connect(lambda _=False: on_click())
    if object_name:
        btn.setObjectName(object_name)
    if tooltip:
        btn.setToolTip(tooltip)
    return btn


def build_controls(size, presets, adjust_seconds, label,
                   on_toggle, on_reset, on_adjust, on_preset,
                   on_fullscreen, on_sound, on_label):
    """Button rows under the clock.

    Returns (container, widget_dict) with keys start, reset, minus, plus,
    presets (minutes -> button), fullscreen, sound and label_input.
    """
    font = QFont("", size["action"])
    step = f"{adjust_seconds // 60}:{adjust_seconds % 60:02d}"

    controls = QWidget()
    outer = QVBoxLayout(controls)
    outer.setContentsMargins(0, 0, 0, 0)
    outer.setSpacing(size["padding"])

    # Row 1: run controls
    run_row = QHBoxLayout()
    run_row.setSpacing(size["padding"] // 2)
    run_row.addStretch()
    start_btn = _button("Start", font, on_toggle, "startBtn", "Start or pause (Space)")
    reset_btn = _button("Reset", font, on_reset, tooltip="Back to the full round (R)")
    minus_btn = _button(f"-{step}", font, lambda: on_adjust(-adjust_seconds))
    plus_btn = _button(f"+{step}", font, lambda: on_adjust(adjust_seconds))
    fullscreen_btn = _button("Fullscreen", font, on_fullscreen, "fullscreenBtn", "Toggle fullscreen (F)")
    sound_btn = _button("Sound On", font, on_sound, tooltip="Mute or unmute the end chime (M)")
    for btn in (start_btn, reset_btn, minus_btn, plus_btn, fullscreen_btn, sound_btn):
        run_row.addWidget(btn)
    run_row.addStretch()
    outer.addLayout(run_row)

    # Row 2: presets + round label
    preset_row = QHBoxLayout()
    preset_row.setSpacing(size["padding"] // 2)
    preset_row.addStretch()
    preset_btns = {}
    for minutes in presets:
        btn = _button(f"{minutes}m", font, lambda m=minutes: on_preset(m), tooltip=f"New {minutes} minute round")
        preset_btns[minutes] = btn
        preset_row.addWidget(btn)

    label_input = QLineEdit(label)
    label_input.setFont(font)
    label_input.setPlaceholderText("Round name...")
    label_input.setMaximumWidth(220)
    # Click-only, so the field never grabs focus on show and swallows the shortcuts
    label_input.setFocusPolicy(Qt.ClickFocus)
    label_input.textEdited.connect(on_label)
    label_input.returnPressed.connect(label_input.clearFocus)
    preset_row.addWidget(label_input)
    preset_row.addStretch()
    outer.addLayout(preset_row)

    widget_dict = {
        "start": start_btn, "reset": reset_btn,
        "minus": minus_btn, "plus": plus_btn,
        "presets": preset_btns, "fullscreen": fullscreen_btn,
        "sound": sound_btn, "label_input": label_input,
    }
    return controls, widget_dict


def _detail_tile(size, caption, value):
    tile = QWidget()
    tile.setObjectName("detailTile")
    tile.setAttribute(Qt.WA_StyledBackground, True)
    lay = QVBoxLayout(tile)
    lay.setContentsMargins(10, 8, 10, 8)
    caption_lbl = QLabel(caption)
    caption_lbl.setObjectName("subtext")
    caption_lbl.setFont(QFont("", size["hint"]))
    value_lbl = QLabel(value)
    value_font = QFont("", size["label"])
    value_font.setBold(True)
    value_lbl.setFont(value_font)
    lay.addWidget(caption_lbl)
    lay.addWidget(value_lbl)
    return tile, value_lbl


def build_details_panel(size, event_title, total_seconds):
    """Side card describing the event. Only the duration tile changes later."""
    panel = QWidget()
    panel.setObjectName("card")
    panel.setAttribute(Qt.WA_StyledBackground, True)
    panel.setFixedWidth(320)
    lay = QVBoxLayout(panel)
    lay.setContentsMargins(size["frame_pad"], size["frame_pad"], size["frame_pad"], size["frame_pad"])
    lay.setSpacing(size["padding"])

    heading = QLabel("Event Details")
    heading_font = QFont("", size["label"] + 3)
    heading_font.setBold(True)
    heading.setFont(heading_font)
    lay.addWidget(heading)

    blurb = QLabel(
        f"Countdown for {event_title}. Share the screen to keep everyone in sync. "
        "When time hits zero the timer alerts with a chime and a flash."
    )
    blurb.setObjectName("subtext")
    blurb.setWordWrap(True)
    blurb.setFont(QFont("", size["hint"] + 1))
    lay.addWidget(blurb)

    tiles = QGridLayout()
    tiles.setSpacing(size["padding"] // 2)
    duration_tile, duration_lbl = _detail_tile(size, "Duration", format_time(total_seconds))
    tiles.addWidget(duration_tile, 0, 0)
    tiles.addWidget(_detail_tile(size, "Mode", "Single Round")[0], 0, 1)
    tiles.addWidget(_detail_tile(size, "Controls", "Space / R / F / M")[0], 1, 0)
    tiles.addWidget(_detail_tile(size, "Visual", "Arc Progress")[0], 1, 1)
    lay.addLayout(tiles)

    tip = QLabel("Tip: nudge the clock a minute at a time with the - and + buttons, before or during the round.")
    tip.setObjectName("hint")
    tip.setWordWrap(True)
    tip.setFont(QFont("", size["hint"]))
    lay.addWidget(tip)
    lay.addStretch()

    return panel, {"duration": duration_lbl}
