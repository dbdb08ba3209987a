from .colors import THEMES, DEFAULT_THEME


# Builds the Qt stylesheet for the whole window from a theme name.
def build_stylesheet(theme_name):
    t = THEMES.get(theme_name, THEMES[DEFAULT_THEME])
    return (
        f"QMainWindow, QWidget {{ background-color: {t['bg']}; }}"
        f"QLabel {{ color: {t['text']}; background: transparent; }}"
        f"QLabel#subtext, QLabel#hint {{ color: {t['subtext']}; }}"
        f"QLabel#eyebrow {{ color: {t['accent']}; letter-spacing: 3px; }}"
        f"#card {{"
        f"  background-color: {t['card_bg']};"
        f"  border: {t['border']}px solid {t['card_border']};"
        f"  border-radius: 24px;"
        f"}}"
        f"#card[flash=\"true\"] {{"
        f"  background-color: {t['flash_bg']};"
        f"  border: 3px solid {t['flash_border']};"
        f"}}"
        f"#detailTile {{"
        f"  background-color: {t['button_bg']};"
        f"  border: 1px solid {t['card_border']};"
        f"  border-radius: 12px;"
        f"}}"
        f"QPushButton {{"
        f"  color: {t['button_text']};"
        f"  background-color: {t['button_bg']};"
        f"  border: {t['border']}px solid rgba(255,255,255,0.1);"
        f"  border-radius: 10px;"
        f"  padding: 8px 16px;"
        f"  font-weight: 600;"
        f"}}"
        f"QPushButton:hover, QPushButton:pressed {{"
        f"  background-color: {t['button_active']};"
        f"}}"
        f"QPushButton#startBtn {{ background-color: {t['start_bg']}; }}"
        f"QPushButton#startBtn[running=\"true\"] {{ background-color: {t['pause_bg']}; }}"
        f"QPushButton#fullscreenBtn {{ background-color: {t['fullscreen_bg']}; }}"
        f"QLineEdit {{"
        f"  color: {t['button_text']};"
        f"  background-color: {t['button_bg']};"
        f"  border: {t['border']}px solid rgba(255,255,255,0.1);"
        f"  border-radius: 8px;"
        f"  padding: 4px 8px;"
        f"}}"
        f"QToolTip {{"
        f"  background-color: {t['bg']};"
        f"  color: {t['text']};"
        f"  border: 1px solid {t['separator']};"
        f"  padding: 4px 8px;"
        f"}}"
    )
