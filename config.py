"""
TapCalc Configuration Settings
"""
import os

# Application Settings
APP_NAME = "TapCalc"
VERSION = "1.0.0"

# Display Settings (portrait keypad)
WINDOW_WIDTH = 360
WINDOW_HEIGHT = 560
DISPLAY_FONT = ("Consolas", 36, "bold")
EXPRESSION_FONT = ("Consolas", 16)
BUTTON_FONT = ("Segoe UI", 18, "bold")
LABEL_FONT = ("Segoe UI", 11)

# ── Neumorphic Palettes ────────────────────────────────────────────────────────

# LIGHT palette  – soft grey background, indigo accents
NEU_LIGHT = {
    "bg":           "#F2F3F7",
    "bg_dark":      "#E1E3EB",
    "shadow_dark":  "#C5C8D4",
    "shadow_lite":  "#FFFFFF",
    "display_bg":   "#E1E3EB",
    "display_fg":   "#1A1F36",
    "btn_bg":       "#F2F3F7",
    "btn_fg":       "#2B2F45",
    "operator_bg":  "#5C6BC0",   # indigo
    "operator_fg":  "#FFFFFF",
    "equals_bg":    "#43A047",   # green confirm
    "equals_fg":    "#FFFFFF",
    "clear_bg":     "#FF5252",   # red accent
    "clear_fg":     "#FFFFFF",
    "accent":       "#3F51B5",
    "text":         "#2B2F45",
    "subtext":      "#6E7390",
    "hdr_bg":       "#E1E3EB",
}

# DARK palette  – black background, same accents
NEU_DARK = {
    "bg":           "#000000",
    "bg_dark":      "#121212",
    "shadow_dark":  "#0A0A0A",
    "shadow_lite":  "#262626",
    "display_bg":   "#121212",
    "display_fg":   "#E8EAF6",
    "btn_bg":       "#1E1E1E",
    "btn_fg":       "#E0E0E0",
    "operator_bg":  "#7986CB",
    "operator_fg":  "#000000",
    "equals_bg":    "#2E7D32",
    "equals_fg":    "#FFFFFF",
    "clear_bg":     "#D32F2F",
    "clear_fg":     "#FFFFFF",
    "accent":       "#9FA8DA",
    "text":         "#E0E0E0",
    "subtext":      "#8C8FA3",
    "hdr_bg":       "#121212",
}


def get_theme(dark: bool) -> dict:
    """Return the active neumorphic colour palette."""
    return NEU_DARK if dark else NEU_LIGHT


# Keypad rows; "0" spans two columns
KEYPAD_LAYOUT = [
    ["AC", "÷", "×", "-"],
    ["7", "8", "9", "+"],
    ["4", "5", "6", "="],
    ["1", "2", "3", "."],
    ["0", "00", "%"],
]
WIDE_KEYS = {"0": 2}

# Engine Settings
DISPLAY_PRECISION = 12
EXACT_INTEGER_LIMIT = 10 ** 15   # floats hold every integer below this exactly
ERROR_TEXT = "Error"

# Preference Settings
DB_PATH = os.environ.get(
    "TAPCALC_DB_PATH",
    os.path.join(os.path.dirname(__file__), "tapcalc.db"),
)
DARK_MODE_KEY = "is_dark"

# Web API settings
WEB_HOST = '0.0.0.0'
WEB_PORT = int(os.environ.get("TAPCALC_WEB_PORT", 8888))
DEFAULT_SESSION = "default"
MAX_SESSIONS = 1000
