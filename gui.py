"""
GUI for TapCalc
Tkinter keypad that forwards presses to the engine and shows its display
"""
import tkinter as tk
import config
from calculator import CalculatorEngine
from preferences import PreferenceStore


class CalculatorGUI:
    def __init__(self, root, preferences=None):
        self.root = root
        self.root.title(config.APP_NAME)
        self.root.geometry(f"{config.WINDOW_WIDTH}x{config.WINDOW_HEIGHT}")

        # Initialize components
        self.preferences = preferences if preferences is not None else PreferenceStore()
        self.engine = CalculatorEngine()

        # ── Theme state (load before any widget is created) ───────────────
        self.dark_mode: bool = self.preferences.is_dark_mode()
        self.T: dict = config.get_theme(self.dark_mode)
        self.root.configure(bg=self.T["bg"])

        self.create_widgets()
        self.render(self.engine.state)

    # ── Theme helpers ──────────────────────────────────────────────────────────
    def apply_theme(self):
        """Refresh T, then destroy+rebuild all widgets."""
        self.T = config.get_theme(self.dark_mode)
        self.root.configure(bg=self.T["bg"])
        for w in self.root.winfo_children():
            w.destroy()
        self.create_widgets()
        self.render(self.engine.state)

    def _toggle_dark_mode(self, val: bool):
        """Persist dark_mode setting and apply theme immediately."""
        self.dark_mode = val
        self.preferences.set_dark_mode(val)
        self.apply_theme()

    def _neu_btn(self, parent, text, command=None, kind="normal", **kw):
        """Create a neumorphic styled flat button."""
        T = self.T
        if kind == "equals":
            bg, fg = T["equals_bg"], T["equals_fg"]
        elif kind == "operator":
            bg, fg = T["operator_bg"], T["operator_fg"]
        elif kind == "clear":
            bg, fg = T["clear_bg"], T["clear_fg"]
        else:
            bg, fg = T["btn_bg"], T["btn_fg"]
        return tk.Button(
            parent, text=text, command=command,
            font=kw.pop("font", config.BUTTON_FONT),
            bg=bg, fg=fg,
            activebackground=T["bg_dark"], activeforeground=fg,
            relief=tk.FLAT, bd=0, cursor="hand2",
            highlightthickness=1,
            highlightbackground=T["shadow_dark"],
            highlightcolor=T["shadow_lite"],
            **kw
        )

    @staticmethod
    def _button_kind(label):
        if label == "=":
            return "equals"
        if label == "AC":
            return "clear"
        if label in ("+", "-", "×", "÷"):
            return "operator"
        return "normal"

    def create_widgets(self):
        """Create main UI components"""
        T = self.T
        # Top bar: title on the left, Light/Dark switch on the right
        self.top_frame = tk.Frame(self.root, bg=T["hdr_bg"], height=44)
        self.top_frame.pack(fill=tk.X, padx=2, pady=2)

        tk.Label(
            self.top_frame, text=config.APP_NAME,
            font=(config.LABEL_FONT[0], 14, "bold"),
            bg=T["hdr_bg"], fg=T["accent"]
        ).pack(side=tk.LEFT, padx=10)

        theme_frame = tk.Frame(self.top_frame, bg=T["hdr_bg"])
        theme_frame.pack(side=tk.RIGHT, padx=6)
        dark_var = tk.BooleanVar(value=self.dark_mode)
        tk.Label(theme_frame, text="Light", font=config.LABEL_FONT,
                 bg=T["hdr_bg"], fg=T["subtext"]).pack(side=tk.LEFT)
        tk.Checkbutton(
            theme_frame, variable=dark_var,
            bg=T["hdr_bg"], activebackground=T["hdr_bg"],
            selectcolor=T["bg_dark"], relief=tk.FLAT, bd=0,
            command=lambda: self._toggle_dark_mode(dark_var.get())
        ).pack(side=tk.LEFT)
        tk.Label(theme_frame, text="Dark", font=config.LABEL_FONT,
                 bg=T["hdr_bg"], fg=T["subtext"]).pack(side=tk.LEFT)

        # Display area, right aligned
        self.display_frame = tk.Frame(self.root, bg=T["display_bg"], height=140)
        self.display_frame.pack(fill=tk.X, padx=12, pady=(6, 12))
        self.display_frame.pack_propagate(False)

        self.expression_display = tk.Label(
            self.display_frame, text="",
            font=config.EXPRESSION_FONT,
            bg=T["display_bg"], fg=T["subtext"],
            anchor=tk.E, padx=16
        )
        self.expression_display.pack(side=tk.TOP, fill=tk.X, pady=(16, 0))

        self.display = tk.Label(
            self.display_frame, text="0",
            font=config.DISPLAY_FONT,
            bg=T["display_bg"], fg=T["display_fg"],
            anchor=tk.E, padx=16
        )
        self.display.pack(side=tk.BOTTOM, fill=tk.X, pady=(0, 16))

        # Keypad
        self.keypad_frame = tk.Frame(self.root, bg=T["bg"])
        self.keypad_frame.pack(fill=tk.BOTH, expand=True, padx=8, pady=(0, 8))
        for col in range(4):
            self.keypad_frame.grid_columnconfigure(col, weight=1, uniform="key")

        for row, labels in enumerate(config.KEYPAD_LAYOUT):
            self.keypad_frame.grid_rowconfigure(row, weight=1)
            col = 0
            for label in labels:
                span = config.WIDE_KEYS.get(label, 1)
                btn = self._neu_btn(
                    self.keypad_frame, label,
                    command=lambda key=label: self.calculator_button_click(key),
                    kind=self._button_kind(label)
                )
                btn.grid(row=row, column=col, columnspan=span, sticky="nsew", padx=6, pady=6)
                col += span

    def calculator_button_click(self, button):
        """Handle calculator button clicks"""
        self.render(self.engine.press(button))

    def render(self, state):
        """Show a display snapshot"""
        self.display.config(text=state.display)
        self.expression_display.config(text=state.expression)
