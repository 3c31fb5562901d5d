"""Shared visual style helpers for the Tk UI (warm farmhouse palette)."""

import tkinter as tk

# Palette
BG = "#f8f1e7"
CARD_BG = "#fffaf3"
GLASS_BG = "#fff4e6"
BORDER = "#e3d6c8"
TEXT = "#2f241d"
MUTED = "#7a675b"
ACCENT = "#d48a52"       # warm copper
ACCENT_DARK = "#b26a39"
SUCCESS = "#6c8f52"      # muted sage
HILITE = "#f3e2cf"       # pale parchment
DISABLED = "#ece4da"

# Typography
FONT_FAMILY = "Georgia"
TITLE = (FONT_FAMILY, 20, "bold")
SUBTITLE = (FONT_FAMILY, 12)
HEADING = (FONT_FAMILY, 13, "bold")
BODY = (FONT_FAMILY, 11)
BUTTON = (FONT_FAMILY, 10, "bold")
SMALL = (FONT_FAMILY, 9, "bold")


def card(parent, glass: bool = False, **kwargs):
    """Lightweight card frame with border."""
    bg_color = GLASS_BG if glass else CARD_BG
    return tk.Frame(
        parent,
        bg=bg_color,
        bd=0,
        highlightbackground=BORDER,
        highlightthickness=1,
        **kwargs,
    )


def heading_label(parent, text, font=TITLE):
    return tk.Label(parent, text=text, bg=parent.cget("bg"), fg=TEXT, font=font)


def muted_label(parent, text, font=BODY, wrap=None):
    return tk.Label(
        parent,
        text=text,
        bg=parent.cget("bg"),
        fg=MUTED,
        font=font,
        justify="left",
        wraplength=wrap,
        anchor="w",
    )


def primary_button(parent, text, command):
    return tk.Button(
        parent,
        text=text,
        command=command,
        bg=ACCENT,
        fg=CARD_BG,
        activebackground=ACCENT_DARK,
        activeforeground=CARD_BG,
        relief="flat",
        bd=0,
        font=BUTTON,
        padx=14,
        pady=8,
        cursor="hand2",
        highlightthickness=0,
    )


def ghost_button(parent, text, command):
    return tk.Button(
        parent,
        text=text,
        command=command,
        bg=CARD_BG,
        fg=ACCENT,
        activebackground=HILITE,
        activeforeground=ACCENT_DARK,
        relief="solid",
        bd=1,
        highlightbackground=ACCENT,
        font=BUTTON,
        padx=12,
        pady=7,
        cursor="hand2",
    )


def day_cell(parent, command=None):
    """Round-ish square used for one habit/day checkbox in the grid."""
    return tk.Button(
        parent,
        text="",
        command=command,
        width=3,
        font=SMALL,
        relief="solid",
        bd=1,
        cursor="hand2",
        highlightthickness=0,
    )


def style_day_cell(button: tk.Button, scheduled: bool, done: bool, marked: bool):
    if not scheduled:
        button.configure(
            bg=DISABLED, fg=MUTED, activebackground=DISABLED,
            state="disabled", cursor="arrow", text="",
        )
        return
    bg = SUCCESS if done else CARD_BG
    button.configure(
        bg=bg,
        fg=CARD_BG if done else ACCENT,
        activebackground=HILITE if not done else SUCCESS,
        state="normal",
        cursor="hand2",
        text="●" if marked else "",
    )


def day_toggle(parent, text, command):
    """Day chip on the create form; restyled by style_day_toggle."""
    btn = tk.Button(
        parent,
        text=text,
        command=command,
        width=4,
        font=BUTTON,
        relief="solid",
        bd=1,
        cursor="hand2",
    )
    style_day_toggle(btn, False)
    return btn


def style_day_toggle(button: tk.Button, selected: bool):
    if selected:
        button.configure(bg=SUCCESS, fg=CARD_BG, activebackground=SUCCESS, activeforeground=CARD_BG)
    else:
        button.configure(bg=CARD_BG, fg=TEXT, activebackground=HILITE, activeforeground=TEXT)
