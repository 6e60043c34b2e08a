"""Shared visual theme for the updater views.

Centralizes ttk style tokens so views do not carry styling logic.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk


def apply_modern_theme(root: tk.Misc) -> None:
    """Apply the ttk + tk theme to the whole application.

    Args:
        root: Root Tk object or any widget tied to the app Tcl interpreter.
    """
    style = ttk.Style(root)
    if "clam" in style.theme_names():
        style.theme_use("clam")

    bg = "#f3f5f9"
    card_bg = "#ffffff"
    border = "#d9dfeb"
    primary = "#2457ff"
    text = "#1f2937"
    muted = "#64748b"

    root.option_add("*Font", "TkDefaultFont 10")
    root.configure(bg=bg)

    style.configure(".", background=bg, foreground=text)
    style.configure("TFrame", background=bg)
    style.configure("Card.TFrame", background=card_bg, relief="flat", borderwidth=1)
    style.configure("TLabel", background=bg, foreground=text)
    style.configure("Card.TLabel", background=card_bg, foreground=text)
    style.configure("Subtle.TLabel", background=bg, foreground=muted)
    style.configure("TCheckbutton", background=card_bg, foreground=text)

    style.configure("TButton", padding=(10, 6), background=card_bg, bordercolor=border, relief="flat")
    style.map("TButton", background=[("active", "#edf2ff")])
    style.configure(
        "Primary.TButton",
        padding=(10, 8),
        background=primary,
        foreground="#ffffff",
        bordercolor=primary,
        font=("TkDefaultFont", 11, "bold"),
    )
    style.map(
        "Primary.TButton",
        background=[("disabled", "#9db2f5"), ("active", "#1b45ce")],
        foreground=[("disabled", "#eef2ff")],
    )

    style.configure("Treeview", rowheight=26, fieldbackground=card_bg, background=card_bg, foreground=text)
    style.configure("Treeview.Heading", background="#e9eefb", foreground=text, relief="flat")
    style.map("Treeview", background=[("selected", "#d9e4ff")], foreground=[("selected", text)])

    style.configure("TEntry", fieldbackground="#ffffff", bordercolor=border)
    style.configure("TCombobox", fieldbackground="#ffffff", bordercolor=border)
