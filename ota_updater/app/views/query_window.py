"""
QueryWindowView
---------------
Tkinter main window of the updater. View code only: no HTTP, no domain
logic. Every user interaction is forwarded to callbacks injected by the
app bootstrap, and the bootstrap pushes state back through the public
``set_*`` methods.

Layout (top to bottom):
  * OTA version entry with a toggle for the model/carrier row
  * GUID entry
  * Region and mode dropdowns, gray checkbox (China only)
  * Query button (spinner while a query is in flight)
  * Response table
  * Status bar used for toasts
"""
from __future__ import annotations

import tkinter as tk
from tkinter import messagebox, ttk
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

from .theme import apply_modern_theme

ABOUT_TEXT = (
    "Updater\n\n"
    "Queries the OTA update service for firmware updates available to a "
    "device build, region and carrier."
)


class QueryWindowView(tk.Tk):
    """Top-level application window."""

    OnVoid = Optional[Callable[[], None]]

    def __init__(
        self,
        *,
        on_field_changed: Optional[Callable[[str, str], None]] = None,
        on_region_selected: Optional[Callable[[int], None]] = None,
        on_mode_selected: Optional[Callable[[int], None]] = None,
        on_gray_changed: Optional[Callable[[bool], None]] = None,
        on_query: OnVoid = None,
        on_toggle_more: OnVoid = None,
    ) -> None:
        super().__init__()
        self.title("Updater")
        self.geometry("560x720")
        self.minsize(460, 560)
        apply_modern_theme(self)

        self._on_field_changed = on_field_changed
        self._on_region_selected = on_region_selected
        self._on_mode_selected = on_mode_selected
        self._on_gray_changed = on_gray_changed
        self._on_query = on_query
        self._on_toggle_more = on_toggle_more

        # programmatic updates must not echo back as user edits
        self._suppress_traces = False
        self._busy = False
        self._query_enabled = True
        self._spinner_frames = ("|", "/", "-", "\\")
        self._spinner_index = 0
        self._spinner_after_id: Optional[str] = None

        self._vars: Dict[str, tk.StringVar] = {
            name: tk.StringVar(value="") for name in ("ota_version", "model", "carrier", "guid")
        }
        for name, var in self._vars.items():
            var.trace_add("write", lambda *_args, field=name: self._field_edited(field))
        self._gray_var = tk.BooleanVar(value=False)

        self.columnconfigure(0, weight=1)
        self.rowconfigure(5, weight=1)
        self._build_header()
        self._build_parameters()
        self._build_selectors()
        self._build_query_button()
        self._build_response_table()
        self._build_statusbar()

        self.bind("<Return>", lambda _e: self._on_query and self._on_query())

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_header(self) -> None:
        header = ttk.Frame(self)
        header.grid(row=0, column=0, sticky="ew", padx=16, pady=(12, 4))
        header.columnconfigure(0, weight=1)
        ttk.Label(header, text="Updater", font=("TkDefaultFont", 14, "bold")).grid(
            row=0, column=0, sticky="w"
        )
        ttk.Button(header, text="About", command=self.show_about).grid(row=0, column=1, sticky="e")

    def _build_parameters(self) -> None:
        frame = ttk.Frame(self)
        frame.grid(row=1, column=0, sticky="ew", padx=16, pady=4)
        frame.columnconfigure(0, weight=1)
        frame.columnconfigure(1, weight=1)

        ttk.Label(frame, text="OTA version").grid(row=0, column=0, columnspan=2, sticky="w")
        version_row = ttk.Frame(frame)
        version_row.grid(row=1, column=0, columnspan=2, sticky="ew")
        version_row.columnconfigure(0, weight=1)
        ttk.Entry(version_row, textvariable=self._vars["ota_version"]).grid(row=0, column=0, sticky="ew")
        self._toggle_button = ttk.Button(version_row, text="▲", width=3, command=self._toggle_clicked)
        self._toggle_button.grid(row=0, column=1, padx=(6, 0))

        self._more_frame = ttk.Frame(frame)
        self._more_frame.grid(row=2, column=0, columnspan=2, sticky="ew", pady=(8, 0))
        self._more_frame.columnconfigure(0, weight=1)
        self._more_frame.columnconfigure(1, weight=1)
        ttk.Label(self._more_frame, text="Model").grid(row=0, column=0, sticky="w")
        ttk.Label(self._more_frame, text="Carrier").grid(row=0, column=1, sticky="w", padx=(8, 0))
        ttk.Entry(self._more_frame, textvariable=self._vars["model"]).grid(row=1, column=0, sticky="ew")
        ttk.Entry(self._more_frame, textvariable=self._vars["carrier"]).grid(
            row=1, column=1, sticky="ew", padx=(8, 0)
        )

        ttk.Label(frame, text="GUID").grid(row=3, column=0, columnspan=2, sticky="w", pady=(8, 0))
        ttk.Entry(frame, textvariable=self._vars["guid"]).grid(row=4, column=0, columnspan=2, sticky="ew")

    def _build_selectors(self) -> None:
        card = ttk.Frame(self, style="Card.TFrame", padding=(12, 8))
        card.grid(row=2, column=0, sticky="ew", padx=16, pady=8)
        card.columnconfigure(1, weight=1)

        ttk.Label(card, text="Region", style="Card.TLabel").grid(row=0, column=0, sticky="w")
        self._region_combo = ttk.Combobox(card, state="readonly")
        self._region_combo.grid(row=0, column=1, sticky="ew", pady=2)
        self._region_combo.bind("<<ComboboxSelected>>", self._region_changed)

        ttk.Label(card, text="Mode", style="Card.TLabel").grid(row=1, column=0, sticky="w")
        self._mode_combo = ttk.Combobox(card, state="readonly")
        self._mode_combo.grid(row=1, column=1, sticky="ew", pady=2)
        self._mode_combo.bind("<<ComboboxSelected>>", self._mode_changed)

        self._gray_check = ttk.Checkbutton(
            card,
            text="Gray (staged rollout)",
            variable=self._gray_var,
            command=self._gray_toggled,
        )
        self._gray_check.grid(row=2, column=0, columnspan=2, sticky="w", pady=(6, 0))

    def _build_query_button(self) -> None:
        self._query_button = ttk.Button(
            self,
            text="Query",
            style="Primary.TButton",
            command=lambda: self._on_query and self._on_query(),
        )
        self._query_button.grid(row=3, column=0, sticky="ew", padx=16, pady=(4, 8))

    def _build_response_table(self) -> None:
        ttk.Label(self, text="Response", style="Subtle.TLabel").grid(row=4, column=0, sticky="w", padx=16)
        table_frame = ttk.Frame(self)
        table_frame.grid(row=5, column=0, sticky="nsew", padx=16, pady=(2, 8))
        table_frame.rowconfigure(0, weight=1)
        table_frame.columnconfigure(0, weight=1)
        self._table = ttk.Treeview(table_frame, columns=("key", "value"), show="headings")
        self._table.heading("key", text="Field")
        self._table.heading("value", text="Value")
        self._table.column("key", width=200, anchor="w")
        self._table.column("value", width=320, anchor="w")
        self._table.grid(row=0, column=0, sticky="nsew")
        scroll = ttk.Scrollbar(table_frame, orient="vertical", command=self._table.yview)
        scroll.grid(row=0, column=1, sticky="ns")
        self._table.configure(yscrollcommand=scroll.set)

    def _build_statusbar(self) -> None:
        self.status_message_var = tk.StringVar(value="Ready.")
        ttk.Label(self, textvariable=self.status_message_var, style="Subtle.TLabel").grid(
            row=6, column=0, sticky="ew", padx=16, pady=(0, 10)
        )

    # ------------------------------------------------------------------
    # Public API (called by the app bootstrap)
    # ------------------------------------------------------------------
    def set_fields(self, values: Dict[str, str]) -> None:
        """Refresh entry texts without firing edit callbacks."""
        self._suppress_traces = True
        try:
            for name, value in values.items():
                var = self._vars.get(name)
                if var is not None and var.get() != value:
                    var.set(value)
        finally:
            self._suppress_traces = False

    def set_region_options(self, labels: Sequence[str], index: int) -> None:
        self._region_combo.configure(values=list(labels))
        self._region_combo.current(index)

    def set_mode_options(self, labels: Sequence[str], index: int) -> None:
        self._mode_combo.configure(values=list(labels))
        self._mode_combo.current(index)

    def set_gray(self, checked: bool, *, visible: bool) -> None:
        self._gray_var.set(bool(checked))
        if visible:
            self._gray_check.grid()
        else:
            self._gray_check.grid_remove()

    def set_more_parameters_visible(self, visible: bool) -> None:
        if visible:
            self._more_frame.grid()
        else:
            self._more_frame.grid_remove()
        self._toggle_button.configure(text="▲" if visible else "▼")

    def set_query_enabled(self, enabled: bool) -> None:
        self._query_enabled = bool(enabled)
        self._refresh_query_button()

    def set_busy(self, busy: bool) -> None:
        self._busy = bool(busy)
        if self._busy:
            self._start_spinner()
        else:
            self._stop_spinner()
        self._refresh_query_button()

    def set_response_rows(self, rows: Iterable[Tuple[str, str]]) -> None:
        for item in self._table.get_children():
            self._table.delete(item)
        for key, value in rows:
            self._table.insert("", "end", values=(key, value))

    def show_toast(self, message: str, level: str = "info") -> None:
        """Lightweight user feedback in the status bar."""
        self.status_message_var.set(message)

    def show_about(self) -> None:
        messagebox.showinfo("About", ABOUT_TEXT, parent=self)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def _field_edited(self, name: str) -> None:
        if self._suppress_traces or not self._on_field_changed:
            return
        self._on_field_changed(name, self._vars[name].get())

    def _region_changed(self, _event=None) -> None:
        if self._on_region_selected:
            self._on_region_selected(self._region_combo.current())

    def _mode_changed(self, _event=None) -> None:
        if self._on_mode_selected:
            self._on_mode_selected(self._mode_combo.current())

    def _gray_toggled(self) -> None:
        if self._on_gray_changed:
            self._on_gray_changed(bool(self._gray_var.get()))

    def _toggle_clicked(self) -> None:
        if self._on_toggle_more:
            self._on_toggle_more()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _refresh_query_button(self) -> None:
        enabled = self._query_enabled and not self._busy
        self._query_button.configure(state=tk.NORMAL if enabled else tk.DISABLED)
        if not self._busy:
            self._query_button.configure(text="Query")

    def _start_spinner(self) -> None:
        self._stop_spinner()
        self._tick_spinner()

    def _stop_spinner(self) -> None:
        if self._spinner_after_id:
            try:
                self.after_cancel(self._spinner_after_id)
            except tk.TclError:
                pass
            self._spinner_after_id = None

    def _tick_spinner(self) -> None:
        frame = self._spinner_frames[self._spinner_index]
        self._query_button.configure(text=f"Querying {frame}")
        self._spinner_index = (self._spinner_index + 1) % len(self._spinner_frames)
        self._spinner_after_id = self.after(220, self._tick_spinner)


__all__ = ["QueryWindowView"]
