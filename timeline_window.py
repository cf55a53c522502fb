"""Timeline window and date-picker dialog (tkinter)."""

from __future__ import annotations

import tkinter as tk
from tkinter import filedialog, messagebox
from typing import Callable

from PIL import ImageTk

from messages import MessageChannel, MessageType, apply_pending
from render import export_png, render_timeline
from settings import WidgetState

POLL_MS = 100
PICKER_SIZE = (516, 300)
GRID_BG = "white"


class DatePicker:
    """Two ISO date fields; Apply posts ``from`` then ``to`` messages."""

    def __init__(self, root: tk.Tk, state: WidgetState, channel: MessageChannel) -> None:
        self._channel = channel
        self.dlg = tk.Toplevel(root)
        self.dlg.title("Date range")
        self.dlg.attributes("-topmost", True)

        frame = tk.Frame(self.dlg, padx=12, pady=8)
        frame.pack(fill="both", expand=True)

        start, end = state.date_range()
        self._from_var = tk.StringVar(value=start.isoformat())
        self._to_var = tk.StringVar(value=end.isoformat())

        tk.Label(frame, text="From (YYYY-MM-DD):").grid(row=0, column=0, sticky="w", pady=4)
        tk.Entry(frame, textvariable=self._from_var, width=14).grid(
            row=0, column=1, padx=(8, 0), pady=4,
        )
        tk.Label(frame, text="To (YYYY-MM-DD):").grid(row=1, column=0, sticky="w", pady=4)
        tk.Entry(frame, textvariable=self._to_var, width=14).grid(
            row=1, column=1, padx=(8, 0), pady=4,
        )

        btn_frame = tk.Frame(frame)
        btn_frame.grid(row=2, column=0, columnspan=2, pady=(8, 0))
        tk.Button(btn_frame, text="Apply", width=8, command=self._on_apply).pack(
            side="left", padx=4,
        )
        tk.Button(btn_frame, text="Close", width=8, command=self.dlg.destroy).pack(
            side="left", padx=4,
        )

        self.dlg.update_idletasks()
        channel.post({
            "type": MessageType.RESIZE.value,
            "width": max(PICKER_SIZE[0], self.dlg.winfo_reqwidth()),
            "height": max(PICKER_SIZE[1] // 2, self.dlg.winfo_reqheight()),
        })

    def _on_apply(self) -> None:
        self._channel.post({"type": MessageType.FROM.value, "dateStr": self._from_var.get()})
        self._channel.post({"type": MessageType.TO.value, "dateStr": self._to_var.get()})

    def resize(self, width: int, height: int) -> None:
        if self.dlg.winfo_exists():
            self.dlg.geometry(f"{width}x{height}")


class TimelineWindow:
    """Shows the rendered timeline and applies picker messages."""

    def __init__(self, state: WidgetState, channel: MessageChannel | None = None,
                 on_state_change: Callable[[], None] | None = None) -> None:
        self.state = state
        self.channel = channel or MessageChannel()
        self._on_state_change = on_state_change
        self._picker: DatePicker | None = None
        self._photo: ImageTk.PhotoImage | None = None

        self.root = tk.Tk()
        self.root.title("Mini Timeline")
        self.root.configure(bg=GRID_BG)

        # Timelines are wide; scroll horizontally instead of growing the window
        self._canvas = tk.Canvas(self.root, bg=GRID_BG, highlightthickness=0)
        self._scroll = tk.Scrollbar(self.root, orient="horizontal",
                                    command=self._canvas.xview)
        self._canvas.configure(xscrollcommand=self._scroll.set)
        self._canvas.pack(fill="both", expand=True)
        self._scroll.pack(fill="x")

        self.refresh()
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.after(POLL_MS, self._poll)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self):
        start, end = self.state.date_range()
        return render_timeline(start, end, self.state.theme(), self.state.size(),
                               first_weekday=self.state.first_weekday())

    def refresh(self) -> None:
        image = self.render()
        self._photo = ImageTk.PhotoImage(image)
        self._canvas.delete("all")
        self._canvas.create_image(0, 0, anchor="nw", image=self._photo)
        self._canvas.configure(
            scrollregion=(0, 0, image.width, image.height),
            height=image.height,
            width=min(image.width, self.root.winfo_screenwidth() - 80),
        )

    def export(self) -> None:
        path = filedialog.asksaveasfilename(
            parent=self.root, defaultextension=".png",
            filetypes=[("PNG image", "*.png")], initialfile="timeline.png",
        )
        if path:
            export_png(self.render(), path)

    # ------------------------------------------------------------------
    # Date picker messages
    # ------------------------------------------------------------------
    def open_date_picker(self) -> None:
        if self._picker is not None and self._picker.dlg.winfo_exists():
            self._picker.dlg.lift()
            return
        self._picker = DatePicker(self.root, self.state, self.channel)

    def _notify(self, text: str, error: bool = False) -> None:
        parent = self._picker.dlg if self._picker and self._picker.dlg.winfo_exists() else self.root
        if error:
            messagebox.showerror("Mini Timeline", text, parent=parent)
        else:
            messagebox.showinfo("Mini Timeline", text, parent=parent)

    def _resize_picker(self, width: int, height: int) -> None:
        if self._picker is not None:
            self._picker.resize(width, height)

    def process_messages(self) -> None:
        if apply_pending(self.channel, self.state, self._notify, self._resize_picker):
            self.refresh()
            if self._on_state_change is not None:
                self._on_state_change()

    def _poll(self) -> None:
        self.process_messages()
        self.root.after(POLL_MS, self._poll)

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.refresh()
        self.root.deiconify()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self.root.withdraw()
