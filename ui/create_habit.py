# ui/create_habit.py
import tkinter as tk

from models import DAYS
from ui import theme


class CreateHabit(tk.Frame):
    def __init__(self, parent, controller):
        super().__init__(parent, bg=theme.BG)
        self.controller = controller
        self.selected = set()
        self.day_buttons = {}

        wrapper = theme.card(self, glass=True)
        wrapper.pack(fill="x", padx=16, pady=18)

        header = tk.Frame(wrapper, bg=wrapper.cget("bg"))
        header.pack(fill="x", padx=14, pady=(12, 2))
        theme.heading_label(header, "Add New Habit", theme.TITLE).pack(anchor="w")
        theme.muted_label(
            header,
            "Pick a name and the days it happens. One day makes it a weekly habit "
            "(done once a month counts); two or more days track each day.",
            wrap=720,
        ).pack(anchor="w", pady=(4, 0))

        form = tk.Frame(wrapper, bg=wrapper.cget("bg"))
        form.pack(padx=14, pady=10, fill="x")
        tk.Label(
            form, text="Name", bg=wrapper.cget("bg"), fg=theme.TEXT, font=theme.BODY
        ).grid(row=0, column=0, sticky="w", pady=4)
        self.name = tk.Entry(
            form,
            bg="#f8fafc",
            fg=theme.TEXT,
            relief="solid",
            bd=1,
            highlightbackground=theme.BORDER,
            highlightcolor=theme.ACCENT,
            font=theme.BODY,
        )
        self.name.grid(row=0, column=1, sticky="ew", padx=8, pady=4)
        form.columnconfigure(1, weight=1)

        tk.Label(
            form, text="Days", bg=wrapper.cget("bg"), fg=theme.TEXT, font=theme.BODY
        ).grid(row=1, column=0, sticky="w", pady=4)
        days_row = tk.Frame(form, bg=wrapper.cget("bg"))
        days_row.grid(row=1, column=1, sticky="w", padx=8, pady=4)
        for day in DAYS:
            btn = theme.day_toggle(days_row, day, lambda d=day: self.toggle_day(d))
            btn.pack(side="left", padx=2)
            self.day_buttons[day] = btn

        self.hint = theme.muted_label(
            wrapper,
            "Required: name + at least one day. Press Enter to save.",
            wrap=720,
        )
        self.hint.pack(anchor="w", padx=14, pady=(4, 10))

        controls = tk.Frame(wrapper, bg=wrapper.cget("bg"))
        controls.pack(fill="x", padx=14, pady=(0, 14))
        theme.primary_button(controls, "Add Habit", self.save).pack(side="left")
        theme.ghost_button(controls, "Cancel", self.cancel).pack(side="left", padx=8)

        self.name.bind("<Return>", lambda e: self.save())

    def refresh(self):
        self.name.focus_set()

    def toggle_day(self, day: str):
        if day in self.selected:
            self.selected.discard(day)
        else:
            self.selected.add(day)
        theme.style_day_toggle(self.day_buttons[day], day in self.selected)

    def _reset(self):
        self.name.delete(0, "end")
        for day in list(self.selected):
            self.toggle_day(day)
        self.hint.configure(fg=theme.MUTED)

    def cancel(self):
        self._reset()
        self.controller.show("Hatchery")

    def save(self):
        habit = self.controller.session.add_habit(self.name.get(), self.selected)
        if habit is None:
            # stay on the form; the session ignores incomplete input
            self.hint.configure(fg=theme.ACCENT_DARK)
            return
        self._reset()
        self.controller.show("Hatchery")
