# ui/dashboard.py (Hatchery screen)
import tkinter as tk

from models import DAYS, day_token, is_scheduled_day
from ui import theme


class Hatchery(tk.Frame):
    def __init__(self, parent, controller):
        super().__init__(parent, bg=theme.BG)
        self.controller = controller

        main = theme.card(self, glass=True)
        main.pack(fill="both", expand=True, padx=16, pady=14)

        # Header
        header = tk.Frame(main, bg=main.cget("bg"))
        header.pack(fill="x", padx=12, pady=(12, 6))
        theme.heading_label(header, "Habit Tracker", theme.TITLE).pack(side="left", anchor="w")
        theme.primary_button(
            header, "Add Habit", lambda: controller.show("CreateHabit")
        ).pack(side="right")

        theme.muted_label(
            main,
            "Tick a scheduled day to complete it. Weekly habits count once per month; "
            "the dot shows which day was ticked.",
            wrap=700,
        ).pack(anchor="w", padx=12, pady=(0, 8))

        grid_card = theme.card(main, glass=True)
        grid_card.pack(fill="both", expand=True, padx=12, pady=(4, 6))
        self.grid_frame = tk.Frame(grid_card, bg=grid_card.cget("bg"))
        self.grid_frame.pack(fill="both", expand=True, padx=8, pady=8)

        # habit id -> {day: button}
        self.cells = {}

    def refresh(self):
        for w in self.grid_frame.winfo_children():
            w.destroy()
        self.cells.clear()

        session = self.controller.session
        habits = session.habits
        bg = self.grid_frame.cget("bg")

        if not habits:
            tk.Label(
                self.grid_frame,
                text="No habits yet.",
                font=theme.HEADING,
                bg=bg,
                fg=theme.TEXT,
            ).grid(row=0, column=0, sticky="w", pady=(4, 2))
            theme.muted_label(
                self.grid_frame,
                "Add your first habit to start ticking days.",
                wrap=700,
            ).grid(row=1, column=0, sticky="w")
            return

        today = day_token(session.today())
        theme.heading_label(self.grid_frame, "Habit", theme.HEADING).grid(
            row=0, column=0, sticky="w", padx=(0, 12)
        )
        for col, day in enumerate(DAYS, start=1):
            tk.Label(
                self.grid_frame,
                text=day,
                font=theme.BUTTON,
                bg=theme.HILITE if day == today else bg,
                fg=theme.ACCENT_DARK if day == today else theme.TEXT,
            ).grid(row=0, column=col, padx=2, pady=(0, 4))

        for row, h in enumerate(habits, start=1):
            name = tk.Label(
                self.grid_frame,
                text=h.name,
                anchor="w",
                bg=bg,
                fg=theme.TEXT,
                font=theme.SUBTITLE,
            )
            name.grid(row=row, column=0, sticky="w", padx=(0, 12), pady=3)
            theme.muted_label(self.grid_frame, h.frequency.value, font=theme.SMALL).grid(
                row=row, column=len(DAYS) + 1, sticky="w", padx=(8, 0)
            )

            self.cells[h.id] = {}
            for col, day in enumerate(DAYS, start=1):
                btn = theme.day_cell(
                    self.grid_frame, command=lambda hid=h.id, d=day: self.toggle(hid, d)
                )
                btn.grid(row=row, column=col, padx=2, pady=3)
                self.cells[h.id][day] = btn
            self._paint_row(h)

    def _paint_row(self, habit):
        session = self.controller.session
        for day, btn in self.cells.get(habit.id, {}).items():
            theme.style_day_cell(
                btn,
                scheduled=is_scheduled_day(habit, day),
                done=session.is_completed(habit, day),
                marked=session.is_marked_day(habit, day),
            )

    # ---------- Completion toggle ----------
    def toggle(self, habit_id: str, day: str):
        updated = self.controller.session.toggle(habit_id, day)
        if updated is not None:
            # weekly habits change every cell in the row
            self._paint_row(updated)
