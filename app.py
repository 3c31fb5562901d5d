import logging
import tkinter as tk

from config import load_config, setup_logging
from persistence import BackgroundWriter
from session import HabitSession
from store import HabitStore
from ui.create_habit import CreateHabit
from ui.dashboard import Hatchery

logger = logging.getLogger(__name__)


class App(tk.Tk):
    def __init__(self, session: HabitSession):
        super().__init__()
        self.title("Habit Hatchery")
        self.geometry("640x460")
        self.session = session

        container = tk.Frame(self)
        container.pack(fill="both", expand=True)

        self.frames = {}
        for F in (Hatchery, CreateHabit):
            frame = F(parent=container, controller=self)
            self.frames[F.__name__] = frame
            frame.grid(row=0, column=0, sticky="nsew")
        container.rowconfigure(0, weight=1)
        container.columnconfigure(0, weight=1)

        self.protocol("WM_DELETE_WINDOW", self.on_close)
        self.show("Hatchery")

    def show(self, name):
        frame = self.frames[name]
        if hasattr(frame, "refresh"):
            frame.refresh()
        frame.tkraise()

    def on_close(self):
        self.session.writer.close()
        self.destroy()


def main():
    config = load_config()
    setup_logging(config)
    store = HabitStore(config.make_backend(), key=config.storage_key)
    session = HabitSession(store, BackgroundWriter(store))
    session.load()
    logger.info("Using %s backend", config.backend)
    App(session).mainloop()


if __name__ == "__main__":
    main()
