import time
from pathlib import Path
from typing import Callable
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler


class SourceUpdateHandler(FileSystemEventHandler):
    """
    Listens for saves of one Agal source file and triggers a callback.
    """
    def __init__(self, target_file: str, callback: Callable[[str], None]):
        self.target_file = str(Path(target_file).resolve())
        self.callback = callback
        self.last_triggered = 0.0
        self.debounce_seconds = 0.5  # editors often write twice per save

    def _matches(self, path) -> bool:
        if isinstance(path, bytes):
            path = path.decode()
        return str(Path(path).resolve()) == self.target_file

    def _trigger(self):
        now = time.time()
        if now - self.last_triggered > self.debounce_seconds:
            self.last_triggered = now
            self.callback(self.target_file)

    def on_modified(self, event):
        if event.is_directory:
            return
        if self._matches(event.src_path):
            self._trigger()

    def on_moved(self, event):
        # Atomic-save editors write a temp file and rename it over the target
        if event.is_directory:
            return
        if self._matches(event.dest_path):
            self._trigger()


class FileWatcher:
    """
    Manages the watchdog observer thread.
    """
    def __init__(self):
        self.observer = Observer()
        self.watch = None

    def start_watching(self, file_path: str, callback: Callable[[str], None]):
        path = Path(file_path).resolve()
        if not path.exists():
            raise FileNotFoundError(f"Cannot watch non-existent file: {file_path}")

        handler = SourceUpdateHandler(str(path), callback)
        self.watch = self.observer.schedule(handler, str(path.parent), recursive=False)
        self.observer.start()

    def stop_watching(self):
        if self.observer.is_alive():
            self.observer.stop()
            self.observer.join()
