"""Phase-end sounds, played in the background."""
from __future__ import annotations
import os
import platform
import subprocess
import threading
from concurrent.futures import Future
from typing import Optional

IS_MAC = platform.system() == "Darwin"
IS_WIN = platform.system() == "Windows"

SYSTEM_SOUNDS = {
    "Darwin": "/System/Library/Sounds/Glass.aiff",
    "Linux": "/usr/share/sounds/freedesktop/stereo/complete.oga",
}


def player_commands(path: str) -> list[list[str]]:
    """Candidate command lines for playing path, in order of preference."""
    if IS_MAC:
        return [["afplay", path]]
    return [
        ["mpv", "--no-terminal", "--no-video", path],
        ["ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet", path],
        ["paplay", path],       # PulseAudio (wav/ogg only usually)
        ["aplay", "-q", path],  # ALSA (wav only)
    ]


class AudioPlayer:
    """Plays files in worker threads. play() returns a Future that resolves on end."""

    def __init__(self, commands=player_commands):
        self.commands = commands
        self._lock = threading.Lock()
        self._playing: dict[Future, Optional[subprocess.Popen]] = {}

    def default_sound(self) -> Optional[str]:
        return SYSTEM_SOUNDS.get(platform.system())

    def play(self, path: Optional[str] = None) -> Future:
        future: Future = Future()
        path = path or self.default_sound()
        if IS_WIN and not path:
            target = self._play_windows_alias
        elif not path or not os.path.exists(path):
            future.set_exception(FileNotFoundError(f"Sound file not found: {path}"))
            return future
        elif IS_WIN:
            target = self._play_windows_file
        else:
            target = self._play_command
        with self._lock:
            self._playing[future] = None
        threading.Thread(target=target, args=(future, path), daemon=True).start()
        return future

    @property
    def playing(self) -> int:
        with self._lock:
            return len(self._playing)

    def stop_all(self) -> None:
        with self._lock:
            procs = [p for p in self._playing.values() if p is not None]
        for proc in procs:
            try:
                proc.terminate()
            except OSError:
                pass

    def _finish(self, future: Future, error: Optional[BaseException] = None) -> None:
        with self._lock:
            self._playing.pop(future, None)
        if error is None:
            future.set_result(None)
        else:
            future.set_exception(error)

    def _play_command(self, future: Future, path: str) -> None:
        error: Optional[BaseException] = FileNotFoundError("No audio player found")
        try:
            for cmd in self.commands(path):
                try:
                    proc = subprocess.Popen(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
                except FileNotFoundError:
                    continue
                with self._lock:
                    self._playing[future] = proc
                code = proc.wait()
                error = None if code == 0 else RuntimeError(f"{cmd[0]} exited with status {code}")
                break
        except Exception as e:  # Any failure rejects the future
            error = e
        finally:
            self._finish(future, error)

    def _play_windows_file(self, future: Future, path: str) -> None:
        self._play_winsound(future, path, "SND_FILENAME")

    def _play_windows_alias(self, future: Future, path: Optional[str]) -> None:
        self._play_winsound(future, "SystemExclamation", "SND_ALIAS")

    def _play_winsound(self, future: Future, sound: str, flag: str) -> None:
        error: Optional[BaseException] = None
        try:
            import winsound
            winsound.PlaySound(sound, getattr(winsound, flag))
        except Exception as e:
            error = e
        finally:
            self._finish(future, error)
