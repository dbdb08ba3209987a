"""Keyboard shortcuts for the round timer.

Key sources hand over plain key names (``"space"``, ``"r"``, ...).  The
dispatcher answers whether it consumed the key so the source can stop the
host's default handling (scrolling on space, for one).
"""

from rt.common.logger import get_module_logger

log = get_module_logger(__name__)

SPACE = "space"


class CommandDispatcher:

    def __init__(self, timer, toggle_fullscreen):
        self._timer = timer
        self._bindings = {
            SPACE: timer.toggle_run,
            "r": timer.reset,
            "f": toggle_fullscreen,
            "m": timer.toggle_sound,
        }
        self._source = None

    @staticmethod
    def normalize(key):
        if key == " ":
            return SPACE
        return key.lower()

    def handle_key(self, key):
        action = self._bindings.get(self.normalize(key))
        if action is None:
            return False
        action()
        return True

    @property
    def attached(self):
        return self._source is not None

    # Only one source is ever listened to. Attaching again drops the old listener first.
    def attach(self, source):
        self.detach()
        source.add_key_listener(self.handle_key)
        self._source = source
        log.debug("Keyboard shortcuts attached")

    def detach(self):
        if self._source is None:
            return
        self._source.remove_key_listener(self.handle_key)
        self._source = None
        log.debug("Keyboard shortcuts detached")
