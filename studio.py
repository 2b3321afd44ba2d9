"""Per-user studio state: the current product image, the edit chat, and the
description/sketch panels.

A session is only touched from request handlers. Its lock guards state
changes but is released while a Gemini call is in flight, so a description,
a sketch and a chat edit can all be running at the same time.
"""
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from uuid import uuid4

from errors import GenerationError, ValidationError

logger = logging.getLogger(__name__)

PANELS = ("chat", "description", "sketch")
OPERATIONS = ("description", "sketch", "chat")

MISSING_IMAGE_MESSAGE = "Please upload a main product image first."
EMPTY_MESSAGE = "Type a prompt or attach an image first."


@dataclass(frozen=True)
class ChatMessage:
    origin: str  # "user" or "assistant"
    text: str
    images: tuple = ()

    def to_dict(self):
        return {"origin": self.origin, "text": self.text, "images": list(self.images)}


class ProductSession:
    def __init__(self, service):
        self.service = service
        self.main_image = None
        self.attachments = []
        self.description = ""
        self.sketch = None
        self.transcript = []
        self.busy = {op: False for op in OPERATIONS}
        self.error = None
        self.active_panel = "chat"
        # Bumped on every main-image upload; results from an older image are dropped.
        self._generation = 0
        self._lock = threading.Lock()

    # ── panel & uploads ──

    def switch_panel(self, panel):
        if panel not in PANELS:
            raise ValidationError(f"Unknown panel: {panel}")
        with self._lock:
            self.active_panel = panel

    def upload_main_image(self, asset):
        """Start over with a new product image."""
        with self._lock:
            self.main_image = asset
            self.description = ""
            self.sketch = None
            self.transcript = []
            self.error = None
            self._generation += 1

    def add_attachment(self, asset):
        with self._lock:
            self.attachments.append(asset)

    # ── generation ──

    def _require_main_image(self):
        if self.main_image is None:
            self.error = MISSING_IMAGE_MESSAGE
            raise ValidationError(MISSING_IMAGE_MESSAGE)

    def _mark_busy(self, operation):
        self.busy[operation] = True
        self.error = None

    def _clear_busy(self, operation):
        with self._lock:
            self.busy[operation] = False

    def _run(self, operation, call, apply):
        with self._lock:
            self._require_main_image()
            image = self.main_image
            generation = self._generation
            self._mark_busy(operation)

        try:
            try:
                result = call(image)
            except GenerationError as e:
                with self._lock:
                    if generation != self._generation:
                        logger.info("Discarding %s failure for a replaced image: %s", operation, e)
                        return
                    self.error = str(e)
                raise
            with self._lock:
                if generation != self._generation:
                    logger.info("Discarding %s result for a replaced image", operation)
                    return
                apply(result)
        finally:
            self._clear_busy(operation)

    def generate_description(self):
        def apply(text):
            self.description = text

        self._run("description", self.service.generate_description, apply)

    def generate_sketch(self):
        def apply(sketch):
            self.sketch = sketch

        self._run("sketch", self.service.generate_sketch, apply)

    def send_message(self, prompt):
        """Post a chat edit request and apply the returned image.

        The user's entry is appended before the remote call; the assistant's
        entry (or an apology carrying the error) once it resolves.
        """
        prompt = (prompt or "").strip()
        with self._lock:
            self._require_main_image()
            if not prompt and not self.attachments:
                raise ValidationError(EMPTY_MESSAGE)
            image = self.main_image
            attachments = list(self.attachments)
            generation = self._generation
            self.transcript.append(
                ChatMessage("user", prompt, tuple(a.data_url for a in attachments))
            )
            self.attachments = []
            self._mark_busy("chat")

        try:
            try:
                result = self.service.edit_image(image, attachments, prompt)
            except GenerationError as e:
                with self._lock:
                    if generation != self._generation:
                        logger.info("Discarding chat edit failure for a replaced image: %s", e)
                        return
                    self.error = str(e)
                    self.transcript.append(
                        ChatMessage("assistant", f"Sorry, I encountered an error: {e}")
                    )
                raise
            with self._lock:
                if generation != self._generation:
                    logger.info("Discarding chat edit for a replaced image")
                    return
                self.main_image = result.image
                self.transcript.append(
                    ChatMessage("assistant", result.text, (result.image.data_url,))
                )
        finally:
            self._clear_busy("chat")

    def to_dict(self):
        with self._lock:
            return {
                "main_image": self.main_image.data_url if self.main_image else None,
                "attachments": [a.data_url for a in self.attachments],
                "description": self.description,
                "sketch": self.sketch.data_url if self.sketch else None,
                "transcript": [m.to_dict() for m in self.transcript],
                "busy": dict(self.busy),
                "error": self.error,
                "active_panel": self.active_panel,
            }


class SessionStore:
    """In-memory sessions keyed by a random hex id; oldest evicted first."""

    def __init__(self, service, max_sessions=200):
        self.service = service
        self.max_sessions = max_sessions
        self._sessions = OrderedDict()
        self._lock = threading.Lock()

    def create(self):
        session_id = uuid4().hex
        with self._lock:
            self._sessions[session_id] = ProductSession(self.service)
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted studio session %s", evicted)
        return session_id

    def get(self, session_id):
        if not session_id:
            return None
        with self._lock:
            return self._sessions.get(session_id)

    def __len__(self):
        with self._lock:
            return len(self._sessions)
