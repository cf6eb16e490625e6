# client/controller.py
import asyncio
import enum
import logging
from typing import Optional

from client.api import SubmissionApi
from client.dom import FeedbackMessage, Form
from client.normalizer import normalize_fields

logger = logging.getLogger(__name__)

SUBMITTING_LABEL = "Submitting..."
DEFAULT_LABEL = "Submit"
NETWORK_ERROR_MESSAGE = "Network error. Please try again."
GENERIC_ERROR_MESSAGE = "Something went wrong"


class SubmissionState(str, enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


def presubmit_error(payload: dict) -> Optional[str]:
    if not (payload.get("fullName") or "").strip():
        return "Please enter your full name"
    if not (payload.get("contactNumber") or "").strip():
        return "Please enter your contact number"
    return None


class SubmissionController:
    """
    Drives one form through IDLE -> VALIDATING -> SUBMITTING -> SUCCESS/ERROR -> IDLE.

    At most one submission is in flight per controller; submit() calls made
    while one is running are ignored. The submit control is always re-enabled
    and relabelled once the request settles, whatever the outcome.
    """

    def __init__(self, form: Form, api: SubmissionApi,
                 success_visible: float = 5.0, success_fade: float = 0.3,
                 error_visible: float = 4.0):
        self.form = form
        self.api = api
        self.success_visible = success_visible
        self.success_fade = success_fade
        self.error_visible = error_visible

        self.state = SubmissionState.IDLE
        self._in_flight = False
        self._current: Optional[FeedbackMessage] = None
        self._timers = set()

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def submit(self, payload: Optional[dict] = None) -> SubmissionState:
        if self._in_flight:
            logger.debug("Submission already in flight, ignoring submit")
            return self.state

        if payload is None:
            payload = normalize_fields(self.form.controls)

        self._in_flight = True
        try:
            self.state = SubmissionState.VALIDATING
            error = presubmit_error(payload)
            if error:
                self._show(error, "error")
            else:
                await self._send(payload)
        finally:
            self._in_flight = False
        return self.state

    async def _send(self, payload: dict):
        self.state = SubmissionState.SUBMITTING
        submit = self.form.submit
        original_label = None

        self.form.loading = True
        if submit is not None:
            submit.disabled = True
            original_label = submit.label
            submit.label = SUBMITTING_LABEL

        try:
            try:
                result = await self.api.submit(payload)
            except Exception:
                # transport failures, unreadable bodies and anything unexpected
                logger.exception("Form submission error")
                self._show(NETWORK_ERROR_MESSAGE, "error")
                return

            if result.get("success"):
                self._show(result.get("message") or "", "success")
                self.form.clear_inputs()
            else:
                self._show(result.get("message") or GENERIC_ERROR_MESSAGE, "error")
        finally:
            self.form.loading = False
            if submit is not None:
                submit.disabled = False
                submit.label = original_label or DEFAULT_LABEL

    def _show(self, text: str, kind: str):
        msg = FeedbackMessage(text=text, kind=kind)
        self.form.insert_message(msg)
        self._current = msg
        self.state = SubmissionState.SUCCESS if kind == "success" else SubmissionState.ERROR

        if kind == "success":
            timer = self._expire(msg, self.success_visible, self.success_fade)
        else:
            timer = self._expire(msg, self.error_visible, 0)
        task = asyncio.get_running_loop().create_task(timer)
        self._timers.add(task)
        task.add_done_callback(self._timers.discard)

    async def _expire(self, msg: FeedbackMessage, visible: float, fade: float):
        await asyncio.sleep(visible)
        if fade:
            msg.opacity = 0.0
            await asyncio.sleep(fade)
        self.form.remove(msg)

        if self._current is msg:
            self._current = None
            if self.state in (SubmissionState.SUCCESS, SubmissionState.ERROR):
                self.state = SubmissionState.IDLE

    async def wait_until_idle(self):
        """Wait for any displayed feedback message to expire."""
        while self._timers:
            await asyncio.gather(*list(self._timers))
