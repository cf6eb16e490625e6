# client/dom.py
"""
Minimal model of the markup a lead form is built from.

Only what the submission flow touches is modelled: control attributes and
values, the submit control's label and disabled state, and the feedback
message nodes inserted into the form.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Set

DATA_TAGS = ("input", "select", "textarea")
SUBMIT_TYPES = ("submit", "button")


@dataclass
class Option:
    text: str
    value: str = ""


@dataclass
class FormControl:
    tag: str = "input"
    type: str = "text"
    name: Optional[str] = None
    placeholder: Optional[str] = None
    id: Optional[str] = None
    value: str = ""
    options: List[Option] = field(default_factory=list)
    selected_index: int = -1
    classes: Set[str] = field(default_factory=set)

    @property
    def is_select(self) -> bool:
        return self.tag == "select"

    @property
    def is_submit(self) -> bool:
        return self.tag == "input" and self.type in SUBMIT_TYPES

    @property
    def selected_option(self) -> Optional[Option]:
        if 0 <= self.selected_index < len(self.options):
            return self.options[self.selected_index]
        return None

    def clear(self):
        if self.is_select:
            self.selected_index = 0 if self.options else -1
        else:
            self.value = ""
        self.classes.discard("input-error")


@dataclass(eq=False)
class SubmitControl:
    """A <button> (label in text) or an <input type="submit"> (label in value)."""

    tag: str = "button"
    text: str = "Submit"
    value: str = ""
    disabled: bool = False

    @property
    def label(self) -> str:
        return self.value if self.tag == "input" else self.text

    @label.setter
    def label(self, new_label: str):
        if self.tag == "input":
            self.value = new_label
        else:
            self.text = new_label


@dataclass(eq=False)
class FeedbackMessage:
    text: str
    kind: str  # "success" or "error"
    opacity: float = 1.0


@dataclass
class Form:
    controls: List[FormControl] = field(default_factory=list)
    submit: Optional[SubmitControl] = None
    # True when the submit control sits in a recognizable submit wrapper
    has_submit_wrapper: bool = False
    loading: bool = False
    children: list = field(default_factory=list)

    def __post_init__(self):
        if not self.children:
            self.children = list(self.controls)
            if self.submit is not None:
                self.children.append(self.submit)

    @property
    def message(self) -> Optional[FeedbackMessage]:
        for child in self.children:
            if isinstance(child, FeedbackMessage):
                return child
        return None

    def insert_message(self, msg: FeedbackMessage):
        """Replace any existing message; place it right after the submit control when wrapped."""
        existing = self.message
        if existing is not None:
            self.remove(existing)

        if self.has_submit_wrapper and self.submit in self.children:
            self.children.insert(self.children.index(self.submit) + 1, msg)
        else:
            self.children.append(msg)

    def remove(self, node):
        if node in self.children:
            self.children.remove(node)

    def clear_inputs(self):
        for control in self.controls:
            if not control.is_submit:
                control.clear()
