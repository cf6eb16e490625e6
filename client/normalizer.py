# client/normalizer.py
import re
from typing import Dict, Iterable, Optional

from client.dom import DATA_TAGS, FormControl

# Canonical field -> accepted raw names, in priority order
CANONICAL_FIELD_ALIASES = {
    "fullName": ("fullname", "name", "full-name", "your-name"),
    "contactNumber": ("contactnumber", "phone", "tel", "your-tel"),
    "city": ("city", "location"),
    "interestedCourse": ("interestedcourse", "course", "select", "menu-447"),
    "message": ("message", "textarea"),
}


def control_name(control: FormControl) -> Optional[str]:
    """name attribute, then placeholder (lower-cased, no whitespace), then id."""
    if control.name:
        return control.name
    if control.placeholder:
        placeholder = re.sub(r"\s+", "", control.placeholder.lower())
        if placeholder:
            return placeholder
    return control.id or None


def control_value(control: FormControl) -> str:
    # selects report the label the visitor saw, not the option value
    if control.is_select:
        option = control.selected_option
        if option is not None and option.text:
            return option.text
    return control.value or ""


def extract_raw_values(controls: Iterable[FormControl]) -> Dict[str, str]:
    raw = {}
    for control in controls:
        if control.tag not in DATA_TAGS or control.is_submit:
            continue
        name = control_name(control)
        if name:
            raw[name] = control_value(control)
    return raw


def resolve_aliases(raw: Dict[str, str]) -> Dict[str, str]:
    """First alias with a non-empty value wins; unmatched fields come back as ""."""
    resolved = {}
    for canonical, aliases in CANONICAL_FIELD_ALIASES.items():
        resolved[canonical] = next((raw[a] for a in aliases if raw.get(a)), "")
    return resolved


def normalize_fields(controls: Iterable[FormControl]) -> Dict[str, str]:
    return resolve_aliases(extract_raw_values(controls))
