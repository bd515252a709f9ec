"""Class-name taxonomy: classify a class token by scanning its characters.

The grammar (case-sensitive, whole-token):

    Component       ^[A-Z][A-Za-z0-9]*$
    Modifier        ^[A-Z][A-Za-z0-9]*--[a-z][A-Za-z0-9]*$
    SubComponent    ^[A-Z][A-Za-z0-9]*-[a-z][A-Za-z0-9]*$
    State           ^is-[a-z][A-Za-z0-9]*$
    Helper          ^[a-z][a-z0-9]*-[a-z][A-Za-z0-9]*$
    HelperModifier  Helper followed by --[a-z][A-Za-z0-9]*

Anything else is Unclassified. The patterns are mutually exclusive by case of
the first character and hyphen count, so a single left-to-right scan decides.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

__all__ = ["ClassTag", "ClassToken", "classify"]


class ClassTag(Enum):
    COMPONENT = "Component"
    SUB_COMPONENT = "SubComponent"
    MODIFIER = "Modifier"
    STATE = "State"
    HELPER = "Helper"
    HELPER_MODIFIER = "HelperModifier"
    UNCLASSIFIED = "Unclassified"


@dataclass(frozen=True)
class ClassToken:
    """A class name with its taxonomy tag and parsed segments."""

    raw: str
    tag: ClassTag
    component_name: str = ""
    sub_component_name: str = ""
    modifier_name: str = ""
    state_name: str = ""
    helper_subject: str = ""
    helper_name: str = ""

    @property
    def is_classified(self) -> bool:
        return self.tag is not ClassTag.UNCLASSIFIED


def _is_upper(char: str) -> bool:
    return "A" <= char <= "Z"


def _is_lower(char: str) -> bool:
    return "a" <= char <= "z"


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_alnum(char: str) -> bool:
    return _is_upper(char) or _is_lower(char) or _is_digit(char)


def _is_lower_or_digit(char: str) -> bool:
    return _is_lower(char) or _is_digit(char)


def _scan_segment(
    text: str,
    pos: int,
    head: Callable[[str], bool],
    body: Callable[[str], bool] = _is_alnum,
) -> int | None:
    """Scan ``head body*`` from *pos*; return the end index or ``None``."""
    if pos >= len(text) or not head(text[pos]):
        return None
    pos += 1
    while pos < len(text) and body(text[pos]):
        pos += 1
    return pos


def _scan_modifier(text: str, pos: int) -> int | None:
    """Scan ``--[a-z][A-Za-z0-9]*`` from *pos*."""
    if not text.startswith("--", pos):
        return None
    return _scan_segment(text, pos + 2, _is_lower)


def _classify_upper(name: str) -> ClassToken:
    head_end = _scan_segment(name, 0, _is_upper)
    if head_end is None:
        return ClassToken(name, ClassTag.UNCLASSIFIED)
    component = name[:head_end]
    if head_end == len(name):
        return ClassToken(name, ClassTag.COMPONENT, component_name=component)

    end = _scan_modifier(name, head_end)
    if end == len(name):
        return ClassToken(
            name,
            ClassTag.MODIFIER,
            component_name=component,
            modifier_name=name[head_end + 2 :],
        )

    if name[head_end] == "-" and not name.startswith("--", head_end):
        end = _scan_segment(name, head_end + 1, _is_lower)
        if end == len(name):
            return ClassToken(
                name,
                ClassTag.SUB_COMPONENT,
                component_name=component,
                sub_component_name=name[head_end + 1 :],
            )
    return ClassToken(name, ClassTag.UNCLASSIFIED)


def _classify_lower(name: str) -> ClassToken:
    if name.startswith("is-"):
        end = _scan_segment(name, 3, _is_lower)
        if end == len(name):
            return ClassToken(name, ClassTag.STATE, state_name=name[3:])

    subject_end = _scan_segment(name, 0, _is_lower, _is_lower_or_digit)
    if subject_end is None or subject_end >= len(name) or name[subject_end] != "-":
        return ClassToken(name, ClassTag.UNCLASSIFIED)
    helper_end = _scan_segment(name, subject_end + 1, _is_lower)
    if helper_end is None:
        return ClassToken(name, ClassTag.UNCLASSIFIED)

    subject = name[:subject_end]
    helper = name[subject_end + 1 : helper_end]
    if helper_end == len(name):
        return ClassToken(
            name, ClassTag.HELPER, helper_subject=subject, helper_name=helper
        )
    end = _scan_modifier(name, helper_end)
    if end == len(name):
        return ClassToken(
            name,
            ClassTag.HELPER_MODIFIER,
            helper_subject=subject,
            helper_name=helper,
            modifier_name=name[helper_end + 2 :],
        )
    return ClassToken(name, ClassTag.UNCLASSIFIED)


def classify(name: str) -> ClassToken:
    """Assign exactly one taxonomy tag to the class *name* (without the dot)."""
    if not name:
        return ClassToken(name, ClassTag.UNCLASSIFIED)
    if _is_upper(name[0]):
        return _classify_upper(name)
    if _is_lower(name[0]):
        return _classify_lower(name)
    return ClassToken(name, ClassTag.UNCLASSIFIED)
