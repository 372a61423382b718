"""Role inference from element ids.

Hosts usually name their elements after what they are (``"close_button"``,
``"nav_bar"``, ``"tooltip_help"``); those names are enough to guess a
placement role when none is given at registration.
"""

from __future__ import annotations

from layoutiq.core.agents.models import ElementRole

# Checked in order; first match wins.
_KEYWORD_ROLES: tuple[tuple[tuple[str, ...], ElementRole], ...] = (
    (("nav", "menu", "header"), ElementRole.ANCHOR),
    (("debug", "info", "stat"), ElementRole.SCOUT),
    (("modal", "overlay", "popup"), ElementRole.DIPLOMAT),
    (("bg", "background", "decoration"), ElementRole.INVISIBLE),
    (("tooltip", "help", "hint"), ElementRole.FOLLOWER),
    (("item", "card", "tile"), ElementRole.CROWD),
    (("corner",), ElementRole.ANCHOR),
)

_BUTTON_ROLES: tuple[tuple[tuple[str, ...], ElementRole], ...] = (
    (("debug", "dev"), ElementRole.SCOUT),
    (("close", "back"), ElementRole.SENTINEL),
    (("menu", "nav"), ElementRole.ANCHOR),
    (("cta", "primary"), ElementRole.MERCHANT),
)


def _match(text: str, table: tuple[tuple[tuple[str, ...], ElementRole], ...]) -> ElementRole | None:
    for keywords, role in table:
        if any(k in text for k in keywords):
            return role
    return None


def infer_role(element_id: str) -> ElementRole | None:
    """Guess an :class:`ElementRole` from *element_id*, or ``None``."""
    lower = element_id.lower()

    if "button" in lower or "btn" in lower:
        return _match(lower, _BUTTON_ROLES) or ElementRole.GUARDIAN

    return _match(lower, _KEYWORD_ROLES)
