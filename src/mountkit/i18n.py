"""
Localization of user-facing strings.

Translations are looked up in the ``mountkit`` gettext domain; when no
catalog is installed the untranslated English strings are used.
"""

import gettext

DOMAIN = "mountkit"

_translation = gettext.translation(DOMAIN, fallback=True)


def _(message: str) -> str:
    return _translation.gettext(message)


def ngettext(singular: str, plural: str, n: int) -> str:
    return _translation.ngettext(singular, plural, n)


def not_available() -> str:
    """The localized placeholder for a value that could not be determined."""
    return _("n/a")
