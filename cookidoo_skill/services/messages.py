"""Spoken response texts (German, the skill's only locale)."""

WELCOME = (
    "Willkommen bei der Cookidoo Einkaufsliste. "
    "Du kannst Artikel hinzufügen, indem du zum Beispiel sagst: Füge Milch hinzu."
)
HELP = (
    "Du kannst Artikel zu deiner Cookidoo Einkaufsliste hinzufügen. "
    "Sage zum Beispiel: Füge Milch hinzu, oder: Ich brauche Eier. "
    "Was möchtest du hinzufügen?"
)
GOODBYE = "Auf Wiedersehen!"
UNKNOWN = "Das habe ich leider nicht verstanden. Bitte sage zum Beispiel: Füge Milch hinzu."

ITEM_ADDED = "{name} wurde zur Einkaufsliste hinzugefügt."
INVALID_ITEM_NAME = "Der Artikelname ist ungültig: {reason}"
LOGIN_FAILED = (
    "Die Anmeldung bei Cookidoo ist fehlgeschlagen. Bitte überprüfe deine Zugangsdaten."
)
ITEM_NOT_ADDED = (
    "Der Artikel konnte nicht hinzugefügt werden. Bitte versuche es später erneut."
)
UNEXPECTED_ERROR = "Ein unerwarteter Fehler ist aufgetreten."

REQUEST_NOT_UNDERSTOOD = "Fehler beim Verarbeiten der Anfrage."
INTERNAL_ERROR = "Interner Fehler."


def item_added(name: str) -> str:
    """Confirmation for a successfully added item."""
    return ITEM_ADDED.format(name=name)


def invalid_item_name(reason: str) -> str:
    """Explain why the spoken item name was rejected."""
    return INVALID_ITEM_NAME.format(reason=reason)


__all__ = [
    "GOODBYE",
    "HELP",
    "INTERNAL_ERROR",
    "ITEM_NOT_ADDED",
    "LOGIN_FAILED",
    "REQUEST_NOT_UNDERSTOOD",
    "UNEXPECTED_ERROR",
    "UNKNOWN",
    "WELCOME",
    "invalid_item_name",
    "item_added",
]
