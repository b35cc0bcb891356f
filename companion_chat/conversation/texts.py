"""Fixed user-facing texts. The assistant speaks German."""

USER_LABEL = "Du"

APOLOGY_TEXT = (
    "Entschuldigung, ich habe gerade Verbindungsprobleme. "
    "Bitte versuche es gleich noch einmal."
)

CLEAR_CONFIRMATION_TEXT = "Möchtest du den Chatverlauf wirklich löschen?"


def greeting_text(assistant_name: str) -> str:
    return f"Hallo! Ich bin {assistant_name}. Wie kann ich dir heute helfen?"


def name_change_text(assistant_name: str) -> str:
    return f'Alles klar! Du kannst mich ab jetzt "{assistant_name}" nennen.'
