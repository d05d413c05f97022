"""French phrasing of itinerary outcomes."""

from tram_skill.models.errors import (
    InvalidLeadTime,
    ItineraryError,
    MissingDeparture,
    MissingDestination,
    NetworkFailure,
    ScheduleUnavailable,
    UnknownStop,
    UnsupportedIntent,
)
from tram_skill.models.network import Stop
from tram_skill.models.responses import ItineraryAnswer

LAUNCH_PROMPT = "Où voulez-vous aller ?"
HELP_TEXT = (
    "Demandez par exemple : quand partir de Théâtre des Arts pour aller à Technopôle. "
    "Vous pouvez aussi enregistrer un lieu de départ et une destination par défaut."
)
GOODBYE_TEXT = "À bientôt !"
MALFORMED_REQUEST_TEXT = "Désolé, une erreur est survenue lors de la lecture de votre requête"
UNSUPPORTED_TEXT = "Désolé, je ne suis pas capable de traiter cette requête"


def minutes_text(minutes: int) -> str:
    return "1 minute" if minutes == 1 else f"{minutes} minutes"


def answer_text(answer: ItineraryAnswer) -> str:
    """Phrase an itinerary answer."""
    route = f"à {answer.departure.stop_name} en direction de {answer.destination.stop_name}"

    if not answer.has_departure:
        return f"Il n'y a pas de prochain tram {route}."

    if answer.lead_minutes == 0:
        if answer.wait_minutes == 0:
            return f"Le prochain tram {route} part maintenant."
        return f"Le prochain tram {route} part dans {minutes_text(answer.wait_minutes)}."

    sentence = (
        f"Le prochain tram {route} part dans "
        f"{minutes_text(answer.minutes_until_departure)}. "
        f"Avec vos {minutes_text(answer.lead_minutes)} de trajet, "
    )
    if answer.wait_minutes == 0:
        return sentence + "vous devez partir maintenant."
    return sentence + f"vous devez partir dans {minutes_text(answer.wait_minutes)}."


def departure_saved_text(stop: Stop, lead_minutes: int) -> str:
    text = (
        f"Votre lieu de départ par défaut est maintenant {stop.name}. "
        "Vous ne devrez plus le préciser à chaque fois."
    )
    if lead_minutes:
        text += f" Je compterai {minutes_text(lead_minutes)} pour rejoindre l'arrêt."
    return text


def destination_saved_text(stop: Stop) -> str:
    return f"Votre destination par défaut est maintenant {stop.name}."


def defaults_cleared_text() -> str:
    return "C'est noté, j'ai oublié votre lieu de départ et votre destination."


def error_text(error: ItineraryError) -> str:
    """Phrase a failure so the conversation can go on."""
    if isinstance(error, UnknownStop):
        return f"Je ne trouve pas d'arrêt correspondant à {error.name}."
    if isinstance(error, MissingDeparture):
        return (
            "Lieu de départ manquant. Précisez-le, "
            "ou enregistrez un lieu de départ par défaut."
        )
    if isinstance(error, MissingDestination):
        return (
            "Destination manquante. Précisez-la, "
            "ou enregistrez une destination par défaut."
        )
    if isinstance(error, NetworkFailure):
        return "Je n'arrive pas à joindre le service des horaires. Réessayez dans un instant."
    if isinstance(error, ScheduleUnavailable):
        return "Horaires indisponibles pour le moment."
    if isinstance(error, InvalidLeadTime):
        return f"Je n'ai pas compris la durée {error.value}."
    if isinstance(error, UnsupportedIntent):
        return UNSUPPORTED_TEXT
    return "Désolé, une erreur est survenue."
