"""Fixed lookup tables for the itinerary engine: place lists and travel estimates."""

from __future__ import annotations

import re
from typing import Dict, List, Pattern, Tuple

from app.api.models.schemas import Vibe

DEFAULT_DESTINATION = "Your Destination"

RELIGIOUS_PLACES = ["rishikesh", "haridwar", "varanasi", "ayodhya", "tirupati", "amritsar", "dwarka"]
MOUNTAIN_PLACES = [
    "manali",
    "shimla",
    "mussoorie",
    "nainital",
    "darjeeling",
    "munnar",
    "ooty",
    "leh",
    "ladakh",
    "spiti",
    "kasol",
    "bir",
]
BEACH_PLACES = ["goa", "pondi", "pondicherry", "kovalam", "varkala", "andaman", "gokarna", "mahabalipuram"]
CITY_PLACES = ["bangalore", "mumbai", "delhi", "hyderabad", "chennai", "kolkata", "pune"]

MOUNTAIN_WORDS = ["mountain", "trek", "trekking", "hills", "snow"]
BEACH_WORDS = ["beach", "beaches", "sea", "coast"]
RELIGIOUS_WORDS = ["temple", "holy", "spiritual", "yoga", "meditation"]

# Destination fallback when the prompt has no "in/to <place>" phrase.
KNOWN_DESTINATIONS = [
    "goa",
    "manali",
    "rishikesh",
    "pondicherry",
    "pondi",
    "kerala",
    "shimla",
    "munnar",
    "leh",
    "udaipur",
    "jaipur",
    "darjeeling",
    "mumbai",
    "delhi",
    "bangalore",
    "ooty",
    "gokarna",
    "andaman",
    "varanasi",
    "haridwar",
    "mussoorie",
    "kasol",
    "spiti",
    "mahabalipuram",
    "kovalam",
    "varkala",
]


def _words(names: List[str]) -> Pattern[str]:
    return re.compile(r"\b(" + "|".join(names) + r")\b")


# Order matters: specific place names first, then generic nouns.
VIBE_RULES: List[Tuple[Pattern[str], Vibe]] = [
    (_words(RELIGIOUS_PLACES), "religious"),
    (_words(MOUNTAIN_PLACES), "mountain"),
    (_words(BEACH_PLACES), "beach"),
    (_words(CITY_PLACES), "city"),
    (_words(MOUNTAIN_WORDS), "mountain"),
    (_words(BEACH_WORDS), "beach"),
    (_words(RELIGIOUS_WORDS), "religious"),
]

KNOWN_DESTINATION_PATTERN = _words(KNOWN_DESTINATIONS)

DEFAULT_ESTIMATE_KEY = "default"

# One-way estimates from major Indian cities.
TRAVEL_ESTIMATES: Dict[str, Dict[str, str]] = {
    "rishikesh": {
        "flight": "N/A (nearest: Dehradun ~₹3–5k)",
        "train": "₹400–800",
        "bus": "₹500–1k",
        "notes": "Dehradun airport then cab/bus.",
    },
    "haridwar": {"flight": "N/A (Dehradun ~₹3–5k)", "train": "₹400–900", "bus": "₹500–1k"},
    "manali": {
        "flight": "N/A (Bhuntar ~₹5–8k)",
        "train": "N/A",
        "bus": "₹1k–1.5k (overnight)",
        "notes": "Delhi–Manali bus ~12–14 hrs.",
    },
    "shimla": {"flight": "N/A", "train": "₹400–1k (Kalka Shatabdi)", "bus": "₹600–1.2k"},
    "mussoorie": {"flight": "N/A (Dehradun ~₹3–5k)", "train": "₹400–800", "bus": "₹500–900"},
    "goa": {"flight": "₹3k–8k", "train": "₹1k–2.5k", "bus": "₹1k–2k", "notes": "Flight to Goa (Dabolim/Mopa)."},
    "pondicherry": {
        "flight": "N/A (Chennai ~₹2–4k)",
        "train": "₹500–1.2k",
        "bus": "₹400–800",
        "notes": "Chennai then 2–3 hr drive/bus.",
    },
    "pondi": {"flight": "N/A (Chennai ~₹2–4k)", "train": "₹500–1.2k", "bus": "₹400–800"},
    "kerala": {"flight": "₹4k–10k (Kochi/Trivandrum)", "train": "₹1k–3k", "bus": "₹1k–2k"},
    "munnar": {"flight": "N/A (Kochi ~₹4–8k)", "train": "N/A", "bus": "₹300–600 from Kochi"},
    "leh": {"flight": "₹8k–15k", "train": "N/A", "bus": "N/A", "notes": "Flights from Delhi; road only in season."},
    "ladakh": {"flight": "₹8k–15k (Leh)", "train": "N/A", "bus": "N/A"},
    "darjeeling": {"flight": "N/A (Bagdogra ~₹4–7k)", "train": "₹600–1.5k", "bus": "₹800–1.5k"},
    "gangtok": {"flight": "N/A (Bagdogra ~₹4–7k)", "train": "N/A", "bus": "₹600–1k"},
    "udaipur": {"flight": "₹4k–9k", "train": "₹500–1.5k", "bus": "₹600–1.2k"},
    "jaipur": {"flight": "₹3k–7k", "train": "₹400–1.2k", "bus": "₹500–1k"},
    DEFAULT_ESTIMATE_KEY: {"flight": "₹2k–6k (varies)", "train": "₹400–1.5k", "bus": "₹400–1.2k"},
}
