"""
Localized reply templates for the shopping assistant.

WHAT: Reply strings for every bot turn in English, Hindi and Kannada
WHY: Replies follow the buyer's script; copy stays out of the decision logic
HOW: Template strings keyed by reply kind and locale, rendered with str.format
"""

import re
from typing import Optional

from ..models.negotiation import LocaleTag
from .intent_router import Destination

FALLBACK_LOCALE: LocaleTag = "en"

ROUTE_MARKER_TEMPLATE = "\n[ROUTE:{route}]"
ROUTE_MARKER_RE = re.compile(r"\[ROUTE:([^\]]+)\]\s*$")


WELCOME = {
    "en": "Hi! 👋 I'm ShopMate, your shopping buddy. How can I help you today?",
    "hi": "नमस्ते! 👋 मैं ShopMate हूँ, आपका शॉपिंग साथी। आज मैं आपकी कैसे मदद करूँ?",
    "kn": "ನಮಸ್ಕಾರ! 👋 ನಾನು ShopMate, ನಿಮ್ಮ ಶಾಪಿಂಗ್ ಗೆಳೆಯ. ಇಂದು ನಾನು ಹೇಗೆ ಸಹಾಯ ಮಾಡಲಿ?",
}

NEGOTIATION_START = {
    "en": "I see you're interested in {product} priced at {price}. Why would you like a discount?",
    "hi": "मैं देख रहा हूँ कि आपको {product} पसंद है, जिसकी कीमत {price} है। आपको छूट क्यों चाहिए?",
    "kn": "ನಿಮಗೆ {price} ಬೆಲೆಯ {product} ಇಷ್ಟವಾಗಿದೆ ಎಂದು ಕಾಣುತ್ತದೆ. ನಿಮಗೆ ರಿಯಾಯಿತಿ ಏಕೆ ಬೇಕು?",
}

COUNTEROFFER = {
    "en": "Alright — I can offer {offer} (about {discount}% off). Do you accept?",
    "hi": "ठीक है — मैं आपको {offer} की पेशकश कर सकता हूँ (लगभग {discount}% छूट)। स्वीकार हैं?",
    "kn": "ಸರಿ — ನಾನು ನಿಮಗೆ {offer} ನೀಡಬಹುದು (ಸುಮಾರು {discount}% ಕಡಿತ). ಒಪ್ಪುತ್ತೀರಿ?",
}

DEAL_CONFIRMED = {
    "en": "Deal confirmed at {price}! Should I add it to your cart? 😄",
    "hi": "{price} पर सौदा पक्का! क्या मैं इसे आपकी कार्ट में जोड़ दूं? 😄",
    "kn": "{price} ಗೆ ವ್ಯವಹಾರ ದೃಢೀಕರಿಸಲಾಯಿತು! ಇದನ್ನು ನಿಮ್ಮ ಕಾರ್ಟ್‌ಗೆ ಸೇರಿಸಬೇಕೆ? 😄",
}

HELP = {
    "en": "I'm here to help! 💛 You can browse groceries, clothes, electronics, or check your cart.",
    "hi": "मैं आपकी मदद के लिए यहाँ हूँ! 💛 आप किराना, कपड़े, इलेक्ट्रॉनिक्स देख सकते हैं या अपनी कार्ट चेक कर सकते हैं।",
    "kn": "ನಾನು ನಿಮಗೆ ಸಹಾಯ ಮಾಡಲು ಇಲ್ಲಿದ್ದೇನೆ! 💛 ನೀವು ದಿನಸಿ, ಬಟ್ಟೆಗಳು, ಎಲೆಕ್ಟ್ರಾನಿಕ್ಸ್ ನೋಡಬಹುದು ಅಥವಾ ನಿಮ್ಮ ಕಾರ್ಟ್ ಪರಿಶೀಲಿಸಬಹುದು।",
}

ROUTE_CONFIRMATIONS: dict[Destination, dict[str, str]] = {
    Destination.CART: {
        "en": "Got it! Opening your cart now 🛒💛",
        "hi": "ठीक है! आपकी कार्ट खोल रहा हूँ 🛒💛",
        "kn": "ಸರಿ! ನಿಮ್ಮ ಕಾರ್ಟ್ ತೆರೆಯುತ್ತಿದ್ದೇನೆ 🛒💛",
    },
    Destination.GROCERY: {
        "en": "Yum! Let's check out the grocery section 🥦✨",
        "hi": "यम! किराने का सेक्शन खोल रहा हूँ 🥦✨",
        "kn": "ಯಮ್! ದಿನಸಿ ವಿಭಾಗ ತೆರೆಯುತ್ತಿದ್ದೇನೆ 🥦✨",
    },
    Destination.CLOTHING: {
        "en": "Nice choice! Taking you to the clothes section 👕✨",
        "hi": "बढ़िया! कपड़ों का सेक्शन खोल रहा हूँ 👕✨",
        "kn": "ಚೆನ್ನಾಗಿದೆ! ಬಟ್ಟೆಗಳ ವಿಭಾಗ ತೆರೆಯುತ್ತಿದ್ದೇನೆ 👕✨",
    },
    Destination.ELECTRONICS: {
        "en": "Great! Taking you to the electronics section 📱✨",
        "hi": "शानदार! इलेक्ट्रॉनिक्स सेक्शन खोल रहा हूँ 📱✨",
        "kn": "ಅದ್ಭುತ! ಎಲೆಕ್ಟ್ರಾನಿಕ್ಸ್ ವಿಭಾಗ ತೆರೆಯುತ್ತಿದ್ದೇನೆ 📱✨",
    },
    Destination.CHECKOUT: {
        "en": "Awesome! Let's go to checkout 💳✨",
        "hi": "बढ़िया! चेकआउट पेज खोल रहा हूँ 💳✨",
        "kn": "ಚೆನ್ನಾಗಿದೆ! ಚೆಕ್‌ಔಟ್ ಪುಟ ತೆರೆಯುತ್ತಿದ್ದೇನೆ 💳✨",
    },
    Destination.AUTH: {
        "en": "Sure! Taking you to login & signup page 😊",
        "hi": "बिल्कुल! लॉगिन पेज खोल रहा हूँ 😊",
        "kn": "ಖಂಡಿತ! ಲಾಗಿನ್ ಪುಟ ತೆರೆಯುತ್ತಿದ್ದೇನೆ 😊",
    },
    Destination.HOME: {
        "en": "Going back to home 🏠",
        "hi": "होम पेज पर वापस जा रहे हैं 🏠",
        "kn": "ಮುಖಪುಟಕ್ಕೆ ಹಿಂತಿರುಗುತ್ತಿದ್ದೇವೆ 🏠",
    },
}


def _pick(templates: dict[str, str], language: str) -> str:
    return templates.get(language) or templates[FALLBACK_LOCALE]


def render_welcome(language: str = FALLBACK_LOCALE) -> str:
    return _pick(WELCOME, language)


def render_negotiation_start(product_name: str, price: str, language: str) -> str:
    return _pick(NEGOTIATION_START, language).format(product=product_name, price=price)


def render_counteroffer(offer: str, discount: str, language: str) -> str:
    return _pick(COUNTEROFFER, language).format(offer=offer, discount=discount)


def render_deal_confirmed(price: str, language: str) -> str:
    return _pick(DEAL_CONFIRMED, language).format(price=price)


def render_help(language: str) -> str:
    return _pick(HELP, language)


def render_route_confirmation(destination: Destination, language: str) -> str:
    """Confirmation line followed by the machine-readable route marker."""
    text = _pick(ROUTE_CONFIRMATIONS[destination], language)
    return text + route_marker(destination)


def route_marker(destination: Destination) -> str:
    return ROUTE_MARKER_TEMPLATE.format(route=destination.route)


def parse_route_marker(text: str) -> Optional[Destination]:
    """
    Read the destination back out of a reply's trailing route marker.

    Returns None when the reply has no marker or names an unknown route.
    """
    if not text:
        return None
    match = ROUTE_MARKER_RE.search(text)
    if not match:
        return None
    try:
        return Destination(match.group(1))
    except ValueError:
        return None
