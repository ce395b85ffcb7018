"""
Toonpack Prompt Templates

Curated prompt fragments for cartoon sticker generation.
"""

DEFAULT_STYLE = "cute_cartoon"
DEFAULT_BODY_TYPE = "half_body"
NEUTRAL_EMOTION_PROMPT = "with neutral expression"

# Emotion presets; any other label falls back to a neutral expression
EMOTION_PRESETS = {
    "happy": {
        "name": "Happy",
        "prompt": "smiling happily with a big joyful smile",
    },
    "sad": {
        "name": "Sad",
        "prompt": "looking sad with tears in eyes",
    },
    "angry": {
        "name": "Angry",
        "prompt": "looking angry with furrowed brows",
    },
    "surprised": {
        "name": "Surprised",
        "prompt": "looking surprised with wide open eyes and mouth",
    },
    "love": {
        "name": "Love",
        "prompt": "showing love with heart eyes and blushing cheeks",
    },
    "cool": {
        "name": "Cool",
        "prompt": "looking cool with sunglasses and confident expression",
    },
    "excited": {
        "name": "Excited",
        "prompt": "looking excited with sparkling eyes and energetic pose",
    },
    "tired": {
        "name": "Tired",
        "prompt": "looking tired with sleepy eyes and yawning",
    },
}

# Art style presets
STYLE_PRESETS = {
    "cute_cartoon": {
        "name": "Cute Cartoon",
        "description": "Colorful kawaii look with big eyes and a chibi body",
        "prompt": (
            "fun, colorful, kawaii anime style with big expressive eyes, "
            "simple shapes, and vibrant colors. "
            "The character should be chibi-style (small body, big head)"
        ),
    },
    "realistic_cartoon": {
        "name": "Realistic Cartoon",
        "description": "Semi-realistic features with cartoon shading",
        "prompt": (
            "semi-realistic cartoon style with detailed features, "
            "natural proportions, and realistic shading "
            "while maintaining a stylized cartoon look"
        ),
    },
    "anime": {
        "name": "Anime",
        "description": "Classic anime / manga rendering",
        "prompt": (
            "anime/manga style with large expressive eyes, detailed hair, "
            "and typical anime art characteristics"
        ),
    },
    "chibi": {
        "name": "Chibi",
        "description": "Super deformed, oversized head on a tiny body",
        "prompt": (
            "super deformed chibi style with oversized head "
            "(about 1:2 head-to-body ratio), tiny body, "
            "and extremely cute simplified features"
        ),
    },
}

# Framing presets
BODY_TYPE_PRESETS = {
    "half_body": {
        "name": "Half Body",
        "description": "Waist-up portrait",
        "prompt": "Show the character from waist up (half body portrait)",
    },
    "full_body": {
        "name": "Full Body",
        "description": "Head to toe, standing or in motion",
        "prompt": (
            "Show the full body of the character from head to toe "
            "in a standing or dynamic pose"
        ),
    },
    "mixed": {
        "name": "Mixed",
        "description": "Alternate between half and full body",
        "prompt": "Vary between half body and full body poses",
    },
}

PROMPT_TEMPLATE = (
    "Create a cartoon sticker of a person {emotion}.\n"
    "Art style: {style}.\n"
    "{body_type}.\n"
    "Make it suitable for messaging apps.\n"
    "The background should be transparent or white.\n"
    "Keep the facial features recognizable but stylized in the chosen art style."
)


def build_prompt(
    emotion: str,
    style: str = DEFAULT_STYLE,
    body_type: str = DEFAULT_BODY_TYPE,
) -> str:
    """
    Build the generation prompt for one sticker.

    Unknown keys are not rejected: an unknown emotion renders a neutral
    expression, unknown style and body type use the defaults.

    Args:
        emotion: Emotion preset key or any free-text label
        style: Style preset key
        body_type: Body type preset key

    Returns:
        Natural-language prompt
    """
    emotion_preset = EMOTION_PRESETS.get(emotion)
    emotion_prompt = emotion_preset["prompt"] if emotion_preset else NEUTRAL_EMOTION_PROMPT
    style_prompt = STYLE_PRESETS.get(style, STYLE_PRESETS[DEFAULT_STYLE])["prompt"]
    body_type_prompt = BODY_TYPE_PRESETS.get(
        body_type, BODY_TYPE_PRESETS[DEFAULT_BODY_TYPE]
    )["prompt"]

    return PROMPT_TEMPLATE.format(
        emotion=emotion_prompt,
        style=style_prompt,
        body_type=body_type_prompt,
    )


def get_available_styles() -> list[dict]:
    """
    Get list of available style presets with metadata.

    Returns:
        List of style dictionaries with id, name, and description
    """
    return [
        {
            "id": key,
            "name": preset["name"],
            "description": preset["description"],
        }
        for key, preset in STYLE_PRESETS.items()
    ]


def get_available_body_types() -> list[dict]:
    """List body type presets with id, name, and description."""
    return [
        {
            "id": key,
            "name": preset["name"],
            "description": preset["description"],
        }
        for key, preset in BODY_TYPE_PRESETS.items()
    ]


def get_available_emotions() -> list[dict]:
    """List emotion presets; the prompt fragment doubles as the description."""
    return [
        {
            "id": key,
            "name": preset["name"],
            "description": preset["prompt"],
        }
        for key, preset in EMOTION_PRESETS.items()
    ]
