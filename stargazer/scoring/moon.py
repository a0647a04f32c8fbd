"""Moon phase classification and display names."""

from stargazer.models.score import MoonCategory, MoonPhase

MOON_PHASE_CATEGORY: dict[MoonPhase, MoonCategory] = {
    MoonPhase.NEW_MOON: MoonCategory.NEW,
    MoonPhase.WAXING_CRESCENT: MoonCategory.CRESCENT,
    MoonPhase.FIRST_QUARTER: MoonCategory.QUARTER,
    MoonPhase.WAXING_GIBBOUS: MoonCategory.GIBBOUS,
    MoonPhase.FULL_MOON: MoonCategory.FULL,
    MoonPhase.WANING_GIBBOUS: MoonCategory.GIBBOUS,
    MoonPhase.LAST_QUARTER: MoonCategory.QUARTER,
    MoonPhase.WANING_CRESCENT: MoonCategory.CRESCENT,
}

# Darker sky scores higher
MOON_CATEGORY_SCORE: dict[MoonCategory, int] = {
    MoonCategory.NEW: 20,
    MoonCategory.CRESCENT: 15,
    MoonCategory.QUARTER: 10,
    MoonCategory.GIBBOUS: 5,
    MoonCategory.FULL: 0,
}

MOON_PHASE_NAMES: dict[MoonPhase, str] = {
    MoonPhase.NEW_MOON: "新月",
    MoonPhase.WAXING_CRESCENT: "三日月",
    MoonPhase.FIRST_QUARTER: "上弦の月",
    MoonPhase.WAXING_GIBBOUS: "十三夜",
    MoonPhase.FULL_MOON: "満月",
    MoonPhase.WANING_GIBBOUS: "十六夜",
    MoonPhase.LAST_QUARTER: "下弦の月",
    MoonPhase.WANING_CRESCENT: "有明月",
}

# Checked in order; first substring match wins
_SUBSTRING_ORDER = (
    MoonCategory.NEW,
    MoonCategory.CRESCENT,
    MoonCategory.QUARTER,
    MoonCategory.GIBBOUS,
    MoonCategory.FULL,
)


def parse_moon_phase(label: str) -> MoonPhase | None:
    try:
        return MoonPhase(label)
    except ValueError:
        return None


def classify_moon_phase(label: str) -> MoonCategory | None:
    """Map a moon phase token to its category.

    Canonical tokens match exactly. Anything else falls back to substring
    matching so variants like "waxing gibbous" still classify; labels
    that match nothing return None.
    """
    phase = parse_moon_phase(label)
    if phase is not None:
        return MOON_PHASE_CATEGORY[phase]
    lowered = label.lower()
    for category in _SUBSTRING_ORDER:
        if category.value in lowered:
            return category
    return None


def moon_term(label: str) -> int:
    category = classify_moon_phase(label)
    if category is None:
        return 0
    return MOON_CATEGORY_SCORE[category]


def moon_phase_name(label: str) -> str:
    """Display name for a moon phase token; unknown tokens pass through."""
    phase = parse_moon_phase(label)
    if phase is None:
        return label
    return MOON_PHASE_NAMES[phase]
