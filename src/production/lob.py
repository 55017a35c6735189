"""Canonical lines of business and their premium buckets.

Organizations name their product lines freely ("Personal Auto", "HO-3",
"Term Life"...). Commission rates are keyed by one of five canonical names,
so sale events are folded onto that set before a rate is looked up.
"""
import logging

logger = logging.getLogger(__name__)

AUTO = "Auto"
FIRE = "Fire"
LIFE = "Life"
HEALTH = "Health"
IPS = "IPS"

CANONICAL_LOBS = (AUTO, FIRE, LIFE, HEALTH, IPS)

UNKNOWN_LOB = "Unknown"

LOB_ALIASES = {
    "auto": AUTO,
    "personal auto": AUTO,
    "pa": AUTO,
    "fire": FIRE,
    "home": FIRE,
    "homeowners": FIRE,
    "ho": FIRE,
    "life": LIFE,
    "health": HEALTH,
    "ips": IPS,
    "investment": IPS,
}

# Short aliases ("pa", "ho") only match a whole name; substrings of them are too noisy.
_SUBSTRING_ALIASES = sorted(
    ((alias, lob) for alias, lob in LOB_ALIASES.items() if len(alias) > 2),
    key=lambda item: -len(item[0]),
)

BUCKET_PC = "PC"
BUCKET_FS = "FS"
BUCKET_IPS = "IPS"

BUCKETS = (BUCKET_PC, BUCKET_FS, BUCKET_IPS)

LOB_BUCKETS = {
    AUTO: BUCKET_PC,
    FIRE: BUCKET_PC,
    LIFE: BUCKET_FS,
    HEALTH: BUCKET_FS,
    IPS: BUCKET_IPS,
}


def canonical_lob(name):
    """Return the canonical name for ``name`` or ``None`` when nothing matches."""
    key = (name or "").strip().lower()
    if not key:
        return None
    if key in LOB_ALIASES:
        return LOB_ALIASES[key]
    for lob in CANONICAL_LOBS:
        if lob.lower() in key:
            return lob
    for alias, lob in _SUBSTRING_ALIASES:
        if alias in key:
            return lob
    return None


def normalize_lob(name):
    """Fold a free-text LOB name onto the canonical set.

    Unmatched names pass through unchanged (they earn no commission since no
    rate can be keyed on them); an empty name becomes ``"Unknown"``.
    """
    lob = canonical_lob(name)
    if lob is not None:
        return lob
    if not (name or "").strip():
        return UNKNOWN_LOB
    logger.warning("Line of business %r does not map to a canonical LOB", name)
    return name


def lob_to_bucket(lob):
    """Premium bucket of a canonical LOB; anything else counts as PC."""
    return LOB_BUCKETS.get(lob, BUCKET_PC)
