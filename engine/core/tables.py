"""
Heuristic tables for the combat engine.

Every weight, threshold and lookup used by the outcome simulator and by the
analytics scoring model lives here, so the scoring model can be audited and
tested apart from the code that walks the data.
"""

from core.constants import Difficulty, OutcomeTier, PerformanceRating, Rarity

# =============================================================================
# Challenge rating and experience
# =============================================================================

# Fractional challenge ratings, everything else is an integer.
FRACTIONAL_CR: dict[str, float] = {
    "1/8": 0.125,
    "1/4": 0.25,
    "1/2": 0.5,
}

# Applied to the summed challenge rating when more than one group is fought.
MULTIPLE_GROUPS_CR_FACTOR = 1.2

XP_BY_CR: dict[str, int] = {
    "1/8": 25,
    "1/4": 50,
    "1/2": 100,
    "1": 200,
    "2": 450,
    "3": 700,
    "4": 1100,
    "5": 1800,
    "6": 2300,
    "7": 2900,
    "8": 3900,
    "9": 5000,
    "10": 5900,
}
XP_HIGH_CR_BASE = 5900
XP_HIGH_CR_STEP = 1000
XP_DEFAULT = 200

# (minimum enemy count, multiplier), checked from the largest down.
ENCOUNTER_XP_MULTIPLIERS: list[tuple[int, float]] = [
    (15, 4.0),
    (11, 3.0),
    (7, 2.5),
    (3, 2.0),
    (2, 1.5),
    (1, 1.0),
]
SMALL_PARTY_SIZE = 3
SMALL_PARTY_XP_FACTOR = 1.5
LARGE_PARTY_SIZE = 5
LARGE_PARTY_XP_FACTOR = 0.5

# =============================================================================
# Strength and outcome
# =============================================================================

PARTY_STRENGTH_PER_LEVEL = 10
ENCOUNTER_STRENGTH_PER_CR = 15
STRENGTH_ROLL_WEIGHT = 5

# (strength ratio that must be exceeded, tier), checked in order.
OUTCOME_THRESHOLDS: list[tuple[float, OutcomeTier]] = [
    (1.5, OutcomeTier.DECISIVE_VICTORY),
    (1.0, OutcomeTier.VICTORY),
    (0.7, OutcomeTier.COSTLY_VICTORY),
    (0.5, OutcomeTier.RETREAT),
]
FALLBACK_OUTCOME = OutcomeTier.DEFEAT

# tier -> (base rounds, spread); rounds = base + randrange(spread).
ROUNDS_BY_OUTCOME: dict[OutcomeTier, tuple[int, int]] = {
    OutcomeTier.DECISIVE_VICTORY: (2, 3),
    OutcomeTier.VICTORY: (3, 4),
    OutcomeTier.COSTLY_VICTORY: (5, 5),
    OutcomeTier.RETREAT: (3, 3),
    OutcomeTier.DEFEAT: (4, 4),
}

# tier -> (minimum fraction, band width) of the party maximum HP lost.
HP_LOSS_BY_OUTCOME: dict[OutcomeTier, tuple[float, float]] = {
    OutcomeTier.DECISIVE_VICTORY: (0.1, 0.1),
    OutcomeTier.VICTORY: (0.2, 0.2),
    OutcomeTier.COSTLY_VICTORY: (0.4, 0.3),
    OutcomeTier.RETREAT: (0.3, 0.3),
    OutcomeTier.DEFEAT: (0.6, 0.3),
}

MAX_SPELL_SLOT_LEVEL = 9
SPELL_SLOT_BASE_CHANCE = 0.3
SPELL_SLOT_CHANCE_PER_ROUND = 0.05
SPELL_SLOTS_MAX_PER_LEVEL = 2

# =============================================================================
# Loot
# =============================================================================

GOLD_MULTIPLIER: dict[Difficulty, int] = {
    Difficulty.TRIVIAL: 10,
    Difficulty.EASY: 25,
    Difficulty.MEDIUM: 50,
    Difficulty.HARD: 100,
    Difficulty.DEADLY: 200,
}
DEFAULT_GOLD_MULTIPLIER = 50

ITEM_CHANCE: dict[Difficulty, float] = {
    Difficulty.TRIVIAL: 0.1,
    Difficulty.EASY: 0.2,
    Difficulty.MEDIUM: 0.4,
    Difficulty.HARD: 0.6,
    Difficulty.DEADLY: 0.8,
}

ITEM_KINDS: list[str] = ["potion", "scroll", "weapon", "armor", "trinket"]

# difficulty -> cumulative (upper bound, rarity); the last entry catches the rest.
RARITY_TABLE: dict[Difficulty, list[tuple[float, Rarity]]] = {
    Difficulty.TRIVIAL: [(0.95, Rarity.COMMON), (1.0, Rarity.UNCOMMON)],
    Difficulty.EASY: [(0.95, Rarity.COMMON), (1.0, Rarity.UNCOMMON)],
    Difficulty.MEDIUM: [
        (0.7, Rarity.COMMON),
        (0.95, Rarity.UNCOMMON),
        (1.0, Rarity.RARE),
    ],
    Difficulty.HARD: [
        (0.4, Rarity.COMMON),
        (0.8, Rarity.UNCOMMON),
        (0.95, Rarity.RARE),
        (1.0, Rarity.VERY_RARE),
    ],
    Difficulty.DEADLY: [
        (0.2, Rarity.UNCOMMON),
        (0.6, Rarity.RARE),
        (0.9, Rarity.VERY_RARE),
        (1.0, Rarity.LEGENDARY),
    ],
}

# =============================================================================
# Narrative
# =============================================================================

NARRATIVES: dict[OutcomeTier, list[str]] = {
    OutcomeTier.DECISIVE_VICTORY: [
        "The party swiftly overwhelmed their foes with coordinated strikes and superior tactics.",
        "With barely a scratch, the adventurers dispatched their enemies in a display of martial prowess.",
        "The encounter was over almost before it began, the party's skill far exceeding the challenge.",
    ],
    OutcomeTier.VICTORY: [
        "After a brief but intense skirmish, the party emerged victorious.",
        "The adventurers fought well, overcoming their foes through teamwork and determination.",
        "Though the enemies put up a fight, the party's strength proved superior.",
    ],
    OutcomeTier.COSTLY_VICTORY: [
        "The battle was hard-fought, with the party paying a steep price for their victory.",
        "Bloodied but unbowed, the adventurers managed to defeat their foes after a grueling combat.",
        "Victory came at a cost, with several party members bearing serious wounds.",
    ],
    OutcomeTier.RETREAT: [
        "Recognizing the danger, the party made a tactical withdrawal from the battlefield.",
        "The adventurers fought a retreating action, escaping with their lives if not their pride.",
        "Discretion proved the better part of valor as the party retreated from overwhelming odds.",
    ],
    OutcomeTier.DEFEAT: [
        "The encounter proved too much for the party, forcing a desperate escape.",
        "Overwhelmed by their foes, the adventurers were routed from the field.",
        "The party suffered a crushing defeat, barely escaping with their lives.",
    ],
}

TERRAIN_FLAVOR: dict[str, str] = {
    "forest": " The dense foliage provided both cover and obstacles during the fight.",
    "dungeon": " The cramped corridors limited mobility and tactical options.",
    "open": " The open terrain allowed for fluid movement and ranged attacks.",
    "urban": " The city streets and buildings created a complex battlefield.",
    "mountain": " The rocky terrain and elevation changes added complexity to the combat.",
}

# =============================================================================
# Initiative
# =============================================================================

ALERT_FEAT_BONUS = 5
PRIORITY_SCALE = 100

# =============================================================================
# Performance rating
# =============================================================================

# (hit rate that must be exceeded, points), checked in order.
HIT_RATE_POINTS: list[tuple[float, int]] = [
    (0.75, 3),
    (0.5, 2),
    (0.25, 1),
]
SURVIVAL_POINTS = 2
UNTOUCHED_POINTS = 2
IMPACT_RATIO = 2
IMPACT_POINTS = 2
CRITICAL_POINTS = 1
HEALING_POINTS = 2

# (minimum score, rating), checked in order.
PERFORMANCE_TIERS: list[tuple[int, PerformanceRating]] = [
    (8, PerformanceRating.EXCELLENT),
    (5, PerformanceRating.GOOD),
    (3, PerformanceRating.FAIR),
]
FALLBACK_RATING = PerformanceRating.POOR

# =============================================================================
# Highlights and key moments
# =============================================================================

HIGHLIGHT_HIT_RATE = 0.75
HIGHLIGHT_CRITICAL_HITS = 1
HIGHLIGHT_DAMAGE_DEALT = 50
HIGHLIGHT_HEALING_DONE = 30
HIGHLIGHT_UNTOUCHED_ROUNDS = 3
HIGHLIGHT_SAVES_MADE = 2

KEY_MOMENT_CRITICAL_HITS = 2
KEY_MOMENT_HEALING_DONE = 50
KEY_MOMENT_FLAWLESS_ATTACKS = 5

OUTCOME_FACTOR_CRITICAL_HITS = 5
OUTCOME_FACTOR_HEALING_SHARE = 3
OUTCOME_FACTOR_SWIFT_ROUNDS = 3

# =============================================================================
# Tactical analysis
# =============================================================================

TACTICAL_BASE_SCORE = 5
TACTICAL_MIN_SCORE = 1
TACTICAL_MAX_SCORE = 10

# (count that must be exceeded, points), checked in order.
COVER_POINTS: list[tuple[int, int]] = [(5, 2), (2, 1)]
HIGH_GROUND_POINTS: list[tuple[int, int]] = [(3, 2), (1, 1)]

HIGH_LEVEL_SPELL = 3
LOW_DAMAGE_FOR_HIGH_LEVEL = 20
EFFICIENT_DAMAGE_PER_LEVEL = 10
OVERHEAL_AMOUNT = 20
WASTED_SPELLS_LIMIT, WASTED_SPELLS_PENALTY = 2, 2
OVERHEAL_LIMIT, OVERHEAL_PENALTY = 3, 1
EFFICIENT_USE_LIMIT, EFFICIENT_USE_POINTS = 5, 2

PRIORITY_KILL_ROUND = 5
PRIORITY_KILL_MAX_POINTS = 3

COMBO_ATTACK_LIMIT, COMBO_ATTACK_POINTS = 5, 2
TIMELY_HEAL_LIMIT, TIMELY_HEAL_POINTS = 3, 1
SETUP_ACTION_LIMIT, SETUP_ACTION_POINTS = 4, 2

AOE_ENEMY_ACTIONS = 3
AOE_ROUNDS_LIMIT = 3

# =============================================================================
# Recommendations
# =============================================================================

RECOMMENDATION_SCORE = 5
LONG_COMBAT_ROUNDS = 10
SHORT_COMBAT_ROUNDS = 3

MISSED_AOE = "Multiple opportunities for area-of-effect spells were missed"
MISSED_HIGH_LEVEL_SLOTS = "High-level spell slots remained unused"

ADVICE_POSITIONING = "Focus on using cover and terrain advantages more effectively"
ADVICE_RESOURCES = (
    "Improve resource management - save high-level spells for tougher enemies"
)
ADVICE_TARGETING = (
    "Prioritize dangerous enemies like spellcasters and high-damage dealers"
)
ADVICE_TEAMWORK = "Coordinate attacks and support actions for better synergy"
ADVICE_STRUGGLING = (
    "Consider adjusting difficulty or providing tactical guidance to struggling players"
)
ADVICE_LONG_COMBAT = (
    "Combat lasted very long - consider more aggressive tactics to speed up encounters"
)
ADVICE_SHORT_COMBAT = (
    "Combat ended very quickly - consider adding environmental challenges or reinforcements"
)
