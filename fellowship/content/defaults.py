"""
Default content catalog.

Plain data, validated into a fresh RunConfig on every default_catalog() call
so no caller can mutate content another caller sees.
"""

from ..state.schema import RunConfig


BASE_HP = 135
BASE_MEMBER_SLOTS = 4


LEADERS = [
    {
        "id": "warlord",
        "name": "The Warlord",
        "description": "A battle-hardened commander. Strong in combat, learns to lead.",
        "base_stats": {"combat": 5, "survival": 2, "social": 1, "chaos": 2},
        "bonus_hp": 15,
        "base_member_slots": 3,
        "tactics_pool_id": "military",
    },
    {
        "id": "diplomat",
        "name": "The Diplomat",
        "description": "A silver-tongued negotiator. Excels socially, avoids direct fights.",
        "base_stats": {"combat": 2, "survival": 2, "social": 5, "chaos": 1},
        "bonus_hp": 10,
        "base_member_slots": 4,
        "tactics_pool_id": "political",
    },
    {
        "id": "ranger",
        "name": "The Ranger",
        "description": "A wilderness expert. Thrives in harsh conditions.",
        "base_stats": {"combat": 2, "survival": 5, "social": 1, "chaos": 2},
        "bonus_hp": 20,
        "base_member_slots": 3,
        "tactics_pool_id": "wilderness",
    },
    {
        "id": "trickster",
        "name": "The Trickster",
        "description": "A chaotic wildcard. Unpredictable but resourceful.",
        "base_stats": {"combat": 2, "survival": 2, "social": 2, "chaos": 5},
        "bonus_hp": 12,
        "base_member_slots": 3,
        "tactics_pool_id": "tricks",
    },
    {
        "id": "balanced",
        "name": "The Wanderer",
        "description": "A jack of all trades. Balanced but unremarkable.",
        "base_stats": {"combat": 2, "survival": 2, "social": 2, "chaos": 2},
        "bonus_hp": 20,
        "base_member_slots": 4,
        "tactics_pool_id": None,
    },
]


# (id, name, primary stat, rank, base value, scaling, description)
_MEMBER_ROWS = [
    ("soldier", "Soldier", "combat", 1, 2, 1, "A trained warrior."),
    ("guard", "Guard", "combat", 1, 1, 2, "Defensive fighter, grows stronger."),
    ("scout", "Scout", "survival", 1, 2, 1, "Quick and observant."),
    ("herbalist", "Herbalist", "survival", 1, 1, 2, "Knows the land's secrets."),
    ("bard", "Bard", "social", 1, 2, 1, "Charming entertainer."),
    ("merchant", "Merchant", "social", 1, 1, 2, "Shrewd negotiator."),
    ("gambler", "Gambler", "chaos", 1, 2, 1, "Lucky and reckless."),
    ("pickpocket", "Pickpocket", "chaos", 1, 1, 2, "Nimble fingers."),

    ("knight", "Knight", "combat", 2, 3, 2, "Armored elite warrior."),
    ("berserker", "Berserker", "combat", 2, 4, 1, "Fury incarnate."),
    ("tracker", "Tracker", "survival", 2, 3, 2, "Master of the wilds."),
    ("healer", "Healer", "survival", 2, 4, 1, "Keeps the fellowship alive."),
    ("noble", "Noble", "social", 2, 3, 2, "Born to lead."),
    ("spy", "Spy", "social", 2, 4, 1, "Gathers secrets."),
    ("alchemist", "Alchemist", "chaos", 2, 3, 2, "Explosive experiments."),
    ("saboteur", "Saboteur", "chaos", 2, 4, 1, "Breaks things expertly."),

    ("champion", "Champion", "combat", 3, 5, 3, "Legendary fighter."),
    ("assassin", "Assassin", "combat", 3, 6, 2, "Silent death."),
    ("druid", "Druid", "survival", 3, 5, 3, "One with nature."),
    ("pathfinder", "Pathfinder", "survival", 3, 6, 2, "Finds a way through anything."),
    ("ambassador", "Ambassador", "social", 3, 5, 3, "Master negotiator."),
    ("prophet", "Prophet", "social", 3, 6, 2, "Voice of inspiration."),
    ("wildmage", "Wild Mage", "chaos", 3, 5, 3, "Unpredictable magic."),
    ("anarchist", "Anarchist", "chaos", 3, 6, 2, "Order is overrated."),
]

MEMBER_TEMPLATES = [
    {
        "id": member_id,
        "name": name,
        "primary_stats": [stat],
        "rank": rank,
        "base_value": base_value,
        "scaling": scaling,
        "description": description,
    }
    for member_id, name, stat, rank, base_value, scaling, description in _MEMBER_ROWS
]


GEAR_TEMPLATES = [
    {"id": "extra_slot_1", "type": "extra_slot", "name": "Recruitment Banner", "description": "+1 member slot", "value": 1},
    {"id": "heal_small", "type": "heal", "name": "Healing Salve", "description": "Restore 20 HP", "value": 20},
    {"id": "heal_medium", "type": "heal", "name": "Healing Potion", "description": "Restore 40 HP", "value": 40},
    {"id": "auto_combat", "type": "auto_success", "name": "Battle Standard", "description": "Auto-succeed next combat check", "value": 1, "stat_type": "combat"},
    {"id": "auto_survival", "type": "auto_success", "name": "Survival Kit", "description": "Auto-succeed next survival check", "value": 1, "stat_type": "survival"},
    {"id": "auto_social", "type": "auto_success", "name": "Royal Seal", "description": "Auto-succeed next social check", "value": 1, "stat_type": "social"},
    {"id": "auto_chaos", "type": "auto_success", "name": "Lucky Charm", "description": "Auto-succeed next chaos check", "value": 1, "stat_type": "chaos"},
]


TACTIC_TEMPLATES = [
    {"id": "boost_combat_perm", "type": "permanent_boost", "name": "Combat Training", "description": "Permanently boost a member's combat contribution by 5", "value": 5, "stat_type": "combat"},
    {"id": "boost_survival_perm", "type": "permanent_boost", "name": "Wilderness Lore", "description": "Permanently boost a member's survival contribution by 5", "value": 5, "stat_type": "survival"},
    {"id": "boost_social_perm", "type": "permanent_boost", "name": "Etiquette Lessons", "description": "Permanently boost a member's social contribution by 5", "value": 5, "stat_type": "social"},
    {"id": "boost_chaos_perm", "type": "permanent_boost", "name": "Chaos Theory", "description": "Permanently boost a member's chaos contribution by 5", "value": 5, "stat_type": "chaos"},
    {"id": "next_combat_boost", "type": "next_segment_boost", "name": "Battle Cry", "description": "+100% combat for next segment", "value": 100, "stat_type": "combat"},
    {"id": "next_survival_boost", "type": "next_segment_boost", "name": "Emergency Rations", "description": "+100% survival for next segment", "value": 100, "stat_type": "survival"},
    {"id": "next_social_boost", "type": "next_segment_boost", "name": "Diplomatic Pouch", "description": "+100% social for next segment", "value": 100, "stat_type": "social"},
    {"id": "next_chaos_boost", "type": "next_segment_boost", "name": "Wild Magic Surge", "description": "+100% chaos for next segment", "value": 100, "stat_type": "chaos"},
    {"id": "skip_event", "type": "skip_event", "name": "Evasive Maneuvers", "description": "Skip the next event entirely", "value": 1},
]


# Themed pools: leader's strong stat (+6 / +150%) plus off-stat cover
TACTIC_POOLS = {
    "military": [
        {"id": "shield_wall", "type": "permanent_boost", "name": "Shield Wall Drill", "description": "Train in defensive combat tactics (+6 combat)", "value": 6, "stat_type": "combat"},
        {"id": "flanking_maneuver", "type": "next_segment_boost", "name": "Flanking Maneuver", "description": "+150% combat for next segment", "value": 150, "stat_type": "combat"},
        {"id": "tactical_retreat", "type": "skip_event", "name": "Tactical Retreat", "description": "Strategically avoid the next encounter", "value": 1},
        {"id": "intimidation", "type": "permanent_boost", "name": "Intimidation", "description": "Your battle reputation precedes you (+5 social)", "value": 5, "stat_type": "social"},
        {"id": "field_medicine", "type": "permanent_boost", "name": "Field Medicine", "description": "Treat wounds like a soldier (+4 survival)", "value": 4, "stat_type": "survival"},
        {"id": "commanders_presence", "type": "next_segment_boost", "name": "Commander's Presence", "description": "Lead with authority (+100% social for next segment)", "value": 100, "stat_type": "social"},
    ],
    "political": [
        {"id": "court_intrigue", "type": "permanent_boost", "name": "Court Intrigue", "description": "Master political maneuvering (+6 social)", "value": 6, "stat_type": "social"},
        {"id": "silver_tongue", "type": "next_segment_boost", "name": "Silver Tongue", "description": "+150% social for next segment", "value": 150, "stat_type": "social"},
        {"id": "diplomatic_immunity", "type": "skip_event", "name": "Diplomatic Immunity", "description": "Invoke protection to avoid confrontation", "value": 1},
        {"id": "hire_mercenaries", "type": "permanent_boost", "name": "Hire Mercenaries", "description": "Gold speaks louder than swords (+5 combat)", "value": 5, "stat_type": "combat"},
        {"id": "trade_routes", "type": "permanent_boost", "name": "Trade Routes", "description": "Connections keep you supplied (+4 survival)", "value": 4, "stat_type": "survival"},
        {"id": "bodyguard_detail", "type": "next_segment_boost", "name": "Bodyguard Detail", "description": "Your allies protect you (+100% combat for next segment)", "value": 100, "stat_type": "combat"},
    ],
    "wilderness": [
        {"id": "foraging_expertise", "type": "permanent_boost", "name": "Foraging Expertise", "description": "Master living off the land (+6 survival)", "value": 6, "stat_type": "survival"},
        {"id": "natures_blessing", "type": "next_segment_boost", "name": "Nature's Blessing", "description": "+150% survival for next segment", "value": 150, "stat_type": "survival"},
        {"id": "camouflage", "type": "skip_event", "name": "Camouflage", "description": "Blend into surroundings to avoid danger", "value": 1},
        {"id": "trappers_cunning", "type": "permanent_boost", "name": "Trapper's Cunning", "description": "The wild teaches unpredictability (+5 chaos)", "value": 5, "stat_type": "chaos"},
        {"id": "rangers_tales", "type": "permanent_boost", "name": "Ranger's Tales", "description": "Stories of adventure captivate (+4 social)", "value": 4, "stat_type": "social"},
        {"id": "primal_instinct", "type": "next_segment_boost", "name": "Primal Instinct", "description": "Trust your gut (+100% chaos for next segment)", "value": 100, "stat_type": "chaos"},
    ],
    "tricks": [
        {"id": "chaos_gambit", "type": "permanent_boost", "name": "Chaos Gambit", "description": "Embrace unpredictability (+6 chaos)", "value": 6, "stat_type": "chaos"},
        {"id": "wild_card", "type": "next_segment_boost", "name": "Wild Card", "description": "+150% chaos for next segment", "value": 150, "stat_type": "chaos"},
        {"id": "smoke_and_mirrors", "type": "skip_event", "name": "Smoke and Mirrors", "description": "Create a diversion to escape trouble", "value": 1},
        {"id": "dirty_fighting", "type": "permanent_boost", "name": "Dirty Fighting", "description": "No rules in a street fight (+5 combat)", "value": 5, "stat_type": "combat"},
        {"id": "scavenger", "type": "permanent_boost", "name": "Scavenger", "description": "Find opportunity everywhere (+4 survival)", "value": 4, "stat_type": "survival"},
        {"id": "misdirection", "type": "next_segment_boost", "name": "Misdirection", "description": "Strike when they least expect (+100% combat for next segment)", "value": 100, "stat_type": "combat"},
    ],
}


EVENT_FLAVORS = {
    "combat": [
        {"name": "Ambush!", "description": "Bandits attack from the shadows."},
        {"name": "Monster Attack", "description": "A beast blocks your path."},
        {"name": "Hostile Patrol", "description": "Armed soldiers demand you halt."},
        {"name": "Bar Brawl", "description": "A tavern dispute turns violent."},
    ],
    "survival": [
        {"name": "Treacherous Path", "description": "The terrain becomes dangerous."},
        {"name": "Sudden Storm", "description": "Weather turns hostile."},
        {"name": "Food Shortage", "description": "Supplies are running low."},
        {"name": "Disease Outbreak", "description": "Illness spreads through camp."},
    ],
    "social": [
        {"name": "Suspicious Guards", "description": "Officials question your intent."},
        {"name": "Merchant Dispute", "description": "A deal goes sour."},
        {"name": "Noble's Request", "description": "A lord demands your attention."},
        {"name": "Crowd Unrest", "description": "Locals grow restless."},
    ],
    "chaos": [
        {"name": "Strange Occurrence", "description": "Reality bends around you."},
        {"name": "Trickster's Game", "description": "Someone plays a dangerous prank."},
        {"name": "Unstable Magic", "description": "Wild energy crackles in the air."},
        {"name": "Fortune's Wheel", "description": "Fate itself seems to test you."},
    ],
}


def default_catalog_data() -> dict:
    """Raw catalog mapping, in the same shape a YAML catalog uses."""
    return {
        "base_hp": BASE_HP,
        "base_member_slots": BASE_MEMBER_SLOTS,
        "leaders": LEADERS,
        "member_templates": MEMBER_TEMPLATES,
        "gear_templates": GEAR_TEMPLATES,
        "tactic_templates": TACTIC_TEMPLATES,
        "tactic_pools": TACTIC_POOLS,
        "starting_member_ids": [],  # Players draft before segment 1
        "event_flavors": EVENT_FLAVORS,
        "heal_amount": 15,
        "auto_success_value": 100,
        "permanent_boost_value": 5,
        "next_segment_boost_percent": 100,
    }


def default_catalog() -> RunConfig:
    """Build a fresh default catalog."""
    return RunConfig.model_validate(default_catalog_data())
