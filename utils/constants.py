import json
from config.paths import CONSTANTS_PATH

"""
Loads configuration constants from config/constants.json and exposes them as module-level variables.
Edit constants.json to change values; import from utils.constants to use in code.
"""

with open(CONSTANTS_PATH, "r", encoding="utf-8") as f:
    _constants = json.load(f)

# Expose constants as variables
WEEKDAY_LABELS = _constants["WEEKDAY_LABELS"]
SUNDAY = _constants["SUNDAY"]
THURSDAY = _constants["THURSDAY"]
SATURDAY = _constants["SATURDAY"]

EMPTY_STAFF_ID = _constants["EMPTY_STAFF_ID"]
ANY_GROUP = _constants["ANY_GROUP"]

DEFAULT_MAX_RETRIES = _constants["DEFAULT_MAX_RETRIES"]
DEFAULT_DAILY_TARGET = _constants["DEFAULT_DAILY_TARGET"]
LOG_CAPACITY = _constants["LOG_CAPACITY"]
BALANCE_MAX_ITERATIONS = _constants["BALANCE_MAX_ITERATIONS"]

# JSON object keys are strings; tiers are ints everywhere else
TIER_DEFAULTS = {int(k): v for k, v in _constants["TIER_DEFAULTS"].items()}

RESERVED_SPECIALTY_BONUS = _constants["RESERVED_SPECIALTY_BONUS"]
REQUESTED_DAY_BONUS = _constants["REQUESTED_DAY_BONUS"]
SPECIALTY_DAY_BONUS = _constants["SPECIALTY_DAY_BONUS"]
QUOTA_HUNGER_WEIGHT = _constants["QUOTA_HUNGER_WEIGHT"]
WEEKEND_LOAD_PENALTY = _constants["WEEKEND_LOAD_PENALTY"]
EVERY_OTHER_DAY_PENALTY = _constants["EVERY_OTHER_DAY_PENALTY"]
GROUP_MATCH_BONUS = _constants["GROUP_MATCH_BONUS"]
JUNIOR_BONUS = _constants["JUNIOR_BONUS"]
SCORE_JITTER = _constants["SCORE_JITTER"]

DAY_DIFFICULTY = _constants["DAY_DIFFICULTY"]
