"""Scoring weights, category defaults, and endpoint settings."""

from __future__ import annotations

import os

# --- Category Weights (should sum to 1.0) ---
CATEGORY_WEIGHTS = {
    "performance": 0.40,
    "verification": 0.30,
    "feedback": 0.20,
    "usage": 0.10,
}
WEIGHT_SUM_TOLERANCE = 1e-6

# --- Category Defaults (score when the category is absent) ---
# Graded judgments sit at the midpoint; volume/credential categories floor at 0.
CATEGORY_DEFAULTS = {
    "performance": 50.0,
    "verification": 0.0,
    "feedback": 50.0,
    "usage": 50.0,
}

# --- Verification Level Points ---
VERIFICATION_POINTS = {
    "gold": 100,
    "silver": 75,
    "bronze": 50,
    "none": 0,
}

# --- Performance Sub-Weights ---
PERFORMANCE_WEIGHTS = {
    "uptime": 0.5,
    "response_time": 0.3,
    "error_rate": 0.2,
}
PERFORMANCE_TERM_DEFAULT = 50.0   # response/error term when its field is missing
RESPONSE_TIME_MS_PER_POINT = 10   # 1000ms+ = 0 points

# --- Feedback Rating Scale ---
RATING_MIN = 1
RATING_MAX = 5

# --- Usage Sub-Weights and Saturation Points ---
USAGE_WEIGHTS = {
    "total_requests": 0.3,
    "unique_clients": 0.4,
    "longevity_days": 0.3,
}
USAGE_FULL_MARKS = {
    "total_requests": 1000,   # full points at 1000+ requests
    "unique_clients": 100,    # full points at 100+ clients
    "longevity_days": 30,     # full points at 30+ days
}

# --- Confidence Factor Weights (sum = 1.0) ---
CONFIDENCE_WEIGHTS = {
    "sample_size": 0.3,
    "consistency": 0.2,
    "diversity": 0.1,
    "recency": 0.2,
    "verification_level": 0.2,
}

# Original fixed values for the unfinished factors
PLACEHOLDER_FACTORS = {
    "consistency": 70.0,
    "diversity": 60.0,
    "recency": 80.0,
}

# Ideal sample size = minimum_data_points * this
IDEAL_DATA_POINTS_MULTIPLIER = 5

# Max std dev of a 1-5 star distribution (all mass split between 1 and 5)
RATING_MAX_STD_DEV = 2.0

DIVERSITY_FULL_CLIENTS = 100

# --- Scoring Defaults ---
HALF_LIFE_DAYS = 30.0
MAX_AGE_HALF_LIVES = 4
MINIMUM_DATA_POINTS = 5
OUTLIER_Z_THRESHOLD = 2.5

# --- Storage ---
HISTORY_LIMIT = 10          # default getHistory() page
MAX_HISTORY_SIZE = 100      # per subject, file-backed storage

# --- Badges ---
BADGE_SCRIPT_URL = "https://cdn.nanda.io/badges/v1/badge.js"
BADGE_API_BASE = "https://api.nanda.io/reputation/badge"

# Score bands -> colour (first match wins)
SCORE_COLORS = [
    (90, "#4CAF50"),   # green
    (70, "#8BC34A"),   # light green
    (50, "#FFC107"),   # amber
    (30, "#FF9800"),   # orange
    (0, "#F44336"),    # red
]

VERIFICATION_COLORS = {
    "gold": "#FFD700",
    "silver": "#C0C0C0",
    "bronze": "#CD7F32",
}
VERIFICATION_COLOR_DEFAULT = "#E0E0E0"

BADGE_THEMES = {
    "light": {"background": "#ffffff", "border": "#e0e0e0", "text": "#333333"},
    "dark": {"background": "#333333", "border": "#555555", "text": "#ffffff"},
}

# --- Metrics API ---
METRICS_API_BASE = os.environ.get(
    "NANDA_METRICS_API_BASE", "https://api.nanda.io"
)
METRICS_CATEGORIES = ("performance", "verification", "feedback", "usage")
METRICS_REQUEST_TIMEOUT = 30.0
METRICS_CONCURRENT_SUBJECTS = 10
