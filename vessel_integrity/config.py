"""
Configuration for the vessel integrity calculation engine.

Domain constants used across the formula, corrosion-rate, remaining-life and
aggregation layers live here, together with the AWS settings used by the
reference result store and alert sink.
"""
import os

# ── Corrosion / life sentinels ───────────────────────────────────────────────
# Minimum nominal corrosion rate when no measurable corrosion (1 mpy = 0.001 ipy)
MIN_NOMINAL_RATE = 0.001

# Maximum inspection interval per API 510 (years)
MAX_INSPECTION_INTERVAL = 10

# Remaining life reported when the corrosion rate is not positive
INFINITE_REMAINING_LIFE = 999

# Elapsed time assumed when inspection dates are missing (years)
DEFAULT_TIME_SPAN_YEARS = 10

DAYS_PER_YEAR = 365.25

# ── Status thresholds (years of remaining life) ──────────────────────────────
CRITICAL_REMAINING_LIFE = 2
WARNING_REMAINING_LIFE = 5

# Reading-to-reading change that flags a measurement for confirmation (%)
ANOMALY_CHANGE_PCT = 20.0

# ── Design defaults ─────────────────────────────────────────────────────────
# Used only when the vessel record leaves a value blank.
DEFAULT_DESIGN_VALUES = {
    "design_pressure": 250.0,      # psi
    "design_temperature": 200.0,   # °F
    "inside_diameter": 72.0,       # in
    "joint_efficiency": 0.85,
    "nominal_thickness": 0.5,      # in
}

DEFAULT_NOZZLE_JOINT_EFFICIENCY = 1.0

# Stored precision of each calculated value (decimal places)
RESULT_PRECISION = {
    "minimum_thickness": 3,
    "calculated_mawp": 1,
    "corrosion_rate": 4,
    "remaining_life": 1,
    "next_inspection_years": 1,
}

# ── AWS ─────────────────────────────────────────────────────────────────────
# Credentials come from boto3's own provider chain (env, profile, role).
AWS_REGION = os.environ.get("AWS_DEFAULT_REGION", "us-east-1")
S3_BUCKET_NAME = os.environ.get("VESSEL_INTEGRITY_S3_BUCKET")
ALERT_TOPIC_ARN = os.environ.get("VESSEL_INTEGRITY_ALERT_TOPIC_ARN")
