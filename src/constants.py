from __future__ import annotations

# ---------------------------------------------------------------------------
# Score groups: the closed set of inspection checks per group.
# Order matters for display and export columns only; sums are order-free.
#
#   trim              Trim line stations T10..T100 plus the trim PQG gate
#   chassis           Chassis / powertrain stations plus the chassis PQG gate
#   final             Final line stations plus the final PQG gate.
#                     ResidualTorque is audited at plant level only and is
#                     routed to the Plant rating, never to MFG (see scoring.py).
#   q_control         Q'Control methods 1.1-5.3
#   q_control_detail  Q'Control detail checks
# ---------------------------------------------------------------------------
TRIM_CHECKS = [
    "T10", "T20", "T30", "T40", "T50", "T60", "T70", "T80", "T90", "T100", "TPQG",
]

CHASSIS_CHECKS = [
    "C10", "C20", "C30", "C40", "C45", "P10", "P20", "P30",
    "C50", "C60", "C70", "RSub", "TS", "C80", "CPQG",
]

RESIDUAL_TORQUE = "ResidualTorque"

FINAL_CHECKS = [
    "F10", "F20", "F30", "F40", "F50", "F60", "F70", "F80", "F90", "F100", "FPQG",
    RESIDUAL_TORQUE,
]

Q_CONTROL_CHECKS = [
    "1.1", "1.2", "1.3", "1.4",
    "3.1", "3.2", "3.3", "3.4",
    "5.1", "5.2", "5.3",
]

Q_CONTROL_LABELS = {
    "1.1": "Frequency control",
    "1.2": "Visual control",
    "1.3": "Periodic audit",
    "1.4": "Human control",
    "3.1": "SAE alert",
    "3.2": "Frequency measure",
    "3.3": "Manual tool",
    "3.4": "Human tracking",
    "5.1": "Auto control",
    "5.2": "Impossibility",
    "5.3": "SAE prohibition",
}

Q_CONTROL_DETAIL_CHECKS = ["CVT", "SHOWER", "DynamicUB", "CC4"]

SCORE_GROUPS = {
    "trim": TRIM_CHECKS,
    "chassis": CHASSIS_CHECKS,
    "final": FINAL_CHECKS,
    "q_control": Q_CONTROL_CHECKS,
    "q_control_detail": Q_CONTROL_DETAIL_CHECKS,
}

SCORE_GROUP_LABELS = {
    "trim": "Trim",
    "chassis": "Chassis",
    "final": "Final",
    "q_control": "Q'Control",
    "q_control_detail": "Q'Control Detail",
}

# ---------------------------------------------------------------------------
# Ratings, levels, statuses
# ---------------------------------------------------------------------------
DEFECT_RATINGS = (1, 3, 5)
DEFAULT_DEFECT_RATING = 1

WEEKS_TRACKED = 6

STATUS_OK = "OK"
STATUS_NG = "NG"
STATUSES = (STATUS_OK, STATUS_NG)

# Control rating keys. Quality is reported but never gates a status.
RATING_MFG = "MFG"
RATING_QUALITY = "Quality"
RATING_PLANT = "Plant"
CONTROL_RATINGS = (RATING_MFG, RATING_QUALITY, RATING_PLANT)

# Control level -> record key holding its status.
CONTROL_LEVELS = ("Workstation", "MFG", "Plant")
LEVEL_STATUS_FIELD = {
    "Workstation": "workstation_status",
    "MFG": "mfg_status",
    "Plant": "plant_status",
}

# Status-class filter values ("" = no filter).
STATUS_CLASS_HAS_NG = "NG"
STATUS_CLASS_ALL_OK = "OK"

# ---------------------------------------------------------------------------
# Record keys
# ---------------------------------------------------------------------------
TEXT_FIELDS = [
    "source", "operation_station", "designation", "concern",
    "resp", "mfg_action", "target",
]

DERIVED_FIELDS = [
    "recurrence", "recurrence_count_plus_defect", "control_rating",
    "workstation_status", "mfg_status", "plant_status",
]

REQUIRED_KEYS = (
    ["s_no"]
    + TEXT_FIELDS
    + ["defect_rating", "weekly_recurrence"]
    + list(SCORE_GROUPS)
    + DERIVED_FIELDS
)

FIELD_LABELS = {
    "s_no": "S.No",
    "source": "Source",
    "operation_station": "Operation Station",
    "designation": "Area",
    "concern": "Concern",
    "defect_rating": "Defect Rating",
    "recurrence": "Recurrence",
    "recurrence_count_plus_defect": "Recurrence + DR",
    "resp": "Resp",
    "mfg_action": "MFG Action",
    "target": "Target",
    "workstation_status": "Workstation Status",
    "mfg_status": "MFG Status",
    "plant_status": "Plant Status",
}

# ---------------------------------------------------------------------------
# Spreadsheet import: header aliases, tried in order.
# Each alias is matched exactly, then as a prefix, then as a substring of the
# lower-cased header cell.
# ---------------------------------------------------------------------------
IMPORT_COLUMN_ALIASES = {
    "source": ["source", "src"],
    "operation_station": ["station", "stn", "operation station"],
    "designation": ["area", "designation"],
    "concern": ["concern", "description"],
    "defect_rating": ["defect rating", "dr", "rating"],
    "resp": ["resp", "responsible", "responsibility"],
    "mfg_action": ["action", "mfg action"],
    "target": ["target"],
}

IMPORT_DEFAULT_SOURCE = "Import"
IMPORT_EXTENSIONS = (".csv", ".xlsx")
IMPORT_PREVIEW_ROWS = 20
