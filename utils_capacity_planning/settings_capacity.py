# utils_capacity_planning/settings_capacity.py

# ---- Recognized columns ----
DATE_COLUMNS = ("date", "dates")  # first non-empty wins
METRIC_COLUMNS = ("cpu_usage", "memory_usage", "network_traffic", "power_consumption")

# ---- Display units ----
NETWORK_DIVISOR = 1_000_000  # bytes/s -> MB/s
POWER_DIVISOR = 1_000        # W -> KW

# ---- Maintenance heuristic ----
STORAGE_RECLAIM_MIN_ROWS = 800   # strictly greater than
STORAGE_RECLAIM_OFFSET_DAYS = 3
BACKUP_EVERY_N_DATES = 7
BACKUP_OFFSET_DAYS = 7
INDEX_REBUILD_MIN_CPU = 70       # strictly greater than
INDEX_REBUILD_OFFSET_DAYS = 1
MAX_ALERTS = 10

# ---- Calendar activity buckets (upper bounds, exclusive) ----
ACTIVITY_LEVELS = [
    (200, "low"),
    (500, "medium"),
    (800, "high"),
]
PEAK_LEVEL = "peak"

# ---- Trend ----
TREND_WINDOW_DAYS = 7

# ---- Upload ----
ACCEPTED_EXTENSIONS = (".csv",)
ACCEPTED_CONTENT_TYPES = ("text/csv", "application/csv", "text/comma-separated-values")

# ---- Visual defaults (company blue & white) ----
COMPANY_BLUES = [
    "#004C99",
    "#007ACC",
    "#FF9F1C",
    "#2ECC71",
    "#E15F99",
]
