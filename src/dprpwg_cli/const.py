ERRORS = {
  "E_SECRET_MISMATCH": "Master password entries differ",
  "E_SECRET_EMPTY": "Master password is empty",
}

# (upper bound, label, tier). Scores at or above the last bound are "overkill".
STRENGTH_BUCKETS = (
  (0.25, "ridiculously low", "low"),
  (0.375, "very low", "low"),
  (0.5, "low", "low"),
  (0.625, "fair", "low"),
  (0.75, "good", "medium"),
  (0.875, "great", "medium"),
  (1.0, "excellent", "high"),
)
STRENGTH_OVERKILL = ("overkill", "high")
