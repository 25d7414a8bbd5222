"""Error codes and warning categories for dprpwg."""

ERRORS = {
  "E_PARAMS_MISSING": "Tuning constants file missing",
  "E_PARAMS_JSON": "Tuning constants JSON invalid",
  "E_PARAMS_SCHEMA": "Tuning constants schema not supported",
  "E_PARAMS_RANGE": "Tuning constant is not an unsigned 32-bit integer",
  "E_PARAMS_FINGERPRINT": "Tuning constants fingerprint does not match pinned value",
}


class ParamsError(ValueError):
    """Raised when a tuning constants set cannot be loaded or is not pinned."""

    def __init__(self, code: str, detail: str = ""):
        self.code = code
        self.detail = detail
        msg = f"{code}: {ERRORS[code]}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class CoverageWarning(UserWarning):
    """Derived password lacks a requested category (iteration ceiling reached)."""
