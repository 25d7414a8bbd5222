"""dprpwg core - deterministic pseudo-random password derivation."""
from .alphabet import alphabet_size, build_alphabet, flags_from_names, missing_categories, satisfies
from .errors import CoverageWarning, ParamsError
from .length import output_length
from .mixing import Derivation, DerivationRequest, MixingEngine, derive
from .params import DEFAULT_PARAMS, ChannelMultipliers, TuningConstants, load_params
from .parse import parse_year
from .protocol import FLAG_ALL, FLAG_DIG, FLAG_LOW, FLAG_SYM, FLAG_UPP
from .strength import DIVISOR_CLAMP, DIVISOR_WRAP, shannon_entropy, strength

__all__ = [
    "alphabet_size", "build_alphabet", "flags_from_names", "missing_categories", "satisfies",
    "CoverageWarning", "ParamsError",
    "output_length",
    "Derivation", "DerivationRequest", "MixingEngine", "derive",
    "DEFAULT_PARAMS", "ChannelMultipliers", "TuningConstants", "load_params",
    "parse_year",
    "FLAG_ALL", "FLAG_DIG", "FLAG_LOW", "FLAG_SYM", "FLAG_UPP",
    "DIVISOR_CLAMP", "DIVISOR_WRAP", "shannon_entropy", "strength",
]
