"""dprpwg protocol constants.

Single source of truth for symbol categories, flag bits and limits.
Keep this file stable. Any change here changes every derived password.
"""

# Symbol categories (deliberately non-alphabetical letter orderings)
OUTPUT_LOW = b"azertyuiopqsdfghjklmwxcvbn"  # Lower case letters
OUTPUT_UPP = b"FGHJKLMWXCVBNAZERTYUIOPQSD"  # Upper case letters
OUTPUT_DIG = b"0123456789"                  # Digits
OUTPUT_SYM = b"()[]-_{}=+!:/;.,?"           # Symbols

# Category flag bits. The numeric values feed the iteration budget.
FLAG_LOW = 1 << 0
FLAG_UPP = 1 << 1
FLAG_DIG = 1 << 2
FLAG_SYM = 1 << 3
FLAG_ALL = FLAG_LOW | FLAG_UPP | FLAG_DIG | FLAG_SYM

# Alphabet concatenation order: Lower, Digit, Symbol, Upper.
# Independent of the flag numbering above.
ALPHABET_ORDER = (
    (FLAG_LOW, OUTPUT_LOW),
    (FLAG_DIG, OUTPUT_DIG),
    (FLAG_SYM, OUTPUT_SYM),
    (FLAG_UPP, OUTPUT_UPP),
)

CATEGORY_NAMES = {
    FLAG_LOW: "lower",
    FLAG_UPP: "upper",
    FLAG_DIG: "digit",
    FLAG_SYM: "symbol",
}

# Output alphabet capacity. 256 = one byte per symbol
OUTPUT_DOMAIN_MAXLENGTH = 256

# Derived length bounds (ignored when a fixed length is requested)
OUTPUT_MIN_LENGTH = 12
OUTPUT_MAX_LENGTH = 256
BASE_YEAR = 2000
YEARS_PER_CHAR = 5

# Hard ceiling for the coverage top-up loop
ITERATION_MAX = 65536

# Accumulator width: 16 bits
ACC_MODULUS = 1 << 16

# Strength divisor: max(year // 5 - 388, 12)
STRENGTH_YEAR_OFFSET = 388
STRENGTH_MIN_DIVISOR = 12

# Arbitrary "impossible to crack" strength reference
OVERKILL_PWD_STRENGTH = 30.0
