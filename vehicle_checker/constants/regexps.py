import re

# Ordered most specific / most current format first.
PLATE_PATTERNS = [
    re.compile(r'[A-Z]{2}[0-9]{2}\s?[A-Z]{3}'),  # current: AB12 CDE
    re.compile(r'[A-Z][0-9]{1,3}\s?[A-Z]{3}'),   # prefix: A123 BCD
    re.compile(r'[A-Z]{3}\s?[0-9]{1,3}[A-Z]'),   # suffix: ABC 123D
    re.compile(r'[A-Z]{1,2}\s?[0-9]{1,4}'),      # dateless: AB 1234
]

ANCHORED_PLATE_PATTERNS = [
    re.compile(r'^[A-Z]{2}[0-9]{2}[A-Z]{3}$'),
    re.compile(r'^[A-Z][0-9]{1,3}[A-Z]{3}$'),
    re.compile(r'^[A-Z]{3}[0-9]{1,3}[A-Z]$'),
    re.compile(r'^[A-Z]{1,2}[0-9]{1,4}$'),
]

DISALLOWED_CHARACTERS_PATTERN = re.compile(r'[^A-Z0-9 ]')

# Leading tag may be fused to the plate, a trailing one must stand alone.
GB_TAG_PATTERN = re.compile(r'^\s*GB\s*|\s+GB\s*$')

WHITESPACE_PATTERN = re.compile(r'\s')
