from enum import Enum

class LookupSource(Enum):
    CAMERA = 'camera'
    MANUAL = 'manual'
