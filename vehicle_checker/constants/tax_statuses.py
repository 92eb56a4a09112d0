from enum import Enum

class TaxStatus(Enum):
    SORN = 'SORN'
    TAXED = 'TAXED'
    UNTAXED = 'UNTAXED'
