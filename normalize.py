#*****************************************************************
#
#  PROJECT:     Food Distribution Dashboard
#
#  CLASS:       Dashboard Data Pipeline
#
#  FILE:        normalize.py
#
#  DESCRIPTION: Cell level normalization helpers shared by the aggregator and
#               the loaders. Both helpers are total: they never raise and
#               always return a defined number or string.
#
#*****************************************************************

import re

import numpy as np

DECIMAL_PATTERN = re.compile(r'^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$')


#*****************************************************************
#
#  Function name: toNumber
#
#  DESCRIPTION:   Converts a raw cell value to a number. Missing values, empty
#                 strings and the literal NA (any case) become 0, as does any
#                 text that is not a finite decimal number.
#
#  Parameters:    raw (str|None) : raw cell value
#
#  Return values: float : parsed value, or 0 when not a finite decimal
#
#*****************************************************************

def toNumber(raw):
    s = '' if raw is None else str(raw).strip()
    if s == '' or s.upper() == 'NA':
        return 0
    if not DECIMAL_PATTERN.match(s):
        return 0

    value = float(s)
    return value if np.isfinite(value) else 0


#*****************************************************************
#
#  Function name: normalizeGeography
#
#  DESCRIPTION:   Normalizes a county code for membership tests so that case
#                 and surrounding whitespace never cause a false negative.
#
#  Parameters:    raw (str|None) : raw county cell value
#
#  Return values: str : trimmed upper case code, '' when missing
#
#*****************************************************************

def normalizeGeography(raw):
    return ('' if raw is None else str(raw)).strip().upper()
