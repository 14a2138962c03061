#*****************************************************************
#
#  PROJECT:     Food Distribution Dashboard
#
#  CLASS:       Dashboard Data Pipeline
#
#  FILE:        csv_parser.py
#
#  DESCRIPTION: Permissive comma separated parser for the distribution logs.
#               Fields are split on every comma; quoted fields are not
#               supported, so a value containing a comma is mis-split. The
#               log exports are quote free, and adding quote handling would
#               change totals for any such field.
#
#*****************************************************************

import re

LINE_BREAK = re.compile(r'\r?\n')
BYTE_ORDER_MARK = '\ufeff'


#*****************************************************************
#
#  Function name: splitLines
#
#  DESCRIPTION:   Trims the whole text and splits it into lines. A leading
#                 byte order mark counts as whitespace so it never becomes
#                 part of the first header, whatever the source of the text.
#
#  Parameters:    text (str) : whole CSV file contents
#
#  Return values: list : lines without their line breaks
#
#*****************************************************************

def splitLines(text):
    return LINE_BREAK.split(text.strip().lstrip(BYTE_ORDER_MARK).strip())


#*****************************************************************
#
#  Function name: parseHeader
#
#  DESCRIPTION:   Returns the trimmed column names of the first line, in
#                 order and including duplicates.
#
#  Parameters:    text (str) : whole CSV file contents
#
#  Return values: list : header names
#
#*****************************************************************

def parseHeader(text):
    return [h.strip() for h in splitLines(text)[0].split(',')]


#*****************************************************************
#
#  Function name: parseCsv
#
#  DESCRIPTION:   Splits raw CSV text into row dictionaries keyed by the trimmed
#                 header names. Short lines are padded with empty strings and
#                 extra fields are dropped. Duplicate headers are kept as is, so
#                 the later column wins. Malformed lines never raise.
#
#  Parameters:    text (str) : whole CSV file contents
#
#  Return values: list : one dict per data line, in file order
#
#*****************************************************************

def parseCsv(text):
    lines = splitLines(text)
    headers = [h.strip() for h in lines[0].split(',')]

    rows = []
    for line in lines[1:]:
        values = line.split(',')
        row = {}
        for i, header in enumerate(headers):
            row[header] = values[i].strip() if i < len(values) else ''
        rows.append(row)

    return rows
