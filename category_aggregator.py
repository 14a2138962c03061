#*****************************************************************
#
#  PROJECT:     Food Distribution Dashboard
#
#  CLASS:       Dashboard Data Pipeline
#
#  FILE:        category_aggregator.py
#
#  DESCRIPTION: Sums the pound columns of parsed log rows per food category
#               for the target counties. The mapping and the county filter
#               are passed in by the caller rather than read from globals.
#
#*****************************************************************

from types import MappingProxyType

from normalize import normalizeGeography, toNumber


#*****************************************************************
#
#  Function name: computeCategoryTotals
#
#  DESCRIPTION:   Initializes one zero total per category in declaration order,
#                 skips rows whose normalized county is not accepted, and adds
#                 every mapped column of the remaining rows. Missing columns
#                 count as 0 and negative values are summed as is.
#
#  Parameters:    rows (list) : row dicts from parseCsv
#                 category_columns (mapping) : category key -> source column
#                 geography_column (str) : column holding the county code
#                 accepted_geographies (set) : normalized county codes to keep
#
#  Return values: mappingproxy : read only category key -> total
#
#*****************************************************************

def computeCategoryTotals(rows, category_columns, geography_column, accepted_geographies):
    totals = {key: 0 for key in category_columns}
    accepted = {normalizeGeography(code) for code in accepted_geographies}

    for row in rows:
        county = normalizeGeography(row.get(geography_column))
        if county not in accepted:
            continue

        for key, column in category_columns.items():
            totals[key] += toNumber(row.get(column))

    return MappingProxyType(totals)
