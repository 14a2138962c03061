#*****************************************************************
#
#  PROJECT:     Food Distribution Dashboard
#
#  CLASS:       Dashboard Data Pipeline
#
#  FILE:        chart_data.py
#
#  DESCRIPTION: Turns category totals into pie chart slices and tooltip text
#               for the generated dashboard.
#
#*****************************************************************


#*****************************************************************
#
#  Function name: formatCategoryLabel
#
#  DESCRIPTION:   Builds the display label for a category key by replacing
#                 underscores with spaces and upper casing.
#
#  Parameters:    key (str) : category key such as baked_goods
#
#  Return values: str : display label such as BAKED GOODS
#
#*****************************************************************

def formatCategoryLabel(key):
    return key.replace('_', ' ').upper()


#*****************************************************************
#
#  Function name: formatSliceTooltip
#
#  DESCRIPTION:   Formats the hover text of one slice with pounds to two
#                 decimals and the share of the displayed total to one decimal.
#
#  Parameters:    label (str) : slice label
#                 value (float) : slice pounds
#                 total (float) : sum of all displayed slices
#
#  Return values: str : e.g. 'PROTEINS: 10.00 lbs (66.7%)'
#
#*****************************************************************

def formatSliceTooltip(label, value, total):
    pct = f'{value / total * 100:.1f}' if total else '0.0'
    return f'{label}: {value:.2f} lbs ({pct}%)'


#*****************************************************************
#
#  Function name: buildPieSlices
#
#  DESCRIPTION:   Converts a totals mapping into the slices shown on a pie.
#                 Categories with no positive pounds are dropped so the pie
#                 stays readable. Tooltip shares use the kept slices only.
#
#  Parameters:    totals (mapping) : category key -> pounds
#
#  Return values: list : dicts with key, label, value and tooltip
#
#*****************************************************************

def buildPieSlices(totals):
    kept = [(key, value) for key, value in totals.items() if value > 0]
    total = sum(value for _, value in kept)

    slices = []
    for key, value in kept:
        label = formatCategoryLabel(key)
        slices.append({
            'key': key,
            'label': label,
            'value': value,
            'tooltip': formatSliceTooltip(label, value, total),
        })
    return slices
