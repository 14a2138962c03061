#*****************************************************************
#
#  PROJECT:     Food Distribution Dashboard
#
#  CLASS:       Dashboard Data Pipeline
#
#  FILE:        choropleth.py
#
#  DESCRIPTION: Styling and popup content for the county boundary layer and
#               the census tract poverty overlay. Colors come from an ordered
#               (upper_bound, color) table scanned front to back.
#
#*****************************************************************

import html
import logging

import numpy as np

from normalize import DECIMAL_PATTERN

logger = logging.getLogger(__name__)

COUNTY_STYLE = { 'weight': 3, 'color': 'blue', 'fillOpacity': 0.15 }
TRACT_STYLE = { 'weight': 1, 'color': '#000000', 'fillOpacity': 0.05 }


#*****************************************************************
#
#  Function name: parseMeasure
#
#  DESCRIPTION:   Reads a numeric feature property. Unlike toNumber a missing
#                 or unreadable value is kept apart from zero so the map can
#                 show it as missing data.
#
#  Parameters:    raw : property value from the GeoJSON feature
#
#  Return values: float : finite value
#                 None  : missing, non numeric, or non finite
#
#*****************************************************************

def parseMeasure(raw):
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        s = str(raw).strip()
        if not DECIMAL_PATTERN.match(s):
            return None
        value = float(s)

    return value if np.isfinite(value) else None


#*****************************************************************
#
#  Function name: povertyColor
#
#  DESCRIPTION:   Returns the fill color for a poverty percentage by scanning
#                 the threshold table in order and taking the first bound the
#                 value is strictly below. Missing data gets the missing color.
#
#  Parameters:    pct : poverty percentage (number, numeric string or None)
#                 thresholds (tuple) : ordered (upper_bound, color) pairs
#                 missing_color (str) : color for missing data
#
#  Return values: str : hex color
#
#*****************************************************************

def povertyColor(pct, thresholds, missing_color):
    value = parseMeasure(pct)
    if value is None:
        return missing_color

    for upper_bound, color in thresholds:
        if value < upper_bound:
            return color

    # value at or above the last bound
    return thresholds[-1][1]


#*****************************************************************
#
#  Function name: buildLegendEntries
#
#  DESCRIPTION:   Builds the legend rows for the poverty overlay from the same
#                 threshold table used for coloring.
#
#  Parameters:    thresholds (tuple) : ordered (upper_bound, color) pairs
#                 missing_color (str) : color for missing data
#
#  Return values: list : (label, color) tuples, lowest band first
#
#*****************************************************************

def buildLegendEntries(thresholds, missing_color):
    entries = []
    lower = None
    for upper_bound, color in thresholds:
        if lower is None:
            label = f'< {upper_bound:g}%'
        elif np.isinf(upper_bound):
            label = f'{lower:g}%+'
        else:
            label = f'{lower:g}-{upper_bound:g}%'
        entries.append((label, color))
        lower = upper_bound

    entries.append(('No data', missing_color))
    return entries


#*****************************************************************
#
#  Function name: formatPovertyLabel
#
#  DESCRIPTION:   Formats a tract poverty percentage for its popup with one
#                 decimal, or N/A when the value is missing.
#
#  Parameters:    raw : PovertyPct property value
#
#  Return values: str : e.g. '12.3%' or 'N/A'
#
#*****************************************************************

def formatPovertyLabel(raw):
    value = parseMeasure(raw)
    return 'N/A' if value is None else f'{value:.1f}%'


#*****************************************************************
#
#  Function name: formatIncomeLabel
#
#  DESCRIPTION:   Formats a tract median income with thousands separators and up
#                 to three decimals, or N/A when the value is missing.
#
#  Parameters:    raw : MedianIncomeNum property value
#
#  Return values: str : e.g. '$45,000' or 'N/A'
#
#*****************************************************************

def formatIncomeLabel(raw):
    value = parseMeasure(raw)
    if value is None:
        return 'N/A'
    digits = f'{value:,.3f}'.rstrip('0').rstrip('.')
    return f'${digits}'


#*****************************************************************
#
#  Function name: buildCountyPopup
#
#  DESCRIPTION:   Builds the popup shown when a county boundary is clicked.
#
#  Parameters:    properties (dict) : county feature properties
#
#  Return values: str : popup HTML
#
#*****************************************************************

def buildCountyPopup(properties):
    name = (properties or {}).get('NAME') or 'County'
    return f'<strong>{html.escape(str(name))} County</strong>'


#*****************************************************************
#
#  Function name: buildTractPopup
#
#  DESCRIPTION:   Builds the tract popup with the tract name, poverty and median
#                 income. The name falls back from NAME to NAMELSAD to Tract.
#
#  Parameters:    properties (dict) : tract feature properties
#
#  Return values: str : popup HTML
#
#*****************************************************************

def buildTractPopup(properties):
    p = properties or {}
    name = p.get('NAME')
    if name is None:
        name = p.get('NAMELSAD')
    if name is None:
        name = 'Tract'

    return (
        f'<b>{html.escape(str(name))}</b><br>'
        f'Poverty: {formatPovertyLabel(p.get("PovertyPct"))}<br>'
        f'Median Income: {formatIncomeLabel(p.get("MedianIncomeNum"))}'
    )


#*****************************************************************
#
#  Function name: styleTract
#
#  DESCRIPTION:   Returns the Leaflet style of one tract: thin black outline,
#                 light fill, and the poverty color as fill color.
#
#  Parameters:    properties (dict) : tract feature properties
#                 thresholds (tuple) : ordered (upper_bound, color) pairs
#                 missing_color (str) : color for missing data
#
#  Return values: dict : Leaflet path style
#
#*****************************************************************

def styleTract(properties, thresholds, missing_color):
    style = dict(TRACT_STYLE)
    style['fillColor'] = povertyColor((properties or {}).get('PovertyPct'), thresholds, missing_color)
    return style


#*****************************************************************
#
#  Function name: annotateCountyLayer
#
#  DESCRIPTION:   Attaches the boundary style and popup to every county
#                 feature so the generated page only hands them to Leaflet.
#
#  Parameters:    geojson (dict) : county FeatureCollection
#
#  Return values: dict : new FeatureCollection with style and popup properties
#
#*****************************************************************

def annotateCountyLayer(geojson):
    features = []
    for feature in geojson.get('features') or []:
        props = dict(feature.get('properties') or {})
        props['_style'] = dict(COUNTY_STYLE)
        props['_popup'] = buildCountyPopup(props)
        features.append({**feature, 'properties': props})

    return {**geojson, 'features': features}


#*****************************************************************
#
#  Function name: annotateTractLayer
#
#  DESCRIPTION:   Attaches the poverty fill style and the popup text to every
#                 tract feature and logs how many tracts were styled.
#
#  Parameters:    geojson (dict) : tract FeatureCollection
#                 thresholds (tuple) : ordered (upper_bound, color) pairs
#                 missing_color (str) : color for missing data
#
#  Return values: dict : new FeatureCollection with style and popup properties
#
#*****************************************************************

def annotateTractLayer(geojson, thresholds, missing_color):
    features = []
    for feature in geojson.get('features') or []:
        props = dict(feature.get('properties') or {})
        props['_style'] = styleTract(props, thresholds, missing_color)
        props['_popup'] = buildTractPopup(props)
        features.append({**feature, 'properties': props})

    logger.info(f'Tract features: {len(features)}')
    return {**geojson, 'features': features}
