#*****************************************************************
#
#  PROJECT:     Food Distribution Dashboard
#
#  CLASS:       Dashboard Data Pipeline
#
#  FILE:        config.py
#
#  DESCRIPTION: Central configuration file for the dashboard build pipeline.
#               Contains source locations, the chart list, the category to
#               column mapping, the target county filter, map and choropleth
#               settings, and logging settings.
#
#*****************************************************************

from pathlib import Path
from types import MappingProxyType

class Config:

    BASE_DIR = Path(__file__).parent

    DATA_DIR = BASE_DIR / 'data'
    OUTPUT_DIR = BASE_DIR / 'output'
    LOGS_DIR = BASE_DIR / 'logs'

    # When set, sources are requested from this URL instead of DATA_DIR
    SOURCE_BASE = None
    FETCH_TIMEOUT = 30

    CHARTS = (
        { 'file': '2023_log.csv', 'canvas_id': 'pie2023', 'title': '2023 Category Mix (Total LBS)' },
        { 'file': '2024_log.csv', 'canvas_id': 'pie2024', 'title': '2024 Category Mix (Total LBS)' },
        { 'file': '2025_log.csv', 'canvas_id': 'pie2025', 'title': '2025 Category Mix (Total LBS)' },
    )

    CATEGORY_COLUMNS = MappingProxyType({
        'proteins': 'Proteins LBS',
        'starch': 'Starch LBS',
        'veg': 'Veg LBS',
        'fruit': 'Fruit LBS',
        'baked_goods': 'Baked Goods LBS',
        'dairy': 'Dairy LBS',
        'grocery': 'Grocery LBS',
        'individual_meal_lbs': 'Indvid Meal LBS',
    })

    COUNTY_COLUMN = 'County'
    TARGET_COUNTIES = frozenset([ 'ELK', 'MAR', 'SJ' ])

    COUNTY_BOUNDARIES_FILE = 'target_counties.geojson'
    TRACTS_FILE = 'tracts_elk_mar_sj.geojson'

    MAP_CENTER = (41.68, -86.25)
    MAP_ZOOM = 9
    TILE_URL = 'https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png'
    TILE_ATTRIBUTION = '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
    TILE_MAX_ZOOM = 19

    POVERTY_THRESHOLDS = (
        (10, '#2ca25f'),
        (20, '#99d8c9'),
        (30, '#ffffb2'),
        (40, '#fecc5c'),
        (float('inf'), '#de2d26'),
    )
    MISSING_DATA_COLOR = '#cccccc'

    LOG_LEVEL = 'INFO'
    LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

    EXPORT_TIMESTAMP_FORMAT = '%Y%m%d'


#*****************************************************************
#
#  Function name: getConfig
#
#  DESCRIPTION:   Factory function that returns a Config instance for the pipeline.
#                 Other modules call this instead of instantiating Config directly
#                 so tests can swap in alternate mappings and filter sets.
#
#  Parameters:    None
#
#  Return values: Config : configuration object
#
#*****************************************************************

def getConfig():
    return Config()
