#*****************************************************************
#
#  PROJECT:     Food Distribution Dashboard
#
#  CLASS:       Dashboard Data Pipeline
#
#  FILE:        load_logs.py
#
#  DESCRIPTION: Loads one yearly distribution log and reduces it to category
#               totals for the target counties. Checks are warnings only since
#               parsing and aggregation degrade to zero instead of failing.
#
#*****************************************************************

import logging
from datetime import datetime

from category_aggregator import computeCategoryTotals
from csv_parser import parseCsv, parseHeader
from normalize import DECIMAL_PATTERN, normalizeGeography
from source_fetcher import SourceUnavailableError

class DistributionLogLoader:

#*****************************************************************
#
#  Function name: __init__
#
#  DESCRIPTION:   Initializes the loader for one log file with the fetcher and
#                 the category and county settings it aggregates with. Also
#                 initializes internal row storage and counters for the summary.
#
#  Parameters:    file_name (str) : log file name, e.g. 2024_log.csv
#                 fetcher (SourceFetcher) : source used to retrieve the file
#                 category_columns (mapping) : category key -> source column
#                 county_column (str) : column holding the county code
#                 target_counties (set) : accepted county codes
#
#  Return values: None (constructor)
#
#*****************************************************************

    def __init__(self, file_name, fetcher, category_columns, county_column, target_counties):
        self.file_name = file_name
        self.fetcher = fetcher
        self.category_columns = category_columns
        self.county_column = county_column
        self.target_counties = target_counties

        self.headers = None
        self.rows = None
        self.totals = None
        self.raw_row_count = 0
        self.target_row_count = 0


#*****************************************************************
#
#  Function name: loadData
#
#  DESCRIPTION:   Retrieves the log text and parses it into row dictionaries,
#                 recording the raw row count. Retrieval failures propagate as
#                 SourceUnavailableError for the caller to report.
#
#  Parameters:    None
#
#  Return values: None
#
#*****************************************************************

    def loadData(self):
        logging.info(f'Loading distribution log {self.file_name}')

        text = self.fetcher.fetchText(self.file_name)
        self.headers = parseHeader(text)
        self.rows = parseCsv(text)
        self.raw_row_count = len(self.rows)

        logging.info(f'Loaded {self.raw_row_count:,} rows from {self.file_name}')


#*****************************************************************
#
#  Function name: validateSchema
#
#  DESCRIPTION:   Looks for the county column and every mapped category column
#                 in the parsed header. Missing columns add nothing to the
#                 totals, so they are logged as warnings rather than failures.
#
#  Parameters:    None
#
#  Return values: list : names of expected columns that are absent
#
#*****************************************************************

    def validateSchema(self):
        logging.info('Validating log columns ')

        if not self.rows:
            logging.warning(f'{self.file_name} has no data rows')

        present = set(self.headers or [])
        expected = [self.county_column] + list(self.category_columns.values())
        missing = [col for col in expected if col not in present]

        if missing:
            logging.warning(f'Missing columns in {self.file_name}: {missing}')
        else:
            logging.info('Column check passed')

        return missing


#*****************************************************************
#
#  Function name: validateValues
#
#  DESCRIPTION:   Counts category cells that are not numbers and not NA so
#                 that data entry problems show in the log. Such cells count
#                 as zero in the totals.
#
#  Parameters:    None
#
#  Return values: int : number of non numeric category cells
#
#*****************************************************************

    def validateValues(self):
        bad_cells = 0
        for row in self.rows or []:
            for column in self.category_columns.values():
                raw = row.get(column, '')
                if raw and raw.upper() != 'NA' and not DECIMAL_PATTERN.match(raw):
                    bad_cells += 1

        if bad_cells > 0:
            logging.warning(f'Found {bad_cells} non numeric category cells counted as 0')
        return bad_cells


#*****************************************************************
#
#  Function name: computeTotals
#
#  DESCRIPTION:   Aggregates the parsed rows into category totals and counts
#                 the rows that fell inside the target counties.
#
#  Parameters:    None
#
#  Return values: mapping : category key -> total pounds
#
#*****************************************************************

    def computeTotals(self):
        self.totals = computeCategoryTotals(
            self.rows,
            self.category_columns,
            self.county_column,
            self.target_counties
        )

        accepted = {normalizeGeography(code) for code in self.target_counties}
        self.target_row_count = sum(
            1 for row in self.rows if normalizeGeography(row.get(self.county_column)) in accepted
        )

        logging.info(f'{self.file_name} {dict(self.totals)}')
        return self.totals


#*****************************************************************
#
#  Function name: generateSummaryStatistics
#
#  DESCRIPTION:   Generates a structured summary of the loaded log for the
#                 pipeline report and JSON export.
#
#  Parameters:    None
#
#  Return values: dict : summary statistics dictionary
#
#*****************************************************************

    def generateSummaryStatistics(self):
        return {
            'file': self.file_name,
            'processing_timestamp': datetime.now().isoformat(),
            'raw_row_count': self.raw_row_count,
            'target_row_count': self.target_row_count,
            'rows_excluded': self.raw_row_count - self.target_row_count,
            'total_lbs': float(sum(self.totals.values())),
            'category_totals': {key: float(value) for key, value in self.totals.items()},
        }


#*****************************************************************
#
#  Function name: runLoadPipeline
#
#  DESCRIPTION:   Runs the full workflow for one log and stops early if the
#                 file cannot be retrieved. A retrieval failure is logged and
#                 reported through the return value so other logs still load.
#
#  Parameters:    None
#
#  Return values: tuple (bool, mapping, dict) : (success, totals, summary)
#                 summary holds the error message when success is False
#
#*****************************************************************

    def runLoadPipeline(self):
        try:
            self.loadData()
        except SourceUnavailableError as e:
            logging.error(str(e))
            return False, None, {'file': self.file_name, 'error': str(e)}

        self.validateSchema()
        self.validateValues()

        totals = self.computeTotals()
        summary = self.generateSummaryStatistics()

        logging.info(f'{self.file_name}: {self.target_row_count:,} of {self.raw_row_count:,} rows in target counties')

        return True, totals, summary
