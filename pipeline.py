#*****************************************************************
#
#  PROJECT:     Food Distribution Dashboard
#
#  CLASS:       Dashboard Data Pipeline
#
#  FILE:        pipeline.py
#
#  DESCRIPTION: Main orchestrator for the dashboard build. Loads every yearly
#               distribution log independently, loads the map layers, builds
#               the combined category table, exports summaries, and triggers
#               dashboard generation.
#
#*****************************************************************

import json
import logging
from pathlib import Path
from datetime import datetime

import pandas as pd

from chart_data import buildPieSlices
from choropleth import annotateCountyLayer, annotateTractLayer
from config import getConfig
from generate_dashboard import DashboardGenerator
from load_logs import DistributionLogLoader
from source_fetcher import SourceFetcher, SourceUnavailableError

class DashboardPipeline:

#*****************************************************************
#
#  Function name: __init__
#
#  DESCRIPTION:   Initializes the pipeline with its configuration, the source
#                 fetcher and the output directory. Also creates the result
#                 slots that store each chart and map layer outcome.
#
#  Parameters:    config (Config) : configuration (default: getConfig())
#                 fetcher (SourceFetcher) : source used for every file
#                 output_dir (str) : path for summaries and the dashboard
#
#  Return values: None (constructor)
#
#*****************************************************************

    def __init__(self, config=None, fetcher=None, output_dir=None):
        self.config = config or getConfig()
        self.fetcher = fetcher or SourceFetcher(
            data_dir=self.config.DATA_DIR,
            base_url=self.config.SOURCE_BASE,
            timeout=self.config.FETCH_TIMEOUT
        )
        self.output_dir = Path(output_dir or self.config.OUTPUT_DIR)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.results = {
            'charts': [],
            'county_layer': None,
            'tract_layer': None,
            'layer_errors': {}
        }

#*****************************************************************
#
#  Function name: setupLogging
#
#  DESCRIPTION:   Configures Python logging with both a timestamped log file and
#                 console output handler. Creates the logs directory if it does
#                 not exist so the pipeline can run from a fresh checkout.
#
#  Parameters:    None
#
#  Return values: None
#
#*****************************************************************

    def setupLogging(self):
        log_dir = Path(self.config.LOGS_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        log_file = log_dir / f'dashboard_pipeline_{timestamp}.log'

        logging.basicConfig(
            level=self.config.LOG_LEVEL,
            format=self.config.LOG_FORMAT,
            handlers=[
                logging.FileHandler(log_file),
                logging.StreamHandler()
            ]
        )

        logging.info(f'Logging initialized: {log_file}')


#*****************************************************************
#
#  Function name: runChartLoading
#
#  DESCRIPTION:   Loads every configured log in order and stores one result
#                 per chart with its totals, pie slices and summary. A file that
#                 cannot be retrieved is recorded as failed and the remaining
#                 files still load.
#
#  Parameters:    None
#
#  Return values: int : number of charts loaded successfully
#
#*****************************************************************

    def runChartLoading(self):
        logging.info('LOADING DISTRIBUTION LOGS')

        self.results['charts'] = []
        for chart in self.config.CHARTS:
            loader = DistributionLogLoader(
                chart['file'],
                self.fetcher,
                self.config.CATEGORY_COLUMNS,
                self.config.COUNTY_COLUMN,
                self.config.TARGET_COUNTIES
            )
            success, totals, summary = loader.runLoadPipeline()

            self.results['charts'].append({
                'file': chart['file'],
                'canvas_id': chart['canvas_id'],
                'title': chart['title'],
                'success': success,
                'totals': dict(totals) if success else None,
                'slices': buildPieSlices(totals) if success else [],
                'summary': summary
            })

        return sum(1 for chart in self.results['charts'] if chart['success'])


#*****************************************************************
#
#  Function name: runMapLoading
#
#  DESCRIPTION:   Loads the county boundary and tract layers and annotates
#                 them with styles and popups. Each layer fails on its own so a
#                 missing tract file still leaves the county outline.
#
#  Parameters:    None
#
#  Return values: True  : both layers loaded
#                 False : one or both layers failed
#
#*****************************************************************

    def runMapLoading(self):
        logging.info('LOADING MAP LAYERS')
        c = self.config

        try:
            counties = self.fetcher.fetchJson(c.COUNTY_BOUNDARIES_FILE)
            self.results['county_layer'] = annotateCountyLayer(counties)
        except SourceUnavailableError as e:
            logging.error(str(e))
            self.results['layer_errors']['county_layer'] = str(e)

        try:
            tracts = self.fetcher.fetchJson(c.TRACTS_FILE)
            self.results['tract_layer'] = annotateTractLayer(
                tracts, c.POVERTY_THRESHOLDS, c.MISSING_DATA_COLOR
            )
        except SourceUnavailableError as e:
            logging.error(str(e))
            self.results['layer_errors']['tract_layer'] = str(e)

        return not self.results['layer_errors']


#*****************************************************************
#
#  Function name: buildTotalsFrame
#
#  DESCRIPTION:   Combines the totals of every loaded chart into one table with
#                 a row per category in declaration order and a column per log
#                 file. Failed files are left out.
#
#  Parameters:    None
#
#  Return values: DataFrame : categories x files, pounds
#
#*****************************************************************

    def buildTotalsFrame(self):
        columns = {
            chart['file']: pd.Series(chart['totals'], dtype='float64')
            for chart in self.results['charts'] if chart['success']
        }
        frame = pd.DataFrame(columns, index=list(self.config.CATEGORY_COLUMNS.keys()))
        frame.index.name = 'category'
        return frame.fillna(0.0)


#*****************************************************************
#
#  Function name: generateCombinedSummary
#
#  DESCRIPTION:   Merges per chart summaries and map layer status into one
#                 dictionary, with overall totals across the loaded files.
#
#  Parameters:    None
#
#  Return values: dict : combined summary statistics
#
#*****************************************************************

    def generateCombinedSummary(self):
        logging.info('Generating combined summary statistics...')

        frame = self.buildTotalsFrame()
        loaded = [chart for chart in self.results['charts'] if chart['success']]

        return {
            'pipeline_timestamp': datetime.now().isoformat(),
            'charts': [chart['summary'] for chart in self.results['charts']],
            'map_layers': {
                'county_layer': self.results['county_layer'] is not None,
                'tract_layer': self.results['tract_layer'] is not None,
                'errors': dict(self.results['layer_errors'])
            },
            'overall': {
                'files_loaded': len(loaded),
                'files_failed': len(self.results['charts']) - len(loaded),
                'total_rows': sum(chart['summary']['raw_row_count'] for chart in loaded),
                'target_rows': sum(chart['summary']['target_row_count'] for chart in loaded),
                'total_lbs': float(frame.to_numpy().sum()),
                'category_totals': {key: float(value) for key, value in frame.sum(axis=1).items()}
            }
        }

#*****************************************************************
#
#  Function name: exportSummaryJson
#
#  DESCRIPTION:   Writes the combined summary dictionary to a timestamped JSON
#                 file in the output directory and returns its path.
#
#  Parameters:    summary (dict) : combined summary from generateCombinedSummary
#
#  Return values: Path : path to the exported JSON file
#
#*****************************************************************

    def exportSummaryJson(self, summary):
        logging.info('Exporting summary statistics to JSON...')

        timestamp = datetime.now().strftime(self.config.EXPORT_TIMESTAMP_FORMAT)
        output_file = self.output_dir / f'dashboard_summary_{timestamp}.json'

        with open(output_file, 'w') as f:
            json.dump(summary, f, indent=2)

        logging.info(f'Summary exported to {output_file}')
        return output_file


#*****************************************************************
#
#  Function name: exportTotalsCsv
#
#  DESCRIPTION:   Writes the category by file totals table to a timestamped CSV
#                 in the output directory and returns its path.
#
#  Parameters:    None
#
#  Return values: Path : path to the exported CSV
#
#*****************************************************************

    def exportTotalsCsv(self):
        timestamp = datetime.now().strftime(self.config.EXPORT_TIMESTAMP_FORMAT)
        output_file = self.output_dir / f'category_totals_{timestamp}.csv'

        self.buildTotalsFrame().to_csv(output_file)

        logging.info(f'Category totals exported to {output_file}')
        return output_file

#*****************************************************************
#
#  Function name: generatePipelineReport
#
#  DESCRIPTION:   Prints a human readable summary of the pipeline results to
#                 both console and log file: row counts and pounds per loaded
#                 file, failures, and map layer status.
#
#  Parameters:    None
#
#  Return values: None (prints to log and console)
#
#*****************************************************************

    def generatePipelineReport(self):
        logging.info('')
        logging.info('FOOD DISTRIBUTION DASHBOARD PIPELINE : FINAL REPORT')

        for chart in self.results['charts']:
            logging.info('')
            if chart['success']:
                summary = chart['summary']
                logging.info(f"{chart['file']}:")
                logging.info(f"  Status: SUCCESS")
                logging.info(f"  Input Rows:  {summary['raw_row_count']:,}")
                logging.info(f"  Target Rows: {summary['target_row_count']:,}")
                logging.info(f"  Excluded:    {summary['rows_excluded']:,}")
                logging.info(f"  Total LBS:   {summary['total_lbs']:,.2f}")
                logging.info(f"  Slices:      {len(chart['slices'])}")
            else:
                logging.info(f"{chart['file']}: FAILED ({chart['summary']['error']})")

        logging.info('')
        for layer in ('county_layer', 'tract_layer'):
            status = 'LOADED' if self.results[layer] is not None else 'FAILED'
            logging.info(f'{layer}: {status}')

        logging.info('')


#*****************************************************************
#
#  Function name: runFullPipeline
#
#  DESCRIPTION:   Executes the complete end to end build by setting up logging,
#                 loading every log and map layer independently, exporting the
#                 summaries, printing the final report, and writing the
#                 dashboard. One failed source never blocks the others.
#
#  Parameters:    setup_logging (bool) : configure file and console logging
#
#  Return values: tuple (bool, str) : (every source loaded, dashboard path)
#
#*****************************************************************

    def runFullPipeline(self, setup_logging=True):
        if setup_logging:
            self.setupLogging()

        logging.info('FOOD DISTRIBUTION DASHBOARD PIPELINE - START')
        logging.info(f'Sources: {self.fetcher.base_url or Path(self.fetcher.data_dir).absolute()}')
        logging.info(f'Output Directory: {self.output_dir.absolute()}')

        loaded = self.runChartLoading()
        layers_ok = self.runMapLoading()

        summary = self.generateCombinedSummary()
        self.exportSummaryJson(summary)
        self.exportTotalsCsv()
        self.generatePipelineReport()

        generator = DashboardGenerator(self.config, output_dir=str(self.output_dir))
        dashboard_path = generator.generate(
            self.results['charts'],
            county_layer=self.results['county_layer'],
            tract_layer=self.results['tract_layer']
        )

        overall_success = loaded == len(self.config.CHARTS) and layers_ok

        if overall_success:
            logging.info('Pipeline Status: SUCCESS')
        else:
            logging.info('Pipeline Status: PARTIAL SUCCESS OR FAILURE')

        return overall_success, dashboard_path


#*****************************************************************
#
#  Function name: main
#
#  DESCRIPTION:   Entry point that creates the pipeline with the default
#                 configuration and runs the full build.
#
#  Parameters:    None
#
#  Return values: True  : every source loaded and the dashboard was written
#                 False : one or more sources failed
#
#*****************************************************************

def main():
    pipeline = DashboardPipeline()

    success, dashboard_path = pipeline.runFullPipeline()

    if success:
        print(" Dashboard build completed successfully")
    else:
        print(" Dashboard built with missing sources. Check logs for details.")
    print(f" File: {dashboard_path}")

    return success


if __name__ == '__main__':
    main()
