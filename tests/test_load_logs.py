from config import getConfig
from load_logs import DistributionLogLoader
from source_fetcher import SourceFetcher

CONFIG = getConfig()


def make_loader(data_dir, file_name):
    return DistributionLogLoader(
        file_name,
        SourceFetcher(data_dir=data_dir),
        CONFIG.CATEGORY_COLUMNS,
        CONFIG.COUNTY_COLUMN,
        CONFIG.TARGET_COUNTIES
    )


def test_load_pipeline_totals(data_dir):
    success, totals, summary = make_loader(data_dir, '2023_log.csv').runLoadPipeline()

    assert success
    assert dict(totals) == {
        'proteins': 15, 'starch': 2, 'veg': 4, 'fruit': 1,
        'baked_goods': 1, 'dairy': 0, 'grocery': 3, 'individual_meal_lbs': 2,
    }
    assert summary['raw_row_count'] == 3
    assert summary['target_row_count'] == 2
    assert summary['rows_excluded'] == 1
    assert summary['total_lbs'] == 28.0


def test_crlf_log_with_bom(data_dir):
    success, totals, summary = make_loader(data_dir, '2024_log.csv').runLoadPipeline()
    assert success
    assert totals['proteins'] == 1.5
    assert totals['dairy'] == 2.25
    assert summary['target_row_count'] == 1


def test_missing_file_is_reported(data_dir):
    success, totals, summary = make_loader(data_dir, '2025_log.csv').runLoadPipeline()
    assert not success
    assert totals is None
    assert summary['file'] == '2025_log.csv'
    assert 'Failed to load 2025_log.csv' in summary['error']


def test_schema_and_value_warnings(tmp_path, caplog):
    (tmp_path / 'odd.csv').write_text('County,Proteins LBS\nELK,ten\nELK,NA\n', encoding='utf-8')
    loader = make_loader(tmp_path, 'odd.csv')
    loader.loadData()

    missing = loader.validateSchema()
    assert 'Starch LBS' in missing
    assert 'County' not in missing
    assert loader.validateValues() == 1
    assert 'non numeric category cells' in caplog.text


def test_remote_log_with_byte_order_mark(fake_session, fake_response):
    body = '\ufeffCounty,Proteins LBS\r\nELK,10\r\nmar,2.5\r\n'
    session = fake_session({'http://host/logs/2024_log.csv': fake_response(body)})
    loader = DistributionLogLoader(
        '2024_log.csv',
        SourceFetcher(base_url='http://host/logs', session=session),
        CONFIG.CATEGORY_COLUMNS,
        CONFIG.COUNTY_COLUMN,
        CONFIG.TARGET_COUNTIES
    )

    success, totals, summary = loader.runLoadPipeline()

    assert success
    assert totals['proteins'] == 12.5
    assert summary['target_row_count'] == 2
    assert 'County' not in loader.validateSchema()


def test_header_only_log_reports_missing_columns(tmp_path, caplog):
    (tmp_path / 'empty.csv').write_text('County,Proteins LBS\n', encoding='utf-8')
    loader = make_loader(tmp_path, 'empty.csv')
    loader.loadData()

    missing = loader.validateSchema()

    assert loader.rows == []
    assert 'County' not in missing
    assert 'Starch LBS' in missing
    assert 'Missing columns in empty.csv' in caplog.text
    assert 'has no data rows' in caplog.text
