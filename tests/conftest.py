import pytest
import requests


class FakeResponse:

    def __init__(self, text='', status_code=200):
        self.text = text
        self.status_code = status_code

    @property
    def ok(self):
        return self.status_code < 400


class FakeSession:
    """Serves canned responses by URL and records every request."""

    def __init__(self, responses):
        self.responses = responses
        self.requests = []

    def get(self, url, timeout=None):
        self.requests.append((url, timeout))
        response = self.responses.get(url)
        if response is None:
            raise requests.ConnectionError(f'no route to {url}')
        return response


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse


LOG_HEADER = 'Date,County,Proteins LBS,Starch LBS,Veg LBS,Fruit LBS,Baked Goods LBS,Dairy LBS,Grocery LBS,Indvid Meal LBS'


@pytest.fixture
def data_dir(tmp_path):
    """A data directory holding two of the three yearly logs and both map layers."""
    data = tmp_path / 'data'
    data.mkdir()

    (data / '2023_log.csv').write_text(
        LOG_HEADER + '\n'
        '1/3/2023,ELK,10,2,NA,,1,0,3,0\n'
        '1/4/2023,mar,5,0,4,1,0,0,0,2\n'
        '1/5/2023,XXX,999,999,999,999,999,999,999,999\n',
        encoding='utf-8'
    )
    (data / '2024_log.csv').write_text(
        '\ufeff' + LOG_HEADER + '\r\n'
        '2/1/2024, SJ ,1.5,0,0,0,0,2.25,0,0\r\n',
        encoding='utf-8'
    )
    (data / 'target_counties.geojson').write_text(
        '{"type": "FeatureCollection", "features": ['
        '{"type": "Feature", "properties": {"NAME": "Elkhart"}, "geometry": null}]}',
        encoding='utf-8'
    )
    (data / 'tracts_elk_mar_sj.geojson').write_text(
        '{"type": "FeatureCollection", "features": ['
        '{"type": "Feature", "properties": {"NAME": "Tract 1", "PovertyPct": "14.2"}, "geometry": null},'
        '{"type": "Feature", "properties": {"NAME": "Tract 2"}, "geometry": null}]}',
        encoding='utf-8'
    )
    return data
