#*****************************************************************
#
#  PROJECT:     Food Distribution Dashboard
#
#  CLASS:       Dashboard Data Pipeline
#
#  FILE:        source_fetcher.py
#
#  DESCRIPTION: Retrieves CSV logs and GeoJSON layers either from a local data
#               directory or from a base URL over HTTP. Any failure to retrieve
#               a file is reported as SourceUnavailableError and never retried.
#
#*****************************************************************

import json
import logging
from pathlib import Path

import requests

logger = logging.getLogger(__name__)


class SourceUnavailableError(Exception):

#*****************************************************************
#
#  Function name: __init__
#
#  DESCRIPTION:   Records which source could not be retrieved and why, with a
#                 message naming the file.
#
#  Parameters:    name (str) : file name that failed
#                 reason (str) : short failure description
#
#  Return values: None (constructor)
#
#*****************************************************************

    def __init__(self, name, reason):
        super().__init__(f'Failed to load {name}: {reason}')
        self.name = name
        self.reason = reason


class SourceFetcher:

#*****************************************************************
#
#  Function name: __init__
#
#  DESCRIPTION:   Initializes the fetcher. When base_url is given files are
#                 requested relative to it, otherwise they are read from
#                 data_dir. A requests session may be injected for reuse.
#
#  Parameters:    data_dir (str|Path) : local directory holding the sources
#                 base_url (str) : optional HTTP base URL
#                 timeout (int) : request timeout in seconds
#                 session (requests.Session) : optional session to use
#
#  Return values: None (constructor)
#
#*****************************************************************

    def __init__(self, data_dir='data', base_url=None, timeout=30, session=None):
        self.data_dir = Path(data_dir)
        self.base_url = base_url.rstrip('/') + '/' if base_url else None
        self.timeout = timeout
        self.session = session


#*****************************************************************
#
#  Function name: fetchText
#
#  DESCRIPTION:   Returns the full text of one source file. A missing file,
#                 a transport error or a non OK HTTP status all raise
#                 SourceUnavailableError naming the file.
#
#  Parameters:    name (str) : file name relative to the source location
#
#  Return values: str : file contents
#
#*****************************************************************

    def fetchText(self, name):
        if self.base_url:
            return self.fetchRemote(name)
        return self.fetchLocal(name)


#*****************************************************************
#
#  Function name: fetchJson
#
#  DESCRIPTION:   Returns one source parsed as JSON. Text that is not valid JSON
#                 is reported as an unavailable source.
#
#  Parameters:    name (str) : file name relative to the source location
#
#  Return values: dict : parsed JSON document
#
#*****************************************************************

    def fetchJson(self, name):
        text = self.fetchText(name)
        try:
            return json.loads(text)
        except ValueError as e:
            raise SourceUnavailableError(name, f'invalid JSON ({e})') from e


#*****************************************************************
#
#  Function name: fetchLocal
#
#  DESCRIPTION:   Reads a source from the data directory, dropping any byte
#                 order mark.
#
#  Parameters:    name (str) : file name inside data_dir
#
#  Return values: str : file contents
#
#*****************************************************************

    def fetchLocal(self, name):
        path = self.data_dir / name
        logger.info(f'Reading {path}')
        try:
            return path.read_text(encoding='utf-8-sig')
        except OSError as e:
            raise SourceUnavailableError(name, e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise SourceUnavailableError(name, 'not valid UTF-8') from e


#*****************************************************************
#
#  Function name: fetchRemote
#
#  DESCRIPTION:   Requests a source relative to the base URL with the configured
#                 timeout. Transport errors and non OK statuses raise
#                 SourceUnavailableError.
#
#  Parameters:    name (str) : file name relative to base_url
#
#  Return values: str : response body
#
#*****************************************************************

    def fetchRemote(self, name):
        url = self.base_url + name
        logger.info(f'Requesting {url}')
        http = self.session or requests
        try:
            response = http.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise SourceUnavailableError(name, str(e)) from e

        if not response.ok:
            raise SourceUnavailableError(name, f'HTTP {response.status_code}')
        return response.text
