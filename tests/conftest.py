"""
Shared test fixtures and utilities.
"""
from unittest.mock import Mock

import pytest
import requests

from directory_admin.state import SelectedFile, Store


def make_response(status_code=200, body=None, url="http://backend.test/api"):
    """Build a fake requests.Response returning ``body`` from ``json()``."""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    response.url = url
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


def make_file(name="listings.csv", content=b"COMPANY,EMAIL\nAcme,a@b.com\n", mime_type="text/csv"):
    return SelectedFile(name=name, size=len(content), mime_type=mime_type, read=lambda: content)


@pytest.fixture
def store():
    return Store()


@pytest.fixture
def session():
    """HTTP session whose calls never leave the process."""
    return Mock(spec=requests.Session)


@pytest.fixture
def history_payload():
    return [
        {
            "_id": "65f0c1",
            "originalName": "plumbers.xlsx",
            "uploadDate": "2024-03-12T10:15:00.000Z",
            "fileType": "xlsx",
            "fileSize": 20480,
            "status": "completed",
            "successfulUploads": 120,
            "totalRows": 120,
        },
        {
            "_id": "65f0c2",
            "originalName": "electricians.csv",
            "uploadDate": "2024-03-13T08:00:00.000Z",
            "fileType": "csv",
            "fileSize": 5120,
            "status": "partial",
            "successfulUploads": 40,
            "totalRows": 45,
        },
    ]
