"""
Tests for fetching the upload history.
"""
from datetime import datetime

import requests

from directory_admin import api_client, config, operations

from conftest import make_response


def test_fetch_replaces_history(store, session, history_payload):
    session.get.return_value = make_response(200, history_payload)

    operations.fetch_history(store, session)

    history = store.state.history
    assert len(history) == 2
    assert history[0].id == "65f0c1"
    assert history[0].original_name == "plumbers.xlsx"
    assert isinstance(history[0].upload_date, datetime)
    assert history[1].status == "partial"
    assert history[1].successful_uploads == 40
    assert history[1].total_rows == 45
    assert store.state.loading_history is False
    session.get.assert_called_once()
    assert session.get.call_args[0][0] == f"{config.API_BASE}{api_client.UPLOAD_HISTORY_PATH}"


def test_later_fetch_wins(store, session, history_payload):
    session.get.return_value = make_response(200, history_payload)
    operations.fetch_history(store, session)

    session.get.return_value = make_response(200, history_payload[1:])
    operations.fetch_history(store, session)

    assert [entry.original_name for entry in store.state.history] == ["electricians.csv"]


def test_server_error_keeps_previous_history(store, session, history_payload):
    session.get.return_value = make_response(200, history_payload)
    operations.fetch_history(store, session)
    before = store.state.history

    session.get.return_value = make_response(500, {"error": "database down"})
    operations.fetch_history(store, session)

    assert store.state.history == before
    assert store.state.message is None
    assert store.state.loading_history is False


def test_network_error_keeps_previous_history(store, session, history_payload):
    session.get.return_value = make_response(200, history_payload)
    operations.fetch_history(store, session)
    before = store.state.history

    session.get.side_effect = requests.exceptions.Timeout("slow")
    operations.fetch_history(store, session)

    assert store.state.history == before
    assert store.state.message is None


def test_malformed_history_is_ignored(store, session):
    session.get.return_value = make_response(200, {"not": "a list"})

    operations.fetch_history(store, session)

    assert store.state.history == ()
    assert store.state.message is None


def test_null_counts_in_entry_keep_the_list(store, session, history_payload):
    history_payload[1].update(fileSize=None, successfulUploads=None, totalRows=None, status=None)
    session.get.return_value = make_response(200, history_payload)

    operations.fetch_history(store, session)

    history = store.state.history
    assert len(history) == 2
    assert history[1].file_size == 0
    assert history[1].successful_uploads == 0
    assert history[1].total_rows == 0
    assert history[1].status == ""
