"""
Tests for status message lifetime and dismissal.
"""
from directory_admin import config, operations
from directory_admin.state import ERROR, SUCCESS


def test_message_expires_after_lifetime(store):
    operations.show_message(store, "Saved", SUCCESS, now=100.0)

    operations.expire_message(store, now=100.0 + config.STATUS_MESSAGE_SECONDS - 0.1)
    assert store.state.message.text == "Saved"

    operations.expire_message(store, now=100.0 + config.STATUS_MESSAGE_SECONDS)
    assert store.state.message is None


def test_new_message_replaces_old_one_and_its_deadline(store):
    operations.show_message(store, "First", SUCCESS, now=100.0)
    operations.show_message(store, "Second", ERROR, now=103.0)

    operations.expire_message(store, now=100.0 + config.STATUS_MESSAGE_SECONDS)

    assert store.state.message.text == "Second"
    assert store.state.message.severity == ERROR


def test_dismiss_clears_message(store):
    operations.show_message(store, "Saved")
    operations.dismiss_message(store)
    assert store.state.message is None


def test_dismiss_without_message_is_noop(store):
    before = store.state
    operations.dismiss_message(store)
    operations.dismiss_message(store)
    assert store.state == before


def test_expire_without_message_is_noop(store):
    before = store.state
    operations.expire_message(store, now=1e9)
    assert store.state is before
