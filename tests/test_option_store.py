"""Unit tests for catalogue/store.py -- wholesale option replacement."""

from unittest.mock import patch

import pytest

from catalogue.models import OptionGroup
from catalogue.store import OptionStore


@pytest.fixture
def store():
    s = OptionStore("sqlite:///:memory:")
    yield s
    s.close()


def _pairs(options):
    return [(o.name, o.type) for o in options]


class TestReplaceAll:
    def test_empty_catalogue(self, store):
        assert store.list_all() == []

    def test_replace_then_list(self, store):
        saved = store.replace_all([OptionGroup("Color", ["Red", "Blue"])])
        assert _pairs(saved) == [("Red", "Color"), ("Blue", "Color")]
        assert _pairs(store.list_all()) == [("Red", "Color"), ("Blue", "Color")]
        assert all(o.id is not None for o in saved)

    def test_previous_options_are_gone(self, store):
        store.replace_all([OptionGroup("Flooring", ["Oak", "Tile"]), OptionGroup("Style", ["Modern"])])
        store.replace_all([OptionGroup("Color", ["Red", "Blue"])])
        assert _pairs(store.list_all()) == [("Red", "Color"), ("Blue", "Color")]

    def test_groups_keep_submission_order(self, store):
        store.replace_all([OptionGroup("Style", ["Boho", "Minimal"]), OptionGroup("Color", ["Sage"])])
        assert _pairs(store.list_all()) == [("Boho", "Style"), ("Minimal", "Style"), ("Sage", "Color")]

    def test_empty_groups_clear_catalogue(self, store):
        store.replace_all([OptionGroup("Color", ["Red"])])
        assert store.replace_all([OptionGroup("Color", [])]) == []
        assert store.list_all() == []

    def test_failure_mid_replace_keeps_old_catalogue(self, store):
        """The delete and inserts share one transaction; a fault rolls both back."""
        store.replace_all([OptionGroup("Color", ["Red", "Blue"])])

        class Exploding(list):
            def __iter__(self):
                yield "Green"
                raise RuntimeError("client went away")

        with pytest.raises(RuntimeError):
            store.replace_all([OptionGroup("Color", Exploding())])

        assert _pairs(store.list_all()) == [("Red", "Color"), ("Blue", "Color")]

    def test_replace_logs_counts(self, store):
        with patch("catalogue.store.logger") as mock_logger:
            store.replace_all([OptionGroup("Color", ["Red"])])
        mock_logger.info.assert_called_once()
