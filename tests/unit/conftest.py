"""
Unit test fixtures - factory-built records and documents.
"""

import pytest

from tests.factories.record_factories import make_spatial_record


@pytest.fixture
def record_data():
    """Return randomized meteorite record data dict."""
    return make_spatial_record()


@pytest.fixture
def year_key():
    from core.bulk_upsert import partition_key_from_field
    return partition_key_from_field("year")
