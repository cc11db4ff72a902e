"""
Unit tests for table definitions.
"""

import pytest
import sqlalchemy as sa

from db.models import ChatMessage, ServiceRequest, User, utc_now


class TestTimestampColumns:
    @pytest.mark.parametrize(
        "model,column",
        [
            (User, "created_at"),
            (User, "updated_at"),
            (ServiceRequest, "created_at"),
            (ServiceRequest, "updated_at"),
            (ChatMessage, "created_at"),
        ],
    )
    def test_timestamps_are_naive_datetime_columns(self, model, column):
        col = model.__table__.c[column]
        assert type(col.type) is sa.DateTime
        assert col.type.timezone is False
        assert col.nullable is False

    def test_utc_now_is_naive(self):
        assert utc_now().tzinfo is None

    def test_naive_timestamp_binds(self):
        # The bind processor must accept what utc_now() produces
        col_type = ServiceRequest.__table__.c.created_at.type
        processor = col_type.bind_processor(sa.create_engine("sqlite://").dialect)
        assert processor(utc_now())
