from datetime import datetime, timezone
from decimal import Decimal

import orjson

from paint_queue.errors import DatastoreError
from paint_queue.logging import _orjson_dumps


def test_event_dict_with_row_values_renders_as_json() -> None:
    line = _orjson_dumps({
        "event": "order_completed",
        "completed_at": datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc),
        "paint_quantity": Decimal("2.50"),
        "error": DatastoreError("boom"),
        1: "non-string key",
    })

    assert orjson.loads(line) == {
        "event": "order_completed",
        "completed_at": "2024-03-01T09:30:00Z",
        "paint_quantity": "2.50",
        "error": "DatastoreError: boom",
        "1": "non-string key",
    }
