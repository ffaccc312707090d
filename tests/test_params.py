"""
Tests for parameter classification and rendering.

Tests verify:
- Each value kind renders with the right quoting
- bool and Enum win over their numeric / string base types
- Dates render in local time with a fixed format
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum, IntEnum

import pytest

from metric_producer.params import DATE_FORMAT, Param, ParamKind, classify, render_value


class Color(Enum):
    TEST_VAL = "test"


class Priority(IntEnum):
    HIGH = 1


@dataclass
class Sample:
    field: str = "value"


class TestClassify:
    """Test value kind resolution."""

    @pytest.mark.parametrize(
        "value, kind",
        [
            (2137, ParamKind.NUMERIC),
            (21.37, ParamKind.NUMERIC),
            (Decimal("1.50"), ParamKind.NUMERIC),
            (True, ParamKind.BOOLEAN),
            ("text", ParamKind.TEXT),
            (datetime(2022, 12, 26, 21, 37, 12), ParamKind.TEMPORAL),
            (date(2022, 12, 26), ParamKind.TEMPORAL),
            (Color.TEST_VAL, ParamKind.SYMBOLIC),
            (Sample(), ParamKind.GENERIC),
            (None, ParamKind.GENERIC),
        ],
    )
    def test_classify(self, value, kind):
        assert classify(value) is kind

    def test_bool_is_not_numeric(self):
        assert classify(False) is ParamKind.BOOLEAN

    def test_int_enum_is_symbolic(self):
        assert classify(Priority.HIGH) is ParamKind.SYMBOLIC


class TestRenderValue:
    """Test rendering of each kind."""

    def test_int_unquoted(self):
        assert render_value(2137) == "2137"

    def test_float_unquoted(self):
        assert render_value(21.37) == "21.37"

    def test_booleans_lowercase(self):
        assert render_value(True) == "true"
        assert render_value(False) == "false"

    def test_string_quoted(self):
        assert render_value("string") == '"string"'

    def test_embedded_quotes_not_escaped(self):
        assert render_value('say "hi"') == '"say "hi""'

    def test_naive_datetime(self):
        value = datetime(2022, 12, 26, 21, 37, 12)
        assert render_value(value) == '"2022-12-26 21:37:12"'

    def test_aware_datetime_uses_local_zone(self):
        value = datetime(2022, 12, 26, 21, 37, 12, tzinfo=UTC)
        expected = value.astimezone().strftime(DATE_FORMAT)
        assert render_value(value) == f'"{expected}"'

    def test_date_renders_midnight(self):
        assert render_value(date(2022, 12, 26)) == '"2022-12-26 00:00:00"'

    def test_enum_by_name(self):
        assert render_value(Color.TEST_VAL) == '"TEST_VAL"'
        assert render_value(Priority.HIGH) == '"HIGH"'

    def test_object_uses_str(self):
        assert render_value(Sample()) == "\"Sample(field='value')\""

    def test_none_is_generic(self):
        assert render_value(None) == '"None"'

    def test_explicit_kind_overrides_classification(self):
        assert render_value(2137, ParamKind.TEXT) == '"2137"'


class TestParam:
    """Test Param pairs."""

    def test_str_joins_name_and_value(self):
        assert str(Param("intParam", "2137")) == "intParam: 2137"

    def test_of_renders_eagerly(self):
        sample = Sample()
        param = Param.of("objectParam", sample)
        sample.field = "changed"

        assert param.value == "\"Sample(field='value')\""
