"""Unit tests for rest/segments.py: OData literal quoting and call segments."""

import pytest

from sharepoint_webparts.rest.segments import method_call, odata_literal


class TestODataLiteral:
    def test_string_is_single_quoted(self) -> None:
        assert odata_literal("42") == "'42'"

    def test_embedded_quote_is_doubled(self) -> None:
        assert odata_literal("O'Brien") == "'O''Brien'"

    def test_empty_string(self) -> None:
        assert odata_literal("") == "''"

    def test_hash_is_percent_encoded(self) -> None:
        assert odata_literal("g#1") == "'g%231'"

    def test_question_mark_is_percent_encoded(self) -> None:
        assert odata_literal("a?b") == "'a%3Fb'"

    def test_percent_is_percent_encoded(self) -> None:
        assert odata_literal("100%") == "'100%25'"

    def test_readable_characters_are_kept(self) -> None:
        assert odata_literal("/sites/x/Shared Documents/a(1).aspx") == (
            "'/sites/x/Shared Documents/a(1).aspx'"
        )

    def test_int_is_bare(self) -> None:
        assert odata_literal(3) == "3"

    def test_negative_int(self) -> None:
        assert odata_literal(-1) == "-1"

    def test_float_is_bare(self) -> None:
        assert odata_literal(1.5) == "1.5"

    def test_bool_renders_lowercase(self) -> None:
        assert odata_literal(True) == "true"
        assert odata_literal(False) == "false"

    def test_none_is_null(self) -> None:
        assert odata_literal(None) == "null"

    def test_unsupported_type_raises(self) -> None:
        with pytest.raises(TypeError, match="list"):
            odata_literal(["a"])


class TestMethodCall:
    def test_positional_argument(self) -> None:
        assert method_call("getbyid", "42") == "getbyid('42')"

    def test_no_arguments(self) -> None:
        assert method_call("Recycle") == "Recycle()"

    def test_keyword_arguments_keep_order_and_spacing(self) -> None:
        segment = method_call("MoveWebPartTo", zoneID="Zone1", zoneIndex=3)
        assert segment == "MoveWebPartTo(zoneID='Zone1', zoneIndex=3)"

    def test_positional_before_keyword(self) -> None:
        assert method_call("f", "a", b=1) == "f('a', b=1)"

    def test_quote_in_argument_cannot_close_literal(self) -> None:
        assert method_call("getbyid", "x')/delete('") == "getbyid('x'')/delete(''')"
