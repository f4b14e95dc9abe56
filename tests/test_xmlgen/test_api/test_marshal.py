"""Tests for the marshal entry points."""

import io
import logging
from dataclasses import dataclass, field
from unittest.mock import Mock

import pytest

from xmlgen import (
    E,
    FunctionEncoder,
    InvalidNameError,
    MarshalResult,
    SerializerConfig,
    UnencodableValueError,
    WriteFailureError,
    marshal,
    marshal_to_bytes,
    marshal_to_string,
    no_attrs,
    try_marshal,
)
from xmlgen.api.encoders import FailingEncoder, LxmlStructuredEncoder, StructuredEncoder
from xmlgen.api.marshal import resolve_encoder
from xmlgen.shared import DiagnosticSeverity


@dataclass
class Xxx:
    __xml_name__ = "abc"
    __xml_namespace__ = "http://something/"

    x: str = field(default="", metadata={"xml": "xyz"})


class BrokenEncoder(StructuredEncoder):
    def encode(self, value):
        raise TypeError("bad")


class Marker:
    def to_element(self):
        return E("thisisatest", {})


class TestMarshal:
    """Test streaming marshal to a sink."""

    def test_mixed_document(self) -> None:
        """Test elements, scalars and a structured value in one document."""
        tree = E("Foo", no_attrs(),
                 E("Bar", {"someattr": "&& a <value>"},
                   123.0234843920,
                   " and a string",
                   E("AndAnElement", no_attrs(),
                     E("Foo", no_attrs(), "BO&OM"))),
                 Xxx(x="test"))
        sink = io.BytesIO()

        marshal(tree, sink)

        assert sink.getvalue() == (
            b'<Foo><Bar someattr="&amp;&amp; a &lt;value&gt;">123.023484 and a string'
            b"<AndAnElement><Foo>BO&amp;OM</Foo></AndAnElement></Bar>"
            b'<abc xmlns="http://something/"><xyz>test</xyz></abc></Foo>'
        )

    def test_simple_tree(self) -> None:
        sink = io.BytesIO()
        marshal(E("Foo", {}, E("Bar", {"k": "&"}, "x")), sink)
        assert sink.getvalue() == b'<Foo><Bar k="&amp;">x</Bar></Foo>'

    def test_elementifiable_root(self) -> None:
        sink = io.BytesIO()
        marshal(Marker(), sink)
        assert sink.getvalue() == b"<thisisatest/>"

    @pytest.mark.parametrize("root", ["Foo", 42, None, {"a": 1}])
    def test_non_element_root(self, root) -> None:
        with pytest.raises(TypeError, match="expected an Element"):
            marshal(root, io.BytesIO())

    def test_element_marshal_method(self) -> None:
        sink = io.BytesIO()
        E("a", {"k": "v"}, "x").marshal(sink)
        assert sink.getvalue() == b'<a k="v">x</a>'

    def test_any_writable_sink(self) -> None:
        """Test that only a write(bytes) method is required of the sink."""
        sink = Mock()
        marshal(E("a", {}, "x"), sink)
        written = b"".join(call.args[0] for call in sink.write.call_args_list)
        assert written == b"<a>x</a>"

    def test_sink_failure(self) -> None:
        sink = Mock()
        sink.write.side_effect = OSError("broken pipe")
        with pytest.raises(WriteFailureError, match=r"broken pipe \(Path: a\)"):
            marshal(E("a"), sink)

    def test_dict_content_is_unencodable(self) -> None:
        with pytest.raises(UnencodableValueError) as info:
            marshal(E("Foo", {}, E("Bar", {}, {"a": 1})), io.BytesIO())
        assert str(info.value) == "Unable to write: {'a': 1} (Path: Foo > Bar)"

    def test_strict_scalars_rejects_dataclasses(self) -> None:
        config = SerializerConfig(strict_scalars=True)
        with pytest.raises(UnencodableValueError, match="Unable to write: Xxx"):
            marshal(E("Foo", {}, Xxx(x="test")), io.BytesIO(), config)

    def test_explicit_encoder_wins(self) -> None:
        config = SerializerConfig(strict_scalars=True)
        encoder = FunctionEncoder(lambda value: "<custom/>")
        sink = io.BytesIO()
        marshal(E("Foo", {}, Xxx()), sink, config, encoder)
        assert sink.getvalue() == b"<Foo><custom/></Foo>"

    def test_canonical_config(self) -> None:
        sink = io.BytesIO()
        marshal(E("a", {"z": 1, "b": 2}), sink, SerializerConfig.canonical())
        assert sink.getvalue() == b'<a b="2" z="1"></a>'

    def test_failure_is_logged(self, caplog) -> None:
        """Test that markup failures are logged with correlation info."""
        caplog.set_level(logging.DEBUG, logger="xmlgen")
        with pytest.raises(InvalidNameError):
            marshal(E("Foo", {}, E("1bad")), io.BytesIO(), correlation_id="req-7")

        failures = [record for record in caplog.records if record.levelno == logging.ERROR]
        assert len(failures) == 1
        assert failures[0].correlation_id == "req-7"
        assert failures[0].error_type == "InvalidNameError"
        assert failures[0].path == "Foo > 1bad"
        assert not failures[0].exc_info

    def test_success_is_logged(self, caplog) -> None:
        caplog.set_level(logging.INFO, logger="xmlgen")
        config = SerializerConfig(correlation_id="cfg-1")
        marshal(E("Foo", {}, "x"), io.BytesIO(), config)

        messages = [record.getMessage() for record in caplog.records]
        assert "Starting marshal operation" in messages
        assert "Marshal operation completed" in messages
        assert all(record.correlation_id == "cfg-1" for record in caplog.records)

        marshal_records = [record for record in caplog.records if record.name == "xmlgen.api.marshal"]
        assert marshal_records
        assert all(record.root == "Foo" for record in marshal_records)


class TestInMemoryMarshal:
    """Test marshal_to_bytes and marshal_to_string."""

    def test_to_bytes(self) -> None:
        assert marshal_to_bytes(E("a", {}, "x")) == b"<a>x</a>"

    def test_declaration(self) -> None:
        output = marshal_to_bytes(E("a"), SerializerConfig.document())
        assert output == b'<?xml version="1.0" encoding="utf-8"?><a/>'

    def test_to_string(self) -> None:
        text = marshal_to_string(E("caf" + chr(0xE9), {}, "x"))
        assert text == "<caf" + chr(0xE9) + ">x</caf" + chr(0xE9) + ">"

    def test_to_string_with_other_encoding(self) -> None:
        config = SerializerConfig(encoding="utf-16-le", xml_declaration=True)
        text = marshal_to_string(E("a"), config)
        assert text == '<?xml version="1.0" encoding="utf-16-le"?><a/>'

    def test_errors_propagate(self) -> None:
        with pytest.raises(InvalidNameError):
            marshal_to_bytes(E("1bad"))


class TestTryMarshal:
    """Test the never-raise marshal variant."""

    def test_success(self) -> None:
        sink = io.BytesIO()
        result = try_marshal(E("Foo", {"a": 1}, E("Bar")), sink, correlation_id="req-1")

        assert isinstance(result, MarshalResult)
        assert result.success
        assert result.error is None
        assert result.error_message is None
        assert result.diagnostics == []
        assert result.correlation_id == "req-1"
        assert result.metrics.elements_written == 2
        assert result.metrics.bytes_written == len(sink.getvalue())
        assert result.metrics.processing_time_ms >= 0

    def test_failure(self) -> None:
        sink = io.BytesIO()
        result = try_marshal(E("Foo", {}, E("Bar", {"1k": "v"})), sink)

        assert not result.success
        assert isinstance(result.error, InvalidNameError)
        assert result.error_message == "Invalid name for attribute: 1k (Path: Foo > Bar)"
        assert result.error_path == ("Foo", "Bar")

        diagnostic = result.diagnostics[0]
        assert diagnostic.severity is DiagnosticSeverity.ERROR
        assert diagnostic.component == "marshal"
        assert diagnostic.path == ("Foo", "Bar")
        assert diagnostic.details["error_type"] == "InvalidNameError"

    def test_type_errors_still_raise(self) -> None:
        """Test that a non-element root is a programming error, not a result."""
        with pytest.raises(TypeError):
            try_marshal("Foo", io.BytesIO())

    def test_encoder_exception_becomes_failed_result(self) -> None:
        """Test that a misbehaving encoder does not break the no-raise contract."""
        result = try_marshal(E("Foo", {}, E("Bar", {}, {"a": 1})), io.BytesIO(), encoder=BrokenEncoder())

        assert not result.success
        assert isinstance(result.error, UnencodableValueError)
        assert result.error_path == ("Foo", "Bar")
        assert isinstance(result.error.__cause__, TypeError)


class TestResolveEncoder:
    """Test structured encoder selection."""

    def test_default_is_lxml(self) -> None:
        assert isinstance(resolve_encoder(SerializerConfig()), LxmlStructuredEncoder)

    def test_strict(self) -> None:
        assert isinstance(resolve_encoder(SerializerConfig(strict_scalars=True)), FailingEncoder)

    def test_explicit(self) -> None:
        encoder = FailingEncoder()
        assert resolve_encoder(SerializerConfig(), encoder) is encoder
