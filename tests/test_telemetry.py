"""Tests for telemetry module."""

import os
from unittest.mock import MagicMock, patch


class TestFamilySpanKindProcessor:
    """Tests for FamilySpanKindProcessor span processor."""

    def _kind_for(self, span_name):
        from genealogy_editor.telemetry import FamilySpanKindProcessor

        processor = FamilySpanKindProcessor()
        mock_span = MagicMock()
        mock_span.name = span_name
        processor.on_start(mock_span)
        return mock_span.set_attribute.call_args

    def test_edit_span_mapped_to_tool(self):
        from genealogy_editor.telemetry import OPENINFERENCE_SPAN_KIND

        call = self._kind_for("family.edit.add_member")
        assert call.args == (OPENINFERENCE_SPAN_KIND, "TOOL")

    def test_query_span_mapped_to_retriever(self):
        from genealogy_editor.telemetry import OPENINFERENCE_SPAN_KIND

        call = self._kind_for("family.query.potential_children")
        assert call.args == (OPENINFERENCE_SPAN_KIND, "RETRIEVER")

    def test_unknown_span_mapped_to_chain(self):
        from genealogy_editor.telemetry import OPENINFERENCE_SPAN_KIND

        call = self._kind_for("some_other_operation")
        assert call.args == (OPENINFERENCE_SPAN_KIND, "CHAIN")

    def test_span_without_attributes_ignored(self):
        from genealogy_editor.telemetry import FamilySpanKindProcessor

        # Should not raise
        FamilySpanKindProcessor().on_start(object())


class TestInitializeTracing:
    """Tests for the tracer provider built by initialize_tracing."""

    def test_returns_none_when_disabled(self):
        from genealogy_editor.telemetry import initialize_tracing

        with patch.dict(os.environ, {"PHOENIX_ENABLED": "false"}):
            assert initialize_tracing() is None

    @patch("genealogy_editor.telemetry.BatchSpanProcessor")
    @patch("genealogy_editor.telemetry.OTLPSpanExporter")
    @patch("genealogy_editor.telemetry.trace.set_tracer_provider")
    def test_provider_tags_family_spans(self, mock_set_provider, mock_exporter, mock_batch):
        """Spans from the provider carry the project name and a span kind."""
        import genealogy_editor.telemetry as telemetry_module

        telemetry_module._tracer_provider = None
        env = {"PHOENIX_ENABLED": "true", "PHOENIX_PROJECT_NAME": "smith-family"}

        try:
            with patch.dict(os.environ, env):
                provider = telemetry_module.initialize_tracing()

            assert provider.resource.attributes["openinference.project.name"] == "smith-family"

            span = provider.get_tracer("test").start_span("family.edit.add_relation")
            assert span.attributes[telemetry_module.OPENINFERENCE_SPAN_KIND] == "TOOL"
            span.end()
        finally:
            telemetry_module._tracer_provider = None

    def test_default_project_name(self):
        from genealogy_editor.telemetry import get_project_name

        with patch.dict(os.environ, {}, clear=True):
            assert get_project_name() == "genealogy-editor"
