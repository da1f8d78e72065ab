"""Unit tests for nccs_core.engine.load_engine."""

from __future__ import annotations

from importlib.metadata import EntryPoint

import pytest

from nccs_core import engine as engine_module
from nccs_core.engine import CompilationEngine, load_engine
from nccs_core.errors import EngineUnavailableError
from testing.fixtures import FakeEngine

FAKE_ENGINE_REF = "testing.fixtures.engine:FakeEngine"


class TestLoadEngine:
    """Tests for load_engine()."""

    def test_class_reference_is_instantiated(self) -> None:
        """Test that a class reference yields an instance."""
        engine = load_engine(FAKE_ENGINE_REF)
        assert isinstance(engine, FakeEngine)
        assert isinstance(engine, CompilationEngine)

    def test_each_load_returns_new_instance(self) -> None:
        """Test that engine classes are instantiated per load."""
        assert load_engine(FAKE_ENGINE_REF) is not load_engine(FAKE_ENGINE_REF)

    def test_malformed_reference(self) -> None:
        """Test that a reference without an attribute is rejected."""
        with pytest.raises(EngineUnavailableError) as exc_info:
            load_engine("testing.fixtures.engine")
        assert "package.module:attribute" in exc_info.value.user_message

    def test_missing_module(self) -> None:
        """Test that an unimportable module is reported as unavailable."""
        with pytest.raises(EngineUnavailableError):
            load_engine("no_such_engine_package:Engine")

    def test_missing_attribute(self) -> None:
        """Test that a missing attribute is reported as unavailable."""
        with pytest.raises(EngineUnavailableError):
            load_engine("testing.fixtures.engine:NoSuchEngine")

    def test_non_engine_object(self) -> None:
        """Test that an object without the entry points is rejected."""
        with pytest.raises(EngineUnavailableError) as exc_info:
            load_engine("testing.fixtures.engine:NEF_MAGIC")
        assert "not a compilation engine" in exc_info.value.user_message

    def test_no_registered_engine(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the error when no reference is given and none is registered."""
        monkeypatch.setattr(engine_module, "entry_points", lambda group: [])
        with pytest.raises(EngineUnavailableError) as exc_info:
            load_engine()
        assert "NCCS_ENGINE" in exc_info.value.user_message

    def test_entry_point_is_used(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the first registered entry point (by name) is loaded."""
        registered = [
            EntryPoint(name="zeta", value="no_such_engine_package:Engine", group="nccs.engines"),
            EntryPoint(name="alpha", value=FAKE_ENGINE_REF, group="nccs.engines"),
        ]
        monkeypatch.setattr(engine_module, "entry_points", lambda group: registered)
        assert isinstance(load_engine(), FakeEngine)
