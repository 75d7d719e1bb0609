from __future__ import annotations

from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from pipsbom.config import PipSbomConfig
from pipsbom.context import PipSbomContext, pass_context


@pytest.mark.unit
class TestPipSbomContext:
    """Tests for PipSbomContext class."""

    def test_default_initialization(self) -> None:
        ctx = PipSbomContext()

        assert ctx.config_path is None
        assert ctx.verbose == 0
        assert ctx.color is True
        assert ctx.config == PipSbomConfig()

    def test_instances_are_independent(self) -> None:
        ctx1 = PipSbomContext()
        ctx2 = PipSbomContext()

        ctx1.verbose = 2
        ctx1.config_path = Path("/tmp/pipsbom.toml")

        assert ctx2.verbose == 0
        assert ctx2.config_path is None

    def test_slots_prevents_arbitrary_attributes(self) -> None:
        ctx = PipSbomContext()

        with pytest.raises(AttributeError):
            ctx.unknown = "value"  # type: ignore[attr-defined]

    def test_pass_context_creates_instance(self) -> None:
        seen = []

        @click.command()
        @pass_context
        def command(ctx: PipSbomContext) -> None:
            seen.append(ctx)

        result = CliRunner().invoke(command, [])

        assert result.exit_code == 0
        assert isinstance(seen[0], PipSbomContext)
