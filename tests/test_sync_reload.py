"""
Tests for sync.reload module.

Tests the toggle -> legacy -> manual reload fallback chain.
"""

import pytest

from copilot_prompt_sync.exceptions import ActionFailedError, ActionUnavailableError
from copilot_prompt_sync.sync.reload import (
    MANUAL_RELOAD_MESSAGE,
    build_reload_steps,
    reload_copilot,
    run_reload_chain,
)

# ============================================================================
# Fakes
# ============================================================================


class FakeActions:
    """Action runner that records calls and fails selected actions."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.calls = []

    async def execute(self, name):
        self.calls.append(name)
        if name in self.failing:
            raise ActionFailedError(f"{name} failed")


class UnavailableActions:
    """Action runner where nothing is configured."""

    def __init__(self):
        self.calls = []

    async def execute(self, name):
        self.calls.append(name)
        raise ActionUnavailableError(f"No command configured for {name}")


class RecordingNotifier:
    def __init__(self):
        self.infos = []
        self.errors = []

    def info(self, message):
        self.infos.append(message)

    def error(self, message):
        self.errors.append(message)


TOGGLE = "github.copilot.toggleCopilot"
LEGACY = "github.copilot.reload"


# ============================================================================
# Tests
# ============================================================================


class TestBuildReloadSteps:
    """Tests for build_reload_steps."""

    def test_step_order(self):
        """Toggle is tried before the legacy reload."""
        steps = build_reload_steps(FakeActions(), 0)

        assert [name for name, _ in steps] == ["toggle", "legacy"]

    @pytest.mark.asyncio
    async def test_toggle_runs_twice(self):
        """The toggle step turns Copilot off and on again."""
        actions = FakeActions()
        _, toggle = build_reload_steps(actions, 0)[0]

        await toggle()

        assert actions.calls == [TOGGLE, TOGGLE]


class TestRunReloadChain:
    """Tests for run_reload_chain."""

    @pytest.mark.asyncio
    async def test_stops_at_first_success(self):
        """Later steps are not tried after a success."""
        ran = []

        async def first():
            ran.append("first")

        async def second():
            ran.append("second")

        result = await run_reload_chain([("first", first), ("second", second)], lambda: None)

        assert result == "first"
        assert ran == ["first"]

    @pytest.mark.asyncio
    async def test_exhausted_calls_fallback_once(self):
        """When every step fails the fallback runs exactly once."""
        exhausted = []

        async def broken():
            raise RuntimeError("nope")

        result = await run_reload_chain(
            [("a", broken), ("b", broken)], lambda: exhausted.append(True)
        )

        assert result == "manual"
        assert exhausted == [True]


class TestReloadCopilot:
    """Tests for reload_copilot."""

    @pytest.mark.asyncio
    async def test_toggle_succeeds(self):
        """Working toggle means no legacy call and no notice."""
        actions = FakeActions()
        notifier = RecordingNotifier()

        result = await reload_copilot(actions, notifier, 0)

        assert result == "toggle"
        assert actions.calls == [TOGGLE, TOGGLE]
        assert notifier.infos == []

    @pytest.mark.asyncio
    async def test_falls_back_to_legacy(self):
        """Failed toggle falls through to the legacy reload."""
        actions = FakeActions(failing={TOGGLE})
        notifier = RecordingNotifier()

        result = await reload_copilot(actions, notifier, 0)

        assert result == "legacy"
        assert actions.calls == [TOGGLE, LEGACY]
        assert notifier.infos == []

    @pytest.mark.asyncio
    async def test_falls_back_to_manual_notice(self):
        """When both actions fail the user is asked to reload."""
        actions = UnavailableActions()
        notifier = RecordingNotifier()

        result = await reload_copilot(actions, notifier, 0)

        assert result == "manual"
        assert actions.calls == [TOGGLE, LEGACY]
        assert notifier.infos == [MANUAL_RELOAD_MESSAGE]
        assert notifier.errors == []

    @pytest.mark.asyncio
    async def test_second_toggle_failure_falls_through(self):
        """A toggle step only succeeds if both invocations do."""
        calls = []

        class SecondToggleFails:
            async def execute(self, name):
                calls.append(name)
                if name == TOGGLE and calls.count(TOGGLE) == 2:
                    raise ActionFailedError("second toggle failed")

        result = await reload_copilot(SecondToggleFails(), RecordingNotifier(), 0)

        assert result == "legacy"
        assert calls == [TOGGLE, TOGGLE, LEGACY]
