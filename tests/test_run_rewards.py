"""
Tests para el script de reparto manual (scripts/run_rewards.py)
"""

import importlib.util
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from app.models.reward import DistributionReport, LeagueOutcome, OutcomeStatus, RewardSpec
from app.services.reward_service import RewardDistributionError

SCRIPT_PATH = Path(__file__).resolve().parent.parent / "scripts" / "run_rewards.py"


def load_script():
    spec = importlib.util.spec_from_file_location("run_rewards", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def make_report(status: OutcomeStatus) -> DistributionReport:
    return DistributionReport(
        window_start=datetime(2024, 3, 3, 23, 59, tzinfo=timezone.utc),
        run_at=datetime(2024, 3, 10, 23, 59, tzinfo=timezone.utc),
        reward=RewardSpec(points=500, label="🏆 CAMPEÓN SEMANAL (+500)"),
        outcomes=[LeagueOutcome(
            league_id="league-1",
            league_name="Madrid Runners",
            status=status,
            error="AutoReconnect: down" if status == OutcomeStatus.ERROR else None,
        )],
    )


class TestRunRewardsScript:
    """Exit code y conexión del script"""

    @pytest.fixture
    def script(self):
        module = load_script()
        with patch.object(module.Database, "connect", AsyncMock()) as connect, \
                patch.object(module.Database, "disconnect", AsyncMock()) as disconnect, \
                patch.object(module.Database, "get_db", return_value=object()), \
                patch.object(module, "configure_logging"):
            module.connect_mock = connect
            module.disconnect_mock = disconnect
            yield module

    @pytest.mark.asyncio
    async def test_successful_run_exits_zero(self, script, capsys):
        trigger = AsyncMock(return_value=make_report(OutcomeStatus.AWARDED))

        with patch.dict(script.TRIGGERS, {"weekly": trigger}):
            exit_code = await script.run("weekly", None)

        assert exit_code == 0
        assert '"awarded"' in capsys.readouterr().out
        script.disconnect_mock.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_leagues_exit_one(self, script, capsys):
        report = make_report(OutcomeStatus.ERROR)
        trigger = AsyncMock(side_effect=RewardDistributionError(report))

        with patch.dict(script.TRIGGERS, {"monthly": trigger}):
            exit_code = await script.run("monthly", datetime(2024, 3, 1))

        assert exit_code == 1
        assert "AutoReconnect: down" in capsys.readouterr().out
        script.disconnect_mock.assert_awaited_once()
        assert trigger.await_args.args[2] == datetime(2024, 3, 1)

    @pytest.mark.asyncio
    async def test_unexpected_error_still_disconnects(self, script):
        trigger = AsyncMock(side_effect=RuntimeError("boom"))

        with patch.dict(script.TRIGGERS, {"weekly": trigger}):
            with pytest.raises(RuntimeError):
                await script.run("weekly", None)

        script.disconnect_mock.assert_awaited_once()
