"""Tests for ExecutionEngine."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ffrecipe.compiler import AuxiliaryFile, CompiledPlan, ffmpeg, ffprobe
from ffrecipe.exceptions import ExecutionError
from ffrecipe.executor import ExecutionEngine, ExecutionMode


def make_process(lines=(), returncode=0):
    """Popen stand-in whose stderr yields ``lines``."""
    process = MagicMock()
    process.stderr.__iter__.return_value = iter(lines)
    process.wait.return_value = returncode
    return process


@pytest.fixture
def echoed():
    return []


@pytest.fixture
def two_step_plan(tmp_path):
    return CompiledPlan.of(
        [
            ffmpeg(["-n", "-i", "in.mp4", "palette.png"], "palette"),
            ffmpeg(["-n", "-i", "in.mp4", "-i", "palette.png", "out.gif"], "apply"),
        ],
        [Path("out.gif")],
        auxiliary=[AuxiliaryFile(tmp_path / "lists" / "concat_list.txt", "file 'a'\n")],
        notes=["GIF will loop infinitely."],
    )


@pytest.fixture
def live_engine(echoed):
    engine = ExecutionEngine(ExecutionMode.LIVE, show_progress=False, echo=echoed.append)
    with patch(
        "ffrecipe.executor.engine.resolve_executable", side_effect=lambda name, path: name
    ):
        yield engine


class TestPreviewModes:
    """Tests for dry-run and explain modes."""

    def test_dry_run_prints_without_running(self, two_step_plan, echoed, tmp_path):
        """Dry run announces every step and spawns nothing."""
        engine = ExecutionEngine(ExecutionMode.DRY_RUN, echo=echoed.append)

        with patch("ffrecipe.executor.engine.subprocess.Popen") as mock_popen:
            result = engine.run(two_step_plan)

        mock_popen.assert_not_called()
        assert echoed == [
            f"Would write: {tmp_path / 'lists' / 'concat_list.txt'}",
            "Running: ffmpeg -n -i in.mp4 palette.png",
            "Running: ffmpeg -n -i in.mp4 -i palette.png out.gif",
        ]
        assert result.mode is ExecutionMode.DRY_RUN
        assert result.outcomes == ()
        assert not (tmp_path / "lists").exists()

    def test_explain_prints_notes(self, two_step_plan, echoed):
        """Explain mode prefixes lines and includes the compiler's notes."""
        engine = ExecutionEngine(ExecutionMode.EXPLAIN, echo=echoed.append)

        engine.run(two_step_plan)

        assert echoed[0] == "[explain] GIF will loop infinitely."
        assert echoed[-1] == "[explain] Running: ffmpeg -n -i in.mp4 -i palette.png out.gif"


class TestLiveMode:
    """Tests for live execution."""

    def test_runs_in_order(self, live_engine, two_step_plan, echoed):
        """Each invocation runs after the previous one succeeded."""
        with patch("ffrecipe.executor.engine.subprocess.Popen") as mock_popen:
            mock_popen.side_effect = [make_process(), make_process()]
            result = live_engine.run(two_step_plan)

        argvs = [call.args[0] for call in mock_popen.call_args_list]
        assert argvs == [
            ["ffmpeg", "-n", "-i", "in.mp4", "palette.png"],
            ["ffmpeg", "-n", "-i", "in.mp4", "-i", "palette.png", "out.gif"],
        ]
        assert result.completed == two_step_plan.invocations
        assert echoed == [
            "Running: ffmpeg -n -i in.mp4 palette.png",
            "Running: ffmpeg -n -i in.mp4 -i palette.png out.gif",
        ]

    def test_auxiliary_written_before_running(self, live_engine, two_step_plan, tmp_path):
        aux_path = tmp_path / "lists" / "concat_list.txt"
        seen = []

        def spawn(argv, **kwargs):
            seen.append(aux_path.read_text(encoding="utf-8"))
            return make_process()

        with patch("ffrecipe.executor.engine.subprocess.Popen", side_effect=spawn):
            live_engine.run(two_step_plan)

        assert seen == ["file 'a'\n", "file 'a'\n"]

    def test_failure_stops_sequence(self, live_engine, two_step_plan):
        """A non-zero exit raises with the failing step and skips the rest."""
        failing = make_process(
            ["ffmpeg version 6.1\n", "palette.png: Permission denied\n", "\n"], returncode=1
        )
        with patch("ffrecipe.executor.engine.subprocess.Popen") as mock_popen:
            mock_popen.side_effect = [failing, make_process()]
            with pytest.raises(ExecutionError) as excinfo:
                live_engine.run(two_step_plan)

        assert mock_popen.call_count == 1
        error = excinfo.value
        assert error.index == 0
        assert error.returncode == 1
        assert error.invocation is two_step_plan.invocations[0]
        assert str(error) == "ffmpeg failed with status 1: palette.png: Permission denied"

    def test_first_of_three_fails(self, live_engine, echoed):
        """Steps two and three are never spawned once step one fails."""
        plan = CompiledPlan.of(
            [
                ffmpeg(["-i", "in.mp4", "pass1.mp4"], "first"),
                ffmpeg(["-i", "pass1.mp4", "pass2.mp4"], "second"),
                ffmpeg(["-i", "pass2.mp4", "out.mp4"], "third"),
            ]
        )
        with patch("ffrecipe.executor.engine.subprocess.Popen") as mock_popen:
            mock_popen.side_effect = [make_process(returncode=1), make_process(), make_process()]
            with pytest.raises(ExecutionError) as excinfo:
                live_engine.run(plan)

        assert mock_popen.call_count == 1
        assert excinfo.value.index == 0
        assert echoed == ["Running: ffmpeg -i in.mp4 pass1.mp4"]

    def test_spawn_failure(self, live_engine):
        plan = CompiledPlan.of([ffmpeg(["-i", "in.mp4", "out.mp4"])])
        with patch(
            "ffrecipe.executor.engine.subprocess.Popen",
            side_effect=FileNotFoundError("No such file"),
        ):
            with pytest.raises(ExecutionError, match="could not be started") as excinfo:
                live_engine.run(plan)
        assert excinfo.value.returncode is None

    def test_filter_log_collected(self, live_engine):
        """Filter report lines are kept on the outcome."""
        plan = CompiledPlan.of([ffmpeg(["-i", "in.mp4", "-f", "null", "-"])])
        lines = [
            "Input #0, mov,mp4 from 'in.mp4':\n",
            "[Parsed_blackdetect_0 @ 0x1] black_start:0 black_end:2.5\n",
            "frame=  100 fps=50 time=00:00:04.00 speed=2x\n",
        ]
        with patch(
            "ffrecipe.executor.engine.subprocess.Popen", return_value=make_process(lines)
        ):
            result = live_engine.run(plan)

        (outcome,) = result.outcomes
        assert outcome.log == ("[Parsed_blackdetect_0 @ 0x1] black_start:0 black_end:2.5",)

    def test_probe_invocations_capture_stdout(self, live_engine):
        """Prober invocations run captured and expose their stdout."""
        plan = CompiledPlan.of([ffprobe(["-v", "error", "in.mp4"])])
        with patch(
            "ffrecipe.executor.engine.run_command", return_value=('{"format": {}}', "", 0)
        ) as mock_run:
            result = live_engine.run(plan)

        mock_run.assert_called_once_with(["ffprobe", "-v", "error", "in.mp4"])
        assert result.stdout == '{"format": {}}'

    def test_probe_failure(self, live_engine):
        plan = CompiledPlan.of([ffprobe(["in.mp4"])])
        with patch(
            "ffrecipe.executor.engine.run_command",
            return_value=("", "in.mp4: Invalid data found\n", 1),
        ):
            with pytest.raises(ExecutionError, match="Invalid data found"):
                live_engine.run(plan)

    def test_progress_drawn_to_stderr(self, capsys):
        """With progress enabled, status lines are drawn on stderr."""
        engine = ExecutionEngine(
            ExecutionMode.LIVE, progress_interval_ms=0, echo=lambda message: None
        )
        plan = CompiledPlan.of([ffmpeg(["-i", "in.mp4", "out.mp4"])])
        with (
            patch("ffrecipe.executor.engine.resolve_executable", return_value="ffmpeg"),
            patch(
                "ffrecipe.executor.engine.subprocess.Popen",
                return_value=make_process(["frame=  10 time=00:00:01.00 speed=1x\n"]),
            ),
        ):
            engine.run(plan)

        assert "time=00:00:01.00 frame=10 speed=1.00x" in capsys.readouterr().err


class TestExecutableResolution:
    """Tests for executable lookup."""

    def test_configured_path_passed_through(self, tmp_path):
        configured = tmp_path / "ffmpeg"
        engine = ExecutionEngine(ffmpeg_path=configured)
        with patch(
            "ffrecipe.executor.engine.resolve_executable", return_value=str(configured)
        ) as mock_resolve:
            assert engine.executable("ffmpeg") == str(configured)
            assert engine.executable("ffmpeg") == str(configured)

        mock_resolve.assert_called_once_with("ffmpeg", configured)
