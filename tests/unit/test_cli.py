from pathlib import Path

from click.testing import CliRunner

from padsynth.ui.cli import cli

SCRIPT = """\
actions:
  - type: next_onboarding_step
  - type: press_key
    note: c4
  - type: move_pad
    x: 0.9
    y: 0.75
  - type: change_effect
    axis: y
    name: reverb
"""


def test_replay_prints_graph_calls_per_action(tmp_path: Path) -> None:
    script = tmp_path / "session.yaml"
    script.write_text(SCRIPT, encoding="utf-8")

    result = CliRunner().invoke(cli, ["replay", str(script)], obj={})

    assert result.exit_code == 0, result.output
    assert "[1] next_onboarding_step\n    (no graph changes)" in result.output
    assert "create_oscillators(notes=[c4])" in result.output
    assert "update_effect_amount(axis='x', amount=0.9)" in result.output
    assert "rebuild_effect_chain({'x': 'filter', 'y': 'reverb'})" in result.output
    assert "voices:" in result.output


def test_replay_dry_run_skips_virtual_graph(tmp_path: Path) -> None:
    script = tmp_path / "session.yaml"
    script.write_text("- type: press_key\n  note: a4\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["replay", "--dry-run", str(script)], obj={})

    assert result.exit_code == 0, result.output
    assert "stop_all_oscillators()" in result.output
    assert "voices:" not in result.output


def test_replay_rejects_invalid_action(tmp_path: Path) -> None:
    script = tmp_path / "bad.yaml"
    script.write_text("- type: press_key\n  note: zz\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["replay", str(script)], obj={})

    assert result.exit_code == 1
    assert "Invalid note identifier" in result.output


def test_diff_prints_change_set(tmp_path: Path) -> None:
    before = tmp_path / "before.yaml"
    after = tmp_path / "after.yaml"
    before.write_text(
        "notes: [c4]\neffects:\n  x: {name: filter, amount: 0.1, options: {}}\n",
        encoding="utf-8",
    )
    after.write_text(
        "notes: [c4]\neffects:\n  x: {name: filter, amount: 0.5, options: {}}\n",
        encoding="utf-8",
    )

    result = CliRunner().invoke(cli, ["diff", str(before), str(after)], obj={})

    assert result.exit_code == 0, result.output
    assert "sounds_changed: true" in result.output
    assert "notes_changed: false" in result.output
    assert "position_changed: true" in result.output


def test_cli_configures_log_level_from_settings_and_debug_flag(tmp_path: Path) -> None:
    script = tmp_path / "session.yaml"
    script.write_text("- type: press_key\n  note: a4\n", encoding="utf-8")

    for log_level in ("WARNING", "chatty"):
        config = tmp_path / f"{log_level}.yaml"
        config.write_text(f"log_level: {log_level}\n", encoding="utf-8")
        result = CliRunner().invoke(
            cli, ["--config", str(config), "replay", "--dry-run", str(script)], obj={}
        )
        assert result.exit_code == 0, result.output

    result = CliRunner().invoke(cli, ["--debug", "replay", "--dry-run", str(script)], obj={})
    assert result.exit_code == 0, result.output


def test_replay_output_carries_no_lifecycle_log_lines(tmp_path: Path) -> None:
    script = tmp_path / "session.yaml"
    script.write_text("- type: press_key\n  note: a4\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["replay", "--dry-run", str(script)], obj={})

    assert result.exit_code == 0, result.output
    assert "Reconciler subscribed" not in result.output
    assert "Reconciler unsubscribed" not in result.output
    assert result.output.startswith("[1] press_key\n")


def test_diff_rejects_snapshot_that_is_not_a_mapping(tmp_path: Path) -> None:
    before = tmp_path / "before.yaml"
    after = tmp_path / "after.yaml"
    before.write_text("- c4\n- e4\n", encoding="utf-8")
    after.write_text("notes: [c4]\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["diff", str(before), str(after)], obj={})

    assert result.exit_code == 1
    assert "must be a mapping" in result.output
