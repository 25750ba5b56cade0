import importlib
from pathlib import Path

import tomllib


def test_padsynth_entrypoint_target_is_importable() -> None:
    pyproject = tomllib.loads(Path("pyproject.toml").read_text(encoding="utf-8"))
    target = pyproject["project"]["scripts"]["padsynth"]
    module_name, symbol = target.split(":")

    module = importlib.import_module(module_name)
    entrypoint = getattr(module, symbol)

    assert callable(entrypoint)


def test_bundled_session_script_parses() -> None:
    from padsynth.core.actions import parse_action
    from padsynth.ui.cli import _load_script

    initial, actions = _load_script(Path("config/session.yaml"))

    assert initial is None
    assert [parse_action(raw).type for raw in actions][:2] == ["next_onboarding_step", "press_key"]
