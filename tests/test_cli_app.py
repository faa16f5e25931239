from fieldfriends.presentation.cli import app
from fieldfriends.services.factories import create_wild_creature
from fieldfriends.core.rng import RNG


def _session(seed: int = 3):
    return app._build_session(app._load_repositories(), RNG(seed), None, seed)


def test_main_menu_quit(monkeypatch) -> None:
    monkeypatch.setattr("builtins.input", lambda *_: "4")
    assert app._main_menu_loop() == "quit"


def test_battle_loop_runs_to_completion(monkeypatch, capsys) -> None:
    session = _session()
    repos = app._load_repositories()
    enemy = create_wild_creature(repos.creatures.get("plen"))
    session.state.in_battle = True
    monkeypatch.setattr("builtins.input", lambda *_: "1")

    app._run_battle(session, enemy, step_mode=False)

    output = capsys.readouterr().out
    assert "A wild Plen appeared." in output
    assert not session.state.in_battle
    assert not session.battles.has_active_battle()


def test_reorder_single_member_party(capsys) -> None:
    session = _session()

    app._reorder_menu(session.state)

    assert "no one to swap" in capsys.readouterr().out
