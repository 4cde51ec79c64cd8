import pytest

from scoreboard.services.state import AppState, default_state, format_delta, load_teams


def test_initial_state_is_zeroed(model, teams):
    state = model.load()
    assert state.scores == {t.name: 0 for t in teams}
    assert state.history == []
    assert state.last_update is None


@pytest.mark.parametrize('start, delta', [(0, 10), (7, -3), (-4, 1), (3, -10)])
def test_apply_change_adds_delta_and_logs_once(model, start, delta):
    state = model.load()
    state = state.model_copy(update={'scores': {**state.scores, 'GREEN': start}})
    new_state = model.apply_change(state, 'GREEN', delta, 'Praw', 'note')

    assert new_state.scores['GREEN'] == start + delta
    assert len(new_state.history) == len(state.history) + 1
    entry = new_state.history[-1]
    assert (entry.team, entry.delta, entry.admin, entry.note) == ('GREEN', delta, 'Praw', 'note')
    assert new_state.last_update == entry.time


def test_apply_change_persists(model, store):
    state = model.apply_change(model.load(), 'RED', 5, 'Pailin')
    assert store.load() == state


def test_apply_change_does_not_touch_input(model):
    state = model.load()
    model.apply_change(state, 'RED', 5, 'Pailin')
    assert state.scores['RED'] == 0
    assert state.history == []


def test_unknown_team_is_a_no_op(model, backend, store):
    state = model.apply_change(model.load(), 'BLUE', 2, 'Pailin')
    saved = backend.get(store.key)

    result = model.apply_change(state, 'PURPLE', 5, 'Pailin', 'nope')

    assert result is state
    assert result == state
    assert len(result.history) == 1
    assert backend.get(store.key) == saved


def test_zero_delta_is_applied_and_logged(model):
    state = model.apply_change(model.load(), 'PINK', 0, 'Paulyne')
    assert state.scores['PINK'] == 0
    assert len(state.history) == 1
    assert state.history[0].delta == 0


def test_history_keeps_insertion_order(model):
    state = model.load()
    for team, delta in [('BLUE', 1), ('RED', 5), ('BLUE', -1)]:
        state = model.apply_change(state, team, delta, 'Pailin')
    assert [(e.team, e.delta) for e in state.history] == [('BLUE', 1), ('RED', 5), ('BLUE', -1)]
    times = [e.time for e in state.history]
    assert times == sorted(times)
    assert state.last_update == times[-1]


def test_reset_all_clears_everything(model, store):
    state = model.load()
    state = model.apply_change(state, 'BLUE', 10, 'Pailin')
    state = model.apply_change(state, 'YELLOW', -5, 'Praw')

    state = model.reset_all(state)

    assert set(state.scores.values()) == {0}
    assert state.history == []
    assert state.last_update is None
    assert store.load() == state


def test_reset_all_on_fresh_state(model):
    state = model.reset_all(model.load())
    assert set(state.scores.values()) == {0}
    assert state.history == []


def test_kickoff_scenario(model):
    state = model.load()
    state = model.apply_change(state, 'BLUE', 10, 'Pailin', 'kickoff')
    assert state.scores['BLUE'] == 10
    assert len(state.history) == 1

    state = model.apply_change(state, 'BLUE', -5, 'Pailin', '')
    assert state.scores['BLUE'] == 5
    assert len(state.history) == 2

    state = model.reset_all(state)
    assert state.scores['BLUE'] == 0
    assert len(state.history) == 0


def test_format_delta():
    assert format_delta(5) == '+5'
    assert format_delta(-3) == '-3'
    assert format_delta(0) == '0'


def test_last_update_must_match_history():
    with pytest.raises(ValueError):
        AppState(scores={'BLUE': 0}, history=[], last_update='2025-01-01T00:00:00Z')


def test_duplicate_team_names_rejected():
    with pytest.raises(ValueError):
        load_teams([{'name': 'BLUE', 'color': '#000'}, {'name': 'BLUE', 'color': '#fff'}])


def test_default_state_follows_team_order(teams):
    assert list(default_state(teams).scores) == [t.name for t in teams]
