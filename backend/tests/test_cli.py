def test_scores_reset_command(flask_app, cli_runner):
    model = flask_app.extensions['scoreboard']
    model.apply_change(model.load(), 'BLUE', 10, 'Pailin', 'kickoff')

    result = cli_runner.invoke(args=['scores-reset'])

    assert result.exit_code == 0
    assert 'All scores have been reset' in result.output
    state = model.load()
    assert state.scores['BLUE'] == 0
    assert state.history == []


def test_init_db_command(cli_runner):
    result = cli_runner.invoke(args=['init-db'])
    assert result.exit_code == 0
    assert 'Database tables created.' in result.output
