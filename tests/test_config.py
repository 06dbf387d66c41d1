import pytest

from bayesnets import create_default_config, run_section


def test_default_config():
    cfg = create_default_config()

    assert cfg.section == 'all'
    assert cfg.general.seed == 42
    assert cfg.sampling.gibbs.n_samples >= 1
    assert cfg.sampling.gibbs.burn_in >= 0
    assert cfg.sampling.gibbs.thinning >= 0


def test_unknown_section():
    with pytest.raises(ValueError):
        run_section('plots', create_default_config())


def test_models_section(capsys):
    run_section('models', create_default_config())
    out = capsys.readouterr().out

    assert "马尔可夫随机场" in out
    assert "马尔可夫毯" in out


def test_sampling_section(capsys):
    cfg = create_default_config()
    cfg.sampling.gibbs.n_samples = 80
    cfg.sampling.gibbs.burn_in = 10

    run_section('sampling', cfg)
    out = capsys.readouterr().out

    assert "KL" in out
    assert "ESS" in out
