import pytest

from warren.layout import ConfigurationError, LayoutConfig, resolve_config


def test_defaults():
    cfg = LayoutConfig()
    assert (cfg.width, cfg.height, cfg.min_room_size) == (50, 50, 6)
    assert cfg.percent_rooms_to_remove == 0.0
    assert cfg.seed is None
    assert (cfg.max_attempts, cfg.max_total_attempts) == (3, None)
    assert cfg.attempt_ceiling == 100
    assert cfg.enable_metrics is True and cfg.strict is False
    assert cfg.validate() is cfg


@pytest.mark.parametrize(
    "kwargs,field,code",
    [
        ({'width': 0}, 'width', 'range'),
        ({'height': -4}, 'height', 'range'),
        ({'min_room_size': 0}, 'min_room_size', 'range'),
        ({'width': 'wide'}, 'width', 'type'),
        ({'width': True}, 'width', 'type'),
        ({'min_room_size': 60}, 'min_room_size', 'too_large'),
        ({'percent_rooms_to_remove': -1}, 'percent_rooms_to_remove', 'range'),
        ({'percent_rooms_to_remove': 100.5}, 'percent_rooms_to_remove', 'range'),
        ({'percent_rooms_to_remove': 'lots'}, 'percent_rooms_to_remove', 'type'),
        ({'max_attempts': 0}, 'max_attempts', 'range'),
        ({'max_attempts': 5, 'max_total_attempts': 4}, 'max_total_attempts', 'range'),
        ({'seed': '12'}, 'seed', 'type'),
    ],
)
def test_validation_errors(kwargs, field, code):
    with pytest.raises(ConfigurationError) as exc:
        LayoutConfig(**kwargs).validate()
    assert exc.value.field == field
    assert exc.value.code == code
    assert exc.value.to_dict() == {'error': exc.value.message, 'field': field, 'code': code}


def test_boundary_values_accepted():
    LayoutConfig(width=6, height=6, min_room_size=6, percent_rooms_to_remove=100).validate()
    LayoutConfig(percent_rooms_to_remove=0, seed=0).validate()


def test_with_seed():
    assert LayoutConfig(seed=0).with_seed().seed == 0
    drawn = LayoutConfig().with_seed()
    assert 1 <= drawn.seed <= 1_000_000


def test_from_env():
    cfg = LayoutConfig.from_env({
        'WARREN_LAYOUT_WIDTH': '64',
        'WARREN_LAYOUT_PRUNE_PERCENT': '12.5',
        'WARREN_LAYOUT_STRICT': 'yes',
        'WARREN_LAYOUT_ENABLE_METRICS': '0',
        'WARREN_LAYOUT_UNKNOWN': 'x',
        'PATH': '/bin',
    })
    assert cfg.width == 64
    assert cfg.percent_rooms_to_remove == 12.5
    assert cfg.strict is True
    assert cfg.enable_metrics is False


def test_env_value_that_does_not_parse():
    with pytest.raises(ConfigurationError) as exc:
        resolve_config(environ={'WARREN_LAYOUT_HEIGHT': 'tall'})
    assert exc.value.field == 'height' and exc.value.code == 'type'


def test_keyword_overrides_win_over_env(monkeypatch):
    monkeypatch.setenv('WARREN_LAYOUT_WIDTH', '40')
    monkeypatch.setenv('WARREN_LAYOUT_SEED', '9')
    cfg = resolve_config(width=30, seed=None)
    assert cfg.width == 30
    assert cfg.seed == 9


def test_app_config_between_env_and_keywords(test_app, monkeypatch):
    monkeypatch.setenv('WARREN_LAYOUT_WIDTH', '40')
    monkeypatch.setenv('WARREN_LAYOUT_HEIGHT', '40')
    test_app.config['LAYOUT_WIDTH'] = 32
    test_app.config['LAYOUT_MAX_ATTEMPTS'] = '5'
    with test_app.app_context():
        cfg = resolve_config(height=36)
    assert (cfg.width, cfg.height, cfg.max_attempts) == (32, 36, 5)
    # Outside an app context only env applies
    assert resolve_config().width == 40


def test_resolve_config_validates():
    with pytest.raises(ConfigurationError):
        resolve_config(environ={}, min_room_size=0)


def test_large_max_attempts_raises_default_ceiling():
    cfg = LayoutConfig(max_attempts=150).validate()
    assert cfg.attempt_ceiling == 150
    assert LayoutConfig(max_attempts=2, max_total_attempts=7).validate().attempt_ceiling == 7


def test_explicit_ceiling_below_max_attempts_rejected():
    with pytest.raises(ConfigurationError) as exc:
        LayoutConfig(max_attempts=150, max_total_attempts=120).validate()
    assert exc.value.field == 'max_total_attempts'
