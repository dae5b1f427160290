from genma.core.config import CanvasConfig, Config, ConfigManager


def test_defaults_match_canvas_constants():
    cfg = CanvasConfig()
    assert cfg.snap_threshold == 5.0
    assert cfg.grid_size == 10.0
    assert cfg.min_element_size == 10.0
    assert (cfg.min_scale, cfg.max_scale) == (0.1, 5.0)
    assert cfg.rollback_on_cancel is True


def test_from_dict_ignores_unknown_keys():
    cfg = CanvasConfig.from_dict({"grid_size": 8, "bogus": 1})
    assert cfg.grid_size == 8
    assert CanvasConfig.from_dict(None) == CanvasConfig()


def test_missing_file_gives_defaults(tmp_path):
    mgr = ConfigManager(tmp_path / "config.yaml")
    assert mgr.config.canvas == CanvasConfig()


def test_save_and_load(tmp_path):
    path = tmp_path / "sub" / "config.yaml"
    mgr = ConfigManager(path)
    mgr.config.canvas.snap_threshold = 8.0
    mgr.save()

    loaded = ConfigManager(path).config
    assert loaded.canvas.snap_threshold == 8.0


def test_changing_canvas_config_saves(tmp_path):
    path = tmp_path / "config.yaml"
    mgr = ConfigManager(path)
    mgr.config.set_canvas(CanvasConfig(grid_size=4.0))
    assert path.exists()
    assert ConfigManager(path).config.canvas.grid_size == 4.0


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert ConfigManager(path).config.canvas == CanvasConfig()


def test_config_dict_round_trip():
    config = Config(CanvasConfig(zoom_at_pointer=True))
    assert Config.from_dict(config.to_dict()).canvas.zoom_at_pointer is True
