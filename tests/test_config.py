from nice_map_gen import config as cfg


def test_defaults_cover_every_section():
    conf = cfg.default_config()
    assert set(conf) >= {"seed", "output_dir", "canvas", "cave", "rooms", "export"}
    assert conf["cave"] == {"neighborhood_size": 1, "neighborhood_threshold": 5, "generations": 3}
    assert conf["rooms"]["room_count"] is None


def test_merge_fills_missing_keys_per_section():
    merged = cfg.merge_config({"canvas": {"pixel_scale": 4}, "seed": 7})
    assert merged["canvas"]["pixel_scale"] == 4
    assert merged["canvas"]["squares_width"] == 50
    assert merged["seed"] == 7
    assert merged["cave"]["generations"] == 3


def test_merge_clamps_to_canvas_ranges():
    merged = cfg.merge_config({
        "canvas": {"squares_width": 1, "squares_height": 5000, "pixel_scale": 99, "subpixel_scale": 0},
        "cave": {"neighborhood_size": 0, "generations": -2},
        "rooms": {"room_count": -3},
    })
    assert merged["canvas"]["squares_width"] == cfg.SQUARES_RANGE[0]
    assert merged["canvas"]["squares_height"] == cfg.SQUARES_RANGE[1]
    assert merged["canvas"]["pixel_scale"] == cfg.PIXEL_SCALE_RANGE[1]
    assert merged["canvas"]["subpixel_scale"] == 1
    assert merged["cave"]["neighborhood_size"] == 1
    assert merged["cave"]["generations"] == 0
    assert merged["rooms"]["room_count"] == 0


def test_merge_does_not_mutate_input():
    conf = {"canvas": {"pixel_scale": 0}}
    cfg.merge_config(conf)
    assert conf == {"canvas": {"pixel_scale": 0}}


def test_save_and_load(tmp_path):
    conf = cfg.default_config()
    conf["cave"]["generations"] = 8
    conf["rooms"]["room_count"] = 4
    path = tmp_path / "nested" / "config.json"
    cfg.save_config(conf, str(path))
    loaded = cfg.load_config(str(path))
    assert loaded == conf
