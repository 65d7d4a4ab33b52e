import json

import pytest

from procareer.career import Career
from procareer.config import SCHEMA_VERSION
from procareer.save import (
    dumps_career, load_career, loads_career, migrate_save, save_career, save_path,
)
from procareer.types import Player, Position

def test_player_json_round_trip(make_player):
    p = make_player()
    assert Player.from_json(p.to_json()).to_dict() == p.to_dict()

def test_save_and_load_career(tmp_path, roster):
    car = Career.new("Save", 18, "England", Position.FWD, roster=roster, seed=21)
    car.play_season()
    path = tmp_path / "slot1" / "career.json"
    save_career(str(path), car)
    loaded = load_career(str(path))
    assert loaded.to_dict() == car.to_dict()

def test_mid_season_save(tmp_path, roster):
    car = Career.new("Mid", 18, "England", Position.MID, roster=roster, seed=22)
    car.play_first_half()
    loaded = loads_career(dumps_career(car))
    assert loaded.in_winter_window
    assert loaded.mid_season.cup == car.mid_season.cup

def test_version_zero_blob_is_wrapped(roster):
    car = Career.new("Old", 20, "England", Position.GK, roster=roster, seed=5)
    bare = json.dumps(car.to_dict())
    loaded = loads_career(bare)
    assert loaded.to_dict() == car.to_dict()
    assert migrate_save({"player": {}}, 0) == {"schema_version": SCHEMA_VERSION, "career": {"player": {}}}

def test_newer_schema_is_refused():
    with pytest.raises(ValueError):
        migrate_save({"career": {}}, SCHEMA_VERSION + 1)

def test_save_path():
    assert save_path("alex", "saves").endswith("alex.json")
