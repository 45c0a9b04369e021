import pytest

from delve.__main__ import main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("DELVE_SEED", "DELVE_MAP_WIDTH", "DELVE_MAP_HEIGHT", "DELVE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_headless_run_prints_map(capsys):
    assert main(["--seed", "3", "--auto-turns", "2"]) == 0
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert len(lines[0]) == 80
    assert "@" in out
    assert "Dungeon level 1" in out


def test_level_and_config(tmp_path, capsys):
    config = tmp_path / "small.yaml"
    config.write_text("map_width: 40\nmap_height: 25\n", encoding="utf-8")
    assert main(["--seed", "4", "--level", "3", "--config", str(config)]) == 0
    out = capsys.readouterr().out
    assert len(out.splitlines()[0]) == 40
    assert "Dungeon level 3" in out


def test_save_dir_writes_save(tmp_path, capsys):
    assert main(["--seed", "5", "--save-dir", str(tmp_path)]) == 0
    assert "Welcome stranger!" in capsys.readouterr().out
    assert (tmp_path / "saves" / "savegame.json").exists()


def test_invalid_level_is_rejected(capsys):
    with pytest.raises(SystemExit):
        main(["--level", "0"])
