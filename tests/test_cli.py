import pytest

from midirunconf.cli import build_parser, main
from midirunconf.config import Config, ConfigEntry, read_config, write_config


def _write(path):
    entry = ConfigEntry(name="play", b0="144", b1="60", keys=[29, 30])
    write_config(Config(input_port=1, mappings=[entry]), path)
    return entry


def test_parser_reads_add_options():
    args = build_parser().parse_args(
        ["--no-restart", "add", "--byte0", "144", "--byte1", "60", "--keys", "1,2"]
    )
    assert args.command == "add"
    assert args.byte0 == "144"
    assert args.keys == "1,2"
    assert args.no_restart is True


def test_version(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--version"])
    assert info.value.code == 0
    assert "0.1.2-beta" in capsys.readouterr().out


def test_show(tmp_path, capsys):
    path = tmp_path / "config.toml"
    _write(path)
    assert main(["--config", str(path), "show"]) == 0
    out = capsys.readouterr().out
    assert "Name: play" in out
    assert "Keys: 29,30" in out


def test_add_writes_mapping(tmp_path):
    path = tmp_path / "config.toml"
    entry = _write(path)
    code = main(
        [
            "--config", str(path), "--no-restart", "add",
            "--name", "stop", "--byte0", "128", "--byte1", "61", "--keys", "57,",
        ]
    )
    assert code == 0
    assert read_config(path).mappings == [
        entry,
        ConfigEntry(name="stop", b0="128", b1="61", keys=[57]),
    ]


def test_remove(tmp_path):
    path = tmp_path / "config.toml"
    _write(path)
    main(
        ["--config", str(path), "--no-restart", "add",
         "--name", "other", "--byte0", "1", "--byte1", "2"]
    )
    assert main(["--config", str(path), "--no-restart", "remove", "0"]) == 0
    assert [entry.name for entry in read_config(path).mappings] == ["other"]


def test_remove_out_of_range(tmp_path):
    path = tmp_path / "config.toml"
    _write(path)
    assert main(["--config", str(path), "--no-restart", "remove", "5"]) == 1
    assert len(read_config(path).mappings) == 1


def test_port_without_mappings(tmp_path, capsys):
    path = tmp_path / "missing.toml"
    assert main(["--config", str(path), "--no-restart", "port", "0"]) == 1
    assert "You don't have any mappings set!" in capsys.readouterr().err
    assert not path.exists()


def test_port_selection(tmp_path):
    path = tmp_path / "config.toml"
    _write(path)
    assert main(["--config", str(path), "--no-restart", "port", "2"]) == 0
    assert read_config(path).input_port == 3


def test_listen_without_device(capsys):
    assert main(["listen"]) == 1
    assert "Please Select a Device!" in capsys.readouterr().err