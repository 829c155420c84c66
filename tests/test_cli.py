import json
import logging

import pytest
from skos2jskos.cli import main_cli, run_cli_app
from skos2jskos.errors import ConfigurationError

VOC = "http://example.org/voc/"


def test_run_cli_app_no_args_entrypoint(monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["skos2jskos"])
    with pytest.raises(SystemExit) as exc_info:
        run_cli_app()
    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert "usage: skos2jskos" in captured.out


def test_run_cli_app_no_args(capsys, caplog):
    with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as exc_info:
        run_cli_app([])
    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert "usage: skos2jskos" in captured.out
    assert "No input given" in caplog.text


def test_main_no_args(capsys):
    with pytest.raises(ConfigurationError, match="No input given"):
        main_cli([])
    assert "usage: skos2jskos" in capsys.readouterr().out


def test_main_unknown_arg(capsys):
    with pytest.raises(SystemExit) as exc_info:
        run_cli_app(["--unknown-arg"])
    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert "skos2jskos: error: unrecognized arguments: --unknown-arg" in captured.err


def test_main_version(capsys):
    main_cli(["--version"])
    captured = capsys.readouterr()
    assert captured.out.startswith("skos2jskos")


def test_main_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        run_cli_app(["--help"])
    assert exc_info.value.code == 0
    captured = capsys.readouterr()
    assert "usage: skos2jskos" in captured.out
    assert "--endpoint" in captured.out


def test_verbose_and_quiet_exclusive(capsys):
    with pytest.raises(SystemExit) as exc_info:
        run_cli_app(["-v", "-q", "voc.ttl"])
    assert exc_info.value.code == 1
    assert "not allowed with argument" in capsys.readouterr().err


def test_convert_files(datadir, tmp_path, caplog):
    with caplog.at_level(logging.INFO):
        main_cli(["-O", str(tmp_path), str(datadir / "simple.ttl")])
    assert "Executing cmd: skos2jskos" in caplog.text
    scheme = json.loads((tmp_path / "scheme.json").read_text())
    assert scheme["prefLabel"] == {"en": "Vocab"}
    concepts = json.loads((tmp_path / "concepts.json").read_text())
    assert [c["uri"] for c in concepts] == ["http://example.org/C1"]


def test_convert_url(datadir, tmp_path):
    url = (datadir / "simple.ttl").as_uri()
    main_cli(["--url", url, "--outdir", str(tmp_path), "--name", "simple"])
    assert (tmp_path / "simple-scheme.json").exists()
    assert (tmp_path / "simple-concepts.json").exists()


def test_convert_with_options(datadir, tmp_path):
    main_cli(
        [
            "-O",
            str(tmp_path),
            "--language",
            "fr",
            "--keep-quotes",
            "--scheme",
            VOC + "scheme",
            str(datadir / "full.ttl"),
        ]
    )
    concepts = json.loads((tmp_path / "concepts.json").read_text())
    dog = next(c for c in concepts if c["uri"] == VOC + "dog")
    assert dog["prefLabel"] == {"fr": "dog"}
    scheme = json.loads((tmp_path / "scheme.json").read_text())
    assert scheme["definition"]["en"] == ['"A small vocabulary of animals."']


def test_config_file(datadir, tmp_path, caplog):
    with caplog.at_level(logging.DEBUG):
        main_cli(
            [
                "--config",
                str(datadir / "config.toml"),
                "-O",
                str(tmp_path),
                str(datadir / "full.ttl"),
            ]
        )
    assert "Config loaded from" in caplog.text
    concepts = json.loads((tmp_path / "animals-concepts.json").read_text())
    dog = next(c for c in concepts if c["uri"] == VOC + "dog")
    assert dog["prefLabel"] == {"de": "dog"}


def test_config_file_overridden_by_options(datadir, tmp_path):
    main_cli(
        [
            "--config",
            str(datadir / "config.toml"),
            "--name",
            "other",
            "-O",
            str(tmp_path),
            str(datadir / "full.ttl"),
        ]
    )
    assert (tmp_path / "other-scheme.json").exists()
    assert not (tmp_path / "animals-scheme.json").exists()


def test_config_file_unknown_key(datadir, tmp_path, caplog):
    with caplog.at_level(logging.ERROR), pytest.raises(ConfigurationError):
        main_cli(
            [
                "--config",
                str(datadir / "invalid-key.toml"),
                "-O",
                str(tmp_path),
                str(datadir / "simple.ttl"),
            ]
        )
    assert "Invalid configuration" in caplog.text


def test_no_input(tmp_path):
    with pytest.raises(ConfigurationError, match="No input given"):
        main_cli(["-O", str(tmp_path)])


def test_two_input_modes(datadir, tmp_path):
    with pytest.raises(ConfigurationError, match="Only one input mode"):
        main_cli(
            [
                "-O",
                str(tmp_path),
                "--url",
                "http://example.org/voc.ttl",
                str(datadir / "simple.ttl"),
            ]
        )


def test_exit_errorvalue_missing_outdir(datadir, tmp_path, caplog):
    with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as exc_info:
        run_cli_app(["-O", str(tmp_path / "missing"), str(datadir / "simple.ttl")])
    assert exc_info.value.code == 1
    assert "Terminating with error" in caplog.text
    assert "Output directory not found" in caplog.text


def test_exit_errorvalue_missing_file(tmp_path, caplog):
    with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as exc_info:
        run_cli_app(["-O", str(tmp_path), str(tmp_path / "missing.ttl")])
    assert exc_info.value.code == 1
    assert "File not found" in caplog.text


def test_exit_errorvalue_no_scheme(datadir, tmp_path, caplog):
    with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as exc_info:
        run_cli_app(["-O", str(tmp_path), str(datadir / "no-scheme.ttl")])
    assert exc_info.value.code == 1
    assert "RDF contains no ConceptScheme" in caplog.text
    assert list(tmp_path.iterdir()) == []


def test_exit_errorvalue_two_schemes(datadir, tmp_path, caplog):
    with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as exc_info:
        run_cli_app(["-O", str(tmp_path), str(datadir / "two-schemes.ttl")])
    assert exc_info.value.code == 1
    assert "http://example.org/first" in caplog.text
    assert "http://example.org/second" in caplog.text


def test_logfile(datadir, tmp_path, caplog):
    logfile = tmp_path / "logs" / "skos2jskos.log"
    outdir = tmp_path / "out"
    outdir.mkdir()
    root = logging.getLogger()
    handlers = list(root.handlers)
    try:
        with caplog.at_level(logging.INFO):
            main_cli(
                ["-l", str(logfile), "-O", str(outdir), str(datadir / "simple.ttl")]
            )
    finally:
        for handler in list(root.handlers):
            if handler not in handlers:
                handler.close()
                root.removeHandler(handler)
    assert "Executing cmd: skos2jskos" in logfile.read_text()
