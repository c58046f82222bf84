import errno
import json

from synth_als.cli import build_parser, main
from synth_als.shards import train_shard_path, validation_shard_path


def test_parser_defaults_and_alias():
    args = build_parser().parse_args(["generate", "--nmovies", "7"])
    assert args.nitems == 7
    assert args.dir == "synthetic_data"
    assert (args.nfiles, args.D, args.nusers, args.nvalidation) == (5, 20, 1000, 2)
    assert (args.noise, args.stdev, args.alpha, args.seed) == (0.1, 2.0, 1.8, 31413)


def test_generate_then_stats(tmp_path, capsys):
    out = tmp_path / "data"
    rc = main(["generate", "--dir", str(out), "--nusers", "20", "--nmovies", "15",
               "--nfiles", "2", "--D", "3", "--no-progress"])
    assert rc == 0
    gen = json.loads(capsys.readouterr().out)
    assert train_shard_path(out, 1).exists()
    assert validation_shard_path(out, 1).exists()

    rc = main(["stats", "--dir", str(out)])
    assert rc == 0
    stats = json.loads(capsys.readouterr().out)
    assert stats["train"] == gen["n_train"]
    assert stats["validation"] == gen["n_validation"] == 15 * 2
    assert stats["items"] == 15
    assert stats["train_per_shard"] == gen["train_per_shard"]


def test_configuration_error_exit_code(tmp_path):
    out = tmp_path / "never"
    rc = main(["generate", "--dir", str(out), "--nusers", "2", "--nvalidation", "2"])
    assert rc == 2
    assert not out.exists()


class _FullDisk:
    def __init__(self, path):
        self.name = str(path)
        self.closed = False

    def write(self, line):
        raise OSError(errno.ENOSPC, "No space left on device")

    def close(self):
        self.closed = True


def test_write_failure_exit_code(tmp_path, monkeypatch, caplog):
    monkeypatch.setattr("synth_als.shards.open", lambda path, *a, **kw: _FullDisk(path), raising=False)
    out = tmp_path / "full"
    rc = main(["generate", "--dir", str(out), "--nusers", "20", "--nmovies", "5",
               "--nfiles", "2", "--no-progress"])
    assert rc == 1
    assert "Error writing file" in caplog.text
    assert "graph_" in caplog.text


def test_stats_missing_dir_is_not_found(tmp_path, caplog):
    assert main(["stats", "--dir", str(tmp_path / "missing")]) == 1
    assert "Data directory not found" in caplog.text
