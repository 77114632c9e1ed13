import numpy as np
import pytest

from chalkboard import cli, pipeline
from chalkboard.io_utils.io import load_gray


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.delenv("CHALKBOARD_OUTDIR", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def step_png(workdir, write_png, step_image):
    return write_png("step photo.png", step_image)


def _output(workdir):
    return load_gray(workdir / "output.png")


def test_parse_levels_valid():
    assert pipeline.parse_levels("30", "2") == (30, 2)


def test_parse_levels_fallbacks():
    assert pipeline.parse_levels("abc", "2") == (50, 2)
    assert pipeline.parse_levels("30", "thick") == (30, 1)
    assert pipeline.parse_levels("", "") == (50, 1)


def test_run_returns_mask(step_png):
    mask = pipeline.run(step_png, threshold=20, thickness=0)
    assert mask.dtype == np.uint8
    assert mask[1:-1, 4:6].all()


def test_run_inverts(step_png):
    plain = pipeline.run(step_png)
    inverted = pipeline.run(step_png, invert=True)
    np.testing.assert_array_equal(inverted, 255 - plain)


def test_main_writes_output(workdir, step_png, step_image, capsys):
    assert pipeline.main([str(step_png)]) == 0

    out = capsys.readouterr().out
    assert "CHALKBOARDIMAGE: by Dave Duke dave@daveduke.co.uk" in out
    assert "Mask created and saved successfully." in out

    mask = _output(workdir)
    assert mask.shape == step_image.shape
    assert mask[1:-1, 4:6].all()
    assert mask.sum() == 16 * 255


def test_main_invert_flag_after_levels(workdir, step_png):
    assert pipeline.main([str(step_png), "250", "0", "-invert"]) == 0
    assert (_output(workdir) == 255).all()


def test_main_levels_need_both_values(workdir, step_png):
    # a lone threshold is ignored, so the default threshold finds the step
    pipeline.main([str(step_png), "250"])
    assert _output(workdir).any()

    pipeline.main([str(step_png), "250", "0"])
    assert not _output(workdir).any()


def test_main_invalid_levels_fall_back(workdir, step_png):
    # threshold -> 50, thickness -> 1
    pipeline.main([str(step_png), "x", "y"])
    mask = _output(workdir)
    assert mask[:, 3:7].all()
    assert not mask[:, :3].any()


def test_main_glob_pattern(workdir, step_png):
    assert pipeline.main(["step*.png"]) == 0
    assert (workdir / "output.png").is_file()


def test_main_without_arguments_prints_usage(workdir, capsys):
    assert pipeline.main([]) == 0
    assert "Usage:" in capsys.readouterr().out
    assert not (workdir / "output.png").exists()


def test_main_no_match(workdir, capsys):
    assert pipeline.main(["missing*.png"]) == 0
    assert "No image files found." in capsys.readouterr().out
    assert not (workdir / "output.png").exists()


def test_main_undecodable_input_is_fatal(workdir):
    (workdir / "broken.png").write_bytes(b"garbage")
    with pytest.raises(SystemExit) as exc:
        pipeline.main(["broken.png"])
    assert exc.value.code == 1
    assert not (workdir / "output.png").exists()


def test_main_unwritable_output_is_fatal(workdir, step_png, monkeypatch):
    blocker = workdir / "blocker"
    blocker.write_text("not a directory")
    monkeypatch.setenv("CHALKBOARD_OUTDIR", str(blocker))
    with pytest.raises(SystemExit) as exc:
        pipeline.main([str(step_png)])
    assert exc.value.code == 1


def test_main_outdir_env(workdir, step_png, monkeypatch):
    monkeypatch.setenv("CHALKBOARD_OUTDIR", str(workdir / "results"))
    pipeline.main([str(step_png)])
    assert (workdir / "results" / "output.png").is_file()
    assert not (workdir / "output.png").exists()


def test_main_timings(workdir, step_png, capsys):
    pipeline.main([str(step_png), "--timings"])
    out = capsys.readouterr().out
    assert "[TIMER] load" in out
    assert "[TIMER] save" in out
    assert "timings" in out


def test_cli_forwards_argv(workdir, step_png, monkeypatch):
    monkeypatch.setattr("sys.argv", ["chalkboard", str(step_png)])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 0
    assert (workdir / "output.png").is_file()


def test_parse_args_positions():
    opts = pipeline.parse_args(["img.png", "30", "2", "-invert", "--timings"])
    assert (opts.input, opts.threshold, opts.thickness) == ("img.png", 30, 2)
    assert opts.invert and opts.timings


def test_parse_args_needs_three_arguments():
    opts = pipeline.parse_args(["img.png", "30"])
    assert (opts.threshold, opts.thickness) == (20, 0)
    assert not opts.invert


def test_parse_args_counts_invert_as_a_position():
    opts = pipeline.parse_args(["img.png", "30", "-invert"])
    assert (opts.threshold, opts.thickness) == (30, 1)
    assert opts.invert


def test_parse_args_ignores_timings_when_counting():
    opts = pipeline.parse_args(["img.png", "--timings", "30"])
    assert (opts.threshold, opts.thickness) == (20, 0)


@pytest.mark.parametrize("level", ["-x", "-1e3", "--"])
def test_parse_args_dashed_threshold_falls_back(level):
    opts = pipeline.parse_args(["img.png", level, "3"])
    assert (opts.threshold, opts.thickness) == (50, 3)


def test_parse_args_negative_integers_are_levels():
    opts = pipeline.parse_args(["img.png", "-5", "-1"])
    assert (opts.threshold, opts.thickness) == (-5, -1)


def test_main_dashed_level_falls_back(workdir, step_png):
    # threshold -> 50, thickness 3
    assert pipeline.main([str(step_png), "-x", "3"]) == 0
    mask = _output(workdir)
    assert mask[:, 1:9].all()
    assert not mask[:, 0].any()
    assert not mask[:, 9].any()


def test_main_invert_in_thickness_position(workdir, step_png):
    # threshold 30, thickness falls back to 1, mask inverted
    assert pipeline.main([str(step_png), "30", "-invert"]) == 0
    mask = _output(workdir)
    assert not mask[:, 3:7].any()
    assert (mask[:, :3] == 255).all()
    assert (mask[:, 7:] == 255).all()


def test_main_help(workdir, capsys):
    assert pipeline.main(["--help"]) == 0
    assert "Usage:" in capsys.readouterr().out
