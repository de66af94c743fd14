import numpy as np
import PIL.Image
import pytest

import plot_zeroes

LITTLEWOOD = ["-2", "2", "-1.5", "1.5", "4", "1", "-1", "-", "2"]


def _split_ppm(data):
    lines = data.split(b"\n", 5)
    return lines[:5], lines[5]


def test_writes_a_ppm_file(tmp_path, capsys):
    output = tmp_path / "zeroes.ppm"
    assert plot_zeroes.main(["-o", str(output), *LITTLEWOOD]) == 0
    header, pixels = _split_ppm(output.read_bytes())
    assert header[0] == b"P6"
    assert header[1].startswith(b"# Zeroes, xmin=-2.000000, xmax=2.000000, ymin=-1.500000, ymax=1.500000, max_count=")
    assert header[1].endswith(b"coeffs=[1.000000, -1.000000],degrees = [2],")
    assert header[2:] == [b"4", b"3", b"65535"]
    assert len(pixels) == 4 * 3 * 3 * 2
    assert "Degree 2 (" in capsys.readouterr().err


def test_quiet_suppresses_progress(tmp_path, capsys):
    output = tmp_path / "zeroes.ppm"
    plot_zeroes.main(["--quiet", "-o", str(output), *LITTLEWOOD])
    assert capsys.readouterr().err == ""


def test_thresholds_reach_the_rasterizer(tmp_path):
    default = tmp_path / "default.ppm"
    wide = tmp_path / "wide.ppm"
    window = ["-2", "2", "-1", "1", "16", "1", "-1", "-", "1"]
    plot_zeroes.main(["-q", "-o", str(default), *window])
    plot_zeroes.main(["-q", "--real-cutoff", "2", "-o", str(wide), *window])
    # Degree one Littlewood polynomials only have the real zeroes 1 and -1.
    assert b"max_count=0," in default.read_bytes()
    assert b"max_count=2," in wide.read_bytes()


def test_preview_and_gif(tmp_path):
    output = tmp_path / "zeroes.ppm"
    preview = tmp_path / "preview"
    gif = tmp_path / "frames.gif"
    plot_zeroes.main([
        "-q", "-o", str(output), "--preview", str(preview), "--gif", str(gif), "--colormap", "magma",
        "-2", "2", "-1", "1", "32", "1", "-1", "-", "3", "4",
    ])
    with PIL.Image.open(tmp_path / "preview.png") as image:
        assert image.size == (32, 16)
        assert np.asarray(image.convert("RGB")).any()
    assert gif.stat().st_size > 0


@pytest.mark.parametrize(
    "values",
    [
        ["-2", "2", "-1.5", "1.5", "4", "1", "-1", "2"],
        ["-2", "2", "-1.5", "1.5", "4", "-", "2", "3"],
        ["-2", "2", "-1.5", "1.5", "4", "1", "-1", "-"],
        ["-2", "2", "-1.5", "1.5", "four", "1", "-", "2"],
        ["-2", "2", "-1.5", "x", "4", "1", "-", "2"],
        ["-2", "2", "-1.5", "1.5", "4", "1", "-", "2.5"],
        ["-2", "2", "-1.5", "1.5", "4", "1", "-", "-3"],
        ["2", "-2", "-1.5", "1.5", "4", "1", "-", "2"],
        ["-2", "2", "-1.5", "1.5", "0", "1", "-", "2"],
        ["-2", "2", "-1.5", "1.5", "4", "1"],
    ],
)
def test_configuration_errors_exit_before_rendering(tmp_path, values, capsys):
    output = tmp_path / "zeroes.ppm"
    with pytest.raises(SystemExit) as excinfo:
        plot_zeroes.main(["-o", str(output), *values])
    assert excinfo.value.code == 2
    assert not output.exists()
    err = capsys.readouterr().err
    assert "error:" in err
    assert "Degree" not in err


def test_output_suffix_checks(tmp_path):
    with pytest.raises(SystemExit):
        plot_zeroes.main(["-o", str(tmp_path / "a.ppm"), "--preview", str(tmp_path / "a.jpg"), *LITTLEWOOD])
    with pytest.raises(SystemExit):
        plot_zeroes.main(["-o", str(tmp_path / "a.ppm"), "--gif", str(tmp_path / "a.png"), *LITTLEWOOD])
    with pytest.raises(SystemExit):
        plot_zeroes.main(["-o", str(tmp_path), *LITTLEWOOD])


def test_parse_plot_arguments():
    parser = plot_zeroes.build_parser()
    opt = parser.parse_args(["-3", "1", "-1", "1", "200", "0", "1", "-1", "-", "5", "7"])
    plot = plot_zeroes.parse_plot_arguments(opt.values, parser)
    assert plot.window.xres == 200 and plot.window.yres == 100
    assert plot.coefficients == (0.0, 1.0, -1.0)
    assert plot.degrees == (5, 7)


def test_make_solver_defaults_to_numpy():
    assert plot_zeroes.make_solver("numpy").name == "numpy"


def test_exponent_form_negatives_after_double_dash(tmp_path):
    output = tmp_path / "zeroes.ppm"
    plot_zeroes.main(["-q", "-o", str(output), "--", "-2", "2", "-1.5", "1.5", "4", "1", "-1e-3", "-", "2"])
    assert b"coeffs=[1.000000, -0.001000]," in output.read_bytes()


def test_usage_mentions_double_dash(capsys):
    with pytest.raises(SystemExit):
        plot_zeroes.build_parser().parse_args(["--help"])
    assert "-1e-3" in capsys.readouterr().out
