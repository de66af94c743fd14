import pytest

import generate_cli_examples
import plot_zeroes


@pytest.mark.parametrize("example", generate_cli_examples.EXAMPLES, ids=lambda e: e.name)
def test_example_arguments_are_valid(example):
    parser = plot_zeroes.build_parser()
    args = example.full_args()
    assert args[:2] == ["python", "plot_zeroes.py"]
    opt = parser.parse_args(args[2:])
    plot = plot_zeroes.parse_plot_arguments(opt.values, parser)
    assert plot.degrees
    assert opt.output is not None


def test_prepare_and_verify(tmp_path):
    target = tmp_path / "example" / "out.ppm"
    example = generate_cli_examples.Example(
        name="tmp",
        args=[],
        expected=[generate_cli_examples.Expected(target)],
        clean=[tmp_path / "example"],
    )
    (tmp_path / "example").mkdir()
    (tmp_path / "example" / "stale.ppm").write_bytes(b"old")
    generate_cli_examples._prepare(example)
    assert not (tmp_path / "example" / "stale.ppm").exists()
    assert target.parent.is_dir()
    with pytest.raises(RuntimeError):
        generate_cli_examples._verify(example)
    target.write_bytes(b"P6\n")
    generate_cli_examples._verify(example)
