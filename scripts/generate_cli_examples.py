from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")
WINDOW = ["-2", "2", "-1.5", "1.5", "320"]
LITTLEWOOD = ["1", "-1", "-", "8", "9", "10"]


@dataclass
class Expected:
    path: Path


@dataclass
class Example:
    name: str
    args: list[str]
    expected: list[Expected]
    clean: list[Path] | None = None

    def full_args(self) -> list[str]:
        return ["python", "plot_zeroes.py", "--quiet", *self.args]


def _out(name: str, filename: str) -> str:
    return str(EXAMPLES_ROOT / name / filename)


EXAMPLES: list[Example] = [
    Example(
        name="littlewood",
        args=["--output", _out("littlewood", "littlewood.ppm"), *WINDOW, *LITTLEWOOD],
        expected=[Expected(EXAMPLES_ROOT / "littlewood" / "littlewood.ppm")],
        clean=[EXAMPLES_ROOT / "littlewood"],
    ),
    Example(
        name="preview",
        args=[
            "--output",
            _out("preview", "zeroes.ppm"),
            "--preview",
            _out("preview", "zeroes.png"),
            *WINDOW,
            *LITTLEWOOD,
        ],
        expected=[
            Expected(EXAMPLES_ROOT / "preview" / "zeroes.ppm"),
            Expected(EXAMPLES_ROOT / "preview" / "zeroes.png"),
        ],
        clean=[EXAMPLES_ROOT / "preview"],
    ),
    Example(
        name="colormap",
        args=[
            "--output",
            _out("colormap", "zeroes.ppm"),
            "--preview",
            _out("colormap", "viridis.png"),
            "--colormap",
            "viridis",
            "--invert",
            *WINDOW,
            *LITTLEWOOD,
        ],
        expected=[Expected(EXAMPLES_ROOT / "colormap" / "viridis.png")],
        clean=[EXAMPLES_ROOT / "colormap"],
    ),
    Example(
        name="gif",
        args=["--output", _out("gif", "zeroes.ppm"), "--gif", _out("gif", "degrees.gif"), *WINDOW, *LITTLEWOOD],
        expected=[Expected(EXAMPLES_ROOT / "gif" / "degrees.gif")],
        clean=[EXAMPLES_ROOT / "gif"],
    ),
    Example(
        name="zero-fill",
        args=["--output", _out("zero-fill", "zeroes.ppm"), *WINDOW, "0", "1", "-1", "-", "6", "7"],
        expected=[Expected(EXAMPLES_ROOT / "zero-fill" / "zeroes.ppm")],
        clean=[EXAMPLES_ROOT / "zero-fill"],
    ),
    Example(
        name="real-cutoff",
        args=["--output", _out("real-cutoff", "zeroes.ppm"), "--real-cutoff", "2", *WINDOW, *LITTLEWOOD],
        expected=[Expected(EXAMPLES_ROOT / "real-cutoff" / "zeroes.ppm")],
        clean=[EXAMPLES_ROOT / "real-cutoff"],
    ),
    Example(
        name="tensorflow",
        args=["--solver", "tensorflow", "--output", _out("tensorflow", "zeroes.ppm"), *WINDOW, "1", "-1", "-", "8"],
        expected=[Expected(EXAMPLES_ROOT / "tensorflow" / "zeroes.ppm")],
        clean=[EXAMPLES_ROOT / "tensorflow"],
    ),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()


def _prepare(example: Example) -> None:
    clean = example.clean or []
    _ensure_clean(clean)
    for expected in example.expected:
        expected.path.parent.mkdir(parents=True, exist_ok=True)


def _verify(example: Example) -> None:
    for expected in example.expected:
        if not expected.path.is_file():
            raise RuntimeError(f"Expected file {expected.path} was not created")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _prepare(example)
        completed = subprocess.run(example.full_args(), check=True)
        if completed.returncode != 0:
            raise RuntimeError(f"Example {example.name} failed with {completed.returncode}")
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
