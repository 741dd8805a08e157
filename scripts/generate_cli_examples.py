from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

REPO_ROOT = Path(__file__).resolve().parent.parent
EXAMPLES_ROOT = Path("examples/cli-options")
OUTPUT_FILE = "fractal.ppm"
BASE_SIZE = "-o=160,120"


@dataclass
class Example:
    name: str
    args: list[str]

    @property
    def directory(self) -> Path:
        return EXAMPLES_ROOT / self.name

    def full_args(self) -> list[str]:
        return [sys.executable, str(REPO_ROOT / "render.py"), *self.args]


EXAMPLES: list[Example] = [
    Example(name="mandelbrot", args=[BASE_SIZE]),
    Example(name="degree", args=[BASE_SIZE, "-d=4"]),
    Example(name="julia", args=[BASE_SIZE, "-j=-0.3,0.7"]),
    Example(name="julia-degree", args=[BASE_SIZE, "-j=0.2,-0.55", "-d=3"]),
    Example(name="region", args=[BASE_SIZE, "-m=0.5,1.25,-2,-1.25"]),
    Example(name="julia-region", args=[BASE_SIZE, "-j=-0.3,0.7", "-m=1.6,1.2"]),
    Example(name="single-pixel", args=["-o=1,1"]),
    Example(name="verbose", args=[BASE_SIZE, "--verbose"]),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()


def _prepare(example: Example) -> None:
    _ensure_clean([example.directory])
    example.directory.mkdir(parents=True, exist_ok=True)


def _verify(example: Example) -> None:
    output = example.directory / OUTPUT_FILE
    if not output.is_file():
        raise RuntimeError(f"Expected file {output} was not created")
    header = output.read_bytes().split(b"\n", 1)[0]
    if not header.startswith(b"P6 "):
        raise RuntimeError(f"{output} does not start with a P6 header")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _prepare(example)
        completed = subprocess.run(example.full_args(), cwd=example.directory, check=True)
        if completed.returncode != 0:
            raise RuntimeError(f"Example {example.name} failed with {completed.returncode}")
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
