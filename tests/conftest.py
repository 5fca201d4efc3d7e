"""Shared fixtures for dupscan tests."""

import pathlib

import pytest


@pytest.fixture
def tree(tmp_path: pathlib.Path) -> pathlib.Path:
    """A root with two files and a subdirectory holding two more."""
    root = tmp_path / "root"
    sub = root / "sub"
    sub.mkdir(parents=True)
    (root / "a.txt").write_bytes(b"alpha")
    (root / "b.txt").write_bytes(b"bravo")
    (sub / "c.txt").write_bytes(b"charlie")
    (sub / "d.txt").write_bytes(b"delta")
    return root


@pytest.fixture
def corpus(tmp_path: pathlib.Path) -> tuple[list[str], set[str]]:
    """Ten files of which exactly two share content.

    Returns (all paths, the duplicate pair).
    """
    root = tmp_path / "corpus"
    root.mkdir()
    paths = []
    for i in range(8):
        p = root / f"unique{i}.bin"
        p.write_bytes(f"unique content {i}".encode() * (i + 1))
        paths.append(str(p))
    first = root / "copy1.bin"
    second = root / "copy2.bin"
    first.write_bytes(b"shared content" * 1000)
    second.write_bytes(b"shared content" * 1000)
    paths += [str(first), str(second)]
    return paths, {str(first), str(second)}
