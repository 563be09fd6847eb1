from pathlib import Path

import pytest

from splint.errors import SourceReadError
from splint.loaders.source_loader import expand_paths, read_source


def _touch(path: Path, text: str = "fn main() {}\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_expand_paths__plain_file__is_kept_even_if_missing(tmp_path: Path) -> None:
    missing = tmp_path / "nope.rs"

    assert expand_paths([str(missing)]) == [missing]


def test_expand_paths__glob__expands_recursively_and_sorted(tmp_path: Path) -> None:
    b = _touch(tmp_path / "src" / "b.rs")
    a = _touch(tmp_path / "src" / "nested" / "a.rs")
    _touch(tmp_path / "src" / "notes.txt", "")

    files = expand_paths([str(tmp_path / "src" / "**" / "*.rs")])

    assert files == sorted([a, b])


def test_expand_paths__directory__finds_supported_files(tmp_path: Path) -> None:
    lib = _touch(tmp_path / "src" / "lib.rs")
    script = _touch(tmp_path / "tools" / "gen.py", "print(1)\n")
    _touch(tmp_path / "target" / "debug" / "build.rs")
    _touch(tmp_path / "README.md", "")

    files = expand_paths([str(tmp_path)])

    assert files == [lib, script]


def test_expand_paths__duplicates__keep_first_occurrence(tmp_path: Path) -> None:
    main = _touch(tmp_path / "main.rs")
    other = _touch(tmp_path / "other.rs")

    files = expand_paths([str(main), str(tmp_path / "*.rs")])

    assert files == [main, other]


def test_expand_paths__no_locations__is_empty() -> None:
    assert expand_paths([]) == []


def test_read_source__keeps_line_terminators(tmp_path: Path) -> None:
    path = tmp_path / "main.rs"
    path.write_bytes(b"fn main() {\r\n}\r\n")

    assert read_source(path) == "fn main() {\r\n}\r\n"


def test_read_source__missing_file__raises(tmp_path: Path) -> None:
    with pytest.raises(SourceReadError):
        read_source(tmp_path / "missing.rs")


def test_read_source__invalid_utf8__raises(tmp_path: Path) -> None:
    path = tmp_path / "latin1.rs"
    path.write_bytes(b"// caf\xe9\n")

    with pytest.raises(SourceReadError):
        read_source(path)
