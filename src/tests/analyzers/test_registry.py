import pytest

from abc_metrics import analyzers
from abc_metrics.analyzers import (
    analyzer,
    get_analyzer_for_file,
    has_extension,
    is_supported,
)
from abc_metrics.analyzers.base import Analyzer
from abc_metrics.analyzers.golang import GoAnalyzer
from abc_metrics.errors import AnalysisError, UnsupportedFileError


@pytest.mark.parametrize(
    "path, ext, expected",
    [
        pytest.param("main.go", ".go", True, id="match"),
        pytest.param("dir/pkg/main.go", ".go", True, id="nested"),
        pytest.param("main.go.txt", ".go", False, id="wrong-suffix"),
        pytest.param("go", ".go", False, id="shorter-than-ext"),
        pytest.param("", ".go", False, id="empty"),
    ],
)
def test_has_extension(path, ext, expected) -> None:
    assert has_extension(path, ext) is expected


def test_go_is_registered() -> None:
    assert isinstance(get_analyzer_for_file("x/main.go"), GoAnalyzer)
    assert is_supported("main.go")
    assert not is_supported("main.ts")


def test_unsupported_file() -> None:
    with pytest.raises(UnsupportedFileError) as exc:
        get_analyzer_for_file("app/index.ts")
    assert str(exc.value) == "unsupported file type: app/index.ts"
    assert exc.value.file_path == "app/index.ts"
    assert isinstance(exc.value, AnalysisError)


def test_first_registered_match_wins(monkeypatch) -> None:
    monkeypatch.setattr(analyzers, "registry", list(analyzers.registry))

    @analyzer(".go", ".tmpl")
    class LaterAnalyzer(Analyzer):
        pass

    assert isinstance(get_analyzer_for_file("main.go"), GoAnalyzer)
    assert isinstance(get_analyzer_for_file("page.tmpl"), LaterAnalyzer)
    assert LaterAnalyzer().supported_extensions() == (".go", ".tmpl")
