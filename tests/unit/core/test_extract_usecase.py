"""Unit tests for ExtractUseCase."""

import logging
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from brio.core.extract_usecase import ExtractRequest, ExtractResponse, ExtractUseCase
from brio.core.languages import LanguageRegistry
from tests.conftest import SAMPLE_PYTHON, SAMPLE_TYPESCRIPT


@pytest.fixture
def use_case(registry: LanguageRegistry) -> ExtractUseCase:
    return ExtractUseCase(registry)


def _summary(response: ExtractResponse, root: Path) -> list[tuple[str, int, int]]:
    return [
        (s.file_path.relative_to(root).as_posix(), s.start_line, s.end_line)
        for s in response.snippets
    ]


class TestExecute:
    """Tests for ExtractUseCase.execute."""

    def test_empty_filter_returns_all_snippets(
        self, use_case: ExtractUseCase, sample_tree: Path
    ) -> None:
        response = use_case.execute(ExtractRequest(root=sample_tree))

        assert response.success
        assert response.error is None
        assert _summary(response, sample_tree) == [
            ("app/models.py", 3, 6),
            ("app/models.py", 9, 12),
            ("web/alert.ts", 2, 6),
        ]
        assert response.files_scanned == 2
        assert response.files_skipped == 0
        assert response.query.is_empty

    def test_category_filter(self, use_case: ExtractUseCase, sample_tree: Path) -> None:
        response = use_case.execute(
            ExtractRequest(root=sample_tree, categories="messages:foundation")
        )
        assert _summary(response, sample_tree) == [("app/models.py", 3, 6)]

    def test_wildcard_category_filter(self, use_case: ExtractUseCase, sample_tree: Path) -> None:
        response = use_case.execute(ExtractRequest(root=sample_tree, categories="foundation"))
        assert _summary(response, sample_tree) == [
            ("app/models.py", 3, 6),
            ("web/alert.ts", 2, 6),
        ]

    def test_carried_domain_filter(self, use_case: ExtractUseCase, sample_tree: Path) -> None:
        response = use_case.execute(
            ExtractRequest(root=sample_tree, categories="alerts:foundation, tests")
        )
        assert _summary(response, sample_tree) == [
            ("app/models.py", 9, 12),
            ("web/alert.ts", 2, 6),
        ]

    def test_pattern_limits_files(self, use_case: ExtractUseCase, sample_tree: Path) -> None:
        response = use_case.execute(ExtractRequest(root=sample_tree, pattern="*.ts"))
        assert _summary(response, sample_tree) == [("web/alert.ts", 2, 6)]
        assert response.files_scanned == 1

    def test_no_match(self, use_case: ExtractUseCase, sample_tree: Path) -> None:
        response = use_case.execute(ExtractRequest(root=sample_tree, categories="nothing"))
        assert response.success
        assert response.snippets == []

    def test_repeated_runs_are_identical(
        self, use_case: ExtractUseCase, sample_tree: Path
    ) -> None:
        request = ExtractRequest(root=sample_tree)
        assert use_case.execute(request).snippets == use_case.execute(request).snippets

    def test_traversal_failure_is_error_response(
        self, use_case: ExtractUseCase, tmp_path: Path
    ) -> None:
        response = use_case.execute(ExtractRequest(root=tmp_path / "missing"))
        assert not response.success
        assert response.snippets == []
        assert "Not a directory" in (response.error or "")
        assert response.hint

    def test_unreadable_file_is_skipped(
        self,
        use_case: ExtractUseCase,
        sample_tree: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        from brio.core.scanning import snippet_scanner

        real_scan = snippet_scanner.scan_file

        def flaky_scan(path, language):
            if path.suffix == ".ts":
                raise PermissionError(13, "Permission denied", str(path))
            return real_scan(path, language)

        with patch("brio.core.extract_usecase.scan_file", side_effect=flaky_scan):
            with caplog.at_level(logging.WARNING, logger="brio"):
                response = use_case.execute(ExtractRequest(root=sample_tree))

        assert response.success
        assert response.files_skipped == 1
        assert response.files_scanned == 1
        assert _summary(response, sample_tree) == [
            ("app/models.py", 3, 6),
            ("app/models.py", 9, 12),
        ]
        assert "Failed to read file" in caplog.text

    def test_unexpected_error_becomes_error_response(
        self, use_case: ExtractUseCase, sample_tree: Path
    ) -> None:
        with patch(
            "brio.core.extract_usecase.scan_file", side_effect=RuntimeError("boom")
        ):
            response = use_case.execute(ExtractRequest(root=sample_tree))
        assert not response.success
        assert response.error == "Extraction error: boom"

    def test_keyboard_interrupt_propagates(
        self, use_case: ExtractUseCase, sample_tree: Path
    ) -> None:
        with patch(
            "brio.core.extract_usecase.scan_file", side_effect=KeyboardInterrupt
        ):
            with pytest.raises(KeyboardInterrupt):
                use_case.execute(ExtractRequest(root=sample_tree))


class TestWorkers:
    """Tests for concurrent scanning."""

    def test_invalid_worker_count(self, registry: LanguageRegistry) -> None:
        with pytest.raises(ValueError):
            ExtractUseCase(registry, workers=0)

    def test_parallel_scan_matches_sequential(
        self,
        registry: LanguageRegistry,
        make_tree: Callable[[dict[str, str]], Path],
    ) -> None:
        files = {f"mod{i:02d}.py": SAMPLE_PYTHON for i in range(12)}
        files.update({f"web/c{i:02d}.ts": SAMPLE_TYPESCRIPT for i in range(6)})
        root = make_tree(files)

        sequential = ExtractUseCase(registry, workers=1).execute(ExtractRequest(root=root))
        parallel = ExtractUseCase(registry, workers=4).execute(ExtractRequest(root=root))

        assert parallel.success
        assert len(parallel.snippets) == 12 * 2 + 6
        assert parallel.snippets == sequential.snippets
