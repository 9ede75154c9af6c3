"""Extract use case: select files, scan them, keep matching snippets."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from brio.core.languages import LanguageRegistry
from brio.core.query import format_query, matches, parse_category_query
from brio.core.scanning.file_selector import FileSelector
from brio.core.scanning.snippet_scanner import scan_file
from brio.core.use_case_errors import format_error_message, log_use_case_error
from brio.domain.entities import CategoryQuery, Snippet
from brio.domain.exceptions import BrioDomainError

logger = logging.getLogger(__name__)


@dataclass
class ExtractRequest:
    """Request to extract snippets.

    Attributes:
        root: Directory to scan recursively.
        pattern: Glob applied to file base names ("*" for all files).
        categories: Raw category filter string ("" matches everything).
    """

    root: Path
    pattern: str = "*"
    categories: str = ""


@dataclass
class ExtractResponse:
    """Response containing extracted snippets.

    Attributes:
        snippets: Matching snippets, in file order then in-file order.
        query: Parsed category query that was applied.
        files_scanned: Number of files scanned successfully.
        files_skipped: Number of selected files that could not be scanned.
        success: Whether extraction succeeded.
        error: Error message if extraction failed.
        hint: Optional actionable suggestion accompanying error.
    """

    snippets: list[Snippet] = field(default_factory=list)
    query: CategoryQuery = field(default_factory=CategoryQuery)
    files_scanned: int = 0
    files_skipped: int = 0
    success: bool = True
    error: str | None = None
    hint: str | None = None

    @classmethod
    def create_success(
        cls,
        *,
        snippets: list[Snippet],
        query: CategoryQuery,
        files_scanned: int,
        files_skipped: int,
    ) -> "ExtractResponse":
        """Create a success response."""
        return cls(
            snippets=snippets,
            query=query,
            files_scanned=files_scanned,
            files_skipped=files_skipped,
        )

    @classmethod
    def create_error(cls, message: str, hint: str | None = None) -> "ExtractResponse":
        """Create an error response carrying no snippets."""
        return cls(success=False, error=message, hint=hint)


@dataclass
class _FileResult:
    """Outcome of scanning one file."""

    path: Path
    snippets: list[Snippet]
    skipped: bool = False


class ExtractUseCase:
    """Use case for extracting category-matched snippets from a tree."""

    def __init__(self, registry: LanguageRegistry, workers: int = 1) -> None:
        """Initialize extract use case.

        Args:
            registry: Language registry used for selection and scanning.
            workers: Files scanned concurrently; 1 scans sequentially.
        """
        if workers <= 0:
            raise ValueError(f"workers must be positive, got {workers}")
        self.registry = registry
        self.workers = workers
        self.selector = FileSelector(registry)

    def execute(self, request: ExtractRequest) -> ExtractResponse:
        """Execute extraction.

        Error handling contract:
            - KeyboardInterrupt/SystemExit are re-raised
            - Traversal failures produce an error response with no snippets
            - Per-file failures are logged and the file is skipped

        Args:
            request: Extract request.

        Returns:
            ExtractResponse with matching snippets or an error.
        """
        try:
            query = parse_category_query(request.categories)
            logger.debug("Category filter: %s", format_query(query))

            files = self.selector.select(request.root, request.pattern)
            results = self._scan_all(files)

            snippets = [
                snippet
                for result in results
                for snippet in result.snippets
                if matches(snippet.categories, query)
            ]
            skipped = sum(1 for result in results if result.skipped)
            logger.info(
                "Matched %d snippet(s) in %d file(s)",
                len(snippets),
                len(results) - skipped,
            )
            return ExtractResponse.create_success(
                snippets=snippets,
                query=query,
                files_scanned=len(results) - skipped,
                files_skipped=skipped,
            )
        except (KeyboardInterrupt, SystemExit):
            raise
        except Exception as e:
            log_use_case_error(e, "extraction")
            hint = e.hint if isinstance(e, BrioDomainError) else None
            return ExtractResponse.create_error(
                format_error_message(e, "extraction"), hint=hint
            )

    def _scan_all(self, files: list[Path]) -> list[_FileResult]:
        """Scan files, preserving the order of the file list."""
        if self.workers == 1 or len(files) <= 1:
            return [self._scan_one(path) for path in files]
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            # map() yields results in input order
            return list(executor.map(self._scan_one, files))

    def _scan_one(self, path: Path) -> _FileResult:
        """Scan a single file, absorbing per-file failures."""
        language = self.registry.lookup(path.suffix)
        if language is None:
            logger.warning("No language registered for file type: %s", path)
            return _FileResult(path=path, snippets=[], skipped=True)
        try:
            snippets = scan_file(path, language)
        except OSError as e:
            logger.warning("Failed to read file %s: %s", path, e)
            return _FileResult(path=path, snippets=[], skipped=True)
        logger.debug("Found %d snippet(s) in %s", len(snippets), path)
        return _FileResult(path=path, snippets=snippets)
