import logging
from pathlib import Path
from typing import Tuple, Union

from abc_metrics.errors import PathLike, SourceReadError
from abc_metrics.metrics import ABCMetrics

logger = logging.getLogger(__name__)


class Analyzer:
    """
    Base for language analyzers.

    Subclasses are registered with @analyzer, which sets ``extensions``,
    and implement analyze_source.
    """

    extensions: Tuple[str, ...] = ()

    def supported_extensions(self) -> Tuple[str, ...]:
        return self.extensions

    def analyze_source(self, code: Union[str, bytes], file_path: PathLike = "<string>") -> ABCMetrics:
        raise NotImplementedError

    def analyze_file(self, file_path: PathLike) -> ABCMetrics:
        """
        Read and analyze a single file.

        Raises:
            SourceReadError: the file could not be read.
            AnalysisError: any parse failure reported by analyze_source.
        """
        try:
            code = Path(file_path).read_bytes()
        except OSError as exc:
            raise SourceReadError(file_path, exc) from exc
        logger.debug("read %s (%d bytes)", file_path, len(code))
        return self.analyze_source(code, file_path)
