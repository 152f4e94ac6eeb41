"""
Errors raised before a file reaches the classification core.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

PathLike = Union[str, Path]


class AnalysisError(Exception):
    """Base class: analysis of a single file was abandoned."""

    def __init__(self, message: str, file_path: PathLike) -> None:
        super().__init__(message)
        self.file_path = str(file_path)


class UnsupportedFileError(AnalysisError):
    def __init__(self, file_path: PathLike) -> None:
        super().__init__(f"unsupported file type: {file_path}", file_path)


class SourceReadError(AnalysisError):
    def __init__(self, file_path: PathLike, cause: OSError) -> None:
        super().__init__(f"error reading file: {cause}", file_path)
        self.cause = cause


class GoParseError(AnalysisError):
    def __init__(
        self,
        file_path: PathLike,
        position: Optional[Tuple[int, int]] = None,
        reason: str = "syntax error",
    ) -> None:
        where = str(file_path)
        if position is not None:
            where = f"{where}:{position[0]}:{position[1]}"
        super().__init__(f"error parsing file: {where}: {reason}", file_path)
        self.position = position
