"""
Input validation and error handling for the TF-IDF Plagiarism Checker.

The similarity engine trusts its inputs; everything that reaches it from a
user, the environment or the filesystem is checked here first.
"""

import math
from pathlib import Path
from typing import Any, Iterable, Optional, Union
from functools import wraps
import inspect
import logging


class ValidationError(Exception):
    """Base class for validation errors."""

    def __init__(self, message: str, field: str = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        super().__init__(self.message)


class FileValidationError(ValidationError):
    """Exception raised for file-related validation errors."""
    pass


class DirectoryValidationError(ValidationError):
    """Exception raised for directory-related validation errors."""
    pass


class ParameterValidationError(ValidationError):
    """Exception raised for parameter validation errors."""
    pass


class CorpusValidationError(ValidationError):
    """Raised when a corpus cannot be compared (fewer than two documents)."""
    pass


class FileValidator:
    """File validation utilities."""

    ALLOWED_TEXT_EXTENSIONS = {'.txt'}
    MAX_FILE_SIZE_MB = 50
    MAX_FILENAME_LENGTH = 255

    @staticmethod
    def validate_file_path(file_path: Union[str, Path],
                           must_exist: bool = True,
                           allowed_extensions: Optional[set] = None,
                           max_size_mb: Optional[float] = None) -> Path:
        """
        Validate a file path.

        Args:
            file_path: Path to the file
            must_exist: Whether the file must exist
            allowed_extensions: Set of allowed (lowercase) file extensions
            max_size_mb: Maximum file size in MB

        Returns:
            Path object

        Raises:
            FileValidationError: If validation fails
        """
        if not file_path:
            raise FileValidationError("File path cannot be empty", field="file_path", value=file_path)

        path = Path(file_path)

        if len(path.name) > FileValidator.MAX_FILENAME_LENGTH:
            raise FileValidationError(f"File name too long: {path.name[:40]}...", field="file_path", value=file_path)

        if must_exist and not path.exists():
            raise FileValidationError(f"File does not exist: {file_path}", field="file_path", value=file_path)

        if must_exist and not path.is_file():
            raise FileValidationError(f"Path is not a file: {file_path}", field="file_path", value=file_path)

        # Name-based so a file called just ".txt" counts; Path(".txt").suffix is ""
        name = path.name.lower()
        if allowed_extensions and not any(name.endswith(ext) for ext in allowed_extensions):
            raise FileValidationError(
                f"File extension not allowed. Allowed: {sorted(allowed_extensions)}, got: {path.name}",
                field="file_path",
                value=file_path
            )

        if must_exist and max_size_mb:
            size_mb = path.stat().st_size / (1024 * 1024)
            if size_mb > max_size_mb:
                raise FileValidationError(
                    f"File too large: {size_mb:.1f}MB (max: {max_size_mb}MB)",
                    field="file_path",
                    value=file_path
                )

        return path

    @staticmethod
    def validate_text_file(file_path: Union[str, Path]) -> Path:
        """Validate a plain-text corpus file."""
        return FileValidator.validate_file_path(
            file_path,
            must_exist=True,
            allowed_extensions=FileValidator.ALLOWED_TEXT_EXTENSIONS,
            max_size_mb=FileValidator.MAX_FILE_SIZE_MB
        )


class DirectoryValidator:
    """Directory validation utilities."""

    @staticmethod
    def validate_directory_path(dir_path: Union[str, Path],
                                must_exist: bool = True) -> Path:
        """
        Validate a directory path.

        Raises:
            DirectoryValidationError: If the path is empty, missing or not a directory
        """
        if not dir_path or not str(dir_path).strip():
            raise DirectoryValidationError("Directory path cannot be empty", field="dir_path", value=dir_path)

        path = Path(str(dir_path).strip()).expanduser()

        if must_exist and not path.exists():
            raise DirectoryValidationError(f"Directory does not exist: {dir_path}", field="dir_path", value=dir_path)

        if must_exist and not path.is_dir():
            raise DirectoryValidationError(f"Path is not a directory: {dir_path}", field="dir_path", value=dir_path)

        return path


class ParameterValidator:
    """Parameter validation utilities."""

    THRESHOLD_SCALES = {'fraction': 1.0, 'percent': 100.0}

    @staticmethod
    def validate_number(value: Any, field: str, min_value: Optional[float] = None,
                        max_value: Optional[float] = None) -> float:
        """Coerce ``value`` to a finite float within the optional bounds."""
        if isinstance(value, bool):
            raise ParameterValidationError(f"{field} must be a number, got bool", field=field, value=value)
        try:
            number = float(value)
        except (ValueError, TypeError):
            raise ParameterValidationError(
                f"{field} must be a number, got {value!r}",
                field=field,
                value=value
            )

        if math.isnan(number) or math.isinf(number):
            raise ParameterValidationError(f"{field} must be finite, got {value!r}", field=field, value=value)

        if min_value is not None and number < min_value:
            raise ParameterValidationError(
                f"{field} must be >= {min_value}, got {number}",
                field=field,
                value=value
            )

        if max_value is not None and number > max_value:
            raise ParameterValidationError(
                f"{field} must be <= {max_value}, got {number}",
                field=field,
                value=value
            )

        return number

    @staticmethod
    def validate_threshold(value: Any, field: str = "threshold", scale: str = "fraction") -> float:
        """
        Validate a similarity threshold and return it as a fraction in [0, 1].

        Args:
            value: Raw threshold (number or numeric string)
            field: Field name used in error messages
            scale: ``"fraction"`` for 0-1 input, ``"percent"`` for 0-100 input

        Raises:
            ParameterValidationError: If the value is not numeric or out of range
        """
        if scale not in ParameterValidator.THRESHOLD_SCALES:
            raise ParameterValidationError(f"Unknown threshold scale: {scale}", field="scale", value=scale)
        upper = ParameterValidator.THRESHOLD_SCALES[scale]
        number = ParameterValidator.validate_number(value, field, min_value=0.0, max_value=upper)
        return number / upper

    @staticmethod
    def validate_stopwords(value: Optional[Iterable[str]], field: str = "stopwords") -> frozenset:
        """Normalise a stopword collection to a lowercase frozenset."""
        if value is None:
            return frozenset()
        if isinstance(value, str):
            raise ParameterValidationError(
                f"{field} must be a collection of words, not a string",
                field=field,
                value=value
            )
        words = set()
        for word in value:
            if not isinstance(word, str):
                raise ParameterValidationError(f"{field} entries must be strings, got {word!r}",
                                               field=field, value=word)
            words.add(word.lower())
        return frozenset(words)


def validate_inputs(**validators):
    """
    Decorator to validate function inputs.

    Args:
        **validators: Mapping of parameter names to validation callables.
            Each callable returns the (possibly coerced) value or raises.
    """
    def decorator(func):
        sig = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            bound_args = sig.bind(*args, **kwargs)
            bound_args.apply_defaults()

            for param_name, validator in validators.items():
                if param_name in bound_args.arguments:
                    value = bound_args.arguments[param_name]
                    try:
                        bound_args.arguments[param_name] = validator(value)
                    except ValidationError:
                        raise
                    except Exception as e:
                        raise ParameterValidationError(
                            f"Validation failed for {param_name}: {str(e)}",
                            field=param_name,
                            value=value
                        ) from e

            return func(*bound_args.args, **bound_args.kwargs)
        return wrapper
    return decorator


def handle_exceptions(default_return=None, reraise_types=None):
    """
    Decorator turning unexpected errors into a logged default result.

    Validation errors are always re-raised so callers can report them.

    Args:
        default_return: Value returned when an unexpected exception occurs
        reraise_types: Exception types to re-raise unchanged
    """
    if reraise_types is None:
        reraise_types = [ValidationError]

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except tuple(reraise_types):
                raise
            except Exception as e:
                logger = logging.getLogger(func.__module__)
                logger.error(f"Unhandled exception in {func.__name__}: {str(e)}", exc_info=True)
                if default_return is not None:
                    return default_return() if callable(default_return) else default_return
                raise
        return wrapper
    return decorator
