class Dir2ContextError(Exception):
    """
    Base class for errors that terminate a dir2context run.

    Recoverable per-entry conditions (unreadable files, binary content and the like)
    are never raised; they are logged as warnings. Only conditions that make the
    traversal itself impossible derive from this class.
    """

    pass


class ConfigurationError(Dir2ContextError):
    """
    Exception raised when the run is configured with invalid settings.

    Example:
        >>> error = ConfigurationError("max_depth must be a non-negative integer, got -1")
        >>> str(error)
        'max_depth must be a non-negative integer, got -1'
    """

    pass


class InvalidPatternError(ConfigurationError):
    """
    Exception raised when an exclusion pattern cannot be compiled.

    Malformed user-supplied patterns are detected when the rules are compiled, before
    any directory is read, so the error is reported once and no output is produced.

    Attributes:
        pattern (str): The offending pattern text.
        source (str): Where the pattern came from ("user-supplied" or an ignore file path).

    Example:
        >>> error = InvalidPatternError("a/***/b", "user-supplied", "invalid glob")
        >>> str(error)
        "Invalid exclusion pattern 'a/***/b' (user-supplied): invalid glob"
    """

    def __init__(self, pattern: str, source: str, reason: str) -> None:
        """
        Initialize the exception with the failing pattern and its provenance.

        Args:
            pattern (str): The pattern text that failed to compile.
            source (str): Provenance of the pattern.
            reason (str): Explanation from the pattern compiler.
        """
        self.pattern = pattern
        self.source = source
        super().__init__(f"Invalid exclusion pattern '{pattern}' ({source}): {reason}")


class RootDirectoryError(Dir2ContextError):
    """
    Exception raised when the root directory cannot be processed at all.

    This covers a root path that does not exist, is not a directory, or cannot be
    listed. It is always fatal.

    Attributes:
        path (str): The root path as given by the caller.

    Example:
        >>> error = RootDirectoryError("/missing", "No such file or directory")
        >>> str(error)
        "Could not access directory '/missing': No such file or directory"
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not access directory '{path}': {reason}")
