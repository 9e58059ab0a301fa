from abc import ABC, abstractmethod


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file/directory exclusion rules.

    Implementations decide whether a path, given relative to the processed root with
    forward-slash separators, is excluded. Whether the path names a directory matters
    because gitignore patterns ending in ``/`` only match directories.

    Example:
        >>> from dir2context.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> rules = GitIgnoreExclusionRules.from_patterns(["*.pyc", "build/"])
        >>> rules.exclude("test.pyc")
        True
        >>> rules.exclude("build", is_dir=True)
        True
        >>> rules.exclude("build", is_dir=False)
        False
    """

    @abstractmethod
    def exclude(self, path: str, is_dir: bool = False) -> bool:
        """
        Determine if a given path should be excluded based on the loaded rules.

        Args:
            path (str): The file or directory path to check, relative to the root of the
                directory being processed and using forward slashes.
            is_dir (bool): True if the path names a directory.

        Returns:
            bool: True if the path should be excluded, False if it should be included.

        Example:
            >>> class TmpExclusionRules(BaseExclusionRules):
            ...     def exclude(self, path: str, is_dir: bool = False) -> bool:
            ...         return not is_dir and path.endswith('.tmp')
            >>> rules = TmpExclusionRules()
            >>> rules.exclude("build/temp.tmp")
            True
            >>> rules.exclude("main.py")
            False
        """
        pass

    def has_rules(self) -> bool:
        """
        Report whether any rule could ever exclude a path.

        Rule types that are always active use this default implementation.

        Returns:
            bool: True if the rules can exclude anything.
        """
        return True
