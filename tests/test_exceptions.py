"""Tests for custom exceptions."""

from dir2context.exceptions import ConfigurationError, Dir2ContextError, InvalidPatternError, RootDirectoryError


class TestInvalidPatternError:
    """Test InvalidPatternError exception."""

    def test_invalid_pattern_error_creation(self):
        error = InvalidPatternError("a[b", "user-supplied", "unterminated character class")

        assert error.pattern == "a[b"
        assert error.source == "user-supplied"
        assert str(error) == "Invalid exclusion pattern 'a[b' (user-supplied): unterminated character class"

    def test_invalid_pattern_error_is_configuration_error(self):
        error = InvalidPatternError("x", "/repo/.gitignore", "bad")
        assert isinstance(error, ConfigurationError)
        assert isinstance(error, Dir2ContextError)


class TestRootDirectoryError:
    """Test RootDirectoryError exception."""

    def test_root_directory_error_creation(self):
        error = RootDirectoryError("/missing", "No such file or directory")

        assert error.path == "/missing"
        assert str(error) == "Could not access directory '/missing': No such file or directory"
        assert isinstance(error, Dir2ContextError)
        assert not isinstance(error, ConfigurationError)


class TestConfigurationError:
    """Test ConfigurationError exception."""

    def test_configuration_error_message(self):
        error = ConfigurationError("max_depth must be a non-negative integer, got -1")
        assert str(error) == "max_depth must be a non-negative integer, got -1"
        assert isinstance(error, Exception)
