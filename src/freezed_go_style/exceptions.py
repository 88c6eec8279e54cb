# Custom exceptions for freezed-go-style

class FreezedGoStyleError(Exception):
    """Base exception for all application-specific errors."""
    pass

class ParseFailure(FreezedGoStyleError):
    """Raised when a file cannot be parsed by tree-sitter."""
    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        self.message = message
        super().__init__(f"Failed to parse {file_path}: {message}")

class ExtractionFailure(FreezedGoStyleError):
    """Raised when a constructor's parameter list has a shape we do not rewrite."""
    def __init__(self, constructor: str, message: str):
        self.constructor = constructor
        self.message = message
        super().__init__(f"Cannot align '{constructor}': {message}")

class GrammarNotFoundError(FreezedGoStyleError):
    """Raised when a required tree-sitter grammar is not found."""
    def __init__(self, language: str, install_command: str = "pip install tree-sitter-language-pack"):
        self.language = language
        self.install_command = install_command
        super().__init__(f"Grammar for '{language}' not found. Try: {install_command}")

class ConfigError(FreezedGoStyleError):
    """Raised for configuration-related problems."""
    pass
