"""
Error types for modchat.

Command routines treat every collaborator failure the same way: the message is
sent back to the chat and the routine stops. These types give the bundled
collaborators structured failures to raise, and ``failure_message`` turns any
exception into the text a user sees.
"""

from typing import Any, Dict, Optional


class ModchatError(Exception):
    """Base exception for all modchat errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.original_error = original_error

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "message": self.message,
            "code": self.code,
            "details": self.details,
            "type": self.__class__.__name__
        }

    def __str__(self) -> str:
        return self.message


class RepositoryError(ModchatError):
    """Error raised by a repository client."""

    def __init__(
        self,
        message: str = "Repository error",
        mod_id: Optional[str] = None,
        **kwargs
    ):
        kwargs.setdefault("code", "REPOSITORY_ERROR")
        super().__init__(message, **kwargs)
        if mod_id:
            self.details["mod_id"] = mod_id


class ModNotFoundError(RepositoryError):
    """Error when a mod does not exist in the repository."""

    def __init__(self, mod_id: str, message: Optional[str] = None, **kwargs):
        super().__init__(
            message or f'Mod "{mod_id}" not found in the repository.',
            mod_id=mod_id,
            code="MOD_NOT_FOUND",
            **kwargs
        )


class ExtensionError(ModchatError):
    """Error raised by an extension manager."""

    def __init__(
        self,
        message: str = "Extension error",
        mod_id: Optional[str] = None,
        **kwargs
    ):
        kwargs.setdefault("code", "EXTENSION_ERROR")
        super().__init__(message, **kwargs)
        if mod_id:
            self.details["mod_id"] = mod_id


class ModNotInstalledError(ExtensionError):
    """Error when loading a mod that is not installed."""

    def __init__(self, mod_id: str, **kwargs):
        super().__init__(
            f'Mod "{mod_id}" is not installed.',
            mod_id=mod_id,
            code="MOD_NOT_INSTALLED",
            **kwargs
        )


class ModAlreadyLoadedError(ExtensionError):
    """Error when loading a mod that is already loaded."""

    def __init__(self, mod_id: str, **kwargs):
        super().__init__(
            f'Mod "{mod_id}" is already loaded.',
            mod_id=mod_id,
            code="MOD_ALREADY_LOADED",
            **kwargs
        )


class ModNotLoadedError(ExtensionError):
    """Error when unloading a mod that is not loaded."""

    def __init__(self, mod_id: str, **kwargs):
        super().__init__(
            f'Mod "{mod_id}" is not loaded.',
            mod_id=mod_id,
            code="MOD_NOT_LOADED",
            **kwargs
        )


class ConfigurationError(ModchatError):
    """Error related to modchat configuration."""

    def __init__(
        self,
        message: str = "Configuration error",
        config_field: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, code="CONFIGURATION_ERROR", **kwargs)
        if config_field:
            self.details["config_field"] = config_field


def failure_message(error: BaseException) -> str:
    """
    Get the user-visible message of a failure.

    Args:
        error: Any exception raised by a collaborator

    Returns:
        The error's ``message`` attribute if it has a non-empty one, else its
        string form, else its class name
    """
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message

    text = str(error)
    if text:
        return text

    return error.__class__.__name__
