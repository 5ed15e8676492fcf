#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the html_injector library.

Conversion itself never raises for untrusted input: malformed markup and
malformed style strings degrade to dropped fragments. The exceptions below
cover misconfiguration and misuse of the public API.

Exception Hierarchy
-------------------
- HtmlInjectorError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class passed to a converter)

  - DependencyError (missing parser backend)

  - SerializationError (malformed serialized node trees)

"""

from typing import Any


class HtmlInjectorError(Exception):
    """Base exception class for all html_injector-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(HtmlInjectorError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an options object of the wrong type is provided.

    Parameters
    ----------
    expected_type : type
        The expected options class type
    received_type : type
        The actual type that was received

    """

    def __init__(self, expected_type: type, received_type: type, original_error: Exception | None = None):
        """Initialize the invalid options error."""
        message = (
            f"Expected options of type '{expected_type.__name__}' "
            f"but received '{received_type.__name__}'."
        )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.expected_type = expected_type
        self.received_type = received_type


class DependencyError(HtmlInjectorError):
    """Exception raised when a selected parser backend is not installed.

    Parameters
    ----------
    component : str
        Name of the component requiring the dependency (e.g. "parser")
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    message : str, optional
        Custom error message. If not provided, generates one with an
        install hint.

    Attributes
    ----------
    component : str
        The component that is missing dependencies
    missing_packages : list[tuple[str, str]]
        Packages that need to be installed
    install_command : str
        Command to install missing dependencies

    """

    def __init__(
        self,
        component: str,
        missing_packages: list[tuple[str, str]],
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error with package details."""
        packages = [f"{name}{spec}" for name, spec in missing_packages]
        self.install_command = f"pip install {' '.join(packages)}" if packages else ""
        if message is None:
            if packages:
                pkg_list = ", ".join(f"'{pkg}'" for pkg in packages)
                message = f"{component} requires the following packages: {pkg_list}. Run: {self.install_command}"
            else:
                message = f"{component} could not load a required dependency."
        super().__init__(message, original_error=original_error)
        self.component = component
        self.missing_packages = missing_packages


class SerializationError(HtmlInjectorError):
    """Exception raised when a serialized node tree cannot be decoded.

    Parameters
    ----------
    message : str
        Description of the problem
    payload : any, optional
        The offending fragment of the serialized data

    """

    def __init__(self, message: str, payload: Any = None, original_error: Exception | None = None):
        """Initialize the serialization error."""
        super().__init__(message, original_error=original_error)
        self.payload = payload


__all__ = [
    "HtmlInjectorError",
    "ValidationError",
    "InvalidOptionsError",
    "DependencyError",
    "SerializationError",
]
